"""Tests for the failure-accumulating Result type."""

import asyncio

import pytest

from formtree._result import Error, Success, annotate, apply_result, bind_result, fail, then


class TestSuccessAndError:
    def test_success_map(self) -> None:
        assert Success(2).map(lambda x: x * 3) == Success(6)

    def test_error_map_is_noop(self) -> None:
        error = Error(("boom",))
        assert error.map(lambda x: x * 3) is error

    def test_map_error(self) -> None:
        assert Error(("a", "b")).map_error(str.upper) == Error(("A", "B"))

    def test_success_map_error_is_noop(self) -> None:
        success = Success(1)
        assert success.map_error(str.upper) is success

    def test_is_success(self) -> None:
        assert Success(None).is_success is True
        assert Error(("e",)).is_success is False

    def test_fail_builds_error(self) -> None:
        assert fail("a", "b") == Error(("a", "b"))

    def test_fail_requires_errors(self) -> None:
        with pytest.raises(ValueError, match="at least one error"):
            fail()


class TestApplyResult:
    def test_both_success(self) -> None:
        assert apply_result(Success(lambda x: x + 1), Success(41)) == Success(42)

    def test_both_errors_accumulate_left_then_right(self) -> None:
        assert apply_result(Error(("e1",)), Error(("e2",))) == Error(("e1", "e2"))

    def test_left_error_only(self) -> None:
        assert apply_result(Error(("e1",)), Success(1)) == Error(("e1",))

    def test_right_error_only(self) -> None:
        assert apply_result(Success(lambda x: x), Error(("e2",))) == Error(("e2",))


class TestBindResult:
    def test_success_runs_function(self) -> None:
        assert bind_result(Success(3), lambda x: Success(x * 2)) == Success(6)

    def test_error_short_circuits(self) -> None:
        calls: list[int] = []

        def fn(x: int) -> Success[int]:
            calls.append(x)
            return Success(x)

        assert bind_result(Error(("e",)), fn) == Error(("e",))
        assert calls == []


class TestAnnotate:
    def test_tags_every_error_with_path(self) -> None:
        assert annotate(("user", "age"), Error(("a", "b"))) == Error(
            ((("user", "age"), "a"), (("user", "age"), "b")),
        )

    def test_success_unchanged(self) -> None:
        assert annotate(("x",), Success(1)) == Success(1)


class TestThen:
    def test_synchronous_outcome(self) -> None:
        assert then(Success(1), lambda r: r.map(lambda x: x + 1)) == Success(2)

    def test_awaitable_outcome(self) -> None:
        async def produce() -> Success[int]:
            return Success(1)

        chained = then(produce(), lambda r: r.map(lambda x: x + 1))
        assert asyncio.run(chained) == Success(2)

    def test_awaitable_returned_by_function_is_awaited(self) -> None:
        async def produce() -> Success[int]:
            return Success(1)

        async def double(r: Success[int]) -> Success[int]:
            return r.map(lambda x: x * 2)

        assert asyncio.run(then(produce(), double)) == Success(2)
