"""Failure-accumulating result type.

A ``Result`` is either a ``Success`` carrying a value or an ``Error`` carrying a
tuple of error views. Tuples concatenate, which makes them the error monoid:
``apply_result`` keeps the errors of both operands, while ``bind_result``
stops at the first failure.
"""

from __future__ import annotations

import inspect
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Generator

    from ._types import Path


@dataclass(slots=True, frozen=True)
class Success[A]:
    value: A

    @property
    def is_success(self) -> bool:
        return True

    def map[B](self, fn: Callable[[A], B]) -> Success[B]:
        return Success(fn(self.value))

    def map_error(self, fn: Callable[[Any], Any]) -> Success[A]:  # noqa: ARG002
        return self

    def bind[B](self, fn: Callable[[A], Result[Any, B]]) -> Result[Any, B]:
        return fn(self.value)


@dataclass(slots=True, frozen=True)
class Error[V]:
    errors: tuple[V, ...]

    @property
    def is_success(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> Error[V]:  # noqa: ARG002
        return self

    def map_error[W](self, fn: Callable[[V], W]) -> Error[W]:
        return Error(tuple(fn(e) for e in self.errors))

    def bind(self, fn: Callable[[Any], Any]) -> Error[V]:  # noqa: ARG002
        return self


type Result[V, A] = Success[A] | Error[V]


def fail[V](*errors: V) -> Error[V]:
    """Build a failed result from one or more error views."""
    if not errors:
        msg = "fail() requires at least one error"
        raise ValueError(msg)
    return Error(errors)


def apply_result(fn_result: Result[Any, Any], arg_result: Result[Any, Any]) -> Result[Any, Any]:
    """Applicative apply: errors from both sides are kept, left before right."""
    match fn_result, arg_result:
        case Success(fn), Success(arg):
            return Success(fn(arg))
        case Error(left), Error(right):
            return Error(left + right)
        case Error(), _:
            return fn_result
        case _:
            return arg_result


def bind_result(result: Result[Any, Any], fn: Callable[[Any], Any]) -> Any:
    """Monadic bind that short-circuits on failure.

    ``fn`` may return a result or an awaitable of one; the return value
    is passed through unchanged.
    """
    match result:
        case Success(value):
            return fn(value)
        case _:
            return result


def annotate(path: Path, result: Result[Any, Any]) -> Result[Any, Any]:
    """Pair every error of ``result`` with ``path``."""
    return result.map_error(lambda e: (path, e))


def then(outcome: Any, fn: Callable[[Any], Any]) -> Any:
    """Apply ``fn`` to ``outcome``, awaiting first if ``outcome`` is awaitable.

    Synchronous outcomes stay synchronous; once an awaitable is involved, the
    whole chain becomes a coroutine, and an awaitable returned by ``fn`` is
    awaited as well.
    """
    if inspect.isawaitable(outcome):
        return _Chained(outcome, fn)
    return fn(outcome)


async def _then_async(outcome: Awaitable[Any], fn: Callable[[Any], Any]) -> Any:
    result = fn(await outcome)
    if inspect.isawaitable(result):
        result = await result
    return result


class _Chained(Coroutine[Any, Any, Any]):
    """The coroutine returned by ``then``.

    Closing it before it starts also closes ``outcome``, so a chain that is
    never awaited does not leave the inner coroutine pending.
    """

    __slots__ = ("_coro", "_outcome")

    def __init__(self, outcome: Awaitable[Any], fn: Callable[[Any], Any]) -> None:
        self._outcome = outcome
        self._coro = _then_async(outcome, fn)

    def __await__(self) -> Generator[Any, None, Any]:
        return self._coro.__await__()

    def send(self, value: Any) -> Any:
        return self._coro.send(value)

    def throw(self, *args: Any) -> Any:
        return self._coro.throw(*args)

    def close(self) -> None:
        self._coro.close()
        if isinstance(self._outcome, Coroutine):
            self._outcome.close()
