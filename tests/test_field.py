"""Tests for the bundled leaf fields."""

from pathlib import Path

import pytest

from formtree._field import BoolField, Choice, File, Singleton, Text, Typed
from formtree._result import Error, Success
from formtree._types import FileInput, Method, TextInput

POST = Method.POST
GET = Method.GET


class TestSingleton:
    def test_ignores_inputs(self) -> None:
        assert Singleton(5).evaluate(POST, [TextInput("7")]) == Success(5)


class TestText:
    def test_reads_first_text_input(self) -> None:
        assert Text().evaluate(POST, [TextInput("bob"), TextInput("alice")]) == Success("bob")

    def test_default_without_input(self) -> None:
        assert Text("anonymous").evaluate(POST, []) == Success("anonymous")

    def test_empty_without_default(self) -> None:
        assert Text().evaluate(GET, []) == Success("")

    def test_file_inputs_ignored(self) -> None:
        assert Text("d").evaluate(POST, [FileInput(Path("/tmp/a"))]) == Success("d")


class TestBoolField:
    def test_get_returns_default(self) -> None:
        assert BoolField(default=True).evaluate(GET, []) == Success(True)

    def test_post_on_is_true(self) -> None:
        assert BoolField().evaluate(POST, [TextInput("on")]) == Success(True)

    def test_post_missing_is_false(self) -> None:
        assert BoolField(default=True).evaluate(POST, []) == Success(False)

    def test_post_other_text_is_false(self) -> None:
        assert BoolField().evaluate(POST, [TextInput("yes")]) == Success(False)


class TestFile:
    def test_post_reads_file_input(self) -> None:
        path = Path("/tmp/upload.bin")
        assert File().evaluate(POST, [TextInput("x"), FileInput(path)]) == Success(path)

    def test_get_returns_none(self) -> None:
        assert File().evaluate(GET, [FileInput(Path("/tmp/upload.bin"))]) == Success(None)

    def test_post_without_file(self) -> None:
        assert File().evaluate(POST, []) == Success(None)


OPTIONS = (("r", "red", "Red"), ("g", "green", "Green"), ("b", "blue", "Blue"))


class TestChoice:
    def test_selects_by_key(self) -> None:
        assert Choice(OPTIONS).evaluate(POST, [TextInput("g")]) == Success("green")

    def test_unknown_key_falls_back_to_default(self) -> None:
        assert Choice(OPTIONS, default_index=2).evaluate(POST, [TextInput("x")]) == Success("blue")

    def test_get_returns_default(self) -> None:
        assert Choice(OPTIONS, default_index=1).evaluate(GET, []) == Success("green")

    def test_no_default(self) -> None:
        assert Choice(OPTIONS, default_index=None).evaluate(POST, []) == Success(None)

    def test_multiple_selection(self) -> None:
        field = Choice(OPTIONS, multiple=True)
        inputs = [TextInput("b"), TextInput("r"), TextInput("nope")]
        assert field.evaluate(POST, inputs) == Success(["blue", "red"])

    def test_multiple_post_without_selection(self) -> None:
        assert Choice(OPTIONS, multiple=True).evaluate(POST, []) == Success([])

    def test_multiple_get_returns_default(self) -> None:
        assert Choice(OPTIONS, multiple=True).evaluate(GET, []) == Success(["red"])

    def test_map_view_maps_labels(self) -> None:
        mapped = Choice(OPTIONS).map_view(str.upper)
        assert [label for _, _, label in mapped.options] == ["RED", "GREEN", "BLUE"]
        assert mapped.evaluate(POST, [TextInput("b")]) == Success("blue")

    def test_requires_options(self) -> None:
        with pytest.raises(ValueError, match="at least one option"):
            Choice(())

    def test_default_index_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            Choice(OPTIONS, default_index=3)


class TestTyped:
    def test_parses_int(self) -> None:
        assert Typed(int).evaluate(POST, [TextInput("17")]) == Success(17)

    def test_invalid_int(self) -> None:
        result = Typed(int).evaluate(POST, [TextInput("abc")])
        assert isinstance(result, Error)
        assert len(result.errors) == 1
        assert "integer" in result.errors[0]

    def test_missing_is_required(self) -> None:
        assert Typed(int).evaluate(POST, []) == Error(("This field is required",))

    def test_blank_counts_as_missing(self) -> None:
        assert Typed(int, default=3).evaluate(POST, [TextInput("  ")]) == Success(3)

    def test_custom_required_message(self) -> None:
        assert Typed(float, required_message="Enter a price").evaluate(POST, []) == Error(("Enter a price",))

    def test_default_used_when_missing(self) -> None:
        assert Typed(int, default=None).evaluate(POST, []) == Success(None)

    def test_empty_string_is_a_str_value(self) -> None:
        assert Typed(str).evaluate(POST, [TextInput("")]) == Success("")

    def test_sequence_receives_every_input(self) -> None:
        assert Typed(list[int]).evaluate(POST, [TextInput("1"), TextInput("2")]) == Success([1, 2])

    def test_sequence_without_inputs_is_empty(self) -> None:
        assert Typed(list[int]).evaluate(POST, []) == Success([])

    def test_sequence_errors(self) -> None:
        result = Typed(list[int]).evaluate(POST, [TextInput("1"), TextInput("x"), TextInput("y")])
        assert isinstance(result, Error)
        assert len(result.errors) == 2

    def test_map_view_renders_errors(self) -> None:
        field = Typed(int).map_view(lambda message: ("E", message))
        assert field.evaluate(POST, []) == Error((("E", "This field is required"),))

    def test_map_view_composes(self) -> None:
        field = Typed(int).map_view(str.upper).map_view(lambda message: f"<{message}>")
        assert field.evaluate(POST, []) == Error(("<THIS FIELD IS REQUIRED>",))

    def test_map_view_keeps_success(self) -> None:
        assert Typed(int).map_view(str.upper).evaluate(POST, [TextInput("5")]) == Success(5)
