"""Tests for TOML input loading and result export in formtree._io."""

import tomllib
from datetime import date
from enum import StrEnum, unique
from pathlib import Path

import pytest
from pydantic import BaseModel

from formtree._eval_engine import EvaluationResult
from formtree._io import (
    _serialize_value,
    env_from_toml,
    evaluation_to_dict,
    export_to_toml,
    load_inputs_from_toml,
    toml_to_inputs,
)
from formtree._result import Error, Success
from formtree._types import FileInput, TextInput

# --- Test Fixtures ---


@unique
class Color(StrEnum):
    RED = "red"
    GREEN = "green"


class SimpleModel(BaseModel):
    value: float
    name: str


class NestedModel(BaseModel):
    inner: SimpleModel
    note: str | None = None


# --- toml_to_inputs() Tests ---


class TestTomlToInputs:
    def test_flat_values(self, tmp_path: Path) -> None:
        inputs = toml_to_inputs({"name": "bob", "age": 17, "ratio": 0.5}, tmp_path)
        assert inputs == {
            ("name",): [TextInput("bob")],
            ("age",): [TextInput("17")],
            ("ratio",): [TextInput("0.5")],
        }

    def test_nested_tables_become_paths(self, tmp_path: Path) -> None:
        inputs = toml_to_inputs({"user": {"address": {"city": "Paris"}}}, tmp_path)
        assert inputs == {("user", "address", "city"): [TextInput("Paris")]}

    def test_booleans_are_checkboxes(self, tmp_path: Path) -> None:
        inputs = toml_to_inputs({"yes": True, "no": False}, tmp_path)
        assert inputs == {("yes",): [TextInput("on")], ("no",): []}

    def test_arrays_are_multi_valued(self, tmp_path: Path) -> None:
        inputs = toml_to_inputs({"tags": ["a", "b", 3]}, tmp_path)
        assert inputs == {("tags",): [TextInput("a"), TextInput("b"), TextInput("3")]}

    def test_dates(self, tmp_path: Path) -> None:
        inputs = toml_to_inputs({"born": date(2000, 1, 2)}, tmp_path)
        assert inputs == {("born",): [TextInput("2000-01-02")]}

    def test_relative_file_reference(self, tmp_path: Path) -> None:
        inputs = toml_to_inputs({"cv": {"file": "docs/cv.pdf"}}, tmp_path)
        assert inputs == {("cv",): [FileInput(tmp_path / "docs" / "cv.pdf")]}

    def test_absolute_file_reference(self, tmp_path: Path) -> None:
        inputs = toml_to_inputs({"cv": {"file": "/data/cv.pdf"}}, tmp_path)
        assert inputs == {("cv",): [FileInput(Path("/data/cv.pdf"))]}

    def test_table_with_other_keys_is_nested(self, tmp_path: Path) -> None:
        inputs = toml_to_inputs({"cv": {"file": "a", "kind": "pdf"}}, tmp_path)
        assert inputs == {("cv", "file"): [TextInput("a")], ("cv", "kind"): [TextInput("pdf")]}

    def test_array_of_tables_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(TypeError, match="Unsupported TOML value"):
            toml_to_inputs({"rows": [{"a": 1}]}, tmp_path)


class TestLoadInputsFromToml:
    def test_file_paths_relative_to_toml(self, tmp_path: Path) -> None:
        sub = tmp_path / "inputs"
        sub.mkdir()
        toml_file = sub / "data.toml"
        toml_file.write_text('name = "bob"\nphoto = { file = "me.png" }\n')

        inputs = load_inputs_from_toml(toml_file)

        assert inputs[("name",)] == [TextInput("bob")]
        assert inputs[("photo",)] == [FileInput(sub.resolve() / "me.png")]

    def test_env_from_toml(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "data.toml"
        toml_file.write_text('[user]\nage = 17\n')

        env = env_from_toml(toml_file)

        assert env(("user", "age")) == [TextInput("17")]
        assert env(("user", "name")) == []


# --- _serialize_value() Tests ---


class TestSerializeValue:
    def test_primitives(self) -> None:
        assert _serialize_value(42) == 42
        assert _serialize_value("x") == "x"
        assert _serialize_value(True) is True

    def test_path(self) -> None:
        assert _serialize_value(Path("/tmp/a")) == "/tmp/a"

    def test_str_enum(self) -> None:
        assert _serialize_value(Color.RED) == "red"

    def test_basemodel(self) -> None:
        model = NestedModel(inner=SimpleModel(value=1.5, name="a"))
        assert _serialize_value(model) == {"inner": {"value": 1.5, "name": "a"}}

    def test_tuple_drops_none(self) -> None:
        assert _serialize_value(("a", None, 1)) == ["a", 1]

    def test_unknown_type_as_string(self) -> None:
        assert _serialize_value(complex(1, 2)) == "(1+2j)"


# --- evaluation_to_dict() / export_to_toml() Tests ---


class TestEvaluationToDict:
    def test_success(self) -> None:
        data = evaluation_to_dict(EvaluationResult(Success(SimpleModel(value=2.0, name="b"))))
        assert data == {"success": True, "value": {"value": 2.0, "name": "b"}, "errors": []}

    def test_success_without_value(self) -> None:
        assert evaluation_to_dict(EvaluationResult(Success(None))) == {"success": True, "errors": []}

    def test_failure(self) -> None:
        evaluation = EvaluationResult(Error(((("user", "age"), "too young"), ((), "invalid"))))
        assert evaluation_to_dict(evaluation) == {
            "success": False,
            "errors": [
                {"path": "user.age", "message": "too young"},
                {"path": "", "message": "invalid"},
            ],
        }


class TestExportToToml:
    def test_round_trips_through_tomllib(self, tmp_path: Path) -> None:
        output = tmp_path / "out.toml"
        export_to_toml(EvaluationResult(Success({"name": "bob", "tags": ["a"]})), output)

        with output.open("rb") as f:
            data = tomllib.load(f)

        assert data == {"success": True, "value": {"name": "bob", "tags": ["a"]}, "errors": []}
