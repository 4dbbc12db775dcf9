from __future__ import annotations

import logging
import tomllib
from datetime import date, datetime, time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import BaseModel

from ._types import FileInput, FormInput, TextInput, from_path

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._eval_engine import EvaluationResult
    from ._types import Path as FormPath

logger = logging.getLogger(__name__)

_TOML_NATIVE = (str, int, float, bool, date, datetime, time)


# =============================================================================
# Input Loading
# =============================================================================


def _is_file_table(value: Any) -> bool:
    return isinstance(value, dict) and set(value) == {"file"} and isinstance(value["file"], str)


def _toml_value_to_inputs(value: Any, base_dir: Path) -> list[FormInput]:
    """Convert one TOML value to raw form inputs.

    Handles:
    - str, numbers, dates: a single text input
    - bool: ``"on"`` when true (a ticked checkbox), nothing when false
    - ``{ file = "..." }``: a file input, resolved relative to ``base_dir``
    - arrays: one input per item (multi-valued fields)
    """
    if _is_file_table(value):
        file_path = Path(value["file"])
        if not file_path.is_absolute():
            file_path = base_dir / file_path
        return [FileInput(file_path)]
    if isinstance(value, bool):
        return [TextInput("on")] if value else []
    if isinstance(value, list):
        return [i for item in value for i in _toml_value_to_inputs(item, base_dir)]
    if isinstance(value, _TOML_NATIVE):
        return [TextInput(str(value))]
    msg = f"Unsupported TOML value for form input: {value!r}"
    raise TypeError(msg)


def toml_to_inputs(
    toml_contents: dict[str, Any],
    base_dir: Path,
    _prefix: FormPath = (),
) -> dict[FormPath, list[FormInput]]:
    """Flatten parsed TOML into raw inputs keyed by path.

    Nested tables become nested paths: ``[user] age = 17`` is the input
    ``"17"`` at ``("user", "age")``.
    """
    inputs: dict[FormPath, list[FormInput]] = {}
    for key, value in toml_contents.items():
        path = (*_prefix, key)
        if isinstance(value, dict) and not _is_file_table(value):
            inputs.update(toml_to_inputs(value, base_dir, path))
        else:
            inputs[path] = _toml_value_to_inputs(value, base_dir)
    return inputs


def load_inputs_from_toml(input_path: Path | str) -> dict[FormPath, list[FormInput]]:
    """Load raw form inputs from a TOML file.

    File references are resolved relative to the TOML file's directory.
    """
    input_path = Path(input_path).resolve()
    with input_path.open("rb") as f:
        toml_contents = tomllib.load(f)

    inputs = toml_to_inputs(toml_contents, input_path.parent)
    logger.debug(f"Loaded {len(inputs)} input paths from {input_path}")
    return inputs


def env_from_toml(input_path: Path | str) -> Callable[[FormPath], list[FormInput]]:
    """Build an environment reading inputs from a TOML file."""
    inputs = load_inputs_from_toml(input_path)

    def lookup(path: FormPath) -> list[FormInput]:
        return list(inputs.get(path, ()))

    return lookup


# =============================================================================
# Result Export
# =============================================================================


def _serialize_value(value: Any) -> Any:
    """Recursively serialize a value for TOML export.

    Handles:
    - Pydantic BaseModel: Converts to dict via model_dump()
    - dict: Recursively serializes values, dropping None (TOML has no null)
    - list/tuple/set: Recursively serializes items
    - Path objects: Converts to string
    - Primitives and TOML-native types: Returns as-is
    - Anything else: Its string representation
    """
    if isinstance(value, BaseModel):
        return _serialize_value(value.model_dump(mode="python"))
    if isinstance(value, dict):
        return {str(k): _serialize_value(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_serialize_value(item) for item in value if item is not None]
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, _TOML_NATIVE):
        return value
    return str(value)


def evaluation_to_dict(evaluation: EvaluationResult[Any]) -> dict[str, Any]:
    """Convert an evaluation result to a dictionary suitable for TOML export.

    Returns:
        A dictionary with the structure:
        {
            "success": bool,
            "value": ...,  # omitted on failure or when the value is None
            "errors": [{"path": "user.age", "message": "..."}, ...]
        }

    """
    data: dict[str, Any] = {"success": evaluation.success}
    if evaluation.success and evaluation.value is not None:
        data["value"] = _serialize_value(evaluation.value)
    data["errors"] = [{"path": from_path(path), "message": str(view)} for path, view in evaluation.errors]
    return data


def export_to_toml(evaluation: EvaluationResult[Any], output_path: Path | str) -> None:
    """Export an evaluation result to a TOML file."""
    toml_data = evaluation_to_dict(evaluation)

    output_path = Path(output_path)
    with output_path.open("wb") as f:
        tomli_w.dump(toml_data, f)

    logger.debug(f"Exported evaluation result to {output_path}")
