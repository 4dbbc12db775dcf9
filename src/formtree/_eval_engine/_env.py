"""Input environments: where evaluation finds the raw inputs for a path."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from pathlib import Path as FilePath
from typing import Any

from formtree._types import FileInput, FormInput, Path, TextInput, to_path

type Env = Callable[[Path], Sequence[FormInput] | Awaitable[Sequence[FormInput]]]


def to_form_inputs(value: Any) -> list[FormInput]:
    """Normalise a raw value (text, file path, input, or a list of them) into inputs."""
    match value:
        case TextInput() | FileInput():
            return [value]
        case str():
            return [TextInput(value)]
        case FilePath():
            return [FileInput(value)]
        case list() | tuple():
            return [i for item in value for i in to_form_inputs(item)]
        case _:
            msg = f"Cannot use {type(value).__name__} as form input: {value!r}"
            raise TypeError(msg)


def env_from_mapping(mapping: Mapping[str | Path, Any]) -> Callable[[Path], list[FormInput]]:
    """Build an environment from a mapping of paths to raw values.

    Keys are dotted names (``"user.age"``) or path tuples; the empty string
    and the empty tuple address the root. Values are anything
    ``to_form_inputs`` accepts.

    Example:
        >>> env = env_from_mapping({"age": "17", "tags": ["a", "b"]})
        >>> env(("tags",))
        [TextInput(text='a'), TextInput(text='b')]

    """
    inputs: dict[Path, list[FormInput]] = {}
    for key, value in mapping.items():
        path = to_path(key) if isinstance(key, str) else tuple(key)
        inputs.setdefault(path, []).extend(to_form_inputs(value))

    def lookup(path: Path) -> list[FormInput]:
        return list(inputs.get(path, ()))

    return lookup
