from dataclasses import dataclass
from enum import StrEnum, auto
from pathlib import Path as FilePath

type Ref = str
type Path = tuple[Ref, ...]


def to_path(text: str) -> Path:
    """Split a dotted name (``"user.address.city"``) into a path."""
    s = text.strip()
    if not s:
        return ()
    refs = tuple(s.split("."))
    if any(not ref for ref in refs):
        msg = f"Empty ref in path: {text!r}"
        raise ValueError(msg)
    return refs


def from_path(path: Path) -> str:
    return ".".join(path)


class Method(StrEnum):
    """Evaluation intent passed to leaf fields."""

    GET = auto()  # Read: fields report their defaults
    POST = auto()  # Submit: fields read the submitted values


@dataclass(slots=True, frozen=True)
class TextInput:
    text: str


@dataclass(slots=True, frozen=True)
class FileInput:
    path: FilePath


type FormInput = TextInput | FileInput
