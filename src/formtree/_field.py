"""Leaf fields.

A field turns the raw inputs found at its path into a ``Result``. Fields are
the only place where raw ``FormInput`` values are interpreted; everything
above them in a form works on typed values.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Annotated, Any, get_args, get_origin

from pydantic import TypeAdapter, ValidationError

from ._result import Error, Success
from ._types import FileInput, Method, TextInput

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from ._result import Result
    from ._types import FormInput

logger = logging.getLogger(__name__)

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


class Field[V, A](ABC):
    """Base class for leaf fields.

    ``V`` is the error view type, ``A`` the value type produced by the field.
    """

    @abstractmethod
    def evaluate(self, method: Method, inputs: Sequence[FormInput]) -> Result[V, A]:
        """Interpret the raw inputs found at this field's path."""

    def map_view[W](self, fn: Callable[[V], W]) -> Field[W, A]:
        """Return a field whose error views are transformed by ``fn``.

        By default the field is wrapped in a ``MappedField``. Fields holding
        views of their own (labels, error renderers) override this to map them
        in place.
        """
        return MappedField(self, fn)


class _Infallible[A](Field[Any, A]):
    """A field that never fails, so it has no error views to map."""

    def map_view[W](self, fn: Callable[[Any], W]) -> Field[W, A]:  # noqa: ARG002
        return self


@dataclass(slots=True, frozen=True)
class MappedField[V, W, A](Field[W, A]):
    """``inner`` with ``fn`` applied to each of its errors."""

    inner: Field[V, A]
    fn: Callable[[V], W]

    def evaluate(self, method: Method, inputs: Sequence[FormInput]) -> Result[W, A]:
        return self.inner.evaluate(method, inputs).map_error(self.fn)


def _texts(inputs: Sequence[FormInput]) -> list[str]:
    return [i.text for i in inputs if isinstance(i, TextInput)]


@dataclass(slots=True, frozen=True)
class Singleton[A](_Infallible[A]):
    """A constant. Used by ``pure`` to lift plain values into a form."""

    value: A

    def evaluate(self, method: Method, inputs: Sequence[FormInput]) -> Result[Any, A]:  # noqa: ARG002
        return Success(self.value)


@dataclass(slots=True, frozen=True)
class Text(_Infallible[str]):
    default: str | None = None

    def evaluate(self, method: Method, inputs: Sequence[FormInput]) -> Result[Any, str]:  # noqa: ARG002
        texts = _texts(inputs)
        if texts:
            return Success(texts[0])
        return Success(self.default or "")


@dataclass(slots=True, frozen=True)
class BoolField(_Infallible[bool]):
    """A checkbox: submitted as ``"on"`` when ticked, absent otherwise."""

    default: bool = False

    def evaluate(self, method: Method, inputs: Sequence[FormInput]) -> Result[Any, bool]:
        if method is Method.GET:
            return Success(self.default)
        texts = _texts(inputs)
        return Success(bool(texts) and texts[0] == "on")


@dataclass(slots=True, frozen=True)
class File(_Infallible["Path | None"]):
    def evaluate(self, method: Method, inputs: Sequence[FormInput]) -> Result[Any, Path | None]:
        if method is Method.POST:
            for i in inputs:
                if isinstance(i, FileInput):
                    return Success(i.path)
        return Success(None)


@dataclass(slots=True, frozen=True)
class Choice[V, A](Field[V, Any]):
    """Selection among fixed options.

    Each option is a ``(key, value, label)`` triple. The submitted text selects
    an option by key. With ``multiple=True`` every submitted key is honoured
    and the value is a list (multi-select); otherwise the first matching key
    wins and unknown keys fall back to the default option.
    """

    options: tuple[tuple[str, A, V], ...]
    default_index: int | None = 0
    multiple: bool = False

    def __post_init__(self) -> None:
        if not self.options:
            msg = "Choice requires at least one option"
            raise ValueError(msg)
        if self.default_index is not None and not 0 <= self.default_index < len(self.options):
            msg = f"default_index {self.default_index} out of range for {len(self.options)} options"
            raise ValueError(msg)

    def _default(self) -> list[A]:
        if self.default_index is None:
            return []
        return [self.options[self.default_index][1]]

    def evaluate(self, method: Method, inputs: Sequence[FormInput]) -> Result[V, Any]:
        selected: list[A] = []
        if method is Method.POST or _texts(inputs):
            by_key = {key: value for key, value, _ in self.options}
            selected = [by_key[text] for text in _texts(inputs) if text in by_key]

        if self.multiple:
            if method is Method.GET and not selected:
                return Success(self._default())
            return Success(selected)

        if selected:
            return Success(selected[0])
        default = self._default()
        return Success(default[0] if default else None)

    def map_view[W](self, fn: Callable[[V], W]) -> Choice[W, A]:
        return Choice(
            options=tuple((key, value, fn(label)) for key, value, label in self.options),
            default_index=self.default_index,
            multiple=self.multiple,
        )


def _identity(view: Any) -> Any:
    return view


_MISSING: Any = object()


@dataclass(slots=True, frozen=True)
class Typed[V, A](Field[V, A]):
    """Submitted text validated into ``type_`` by pydantic.

    Every error message pydantic reports becomes one error view, passed
    through ``render_error``. For sequence types (``list[int]``, ...) all
    submitted texts are validated together, supporting multi-valued inputs.
    Empty submissions count as missing unless ``type_`` is ``str``.
    """

    type_: Any
    default: Any = _MISSING
    required_message: str = "This field is required"
    render_error: Callable[[str], V] = _identity
    _adapter: TypeAdapter[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_adapter", TypeAdapter(self.type_))

    @property
    def is_sequence(self) -> bool:
        type_ = self.type_
        if get_origin(type_) is Annotated:
            type_ = get_args(type_)[0]
        return (get_origin(type_) or type_) in _SEQUENCE_ORIGINS

    def evaluate(self, method: Method, inputs: Sequence[FormInput]) -> Result[V, A]:  # noqa: ARG002
        texts = _texts(inputs)
        if self.type_ is not str:
            texts = [t for t in texts if t.strip()]

        if not texts:
            if self.default is not _MISSING:
                return Success(self.default)
            if not self.is_sequence:
                return Error((self.render_error(self.required_message),))

        raw: Any = texts if self.is_sequence else texts[0]
        try:
            value = self._adapter.validate_python(raw)
        except ValidationError as e:
            logger.debug(f"Validation of {raw!r} as {self.type_!r} failed: {e}")
            return Error(tuple(self.render_error(err["msg"]) for err in e.errors()))
        return Success(value)

    def map_view[W](self, fn: Callable[[V], W]) -> Typed[W, A]:
        render = self.render_error
        return replace(self, render_error=lambda message: fn(render(message)))  # type: ignore[return-value]
