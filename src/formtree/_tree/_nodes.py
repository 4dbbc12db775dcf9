"""Resolved form tree nodes.

A ``FormTree`` is static: it holds no deferred placeholders. Each node
exposes the type-erased traversal operations (``children``, ``pop_name``,
``to_field``) so that code walking a tree never needs to know the value type
of a sub-tree.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from formtree._field import Field
    from formtree._types import Ref


class FormTree[V, A](ABC):
    """Base class of resolved form nodes."""

    @abstractmethod
    def children(self) -> tuple[FormTree[V, Any], ...]:
        """Immediate sub-forms, looking through transforms and names."""

    @abstractmethod
    def pop_name(self) -> tuple[Ref | None, FormTree[V, A]]:
        """Strip the outermost name, looking through transforms.

        Returns:
            The ref (or None if the node is unnamed) and the tree without it.

        """

    @abstractmethod
    def to_field(self) -> Field[V, A] | None:
        """The leaf field, if this node is a (possibly transformed or named) leaf."""

    def __str__(self) -> str:
        return "\n".join(self.describe())

    @abstractmethod
    def describe(self) -> list[str]:
        """Indented, one node per line, dump of the tree structure."""


def _indent(lines: list[str]) -> list[str]:
    return ["  " + line for line in lines]


@dataclass(slots=True, frozen=True)
class Leaf[V, A](FormTree[V, A]):
    field: Field[V, A]

    def children(self) -> tuple[FormTree[V, Any], ...]:
        return ()

    def pop_name(self) -> tuple[Ref | None, FormTree[V, A]]:
        return None, self

    def to_field(self) -> Field[V, A] | None:
        return self.field

    def describe(self) -> list[str]:
        return [f"Leaf ({self.field!r})"]


@dataclass(slots=True, frozen=True)
class Combine[V, A](FormTree[V, A]):
    fn: FormTree[V, Callable[[Any], A]]
    arg: FormTree[V, Any]

    def children(self) -> tuple[FormTree[V, Any], ...]:
        return (self.fn, self.arg)

    def pop_name(self) -> tuple[Ref | None, FormTree[V, A]]:
        return None, self

    def to_field(self) -> Field[V, A] | None:
        return None

    def describe(self) -> list[str]:
        return ["Combine", *_indent(self.fn.describe()), *_indent(self.arg.describe())]


@dataclass(slots=True, frozen=True)
class Transform[V, A](FormTree[V, A]):
    fn: Callable[[Any], Any]
    child: FormTree[V, Any]

    def children(self) -> tuple[FormTree[V, Any], ...]:
        return self.child.children()

    def pop_name(self) -> tuple[Ref | None, FormTree[V, A]]:
        ref, stripped = self.child.pop_name()
        if ref is None:
            return None, self
        return ref, Transform(self.fn, stripped)

    def to_field(self) -> Field[V, A] | None:
        return self.child.to_field()

    def describe(self) -> list[str]:
        return ["Transform _", *_indent(self.child.describe())]


@dataclass(slots=True, frozen=True)
class Named[V, A](FormTree[V, A]):
    ref: Ref
    child: FormTree[V, A]

    def children(self) -> tuple[FormTree[V, Any], ...]:
        return self.child.children()

    def pop_name(self) -> tuple[Ref | None, FormTree[V, A]]:
        return self.ref, self.child

    def to_field(self) -> Field[V, A] | None:
        return self.child.to_field()

    def describe(self) -> list[str]:
        return [f"Named {self.ref!r}", *_indent(self.child.describe())]
