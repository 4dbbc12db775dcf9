"""Addressing sub-forms by path."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formtree._errors import AmbiguousFieldError, FieldNotFoundError, NotAFieldError

from ._nodes import Combine, Leaf, Named, Transform

if TYPE_CHECKING:
    from collections.abc import Callable

    from formtree._field import Field
    from formtree._types import Path, Ref

    from ._nodes import FormTree


def pop_name[V, A](tree: FormTree[V, A]) -> tuple[Ref | None, FormTree[V, A]]:
    return tree.pop_name()


def get_ref(tree: FormTree[Any, Any]) -> Ref | None:
    return tree.pop_name()[0]


def children[V](tree: FormTree[V, Any]) -> tuple[FormTree[V, Any], ...]:
    return tree.children()


def to_field[V, A](tree: FormTree[V, A]) -> Field[V, A] | None:
    return tree.to_field()


def lookup[V](path: Path, tree: FormTree[V, Any]) -> list[FormTree[V, Any]]:
    """Find every sub-form addressed by ``path``.

    Names are matched by popping them one at a time while descending, so a
    matched sub-form is returned without its own name. Unnamed nodes are
    looked through. Directly nested names (``name("a", name("b", x))``)
    are matched segment by segment. Duplicate names are allowed, in which
    case more than one sub-form is returned.

    Args:
        path: The refs to match, outermost first.
        tree: The tree to search.

    Returns:
        All matching sub-forms, in left-to-right order.

    """
    if not path:
        return [tree]

    head, rest = path[0], path[1:]
    ref, stripped = tree.pop_name()
    if ref is None:
        return [match for child in tree.children() for match in lookup(path, child)]
    if ref != head:
        return []
    if not rest:
        return [stripped]
    return lookup(rest, stripped)


def query_field[V, R](
    path: Path,
    tree: FormTree[V, Any],
    continuation: Callable[[Field[V, Any]], R] | None = None,
) -> R | Field[V, Any]:
    """Locate the leaf field at ``path`` and pass it to ``continuation``.

    Without a continuation the field itself is returned.

    Raises:
        FieldNotFoundError: Nothing exists at ``path``.
        AmbiguousFieldError: More than one sub-form exists at ``path``.
        NotAFieldError: The sub-form at ``path`` is not a leaf.

    """
    matches = lookup(path, tree)
    if not matches:
        raise FieldNotFoundError(path)
    if len(matches) > 1:
        raise AmbiguousFieldError(path, len(matches))

    field = matches[0].to_field()
    if field is None:
        raise NotAFieldError(path)
    if continuation is None:
        return field
    return continuation(field)


def debug_paths(tree: FormTree[Any, Any]) -> list[Path]:
    """Path of every leaf in the tree, left to right."""
    match tree:
        case Leaf():
            return [()]
        case Combine(fn, arg):
            return debug_paths(fn) + debug_paths(arg)
        case Transform(_, child):
            return debug_paths(child)
        case Named(ref, child):
            return [(ref, *path) for path in debug_paths(child)]
        case _:
            msg = f"Unknown tree node: {type(tree)}"
            raise TypeError(msg)


def format_tree(tree: FormTree[Any, Any]) -> str:
    return "\n".join(tree.describe())
