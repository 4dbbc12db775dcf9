"""Changing the error view type of a resolved tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formtree._result import then

from ._nodes import Combine, Leaf, Named, Transform

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._nodes import FormTree


def map_view[V, W, A](tree: FormTree[V, A], fn: Callable[[V], W]) -> FormTree[W, A]:
    """Apply ``fn`` to every error view the tree can produce.

    The shape of the tree and its success values are left untouched, so
    evaluating the mapped tree equals evaluating ``tree`` and mapping the
    errors of the outcome.
    """
    match tree:
        case Leaf(field):
            return Leaf(field.map_view(fn))
        case Combine(fn_tree, arg_tree):
            return Combine(map_view(fn_tree, fn), map_view(arg_tree, fn))
        case Transform(inner, child):
            return Transform(lambda x: then(inner(x), lambda r: r.map_error(fn)), map_view(child, fn))
        case Named(ref, child):
            return Named(ref, map_view(child, fn))
        case _:
            msg = f"Unknown tree node: {type(tree)}"
            raise TypeError(msg)
