"""Resolution of deferred sub-forms into a static tree."""

import inspect
import logging
from collections.abc import Coroutine
from typing import Any

from formtree._form import CombineForm, DeferredForm, Form, LeafForm, NamedForm, TransformForm

from ._nodes import Combine, FormTree, Leaf, Named, Transform

logger = logging.getLogger(__name__)


def resolve_tree[V, A](form: Form[V, A]) -> FormTree[V, A]:
    """Run every deferred thunk in ``form`` and splice in its result.

    Args:
        form: The form to resolve.

    Returns:
        A static tree with the same shape, minus the deferred placeholders.

    Raises:
        TypeError: If a thunk returns an awaitable (use ``resolve_tree_async``)
            or something that is not a form.

    """
    match form:
        case LeafForm(field):
            return Leaf(field)
        case CombineForm(fn, arg):
            return Combine(resolve_tree(fn), resolve_tree(arg))
        case TransformForm(fn, child):
            return Transform(fn, resolve_tree(child))
        case NamedForm(ref, child):
            return Named(ref, resolve_tree(child))
        case DeferredForm(thunk):
            produced = thunk()
            if inspect.isawaitable(produced):
                if isinstance(produced, Coroutine):
                    produced.close()
                msg = "Deferred form produced an awaitable; use resolve_tree_async"
                raise TypeError(msg)
            logger.debug(f"Resolved deferred form via {thunk!r}")
            return resolve_tree(_check_form(produced))
        case _:
            msg = f"Unknown form node: {type(form)}"
            raise TypeError(msg)


async def resolve_tree_async[V, A](form: Form[V, A]) -> FormTree[V, A]:
    """Like ``resolve_tree``, awaiting thunks that return awaitables."""
    match form:
        case LeafForm(field):
            return Leaf(field)
        case CombineForm(fn, arg):
            return Combine(await resolve_tree_async(fn), await resolve_tree_async(arg))
        case TransformForm(fn, child):
            return Transform(fn, await resolve_tree_async(child))
        case NamedForm(ref, child):
            return Named(ref, await resolve_tree_async(child))
        case DeferredForm(thunk):
            produced = thunk()
            if inspect.isawaitable(produced):
                produced = await produced
            logger.debug(f"Resolved deferred form via {thunk!r}")
            return await resolve_tree_async(_check_form(produced))
        case _:
            msg = f"Unknown form node: {type(form)}"
            raise TypeError(msg)


def _check_form(produced: Any) -> Form[Any, Any]:
    if not isinstance(produced, Form):
        msg = f"Deferred form must produce a Form, got: {type(produced)}"
        raise TypeError(msg)
    return produced
