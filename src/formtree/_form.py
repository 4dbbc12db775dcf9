"""Form construction.

A ``Form`` is the unresolved rule tree built by user code. It may contain
``DeferredForm`` placeholders whose thunk produces the rest of the form
(e.g. choices loaded from a database); ``resolve_tree`` turns it into a static
``FormTree`` before evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._field import Singleton
from ._result import Error, Success, bind_result, then

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ._field import Field
    from ._result import Result
    from ._types import Ref


class Form[V, A]:
    """Base class of unresolved form nodes."""

    def map[B](self, fn: Callable[[A], B]) -> Form[V, B]:
        return fmap(self, fn)

    def transform[B](self, fn: Callable[[A], Result[V, B] | Awaitable[Result[V, B]]]) -> Form[V, B]:
        return transform(self, fn)


@dataclass(slots=True, frozen=True)
class LeafForm[V, A](Form[V, A]):
    field: Field[V, A]


@dataclass(slots=True, frozen=True)
class CombineForm[V, A](Form[V, A]):
    fn: Form[V, Callable[[Any], A]]
    arg: Form[V, Any]


@dataclass(slots=True, frozen=True)
class TransformForm[V, A](Form[V, A]):
    fn: Callable[[Any], Any]
    child: Form[V, Any]


@dataclass(slots=True, frozen=True)
class DeferredForm[V, A](Form[V, A]):
    thunk: Callable[[], Form[V, A] | Awaitable[Form[V, A]]]


@dataclass(slots=True, frozen=True)
class NamedForm[V, A](Form[V, A]):
    ref: Ref
    child: Form[V, A]


def leaf[V, A](field: Field[V, A]) -> Form[V, A]:
    return LeafForm(field)


def pure[A](value: A) -> Form[Any, A]:
    return LeafForm(Singleton(value))


def combine[V, A, B](fn_form: Form[V, Callable[[A], B]], arg_form: Form[V, A]) -> Form[V, B]:
    """Applicative apply: the function produced by ``fn_form`` applied to the value of ``arg_form``."""
    return CombineForm(fn_form, arg_form)


def transform[V, A, B](
    form: Form[V, A],
    fn: Callable[[A], Result[V, B] | Awaitable[Result[V, B]]],
) -> Form[V, B]:
    """Run ``fn`` on the value of ``form``; its errors are tagged with the current path.

    Transforming a transform yields a single node whose function runs the
    inner function and, only if it succeeds, ``fn``.
    """
    if isinstance(form, TransformForm):
        inner = form.fn
        return TransformForm(lambda x: then(inner(x), lambda r: bind_result(r, fn)), form.child)
    return TransformForm(fn, form)


def fmap[V, A, B](form: Form[V, A], fn: Callable[[A], B]) -> Form[V, B]:
    return transform(form, lambda x: Success(fn(x)))


def deferred[V, A](thunk: Callable[[], Form[V, A] | Awaitable[Form[V, A]]]) -> Form[V, A]:
    """A sub-form produced by ``thunk`` when the form is resolved."""
    return DeferredForm(thunk)


def name[V, A](ref: Ref, form: Form[V, A]) -> Form[V, A]:
    """Attach ``ref`` to ``form``; nested names form dotted paths."""
    if not ref or "." in ref:
        msg = f"Invalid ref {ref!r}: must be non-empty and must not contain '.'"
        raise ValueError(msg)
    return NamedForm(ref, form)


def _curry(fn: Callable[..., Any], arity: int, args: tuple[Any, ...] = ()) -> Any:
    if arity == 0:
        return fn(*args)
    return lambda x: _curry(fn, arity - 1, (*args, x))


def lift[V](fn: Callable[..., Any], *forms: Form[V, Any]) -> Form[V, Any]:
    """Combine ``forms`` into one form whose value is ``fn(*values)``.

    The curried ``fn`` is mapped over the first form rather than lifted with
    ``pure``, so no constant leaf is added at the enclosing path.

    Example:
        >>> pair = lift(lambda n, a: (n, a), name("name", leaf(Text())), name("age", leaf(Typed(int))))

    """
    if not forms:
        return pure(fn())
    first, *rest = forms
    result: Form[V, Any] = fmap(first, _curry(fn, len(forms)))
    for form in rest:
        result = combine(result, form)
    return result


def check[V, A](form: Form[V, A], message: V, predicate: Callable[[A], bool]) -> Form[V, A]:
    """Fail with ``message`` when ``predicate`` does not hold for the value."""
    return transform(form, lambda x: Success(x) if predicate(x) else Error((message,)))
