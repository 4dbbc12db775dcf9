"""Evaluation of a resolved form tree against an input environment."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from formtree._result import Error, Success, annotate, apply_result
from formtree._tree import Combine, Leaf, Named, Transform, resolve_tree, resolve_tree_async
from formtree._types import Method

if TYPE_CHECKING:
    from formtree._form import Form
    from formtree._result import Result
    from formtree._tree import FormTree
    from formtree._types import FormInput, Path

    from ._env import Env

logger = logging.getLogger(__name__)

type Inputs = list[tuple[Path, FormInput]]


@dataclass(frozen=True, slots=True)
class EvaluationResult[A]:
    """Outcome of evaluating a form.

    Attributes:
        result: ``Success`` with the form's value, or ``Error`` whose errors are
            ``(path, view)`` pairs naming where each error was raised.
        inputs: Every raw input consumed, paired with the path it was read at,
            in left-to-right leaf order.

    """

    result: Result[tuple[Path, Any], A]
    inputs: tuple[tuple[Path, FormInput], ...] = ()

    @property
    def success(self) -> bool:
        return isinstance(self.result, Success)

    @property
    def value(self) -> A:
        """The form's value.

        Raises:
            ValueError: If evaluation failed.

        """
        match self.result:
            case Success(value):
                return value
            case _:
                msg = f"Form evaluation failed with {len(self.errors)} error(s)"
                raise ValueError(msg)

    @property
    def errors(self) -> tuple[tuple[Path, Any], ...]:
        match self.result:
            case Error(errors):
                return errors
            case _:
                return ()

    def errors_at(self, path: Path) -> list[Any]:
        """Error views raised exactly at ``path``."""
        return [view for error_path, view in self.errors if error_path == path]

    def inputs_at(self, path: Path) -> list[FormInput]:
        return [value for input_path, value in self.inputs if input_path == path]


def _not_awaitable(value: Any, what: str) -> Any:
    if inspect.isawaitable(value):
        if isinstance(value, Coroutine):
            value.close()
        msg = f"{what} returned an awaitable; use evaluate_async"
        raise TypeError(msg)
    return value


def _check_result(value: Any) -> Result[Any, Any]:
    if not isinstance(value, Success | Error):
        msg = f"Transform must return Success or Error, got: {type(value)}"
        raise TypeError(msg)
    return value


def _eval(path: Path, method: Method, env: Env, tree: FormTree[Any, Any]) -> tuple[Result[Any, Any], Inputs]:
    match tree:
        case Leaf(field):
            raw = list(_not_awaitable(env(path), "Environment"))
            result = annotate(path, field.evaluate(method, raw))
            return result, [(path, value) for value in raw]
        case Combine(fn, arg):
            fn_result, fn_inputs = _eval(path, method, env, fn)
            arg_result, arg_inputs = _eval(path, method, env, arg)
            return apply_result(fn_result, arg_result), fn_inputs + arg_inputs
        case Transform(fn, child):
            result, inputs = _eval(path, method, env, child)
            if isinstance(result, Success):
                outcome = _not_awaitable(fn(result.value), "Transform")
                result = annotate(path, _check_result(outcome))
            return result, inputs
        case Named(ref, child):
            return _eval((*path, ref), method, env, child)
        case _:
            msg = f"Cannot evaluate {type(tree)}; resolve the form first"
            raise TypeError(msg)


async def _eval_async(
    path: Path,
    method: Method,
    env: Env,
    tree: FormTree[Any, Any],
) -> tuple[Result[Any, Any], Inputs]:
    match tree:
        case Leaf(field):
            raw = env(path)
            if inspect.isawaitable(raw):
                raw = await raw
            raw = list(raw)
            result = annotate(path, field.evaluate(method, raw))
            return result, [(path, value) for value in raw]
        case Combine(fn, arg):
            fn_result, fn_inputs = await _eval_async(path, method, env, fn)
            arg_result, arg_inputs = await _eval_async(path, method, env, arg)
            return apply_result(fn_result, arg_result), fn_inputs + arg_inputs
        case Transform(fn, child):
            result, inputs = await _eval_async(path, method, env, child)
            if isinstance(result, Success):
                outcome = fn(result.value)
                if inspect.isawaitable(outcome):
                    outcome = await outcome
                result = annotate(path, _check_result(outcome))
            return result, inputs
        case Named(ref, child):
            return await _eval_async((*path, ref), method, env, child)
        case _:
            msg = f"Cannot evaluate {type(tree)}; resolve the form first"
            raise TypeError(msg)


def evaluate[A](tree: FormTree[Any, A], env: Env, method: Method = Method.POST) -> EvaluationResult[A]:
    """Evaluate a resolved tree against ``env``.

    Errors raised by leaves and transforms are tagged with the path active
    where they were raised. Sibling sub-forms are always all evaluated, so
    every error in the form is reported at once.

    Args:
        tree: The resolved tree.
        env: Maps a path to the raw inputs found there.
        method: GET to read defaults, POST to read submitted values.

    Returns:
        The evaluation result with the echo of consumed inputs.

    Raises:
        TypeError: If ``env`` or a transform returns an awaitable.

    """
    logger.debug(f"Evaluating form ({method})")
    result, inputs = _eval((), method, env, tree)
    evaluation = EvaluationResult(result, tuple(inputs))
    logger.debug(f"Evaluation done: {len(evaluation.inputs)} inputs, {len(evaluation.errors)} errors")
    return evaluation


async def evaluate_async[A](tree: FormTree[Any, A], env: Env, method: Method = Method.POST) -> EvaluationResult[A]:
    """Like ``evaluate``, awaiting awaitable environment lookups and transform outcomes."""
    logger.debug(f"Evaluating form asynchronously ({method})")
    result, inputs = await _eval_async((), method, env, tree)
    evaluation = EvaluationResult(result, tuple(inputs))
    logger.debug(f"Evaluation done: {len(evaluation.inputs)} inputs, {len(evaluation.errors)} errors")
    return evaluation


def run_form[A](form: Form[Any, A], env: Env, method: Method = Method.POST) -> EvaluationResult[A]:
    """Resolve ``form`` and evaluate it."""
    return evaluate(resolve_tree(form), env, method)


async def run_form_async[A](form: Form[Any, A], env: Env, method: Method = Method.POST) -> EvaluationResult[A]:
    return await evaluate_async(await resolve_tree_async(form), env, method)
