"""Evaluation engine module for formtree.

This module evaluates resolved form trees against an input environment.

Key types:
- Env: Function from a path to the raw inputs found there
- EvaluationResult: The form's result plus the echo of consumed inputs
- evaluate / evaluate_async: Evaluate a resolved FormTree
- run_form / run_form_async: Resolve a Form, then evaluate it
"""

from ._engine import EvaluationResult, evaluate, evaluate_async, run_form, run_form_async
from ._env import Env, env_from_mapping, to_form_inputs

__all__ = [
    "Env",
    "EvaluationResult",
    "env_from_mapping",
    "evaluate",
    "evaluate_async",
    "run_form",
    "run_form_async",
    "to_form_inputs",
]
