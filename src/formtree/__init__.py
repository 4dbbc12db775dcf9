"""Composable form validation trees."""

__all__ = [
    "AmbiguousFieldError",
    "BoolField",
    "Choice",
    "Combine",
    "Env",
    "Error",
    "EvaluationResult",
    "Field",
    "FieldNotFoundError",
    "File",
    "FileInput",
    "Form",
    "FormDefinitionError",
    "FormInput",
    "FormTree",
    "Leaf",
    "MappedField",
    "Method",
    "Named",
    "NotAFieldError",
    "Path",
    "Ref",
    "Result",
    "Singleton",
    "Success",
    "Text",
    "TextInput",
    "Transform",
    "Typed",
    "apply_result",
    "bind_result",
    "check",
    "children",
    "combine",
    "debug_paths",
    "deferred",
    "env_from_mapping",
    "env_from_toml",
    "evaluate",
    "evaluate_async",
    "evaluation_to_dict",
    "export_to_toml",
    "fail",
    "fmap",
    "form_from_model",
    "format_tree",
    "from_path",
    "get_ref",
    "leaf",
    "lift",
    "load_inputs_from_toml",
    "lookup",
    "map_view",
    "name",
    "pop_name",
    "pure",
    "query_field",
    "resolve_tree",
    "resolve_tree_async",
    "run_form",
    "run_form_async",
    "to_field",
    "to_path",
    "transform",
]

from ._errors import AmbiguousFieldError, FieldNotFoundError, FormDefinitionError, NotAFieldError
from ._eval_engine import Env, EvaluationResult, env_from_mapping, evaluate, evaluate_async, run_form, run_form_async
from ._field import BoolField, Choice, Field, File, MappedField, Singleton, Text, Typed
from ._form import Form, check, combine, deferred, fmap, leaf, lift, name, pure, transform
from ._io import env_from_toml, evaluation_to_dict, export_to_toml, load_inputs_from_toml
from ._model_form import form_from_model
from ._result import Error, Result, Success, apply_result, bind_result, fail
from ._tree import (
    Combine,
    FormTree,
    Leaf,
    Named,
    Transform,
    children,
    debug_paths,
    format_tree,
    get_ref,
    lookup,
    map_view,
    pop_name,
    query_field,
    resolve_tree,
    resolve_tree_async,
    to_field,
)
from ._types import FileInput, FormInput, Method, Path, Ref, TextInput, from_path, to_path
