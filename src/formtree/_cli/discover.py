"""Finding the form a CLI command works on.

A form target is ``"package.module:variable"`` (imported from the Python
path), the path of a script, or a ``ScriptTarget`` from the configuration.
Whatever is found is resolved, so commands always receive a ``FormTree``.
"""

import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from formtree._form import Form
from formtree._tree import FormTree, resolve_tree

from .config import ScriptTarget

logger = logging.getLogger(__name__)

DEFAULT_FORM_NAME = "form"

_FORM_TYPES = (Form, FormTree)


def _import_script(script: Path) -> ModuleType:
    """Execute ``script`` as a module named after its file.

    The script's directory goes on ``sys.path`` so it can import its siblings.
    """
    script = script.resolve()
    if not script.is_file():
        msg = f"Form script not found: {script}"
        raise FileNotFoundError(msg)

    spec = importlib.util.spec_from_file_location(script.stem, script)
    if spec is None or spec.loader is None:
        msg = f"Cannot import {script}"
        raise ImportError(msg)

    module = importlib.util.module_from_spec(spec)
    if str(script.parent) not in sys.path:
        sys.path.insert(0, str(script.parent))
    # Registered before execution so pydantic can resolve annotations of models defined in the script
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def _find_form(module: ModuleType, form_name: str | None) -> Form[Any, Any] | FormTree[Any, Any]:
    if form_name is not None:
        if not hasattr(module, form_name):
            msg = f"Could not find form '{form_name}' in {module.__name__}"
            raise ValueError(msg)
        found = getattr(module, form_name)
        if not isinstance(found, _FORM_TYPES):
            msg = f"'{form_name}' in {module.__name__} is a {type(found).__name__}, not a form"
            raise TypeError(msg)
        return found

    forms = {
        attr: value
        for attr, value in vars(module).items()
        if not attr.startswith("_") and isinstance(value, _FORM_TYPES)
    }
    if DEFAULT_FORM_NAME in forms:
        return forms[DEFAULT_FORM_NAME]
    if len(forms) == 1:
        return next(iter(forms.values()))
    if not forms:
        msg = f"No form found in {module.__name__}"
    else:
        msg = f"Several forms in {module.__name__} ({', '.join(sorted(forms))}); pick one with --form"
    raise ValueError(msg)


def load_form(target: str | Path | ScriptTarget, form_name: str | None = None) -> FormTree[Any, Any]:
    """Load the form designated by ``target`` and resolve it.

    Args:
        target: ``"module.path:variable"``, a script path, or a configured script.
        form_name: Variable holding the form. Overrides the variable named by
            ``target``; without either, a variable called ``form`` or the only
            form in the module is used.

    Returns:
        The resolved form.

    Raises:
        ValueError: If no form, or more than one candidate, is found.
        TypeError: If the named variable does not hold a form.

    """
    match target:
        case ScriptTarget(script=script, name=name):
            module = _import_script(script)
            found = _find_form(module, form_name or name)
        case str() if ":" in target and not target.endswith(".py"):
            module_name, _, variable = target.partition(":")
            module = importlib.import_module(module_name)
            found = _find_form(module, form_name or variable or None)
        case _:
            module = _import_script(Path(target))
            found = _find_form(module, form_name)

    logger.debug(f"Loaded {type(found).__name__} from {module.__name__}")
    return found if isinstance(found, FormTree) else resolve_tree(found)
