import logging
from inspect import isclass
from typing import Annotated, Any

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from ._field import BoolField, Typed
from ._form import Form, leaf, lift, name, transform
from ._result import Error, Result, Success

logger = logging.getLogger(__name__)


def _field_form(field_name: str, field_info: FieldInfo) -> Form[str, Any]:
    annotation = field_info.annotation
    if isclass(annotation) and issubclass(annotation, BaseModel):
        return form_from_model(annotation)

    if annotation is bool:
        default = False if field_info.is_required() else field_info.get_default(call_default_factory=True)
        return leaf(BoolField(default=bool(default)))

    # Keep field constraints (gt, max_length, ...) so they are reported at the field's own path
    type_ = Annotated[annotation, *field_info.metadata] if field_info.metadata else annotation
    logger.debug(f"Field '{field_name}' validated as {type_!r}")
    if field_info.is_required():
        return leaf(Typed(type_))
    return leaf(Typed(type_, default=field_info.get_default(call_default_factory=True)))


def _format_loc(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _validate_model[M: BaseModel](model: type[M], data: dict[str, Any]) -> Result[str, M]:
    try:
        return Success(model.model_validate(data))
    except ValidationError as e:
        return Error(
            tuple(f"{_format_loc(err['loc'])}: {err['msg']}" if err["loc"] else err["msg"] for err in e.errors()),
        )


def form_from_model[M: BaseModel](model: type[M]) -> Form[str, M]:
    """Derive a form from a pydantic model.

    Each model field becomes a sub-form named after the field: nested models
    become nested forms, ``bool`` fields become checkboxes, and every other
    field a ``Typed`` leaf carrying the field's type and constraints. The
    collected values are finally validated by the model itself, so model
    validators run too; their errors are reported at the form's own path.

    Args:
        model: The pydantic model class.

    Returns:
        A form producing instances of ``model``.

    Example:
        >>> class User(BaseModel):
        ...     name: str
        ...     age: int = 0
        >>> result = run_form(form_from_model(User), env_from_mapping({"name": "bob"}))
        >>> result.value
        User(name='bob', age=0)

    """
    field_names = list(model.model_fields)
    forms = [name(field_name, _field_form(field_name, info)) for field_name, info in model.model_fields.items()]

    def collect(*values: Any) -> dict[str, Any]:
        return dict(zip(field_names, values, strict=True))

    return transform(lift(collect, *forms), lambda data: _validate_model(model, data))
