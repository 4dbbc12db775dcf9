"""``[tool.formtree]`` settings from the nearest pyproject.toml.

Example:
    [tool.formtree]
    form = "myapp.forms:signup"          # or { script = "forms.py", name = "signup" }
    input = "fixtures/signup.toml"
    method = "post"

"""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from formtree._types import Method

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Error in formtree configuration."""


class ScriptTarget(BaseModel):
    """A form variable defined in a standalone script."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    script: Path
    name: str | None = None


class FormtreeConfig(BaseModel):
    """Settings for the CLI, every one optional.

    ``form`` is either a ``"module.path:variable"`` string or a ``ScriptTarget``.
    Once loaded through ``load_config``, relative paths are resolved against
    ``project_root``, the directory holding the pyproject.toml.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    form: str | ScriptTarget | None = None
    input: Path | None = None
    method: Method | None = None
    project_root: Path | None = None

    @field_validator("form")
    @classmethod
    def _module_target_names_a_variable(cls, value: str | ScriptTarget | None) -> str | ScriptTarget | None:
        if isinstance(value, str) and ":" not in value:
            msg = f"'{value}' must be 'module.path:variable' or a table with a 'script' key"
            raise ValueError(msg)
        return value

    @field_validator("method", mode="before")
    @classmethod
    def _case_insensitive_method(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    def relative_to(self, root: Path) -> "FormtreeConfig":
        """Resolve relative paths against ``root`` and record it as the project root."""
        form = self.form
        if isinstance(form, ScriptTarget):
            form = form.model_copy(update={"script": root / form.script})
        input_path = root / self.input if self.input is not None else None
        return self.model_copy(update={"form": form, "input": input_path, "project_root": root})


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Nearest pyproject.toml in ``start_dir`` (default: the working directory) or its parents."""
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'section'}: {err['msg']}" for err in error.errors()
    )


def load_config(pyproject_path: Path) -> FormtreeConfig:
    """Read and validate the ``[tool.formtree]`` section of ``pyproject_path``.

    A missing section yields an empty configuration.

    Raises:
        ConfigError: If the file is not valid TOML or the section is invalid.

    """
    try:
        data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {pyproject_path}: {e}"
        raise ConfigError(msg) from e

    section = data.get("tool", {}).get("formtree", {})
    section.pop("project_root", None)
    try:
        config = FormtreeConfig.model_validate(section)
    except ValidationError as e:
        msg = f"Invalid formtree configuration in {pyproject_path}: {_describe(e)}"
        raise ConfigError(msg) from e

    logger.debug(f"Loaded formtree configuration from {pyproject_path}")
    return config.relative_to(pyproject_path.parent)


def get_config() -> FormtreeConfig:
    """Configuration from the nearest pyproject.toml, or an empty one if there is none."""
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return FormtreeConfig()
    return load_config(pyproject_path)
