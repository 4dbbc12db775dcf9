"""Errors raised when a form and the code addressing it disagree.

These are defects in how a form was built or queried, never user input
errors. User input errors are values carried by ``Error`` results.
"""

from ._types import Path, from_path


class FormDefinitionError(Exception):
    """Base class for form definition and addressing errors."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"'{from_path(path)}' {reason}")


class FieldNotFoundError(FormDefinitionError):
    """No sub-form exists at the queried path."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "does not exist")


class NotAFieldError(FormDefinitionError):
    """The queried path names a composite form rather than a single field."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "is not a field")


class AmbiguousFieldError(FormDefinitionError):
    """The queried path matches more than one sub-form."""

    def __init__(self, path: Path, count: int) -> None:
        self.count = count
        super().__init__(path, f"is ambiguous ({count} matches)")
