"""Error types for field validation and form wiring."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a validation failure, for programmatic consumers."""

    REQUIRED = "required"
    FORMAT = "format"
    LENGTH = "length"
    RANGE = "range"
    CHOICE = "choice"
    TYPE = "type"
    CUSTOM = "custom"


class ValidationError(Exception):
    """Submitted value failed validation.

    Raised by fields and validators, caught by the binding pipeline and
    stored on the field and in the form's error map. Never escapes
    ``is_valid()``.
    """

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.CUSTOM):
        super().__init__(message)
        self.message = message
        self.kind = kind

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ValidationError({self.message!r}, kind={self.kind.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.message == other.message and self.kind == other.kind

    def __hash__(self) -> int:
        return hash((self.message, self.kind))


class FormbindError(Exception):
    """Programming error in how a form is declared or bound."""


class UnregisteredFieldError(FormbindError, LookupError):
    """A form declares a field class with no registered constructor."""


class TransportError(FormbindError):
    """A value-lookup strategy was used against a field it cannot serve."""
