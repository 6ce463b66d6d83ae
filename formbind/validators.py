"""Validators check an already-coerced field value.

A validator is any object with a ``validate(value)`` method that raises
:class:`~formbind.exceptions.ValidationError` on failure. Validators hold no
per-call state, so one instance can be shared between fields.

Usage:
    field = StringField()
    field.add_validator(RegexValidator(r"^[a-z]+$"))
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from formbind.config import get_settings
from formbind.exceptions import ErrorKind, ValidationError


@runtime_checkable
class Validator(Protocol):
    def validate(self, value: Any) -> None: ...


def unsupported_type(value: Any) -> ValidationError:
    message = get_settings().messages.unsupported_type.format(type_name=type(value).__name__)
    return ValidationError(message, ErrorKind.TYPE)


def invalid_choice(value: Any) -> ValidationError:
    message = get_settings().messages.invalid_choice.format(value=value)
    return ValidationError(message, ErrorKind.CHOICE)


class StringChoicesValidator:
    def __init__(self, choices: Sequence[tuple[str, str]]):
        self.choices = tuple((value, label) for value, label in choices)

    def validate(self, value: Any) -> None:
        if not isinstance(value, str):
            raise unsupported_type(value)
        for choice_value, _ in self.choices:
            if choice_value == value:
                return
        raise invalid_choice(value)


class Int64ChoicesValidator:
    def __init__(self, choices: Sequence[tuple[int, str]]):
        self.choices = tuple((value, label) for value, label in choices)

    def validate(self, value: Any) -> None:
        # bool is an int subclass but never a valid integer choice
        if not isinstance(value, int) or isinstance(value, bool):
            raise unsupported_type(value)
        for choice_value, _ in self.choices:
            if choice_value == value:
                return
        raise invalid_choice(value)


class RegexValidator:
    """Require a string value to match ``pattern`` (re.search semantics)."""

    def __init__(self, pattern: str | re.Pattern[str], message: str | None = None):
        self.pattern = re.compile(pattern)
        self.message = message

    def validate(self, value: Any) -> None:
        if not isinstance(value, str):
            raise unsupported_type(value)
        if self.pattern.search(value) is None:
            message = self.message or get_settings().messages.pattern_mismatch.format(value=value)
            raise ValidationError(message, ErrorKind.FORMAT)


class RangeValidator:
    """Require an integer value to lie within inclusive bounds."""

    def __init__(self, min_value: int | None = None, max_value: int | None = None):
        self.min_value = min_value
        self.max_value = max_value

    def validate(self, value: Any) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise unsupported_type(value)
        messages = get_settings().messages
        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                messages.below_minimum.format(min_value=self.min_value), ErrorKind.RANGE
            )
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                messages.above_maximum.format(max_value=self.max_value), ErrorKind.RANGE
            )
