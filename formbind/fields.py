"""Field variants and the per-field binding algorithm.

A field couples a name/label, requiredness and a widget with the rules that
turn a raw submitted value into a typed one:

    field = Int64Field()
    if is_field_valid(field, "23"):
        field.value        # 23
    else:
        field.error        # ValidationError

Single-value fields are required unless told otherwise; multi-value fields
are optional.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence, Set
from typing import TYPE_CHECKING, Any

from litestar.datastructures import UploadFile
from markupsafe import Markup

from formbind.config import get_settings
from formbind.exceptions import ErrorKind, ValidationError
from formbind.validators import (
    Int64ChoicesValidator,
    StringChoicesValidator,
    Validator,
    unsupported_type,
)
from formbind.widgets import (
    CheckboxWidget,
    ChoiceWidget,
    FileWidget,
    MultiSelectWidget,
    RadioWidget,
    SelectWidget,
    TextareaWidget,
    TextWidget,
    Widget,
)

if TYPE_CHECKING:
    from formbind.registry import Registry

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
INT64_MAX_DIGITS = len(str(INT64_MAX))

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def to_string(value: Any) -> str:
    """Stringify a raw value the way it would appear in a form submission."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_int64(raw: Any) -> int:
    """Parse a base-10 signed 64-bit integer, raising ValidationError on failure."""
    messages = get_settings().messages
    text = to_string(raw)
    if not _INTEGER_RE.fullmatch(text):
        raise ValidationError(messages.invalid_integer.format(value=text), ErrorKind.FORMAT)
    # Too many digits for 64 bits; also keeps int() under the str-conversion limit
    if len(text.lstrip("+-").lstrip("0")) > INT64_MAX_DIGITS:
        raise ValidationError(messages.integer_out_of_range.format(value=text), ErrorKind.RANGE)
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValidationError(messages.integer_out_of_range.format(value=text), ErrorKind.RANGE)
    return value


def is_empty(value: Any) -> bool:
    """True for None, empty containers/strings, zero numbers and False."""
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, bytes, Sequence, Mapping, Set)):
        return len(value) == 0
    return False


def is_field_valid(field: Field, raw_value: Any) -> bool:
    """Run one binding pass of ``raw_value`` through ``field``.

    Clears the field's previous value and error, then sets at most one of
    them. Validation failures are recorded on ``field.error``; any other
    exception propagates.
    """
    field.reset()

    if field.is_empty(raw_value):
        if field.required:
            field.error = ValidationError(get_settings().messages.required, ErrorKind.REQUIRED)
            return False
        return True

    try:
        field.validate(raw_value)
    except ValidationError as e:
        field.error = e
        return False

    return True


ValidatorLike = Validator | Callable[[Any], None]


class Field(ABC):
    """Base class for all field variants.

    Subclasses implement ``validate()``, which must either raise
    ValidationError or store the coerced value in ``self._value``.
    """

    widget_class: type[Widget] = TextWidget
    is_multi: bool = False
    is_multipart: bool = False
    default_required: bool = True

    def __init__(
        self,
        *,
        name: str | None = None,
        label: str | None = None,
        required: bool | None = None,
        widget: Widget | None = None,
        validators: Sequence[ValidatorLike] = (),
    ):
        self.name = name
        self.label = label
        self.required = self.default_required if required is None else required
        self.widget = widget if widget is not None else self.widget_class()
        self.validators: list[ValidatorLike] = list(validators)
        self.error: ValidationError | None = None
        self._value: Any = None

    # -- Validation --

    @abstractmethod
    def validate(self, raw_value: Any) -> None:
        """Coerce and check ``raw_value``, storing it on success."""

    def is_empty(self, raw_value: Any) -> bool:
        return is_empty(raw_value)

    def add_validator(self, validator: ValidatorLike) -> None:
        self.validators.append(validator)

    def apply_validators(self, value: Any) -> None:
        """Run attached validators in order; the first failure propagates."""
        for validator in self.validators:
            if isinstance(validator, Validator):
                validator.validate(value)
            else:
                validator(value)

    def reset(self) -> None:
        self._value = None
        self.error = None

    # -- Value access --

    @property
    def has_value(self) -> bool:
        return self._value is not None

    @property
    def value(self) -> Any:
        return self._value

    def set_initial(self, value: Any) -> None:
        self._value = value

    def string_value(self) -> str | list[str]:
        if self._value is None:
            return ""
        return to_string(self._value)

    # -- Rendering --

    def render(self, **attrs: object) -> Markup:
        return self.widget.render(attrs, self.string_value())

    def __str__(self) -> str:
        return str(self.render())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, value={self._value!r}, error={self.error!r})"


class StringField(Field):
    def __init__(self, *, min_len: int = 0, max_len: int = 0, **kwargs: Any):
        super().__init__(**kwargs)
        self.min_len = min_len
        self.max_len = max_len

    @property
    def value(self) -> str:
        return "" if self._value is None else self._value

    def validate(self, raw_value: Any) -> None:
        value = to_string(raw_value)
        messages = get_settings().messages

        if self.min_len > 0 and len(value) < self.min_len:
            raise ValidationError(messages.min_length.format(min_len=self.min_len), ErrorKind.LENGTH)
        if self.max_len > 0 and len(value) > self.max_len:
            raise ValidationError(messages.max_length.format(max_len=self.max_len), ErrorKind.LENGTH)

        self.apply_validators(value)
        self._value = value


class TextareaStringField(StringField):
    widget_class = TextareaWidget


class Int64Field(Field):
    @property
    def value(self) -> int:
        return 0 if self._value is None else self._value

    def validate(self, raw_value: Any) -> None:
        value = parse_int64(raw_value)
        self.apply_validators(value)
        self._value = value


class BoolField(Field):
    widget_class = CheckboxWidget

    @property
    def value(self) -> bool:
        return False if self._value is None else self._value

    def validate(self, raw_value: Any) -> None:
        value = to_string(raw_value) == "true"
        self.apply_validators(value)
        self._value = value

    def render(self, **attrs: object) -> Markup:
        if self.string_value() == "true":
            attrs["checked"] = "checked"
        return self.widget.render(attrs, "true")


# -- Choice fields --


class ChoiceFieldMixin:
    """Adds a configurable (value, label) choice set to a field.

    ``set_choices()`` updates the widget's options and swaps in a validator
    checking membership in the new set.
    """

    choices_validator_class: type = StringChoicesValidator

    def __init__(
        self,
        *,
        choices: Sequence[tuple[Any, str]] | None = None,
        radio: bool = False,
        **kwargs: Any,
    ):
        if radio and kwargs.get("widget") is None:
            kwargs["widget"] = RadioWidget()
        if self.is_multi and isinstance(kwargs.get("widget"), RadioWidget):
            raise TypeError(f"{type(self).__name__} holds several values and cannot use radio buttons")
        super().__init__(**kwargs)
        self.choices: list[tuple[Any, str]] = []
        self._choices_validator: Validator | None = None
        if choices is not None:
            self.set_choices(choices)

    def set_choices(self, choices: Sequence[tuple[Any, str]]) -> None:
        if not isinstance(self.widget, ChoiceWidget):
            raise TypeError(f"{type(self.widget).__name__} does not support choices")

        self.choices = list(choices)
        self.widget.set_choices([(to_string(value), label) for value, label in self.choices])

        if self._choices_validator is not None:
            self.validators.remove(self._choices_validator)
        self._choices_validator = self.choices_validator_class(self.choices)
        self.add_validator(self._choices_validator)


class StringChoiceField(ChoiceFieldMixin, StringField):
    widget_class = SelectWidget
    choices_validator_class = StringChoicesValidator


class Int64ChoiceField(ChoiceFieldMixin, Int64Field):
    widget_class = SelectWidget
    choices_validator_class = Int64ChoicesValidator


class MultiValueMixin:
    """Multi-valued field: the raw value is a list and every entry is checked."""

    widget_class = MultiSelectWidget
    is_multi = True
    default_required = False

    @property
    def value(self) -> list:
        return [] if self._value is None else list(self._value)

    def coerce(self, raw_entry: Any) -> Any:
        raise NotImplementedError

    def validate(self, raw_value: Any) -> None:
        if not isinstance(raw_value, (list, tuple)):
            raise unsupported_type(raw_value)

        values = [self.coerce(entry) for entry in raw_value]
        for value in values:
            self.apply_validators(value)

        self._value = values

    def string_value(self) -> list[str]:
        return [to_string(value) for value in self.value]

    def render(self, **attrs: object) -> Markup:
        return self.widget.render(attrs, *self.string_value())


class MultiStringChoiceField(MultiValueMixin, StringChoiceField):
    def coerce(self, raw_entry: Any) -> str:
        return to_string(raw_entry)


class MultiInt64ChoiceField(MultiValueMixin, Int64ChoiceField):
    def coerce(self, raw_entry: Any) -> int:
        return parse_int64(raw_entry)


# -- File transport --


class FileField(Field):
    """Uploaded file from a multipart submission (a Litestar UploadFile)."""

    widget_class = FileWidget
    is_multipart = True

    @property
    def value(self) -> UploadFile | None:
        return self._value

    def validate(self, raw_value: Any) -> None:
        if not isinstance(raw_value, UploadFile):
            raise unsupported_type(raw_value)
        self.apply_validators(raw_value)
        self._value = raw_value

    def string_value(self) -> str:
        return "" if self._value is None else self._value.filename

    def render(self, **attrs: object) -> Markup:
        return self.widget.render(attrs)


BUILTIN_FIELDS: tuple[type[Field], ...] = (
    StringField,
    TextareaStringField,
    StringChoiceField,
    Int64Field,
    Int64ChoiceField,
    BoolField,
    MultiStringChoiceField,
    MultiInt64ChoiceField,
    FileField,
)


def register_builtin_fields(registry: Registry) -> None:
    """Register a default constructor for every built-in field variant."""
    for field_cls in BUILTIN_FIELDS:
        registry.register(field_cls, field_cls)
