"""Discover the fields declared on a form class.

Fields are declared as annotated class members. An optional ``tag()``
default (or ``Annotated`` metadata) overrides the name and label and marks
the field required:

    class SignupForm(Form):
        email: StringField = tag(required=True)
        age: Int64Field = tag(label="Your age")
        newsletter: Annotated[BoolField, tag(name="nl")]

Members whose names start with an underscore are private and ignored, as
are members whose annotation is not a Field subclass.
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any

from formbind.exceptions import FormbindError, UnregisteredFieldError
from formbind.fields import Field

Constructor = Callable[[], Field]


def split_words(s: str) -> list[str]:
    """Split a CamelCase identifier into words.

    Runs of capitals stay together: ``"HTTPReq"`` -> ``["HTTP", "Req"]``.
    """
    words: list[str] = []
    if not s:
        return words

    n = len(s)
    i = 0
    while i < n - 1:
        start = i
        first, second = s[i], s[i + 1]
        i += 2

        if first.isupper() and second.isupper():
            while i < n:
                i += 1
                if s[i - 1].islower():
                    i -= 1
                    break
            # The last capital before a lowercase letter starts the next word
            if i != n:
                i -= 1
        else:
            while i < n:
                i += 1
                if s[i - 1].isupper():
                    i -= 1
                    break

        words.append(s[start:i])

    if i < n:
        words.append(s[i:])

    return words


def derive_label(identifier: str) -> str:
    """Human label for an attribute name: first_name -> "First Name", HTTPReq -> "HTTP Req"."""
    words = [
        word[:1].upper() + word[1:]
        for part in identifier.split("_")
        for word in split_words(part)
    ]
    return " ".join(words)


@dataclass(frozen=True)
class FieldTag:
    """Declarative per-field settings attached to a form class member."""

    name: str | None = None
    label: str | None = None
    required: bool = False


def tag(name: str | None = None, *, label: str | None = None, required: bool = False) -> Any:
    """Declare name/label overrides and requiredness for a form field."""
    return FieldTag(name=name, label=label, required=required)


@dataclass(frozen=True)
class FieldInfo:
    """Descriptor for one declared field of a form class."""

    attr: str
    name: str
    label: str
    required: bool
    constructor: Constructor


def _class_default(form_cls: type, attr: str) -> Any:
    for klass in form_cls.__mro__:
        if attr in vars(klass):
            return vars(klass)[attr]
    return None


def _split_annotation(hint: Any) -> tuple[Any, FieldTag | None]:
    if typing.get_origin(hint) is Annotated:
        base, *metadata = typing.get_args(hint)
        tags = [item for item in metadata if isinstance(item, FieldTag)]
        return base, tags[-1] if tags else None
    return hint, None


def build_type_info(
    form_cls: type, lookup: Callable[[type], Constructor | None]
) -> tuple[FieldInfo, ...]:
    """Compute field descriptors for ``form_cls`` in declaration order.

    ``lookup`` maps a field class to its registered constructor. Raises
    UnregisteredFieldError for a field class with no constructor.
    """
    hints = typing.get_type_hints(form_cls, include_extras=True)

    infos = []
    for attr, hint in hints.items():
        if attr.startswith("_"):
            continue

        field_cls, field_tag = _split_annotation(hint)
        if not (isinstance(field_cls, type) and issubclass(field_cls, Field)):
            continue

        default = _class_default(form_cls, attr)
        if isinstance(default, FieldTag):
            field_tag = default
        elif default is not None:
            raise FormbindError(
                f"{form_cls.__name__}.{attr}: field defaults must be declared with tag()"
            )
        field_tag = field_tag or FieldTag()

        constructor = lookup(field_cls)
        if constructor is None:
            raise UnregisteredFieldError(
                f"{form_cls.__name__}.{attr}: no constructor registered for {field_cls.__name__}"
            )

        infos.append(
            FieldInfo(
                attr=attr,
                name=field_tag.name or attr,
                label=field_tag.label or derive_label(attr),
                required=field_tag.required,
                constructor=constructor,
            )
        )

    return tuple(infos)
