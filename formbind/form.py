"""Form base class and the binding pipeline.

Usage:
    class ContactForm(Form):
        name: StringField = tag(required=True)
        age: Int64Field
        topic: StringChoiceField

    form = ContactForm(topic=StringChoiceField(choices=[("bug", "Bug"), ("idea", "Idea")]))

    if form.validate_values(submitted):
        # form.name.value, form.age.value, ... hold typed values
        ...
    else:
        # form.errors maps field name -> ValidationError
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from formbind.exceptions import ValidationError
from formbind.fields import Field, is_field_valid
from formbind.lookup import ValueLookup, form_values_lookup, multipart_lookup
from formbind.registry import Registry, default_registry

logger = logging.getLogger(__name__)


def _registry_for(form: object, registry: Registry | None) -> Registry:
    if registry is not None:
        return registry
    return getattr(form, "_registry", None) or default_registry


def init_form(form: object, registry: Registry | None = None) -> None:
    """Construct unset fields and fill in names, labels and widget attributes.

    Fields already present on the instance keep their own configuration;
    only fields built here take the required flag from the class declaration.
    """
    registry = _registry_for(form, registry)

    for info in registry.type_info(type(form)):
        field: Field | None = vars(form).get(info.attr)
        fresh = field is None
        if fresh:
            field = info.constructor()
            setattr(form, info.attr, field)

        if field.name is None:
            field.name = info.name
        if field.label is None:
            field.label = info.label
        if fresh:
            field.required = info.required

        attrs = field.widget.attrs
        if "id" not in attrs:
            attrs.set("id", field.name)
        if "name" not in attrs:
            attrs.set("name", field.name)


def is_valid(form: object, lookup: ValueLookup, registry: Registry | None = None) -> bool:
    """Bind submitted values to every field of ``form`` and validate them.

    ``lookup(name, is_multi, is_multipart)`` supplies each field's raw value.
    ``form.errors`` is replaced with the failures from this pass. Errors
    raised by ``lookup`` itself (e.g. TransportError) propagate.
    """
    registry = _registry_for(form, registry)

    errors: dict[str, ValidationError] = {}
    for info in registry.type_info(type(form)):
        field: Field | None = vars(form).get(info.attr)
        if field is None:
            continue

        raw_value = lookup(field.name, field.is_multi, field.is_multipart)
        if not is_field_valid(field, raw_value):
            errors[field.name] = field.error

    form.errors = errors
    if errors:
        logger.debug("%s failed validation: %s", type(form).__name__, ", ".join(errors))

    return not errors


class Form:
    """Base class for declarative forms.

    Annotated members whose type is a Field subclass are the form's fields.
    Keyword arguments to the constructor supply pre-configured field
    instances; every other declared field is built from the registry.
    """

    def __init__(self, *, registry: Registry | None = None, **fields: Field):
        self._registry = registry or default_registry
        self.errors: dict[str, ValidationError] = {}

        declared = {info.attr for info in self._registry.type_info(type(self))}
        for attr, field in fields.items():
            if attr not in declared:
                raise TypeError(f"{type(self).__name__} has no field {attr!r}")
            setattr(self, attr, field)

        init_form(self, self._registry)

    # -- Validation --

    def is_valid(self, lookup: ValueLookup) -> bool:
        return is_valid(self, lookup, self._registry)

    def validate_values(self, values: Mapping[str, Any]) -> bool:
        """Validate URL-encoded form values (a MultiDict or a mapping of lists)."""
        return self.is_valid(form_values_lookup(values))

    def validate_multipart(self, data: Mapping[str, Any]) -> bool:
        """Validate multipart form data containing both values and uploaded files."""
        return self.is_valid(multipart_lookup(data))

    @property
    def is_multipart(self) -> bool:
        return any(field.is_multipart for field in self)

    # -- Field access & iteration --

    @property
    def fields(self) -> dict[str, Field]:
        fields = {}
        for info in self._registry.type_info(type(self)):
            field = vars(self).get(info.attr)
            if field is not None:
                fields[field.name] = field
        return fields

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields.values())

    def __getitem__(self, field_name: str) -> Field:
        return self.fields[field_name]

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self.fields

    def error(self, field_name: str) -> ValidationError | None:
        """Validation error for a field from the last pass (None if no error)."""
        return self.errors.get(field_name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fields={list(self.fields)!r}, errors={self.errors!r})"
