"""Blob transport: fields whose value is a handle to an already-stored upload.

Some deployments hand uploads straight to a storage service, which calls
back with blob metadata instead of file contents. ``BlobField`` accepts
those handles, and ``blobstore_lookup`` in :mod:`formbind.lookup` feeds them
into a form alongside the ordinary values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from markupsafe import Markup

from formbind.fields import Field
from formbind.registry import default_registry
from formbind.validators import unsupported_type
from formbind.widgets import FileWidget


@dataclass(frozen=True)
class StoredBlob:
    """Metadata for an upload already persisted by a storage backend."""

    key: str
    filename: str
    content_type: str
    size: int


class BlobField(Field):
    widget_class = FileWidget
    is_multipart = True

    @property
    def value(self) -> StoredBlob | None:
        return self._value

    def validate(self, raw_value: Any) -> None:
        if not isinstance(raw_value, StoredBlob):
            raise unsupported_type(raw_value)
        self.apply_validators(raw_value)
        self._value = raw_value

    def string_value(self) -> str:
        return "" if self._value is None else self._value.key

    def render(self, **attrs: object) -> Markup:
        return self.widget.render(attrs)


default_registry.register(BlobField, BlobField)
