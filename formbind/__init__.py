"""formbind - declarative forms: field binding, validation and HTML widgets."""

from formbind.blobs import BlobField, StoredBlob
from formbind.exceptions import (
    ErrorKind,
    FormbindError,
    TransportError,
    UnregisteredFieldError,
    ValidationError,
)
from formbind.fields import (
    BoolField,
    Field,
    FileField,
    Int64ChoiceField,
    Int64Field,
    MultiInt64ChoiceField,
    MultiStringChoiceField,
    StringChoiceField,
    StringField,
    TextareaStringField,
    is_field_valid,
)
from formbind.form import Form, init_form, is_valid
from formbind.introspect import split_words, tag
from formbind.lookup import blobstore_lookup, form_values_lookup, mapping_lookup, multipart_lookup
from formbind.registry import Registry, default_registry, register

__all__ = [
    "BlobField",
    "BoolField",
    "ErrorKind",
    "Field",
    "FileField",
    "Form",
    "FormbindError",
    "Int64ChoiceField",
    "Int64Field",
    "MultiInt64ChoiceField",
    "MultiStringChoiceField",
    "Registry",
    "StoredBlob",
    "StringChoiceField",
    "StringField",
    "TextareaStringField",
    "TransportError",
    "UnregisteredFieldError",
    "ValidationError",
    "blobstore_lookup",
    "default_registry",
    "form_values_lookup",
    "init_form",
    "is_field_valid",
    "is_valid",
    "mapping_lookup",
    "multipart_lookup",
    "register",
    "split_words",
    "tag",
]
