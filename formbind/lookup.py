"""Value-lookup strategies.

The binding pipeline asks a lookup for each field's raw value with
``lookup(name, is_multi, is_multipart)``. A lookup returns the first
submitted value for single-value fields, the list of all values for
multi-value fields, and None when nothing was submitted.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from litestar.datastructures import UploadFile

from formbind.blobs import StoredBlob
from formbind.exceptions import TransportError

ValueLookup = Callable[[str, bool, bool], Any]


def _getall(source: Mapping[str, Any], name: str) -> list[Any]:
    """All values for ``name`` from a MultiDict or a mapping of lists."""
    getall = getattr(source, "getall", None)
    if getall is not None:
        return list(getall(name, []))

    values = source.get(name)
    if values is None:
        return []
    if isinstance(values, (list, tuple)):
        return list(values)
    return [values]


def _pick(values: list[Any], is_multi: bool) -> Any:
    if not values:
        return None
    return values if is_multi else values[0]


def form_values_lookup(values: Mapping[str, Any]) -> ValueLookup:
    """Lookup over URL-encoded form values. Refuses file-transport fields."""

    def lookup(name: str, is_multi: bool, is_multipart: bool) -> Any:
        if is_multipart:
            raise TransportError(
                f"Field {name!r} expects a file upload; use multipart_lookup() "
                "or blobstore_lookup() for forms with file fields"
            )
        return _pick(_getall(values, name), is_multi)

    return lookup


def multipart_lookup(data: Mapping[str, Any]) -> ValueLookup:
    """Lookup over multipart form data holding both strings and UploadFiles.

    File-transport fields only see uploaded files; ordinary fields only see
    the other values.
    """

    def lookup(name: str, is_multi: bool, is_multipart: bool) -> Any:
        entries = _getall(data, name)
        if is_multipart:
            entries = [entry for entry in entries if isinstance(entry, UploadFile)]
        else:
            entries = [entry for entry in entries if not isinstance(entry, UploadFile)]
        return _pick(entries, is_multi)

    return lookup


def blobstore_lookup(
    blobs: Mapping[str, list[StoredBlob]], values: Mapping[str, Any]
) -> ValueLookup:
    """Lookup combining stored-blob handles with ordinary form values."""

    def lookup(name: str, is_multi: bool, is_multipart: bool) -> Any:
        if is_multipart:
            return _pick(list(blobs.get(name) or []), is_multi)
        return _pick(_getall(values, name), is_multi)

    return lookup


def mapping_lookup(data: Mapping[str, Any]) -> ValueLookup:
    """Lookup over a plain mapping of value lists, regardless of transport."""

    def lookup(name: str, is_multi: bool, is_multipart: bool) -> Any:
        return _pick(_getall(data, name), is_multi)

    return lookup
