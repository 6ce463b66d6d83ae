"""Litestar request adapter."""

from __future__ import annotations

from litestar import Request

from formbind.form import Form
from formbind.lookup import form_values_lookup, multipart_lookup


async def validate_request(form: Form, request: Request) -> bool:
    """Parse the submitted body of ``request`` and validate ``form`` against it.

    Forms with file fields are read as multipart data, everything else as
    URL-encoded values.
    """
    form_data = await request.form()
    if form.is_multipart:
        return form.is_valid(multipart_lookup(form_data))
    return form.is_valid(form_values_lookup(form_data))
