"""Shared pytest fixtures."""

from unittest.mock import MagicMock

import pytest

from formbind.config import get_settings
from formbind.fields import register_builtin_fields
from formbind.registry import Registry, default_registry


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop cached settings so environment changes in a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_default_registry():
    """Restore the default registry's constructors and type-info cache after each test."""
    constructors = default_registry._constructors.copy()
    type_infos = default_registry._type_infos.copy()
    yield
    default_registry._constructors = constructors
    default_registry._type_infos = type_infos


@pytest.fixture
def registry():
    """A fresh registry with the built-in field variants."""
    registry = Registry()
    register_builtin_fields(registry)
    return registry


@pytest.fixture
def mock_request_factory():
    """Factory fixture that returns mock requests with the given form data."""
    def _make(form_data=None):
        request = MagicMock()

        async def _form():
            return form_data or {}

        request.form = _form
        return request
    return _make
