"""Shared fixtures for the pkglang test suite."""

import pytest

from pkglang.i18n import registry as registry_module
from pkglang.services import providers


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset process-wide singletons around every test."""
    registry_module._global_registry = None
    providers.get_settings.cache_clear()
    providers.get_culture_manager.cache_clear()
    yield
    registry_module._global_registry = None
    providers.get_settings.cache_clear()
    providers.get_culture_manager.cache_clear()
