"""Service providers for application-scoped singletons."""

from pkglang.services.providers import (
    get_culture_manager,
    get_language_registry,
    get_settings,
)

__all__ = ["get_settings", "get_language_registry", "get_culture_manager"]
