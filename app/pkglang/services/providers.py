"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for the localization services.
"""

from functools import lru_cache

from pkglang.configuration import Settings
from pkglang.i18n.preferences import CultureManager
from pkglang.i18n.registry import LanguageRegistry
from pkglang.i18n.registry import get_language_registry as _get_global_registry


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


def get_language_registry() -> LanguageRegistry:
    """
    Get the process-wide language registry.

    Returns:
        LanguageRegistry: The global registry packages register with.
    """
    return _get_global_registry()


@lru_cache
def get_culture_manager() -> CultureManager:
    """
    Get application-scoped culture manager singleton.

    The initial preferred culture comes from LOCALIZATION_PREFERRED_CULTURE,
    falling back to LOCALIZATION_FALLBACK_CULTURE.

    Returns:
        CultureManager: Cached manager bound to the global registry.
    """
    settings = get_settings()
    return CultureManager(
        registry=get_language_registry(),
        fallback_culture=settings.localization.fallback_culture,
        preferred_culture=settings.localization.preferred_culture,
    )
