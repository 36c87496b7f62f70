"""Package language registry.

Packages register a (package name, root culture, search roots provider)
triple at startup. The PackageLanguage for a registration is constructed on
first request and loaded for the registry's current culture.
"""

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from pkglang.i18n.exceptions import (
    PackageAlreadyRegisteredError,
    PackageNotRegisteredError,
)
from pkglang.i18n.factory import create_package_language
from pkglang.i18n.language import PackageLanguage, SearchRootsProvider
from pkglang.logging import get_module_logger

logger = get_module_logger()


@dataclass(frozen=True)
class PackageRegistration:
    """What a package supplies to be localized."""

    package_name: str
    root_culture: str
    search_roots_provider: SearchRootsProvider


class LanguageRegistry:
    """Thread-safe registry of package languages.

    Attributes:
        culture: Culture new and reloaded languages are loaded for; None
            means each package's root culture.
    """

    def __init__(self, culture: Optional[str] = None):
        self.culture = culture
        self._registrations: Dict[str, PackageRegistration] = {}
        self._languages: Dict[str, PackageLanguage] = {}
        self._lock = threading.Lock()

    def register(
        self,
        package_name: str,
        root_culture: str,
        search_roots_provider: SearchRootsProvider,
    ) -> PackageRegistration:
        """Register a package for localization.

        Raises:
            ValueError: If package_name is empty.
            PackageAlreadyRegisteredError: If the name is already registered.
        """
        if not package_name:
            raise ValueError("package_name must be a non-empty string")

        registration = PackageRegistration(package_name, root_culture, search_roots_provider)
        with self._lock:
            if package_name in self._registrations:
                raise PackageAlreadyRegisteredError(
                    f"Package '{package_name}' is already registered"
                )
            self._registrations[package_name] = registration

        logger.info(
            "package_language_registered",
            package_name=package_name,
            root_culture=root_culture,
        )
        return registration

    def unregister(self, package_name: str) -> None:
        """Remove a package and its language.

        Raises:
            PackageNotRegisteredError: If the package is not registered.
        """
        with self._lock:
            if package_name not in self._registrations:
                raise PackageNotRegisteredError(
                    f"Package '{package_name}' is not registered"
                )
            del self._registrations[package_name]
            self._languages.pop(package_name, None)

        logger.info("package_language_unregistered", package_name=package_name)

    def is_registered(self, package_name: str) -> bool:
        with self._lock:
            return package_name in self._registrations

    def get(self, package_name: str) -> PackageLanguage:
        """Get the language of a package, constructing it on first request.

        Raises:
            PackageNotRegisteredError: If the package is not registered.
        """
        with self._lock:
            language = self._languages.get(package_name)
            if language is not None:
                return language

            registration = self._registrations.get(package_name)
            if registration is None:
                raise PackageNotRegisteredError(
                    f"Package '{package_name}' is not registered"
                )
            culture = self.culture

        # Built without the lock held; the provider may call back into the registry.
        language = create_package_language(
            registration.package_name,
            root_culture=registration.root_culture,
            search_roots_provider=registration.search_roots_provider,
            culture=culture,
        )

        with self._lock:
            if self._registrations.get(package_name) is not registration:
                raise PackageNotRegisteredError(
                    f"Package '{package_name}' was unregistered while loading"
                )
            language = self._languages.setdefault(package_name, language)
            current_culture = self.culture

        # A reload_all that ran while loading switched the culture.
        if current_culture != culture:
            language.load(current_culture)
        return language

    def packages(self) -> List[PackageLanguage]:
        """Languages of every registered package, constructing any missing."""
        with self._lock:
            names = list(self._registrations)
        return [self.get(name) for name in names]

    def reload_all(self, culture: Optional[str] = None) -> None:
        """Reload every constructed language, optionally switching culture.

        Args:
            culture: New culture for all packages; keeps the current one if None.
        """
        with self._lock:
            if culture is not None:
                self.culture = culture
            languages = list(self._languages.values())

        for language in languages:
            language.load(self.culture)

        logger.info(
            "package_languages_reloaded",
            culture=self.culture,
            package_count=len(languages),
        )

    def discover_available_cultures(self) -> List[str]:
        """Cultures with a catalog for any registered package, sorted."""
        cultures = set()
        for language in self.packages():
            cultures.update(language.discover_available_cultures())
        return sorted(cultures)

    def reset(self) -> None:
        """Remove all registrations and languages.

        Primarily used for testing.
        """
        with self._lock:
            self._registrations.clear()
            self._languages.clear()
            logger.debug("language_registry_cleared")

    def count(self) -> int:
        with self._lock:
            return len(self._registrations)


# Global registry instance
_global_registry: Optional[LanguageRegistry] = None
_global_registry_lock = threading.Lock()


def get_language_registry() -> LanguageRegistry:
    """Get the global language registry singleton.

    Thread-safe singleton pattern. Creates the registry on first call.
    """
    global _global_registry

    if _global_registry is None:
        with _global_registry_lock:
            # Double-check locking pattern
            if _global_registry is None:
                _global_registry = LanguageRegistry()
                logger.debug("global_language_registry_initialized")

    return _global_registry
