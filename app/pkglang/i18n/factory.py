"""Factory functions for creating i18n components.

Provides convenience functions for building package languages with the
configured defaults.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from pkglang.configuration import LocalizationSettings
from pkglang.i18n.domain import LanguageDomain
from pkglang.i18n.language import (
    PackageLanguage,
    SearchRootsProvider,
    languages_search_roots,
)
from pkglang.i18n.repository import CatalogRepository
from pkglang.logging import get_module_logger

logger = get_module_logger()


def create_package_language(
    package_name: str,
    root_culture: Optional[str] = None,
    search_roots_provider: Optional[SearchRootsProvider] = None,
    base_directories: Optional[Iterable[Union[str, Path]]] = None,
    culture: Optional[str] = None,
    preload: bool = True,
    settings: Optional[LocalizationSettings] = None,
) -> PackageLanguage:
    """Create and configure a PackageLanguage.

    Args:
        package_name: Name of the package.
        root_culture: Culture of the source text (default: fallback culture).
        search_roots_provider: Callable returning search roots. When omitted,
            roots are built from base_directories.
        base_directories: Base directories holding ``<package>/Languages``
            (default: current working directory).
        culture: Culture to load on creation (default: root culture).
        preload: Whether to load the domain immediately.
        settings: LocalizationSettings override.

    Returns:
        PackageLanguage: Configured package language.

    Usage:
        language = create_package_language(
            "my-package",
            base_directories=[assets_dir, user_data_dir],
            culture="fr-FR",
        )
        language.text("Hello")
    """
    settings = settings or LocalizationSettings()
    root_culture = root_culture or settings.fallback_culture

    if search_roots_provider is None:
        bases = list(base_directories) if base_directories is not None else [Path.cwd()]

        def _default_search_roots():
            return languages_search_roots(
                package_name,
                bases,
                languages_directory=settings.languages_directory,
                extension=settings.catalog_extension,
            )

        search_roots_provider = _default_search_roots

    domain = LanguageDomain(
        repository=CatalogRepository(),
        search_roots=search_roots_provider,
        ellipsis=settings.ellipsis,
    )
    language = PackageLanguage(
        package_name=package_name,
        root_culture=root_culture,
        search_roots_provider=search_roots_provider,
        domain=domain,
    )

    if preload:
        language.load(culture)
        logger.info(
            "package_language_created_with_preload",
            package_name=package_name,
            culture=language.active_culture,
        )
    else:
        logger.info("package_language_created_lazy", package_name=package_name)

    return language
