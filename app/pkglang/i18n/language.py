"""Package languages.

A package language ties a package name and root culture to the search roots
holding its catalogs and to the LanguageDomain serving its text.
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Union

from pkglang.i18n.cultures import build_fallback_chain, normalize_culture_name
from pkglang.i18n.domain import LanguageDomain
from pkglang.i18n.exceptions import LanguageAlreadySetUpError
from pkglang.i18n.models import SearchRoot
from pkglang.logging import get_module_logger

logger = get_module_logger()

SearchRootsProvider = Callable[[], Sequence[SearchRoot]]

LANGUAGES_DIRECTORY_NAME = "Languages"


def languages_search_roots(
    package_name: str,
    base_directories: Iterable[Union[str, Path]],
    languages_directory: str = LANGUAGES_DIRECTORY_NAME,
    extension: str = ".mo",
) -> List[SearchRoot]:
    """Search roots ``<base>/<package_name>/<languages_directory>`` per base.

    Bases are typically the asset directory followed by the user-data
    directory, so user-supplied catalogs override shipped ones.
    """
    return [
        SearchRoot(Path(base).resolve() / package_name / languages_directory, extension)
        for base in base_directories
    ]


class PackageLanguage:
    """Localization for one named package.

    Attributes:
        package_name: Name of the package.
        root_culture: Culture of the non-translated text in code.
        domain: LanguageDomain serving the package's text. Set once, either
            through the constructor or setup(); a default domain over the
            package's search roots is created on first use otherwise.
    """

    def __init__(
        self,
        package_name: str,
        root_culture: str,
        search_roots_provider: SearchRootsProvider,
        domain: Optional[LanguageDomain] = None,
    ):
        """Initialize PackageLanguage.

        Args:
            package_name: Name of the package.
            root_culture: Culture of the non-translated text in code.
            search_roots_provider: Callable returning the package's search roots.
            domain: Optional pre-built LanguageDomain.

        Raises:
            ValueError: If package_name is empty or root_culture is invalid.
        """
        if not package_name:
            raise ValueError("package_name must be a non-empty string")

        self.package_name = package_name
        self.root_culture = normalize_culture_name(root_culture)
        self.search_roots_provider = search_roots_provider
        self._domain: Optional[LanguageDomain] = None
        self._culture: Optional[str] = None
        if domain is not None:
            self.setup(domain)

    def setup(self, domain: LanguageDomain) -> None:
        """Attach the language domain serving this package's text.

        Raises:
            ValueError: If domain is None.
            LanguageAlreadySetUpError: If a domain is already attached.
        """
        if domain is None:
            raise ValueError("domain must not be None")
        if self._domain is not None:
            raise LanguageAlreadySetUpError(
                f"Package language '{self.package_name}' has already been set up"
            )
        self._domain = domain

    @property
    def domain(self) -> LanguageDomain:
        if self._domain is None:
            self.setup(LanguageDomain(search_roots=self.search_roots_provider))
        return self._domain

    @property
    def active_culture(self) -> str:
        """Culture of the localization currently active."""
        return self._culture or self.root_culture

    def load(self, culture: Optional[str] = None) -> None:
        """Load the domain for a culture, falling back to the root culture.

        Args:
            culture: Culture identifier; defaults to the root culture.
        """
        self._culture = normalize_culture_name(culture) if culture else self.root_culture
        chain = build_fallback_chain(self._culture, self.root_culture)
        self.domain.load(chain)
        logger.info(
            "package_language_loaded",
            package_name=self.package_name,
            culture=self._culture,
            resolved_culture=self.domain.resolved_culture,
        )

    def reload(self) -> None:
        """Reload the domain using the currently active culture."""
        self.load(self.active_culture)

    def discover_available_cultures(self) -> List[str]:
        """Cultures that have a catalog file in any of the package's roots."""
        return self.domain.repository.discover_available_cultures(
            self.search_roots_provider()
        )

    def text(self, message: str) -> str:
        return self.domain.text(message)

    def particular_text(self, context: str, message: str) -> str:
        return self.domain.particular_text(context, message)

    def plural_text(self, singular: str, plural: str, value: int) -> str:
        return self.domain.plural_text(singular, plural, value)

    def particular_plural_text(
        self, context: str, singular: str, plural: str, value: int
    ) -> str:
        return self.domain.particular_plural_text(context, singular, plural, value)

    def proper_name(self, name: str) -> str:
        return self.domain.proper_name(name)

    def opens_window(self, action: str) -> str:
        return self.domain.opens_window(action)
