"""Language domain - the runtime lookup facade.

Holds the active catalog and its compiled plural rule for one package and
answers text lookups. Lookups never raise; the worst case is the
non-translated text supplied by the caller.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, Union

from pkglang.i18n.exceptions import PluralExpressionError
from pkglang.i18n.models import Catalog, LocalizedString, MessageKey, SearchRoot
from pkglang.i18n.plural import PluralRule, compile_plural_forms, default_plural_rule
from pkglang.i18n.repository import CatalogRepository
from pkglang.logging import get_module_logger

logger = get_module_logger()

SearchRootsSource = Union[Sequence[SearchRoot], Callable[[], Sequence[SearchRoot]]]

DEFAULT_ELLIPSIS = "…"


@dataclass(frozen=True)
class DomainState:
    """Everything a lookup reads, replaced as a single reference on load."""

    catalog: Catalog
    plural_rule: PluralRule
    culture_chain: Tuple[str, ...] = ()


def _compile_rule(catalog: Catalog) -> PluralRule:
    try:
        return compile_plural_forms(catalog.plural_forms)
    except PluralExpressionError as e:
        logger.warning(
            "plural_forms_invalid",
            plural_forms=catalog.plural_forms,
            culture=catalog.culture,
            reason=e.reason.value,
            offset=e.offset,
            error=str(e),
        )
        return default_plural_rule()


class LanguageDomain:
    """Serves translated text for the active culture of one package.

    ``load`` resolves a new catalog and swaps the whole state in a single
    assignment, so concurrent readers see either the old or the new
    catalog and never a mix.

    Attributes:
        repository: CatalogRepository used to resolve catalogs.
        ellipsis: Marker appended by opens_window.
    """

    def __init__(
        self,
        repository: Optional[CatalogRepository] = None,
        search_roots: SearchRootsSource = (),
        ellipsis: str = DEFAULT_ELLIPSIS,
    ):
        """Initialize LanguageDomain with an empty catalog.

        Args:
            repository: CatalogRepository to resolve catalogs with.
            search_roots: Search roots, or a callable returning them; a
                callable is re-evaluated on every load.
            ellipsis: Marker appended by opens_window.
        """
        self.repository = repository or CatalogRepository()
        self.ellipsis = ellipsis
        self._search_roots = search_roots
        self._state = DomainState(Catalog.empty(), default_plural_rule())

    @property
    def search_roots(self) -> Sequence[SearchRoot]:
        if callable(self._search_roots):
            return list(self._search_roots())
        return list(self._search_roots)

    def load(self, culture_chain: Sequence[str]) -> Catalog:
        """Resolve and activate the catalog for a culture fallback chain.

        Safe to call repeatedly; each call fully replaces the active state.

        Args:
            culture_chain: Culture identifiers, most specific first.

        Returns:
            The newly active Catalog.
        """
        culture_chain = tuple(culture_chain)
        catalog = self.repository.resolve(self.search_roots, culture_chain)
        self.load_catalog(catalog, culture_chain)
        return catalog

    def load_catalog(self, catalog: Catalog, culture_chain: Sequence[str] = ()) -> None:
        """Activate an already-built catalog."""
        state = DomainState(catalog, _compile_rule(catalog), tuple(culture_chain))
        self._state = state
        logger.info(
            "language_domain_loaded",
            requested_culture=state.culture_chain[0] if state.culture_chain else None,
            resolved_culture=catalog.culture,
            entry_count=len(catalog),
            plural_count=catalog.plural_count,
        )

    @property
    def catalog(self) -> Catalog:
        return self._state.catalog

    @property
    def active_culture(self) -> Optional[str]:
        """Culture requested by the last load (first of its chain)."""
        chain = self._state.culture_chain
        return chain[0] if chain else None

    @property
    def resolved_culture(self) -> Optional[str]:
        """Culture whose catalog files are in use, or None if untranslated."""
        return self._state.catalog.culture

    @property
    def plural_count(self) -> int:
        return self._state.catalog.plural_count

    def text(self, message: str) -> str:
        """Translate a message without context."""
        return self.particular_text("", message)

    def particular_text(self, context: str, message: str) -> str:
        """Translate a message with a disambiguating context."""
        forms = self._state.catalog.get_forms(MessageKey(context, message))
        if forms:
            return forms[0]
        return message

    def plural_text(self, singular: str, plural: str, value: int) -> str:
        """Translate a message choosing the plural form for ``value``."""
        return self.particular_plural_text("", singular, plural, value)

    def particular_plural_text(
        self, context: str, singular: str, plural: str, value: int
    ) -> str:
        """Translate a message with context, choosing the plural form for ``value``.

        Without a translation, ``singular`` is returned when value is exactly
        one and ``plural`` otherwise.
        """
        state = self._state
        forms = state.catalog.get_forms(MessageKey(context, singular))
        if not forms:
            return singular if value == 1 else plural
        if len(forms) != state.catalog.plural_count:
            return forms[0]

        try:
            index = state.plural_rule.evaluate(abs(value))
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "plural_evaluation_failed",
                expression=state.plural_rule.expression,
                value=value,
                culture=state.catalog.culture,
                error=str(e),
            )
            return forms[0]
        # The rule may come from a different header than the catalog's count.
        index = min(index, len(forms) - 1)
        return forms[index]

    def proper_name(self, name: str) -> str:
        """Translate a proper name, annotating it with the original name.

        Returns ``"{translation} ({name})"`` unless the translation already
        contains the parenthesized original name.
        """
        forms = self._state.catalog.get_forms(MessageKey("", name))
        if not forms:
            return name
        translation = forms[0]
        if f"({name})" in translation:
            return translation
        return f"{translation} ({name})"

    def opens_window(self, action: str) -> str:
        """Mark action text as opening another window; does not translate."""
        return f"{action}{self.ellipsis}"

    def localize(self, localized_string: LocalizedString) -> str:
        """Translate a LocalizedString."""
        return self.particular_text(localized_string.context, localized_string.value)
