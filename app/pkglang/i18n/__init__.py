"""i18n system - gettext message-catalog localization.

Main components:
- models: Catalog, MessageKey, SearchRoot, LocalizedString
- parser: CatalogParser for binary .mo catalogs
- plural: Plural-Forms compiler (compile_plural_forms, PluralRule)
- repository: CatalogRepository resolving catalogs for a culture chain
- domain: LanguageDomain lookup facade
- language/registry/preferences: package languages, their registry and the
  preferred culture manager
"""

from pkglang.i18n.cultures import (
    build_fallback_chain,
    normalize_culture_name,
    specific_culture_name,
)
from pkglang.i18n.domain import LanguageDomain
from pkglang.i18n.exceptions import (
    CatalogFormatError,
    CatalogFormatErrorReason,
    LanguageAlreadySetUpError,
    LocalizationError,
    PackageAlreadyRegisteredError,
    PackageNotRegisteredError,
    PluralExpressionError,
    PluralExpressionErrorReason,
)
from pkglang.i18n.factory import create_package_language
from pkglang.i18n.language import PackageLanguage, languages_search_roots
from pkglang.i18n.models import Catalog, LocalizedString, MessageKey, SearchRoot
from pkglang.i18n.parser import CatalogParser, parse_catalog
from pkglang.i18n.plural import PluralRule, compile_plural_forms
from pkglang.i18n.preferences import CultureManager
from pkglang.i18n.registry import LanguageRegistry, get_language_registry
from pkglang.i18n.repository import CatalogRepository

__all__ = [
    "Catalog",
    "MessageKey",
    "SearchRoot",
    "LocalizedString",
    "CatalogParser",
    "parse_catalog",
    "PluralRule",
    "compile_plural_forms",
    "CatalogRepository",
    "LanguageDomain",
    "PackageLanguage",
    "languages_search_roots",
    "create_package_language",
    "LanguageRegistry",
    "get_language_registry",
    "CultureManager",
    "build_fallback_chain",
    "normalize_culture_name",
    "specific_culture_name",
    "LocalizationError",
    "CatalogFormatError",
    "CatalogFormatErrorReason",
    "PluralExpressionError",
    "PluralExpressionErrorReason",
    "PackageNotRegisteredError",
    "PackageAlreadyRegisteredError",
    "LanguageAlreadySetUpError",
]
