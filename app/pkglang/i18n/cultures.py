"""Culture identifier helpers.

Builds the fallback chain consumed by the repository: the requested culture,
its progressively less specific parents, then the root culture. Neutral
cultures ("fr") are expanded to their most likely specific culture ("fr-FR")
from Babel's CLDR data.
"""

import re
from typing import List, Optional

from babel import Locale, UnknownLocaleError
from babel.core import get_global, parse_locale

_CULTURE_PATTERN = re.compile(r"^[A-Za-z]{2,8}(-[A-Za-z0-9]{1,8})*$")


def normalize_culture_name(name: str) -> str:
    """Normalize a culture identifier to ``language-Script-REGION`` casing.

    Accepts underscores as separators ("pt_BR" -> "pt-BR") and drops a
    POSIX encoding or modifier suffix ("de_DE.UTF-8@euro" -> "de-DE").

    Args:
        name: Culture identifier.

    Returns:
        Normalized identifier.

    Raises:
        ValueError: If name is empty or not a culture identifier.
    """
    if not name or not name.strip():
        raise ValueError("Culture name must not be empty")

    candidate = re.split(r"[.@]", name.strip(), maxsplit=1)[0].replace("_", "-")
    if not _CULTURE_PATTERN.match(candidate):
        raise ValueError(f"Invalid culture name: {name}")

    parts = candidate.split("-")
    normalized = [parts[0].lower()]
    for part in parts[1:]:
        if len(part) == 4 and part.isalpha():
            normalized.append(part.title())
        elif len(part) == 2 and part.isalpha():
            normalized.append(part.upper())
        else:
            normalized.append(part)
    return "-".join(normalized)


def parent_cultures(culture: str) -> List[str]:
    """Less specific cultures of an identifier, most specific first.

    Example:
        parent_cultures("zh-Hant-TW") == ["zh-Hant", "zh"]
    """
    parts = culture.split("-")
    return ["-".join(parts[:end]) for end in range(len(parts) - 1, 0, -1)]


def build_fallback_chain(culture: str, root_culture: Optional[str] = None) -> List[str]:
    """Build the culture fallback chain for a requested culture.

    Args:
        culture: Requested culture identifier (e.g. "fr-FR").
        root_culture: Culture of the non-translated source text, tried last.

    Returns:
        Unique culture identifiers, most specific first; e.g.
        ``["fr-FR", "fr", "en-US"]``.
    """
    candidates = [culture] + parent_cultures(culture)
    if root_culture:
        candidates.append(root_culture)

    chain: List[str] = []
    for candidate in candidates:
        if candidate not in chain:
            chain.append(candidate)
    return chain


def specific_culture_name(culture: str) -> str:
    """Expand a neutral culture to its most likely specific culture.

    Uses CLDR likely subtags, so "fr" becomes "fr-FR" and "zh-Hant"
    becomes "zh-Hant-TW". Cultures that already name a region or variant,
    and languages CLDR does not know, are returned normalized but unchanged.

    Args:
        culture: Culture identifier.

    Returns:
        Normalized specific culture identifier.

    Raises:
        ValueError: If culture is empty or not a culture identifier.
    """
    name = normalize_culture_name(culture)
    try:
        locale = Locale.parse(name, sep="-")
    except (UnknownLocaleError, ValueError):
        return name
    if locale.territory or locale.variant:
        return name

    likely_subtags = get_global("likely_subtags")
    likely = None
    if locale.script:
        likely = likely_subtags.get(f"{locale.language}_{locale.script}")
    likely = likely or likely_subtags.get(locale.language)
    if not likely:
        return name

    territory = parse_locale(likely)[1]
    if not territory:
        return name
    return f"{name}-{territory}"
