"""Preferred culture selection.

Holds the process-wide preferred culture in memory and pushes changes to the
language registry. The culture the user picked ("fr") is kept for display;
packages load its specific culture ("fr-FR") so region catalogs are found.
Listeners are called synchronously: changed listeners first, then every
package is reloaded, then reloaded listeners.
"""

from typing import Callable, List, Optional

from pkglang.i18n.cultures import normalize_culture_name, specific_culture_name
from pkglang.i18n.registry import LanguageRegistry
from pkglang.logging import get_module_logger

logger = get_module_logger()

CultureListener = Callable[[str], None]


class CultureManager:
    """Tracks the preferred culture and reloads package languages on change.

    Attributes:
        registry: LanguageRegistry reloaded when the culture changes.
        fallback_culture: Culture used when no valid preference is given.
    """

    def __init__(
        self,
        registry: LanguageRegistry,
        fallback_culture: str = "en-US",
        preferred_culture: Optional[str] = None,
    ):
        self.registry = registry
        self.fallback_culture = normalize_culture_name(fallback_culture)
        self._preferred_culture = self._resolve(preferred_culture)
        self._preferred_specific_culture = specific_culture_name(self._preferred_culture)
        self._changed_listeners: List[CultureListener] = []
        self._reloaded_listeners: List[CultureListener] = []
        self.registry.culture = self._preferred_specific_culture

    @property
    def preferred_culture(self) -> str:
        """Culture the user selected, e.g. "fr"; show this in language pickers."""
        return self._preferred_culture

    @property
    def preferred_specific_culture(self) -> str:
        """Specific culture packages load, e.g. "fr-FR" for a preference of "fr"."""
        return self._preferred_specific_culture

    def add_changed_listener(self, listener: CultureListener) -> CultureListener:
        """Call ``listener(culture)`` after the preferred culture changes."""
        self._changed_listeners.append(listener)
        return listener

    def add_reloaded_listener(self, listener: CultureListener) -> CultureListener:
        """Call ``listener(culture)`` after all package languages reload."""
        self._reloaded_listeners.append(listener)
        return listener

    def remove_listener(self, listener: CultureListener) -> None:
        for listeners in (self._changed_listeners, self._reloaded_listeners):
            if listener in listeners:
                listeners.remove(listener)

    def set_preferred_culture(self, culture: Optional[str]) -> None:
        """Switch the preferred culture and reload every package language.

        Does nothing when the culture is unchanged. An empty or invalid
        culture name selects the fallback culture.

        Args:
            culture: Culture identifier (e.g. "fr-FR").
        """
        resolved = self._resolve(culture)
        if resolved == self._preferred_culture:
            return

        previous = self._preferred_culture
        self._preferred_culture = resolved
        self._preferred_specific_culture = specific_culture_name(resolved)
        logger.info(
            "preferred_culture_changed",
            previous_culture=previous,
            culture=resolved,
            specific_culture=self._preferred_specific_culture,
        )

        self._notify(self._changed_listeners, "changed")
        self.reload_all()

    def reload_all(self) -> None:
        """Reload every package language for the preferred specific culture."""
        self.registry.reload_all(self._preferred_specific_culture)
        self._notify(self._reloaded_listeners, "reloaded")

    def discover_available_cultures(self) -> List[str]:
        return self.registry.discover_available_cultures()

    def _resolve(self, culture: Optional[str]) -> str:
        if not culture:
            return self.fallback_culture
        try:
            return normalize_culture_name(culture)
        except ValueError as e:
            logger.warning(
                "invalid_preferred_culture",
                culture=culture,
                fallback_culture=self.fallback_culture,
                error=str(e),
            )
            return self.fallback_culture

    def _notify(self, listeners: List[CultureListener], event: str) -> None:
        for listener in list(listeners):
            try:
                listener(self._preferred_culture)
            except Exception as e:  # pylint: disable=broad-except
                logger.error(
                    "culture_listener_failed",
                    listener=getattr(listener, "__name__", "unknown"),
                    event=event,
                    culture=self._preferred_culture,
                    error=str(e),
                )
