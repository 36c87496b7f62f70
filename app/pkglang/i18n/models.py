"""Catalog models for the localization system.

Defines the immutable data structures shared by the parser, repository and
language domain.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

DEFAULT_PLURAL_FORMS = "nplurals=2; plural=(n != 1);"
DEFAULT_CHARSET = "utf-8"


@dataclass(frozen=True)
class MessageKey:
    """Identifies a message within a catalog.

    Attributes:
        context: Disambiguating context; empty string means no context.
        message_id: Non-translated message text in the root culture.
    """

    context: str
    message_id: str

    def __str__(self) -> str:
        if self.context:
            return f"{self.context}\x04{self.message_id}"
        return self.message_id


@dataclass(frozen=True)
class SearchRoot:
    """A directory searched for catalog files.

    Attributes:
        directory: Absolute directory path.
        extension: Catalog file extension including the dot (e.g. ".mo").
    """

    directory: Path
    extension: str = ".mo"

    def __post_init__(self):
        object.__setattr__(self, "directory", Path(self.directory))

    def catalog_path(self, culture: str) -> Path:
        """Path of the catalog file for a culture identifier in this root."""
        return self.directory / f"{culture}{self.extension}"


def _freeze(mapping) -> Mapping:
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Catalog:
    """Immutable snapshot of translations for one resolved culture.

    Entries map a MessageKey to its translated forms; index 0 is the
    singular/default form and indices 1..plural_count-1 are plural forms.
    Every entry holds either 1 form or exactly ``plural_count`` forms.

    Attributes:
        plural_forms: Raw Plural-Forms header value.
        plural_count: Number of plural forms (nplurals).
        entries: Read-only mapping of MessageKey to translated forms.
        culture: Culture identifier the catalog was resolved for, if any.
        charset: Charset the strings were decoded with.
        metadata: Header fields from the catalog metadata block.
        sources: Files merged into this catalog, in merge order.
    """

    plural_forms: str = DEFAULT_PLURAL_FORMS
    plural_count: int = 2
    entries: Mapping[MessageKey, Tuple[str, ...]] = field(default_factory=dict)
    culture: Optional[str] = None
    charset: str = DEFAULT_CHARSET
    metadata: Mapping[str, str] = field(default_factory=dict)
    sources: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.plural_count < 1:
            raise ValueError(f"plural_count must be >= 1, got {self.plural_count}")
        object.__setattr__(self, "entries", _freeze(self.entries))
        object.__setattr__(self, "metadata", _freeze(self.metadata))
        object.__setattr__(self, "sources", tuple(self.sources))

    @classmethod
    def empty(cls, culture: Optional[str] = None) -> "Catalog":
        """Catalog with no entries and a single plural form."""
        return cls(
            plural_forms="nplurals=1; plural=0;",
            plural_count=1,
            culture=culture,
        )

    def get_forms(self, key: MessageKey) -> Optional[Tuple[str, ...]]:
        """Return the translated forms for a key, or None if absent."""
        return self.entries.get(key)

    def has_message(self, key: MessageKey) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def with_culture(self, culture: Optional[str]) -> "Catalog":
        """Copy of this catalog tagged with a culture identifier."""
        return Catalog(
            plural_forms=self.plural_forms,
            plural_count=self.plural_count,
            entries=self.entries,
            culture=culture,
            charset=self.charset,
            metadata=self.metadata,
            sources=self.sources,
        )

    def merged_with(self, other: "Catalog") -> "Catalog":
        """Return a new catalog with ``other`` layered over this one.

        Keys present in ``other`` replace this catalog's forms wholesale.
        Header values (plural forms, charset, metadata) come from ``other``.
        Entries of this catalog whose form count no longer fits the merged
        plural count are reduced to their singular form.

        Args:
            other: Catalog whose entries take precedence.

        Returns:
            Merged Catalog.
        """
        plural_count = other.plural_count
        entries = {}
        for key, forms in self.entries.items():
            if len(forms) != 1 and len(forms) != plural_count:
                forms = forms[:1]
            entries[key] = forms
        entries.update(other.entries)

        metadata = dict(self.metadata)
        metadata.update(other.metadata)

        return Catalog(
            plural_forms=other.plural_forms,
            plural_count=plural_count,
            entries=entries,
            culture=other.culture if other.culture is not None else self.culture,
            charset=other.charset,
            metadata=metadata,
            sources=self.sources + other.sources,
        )


@dataclass(frozen=True)
class LocalizedString:
    """A translatable string as stored in serialized data.

    Attributes:
        value: Non-translated text in the root culture.
        context: Disambiguating context; empty string means no context.
    """

    value: str
    context: str = ""

    def __post_init__(self):
        if self.context is None:
            object.__setattr__(self, "context", "")

    @property
    def key(self) -> MessageKey:
        return MessageKey(self.context, self.value)
