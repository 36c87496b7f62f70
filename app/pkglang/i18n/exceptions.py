"""Custom exceptions for the localization system.

Catalog and plural-expression errors carry a machine-readable ``reason`` so
callers can log or branch on the failure kind without parsing messages.
"""

from enum import Enum
from typing import Optional


class LocalizationError(Exception):
    """Base exception for all localization errors."""

    pass


class CatalogFormatErrorReason(str, Enum):
    """Why a binary catalog could not be decoded."""

    BAD_MAGIC = "bad_magic"
    UNSUPPORTED_REVISION = "unsupported_revision"
    TRUNCATED_TABLE = "truncated_table"
    BAD_ENCODING = "bad_encoding"


class CatalogFormatError(LocalizationError):
    """Raised when a binary message catalog is malformed.

    Fatal to parsing that one file only; the repository skips the file.

    Attributes:
        reason: CatalogFormatErrorReason describing the failure.
        pair_index: Index of the offending string pair, when known.
    """

    def __init__(
        self,
        reason: CatalogFormatErrorReason,
        message: str,
        pair_index: Optional[int] = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.pair_index = pair_index


class PluralExpressionErrorReason(str, Enum):
    """Why a Plural-Forms header could not be compiled."""

    SYNTAX = "syntax"
    DIVISION_BY_ZERO = "division_by_zero"


class PluralExpressionError(LocalizationError):
    """Raised when a Plural-Forms header cannot be compiled.

    Attributes:
        reason: PluralExpressionErrorReason describing the failure.
        offset: Character offset into the header where the problem was found.
    """

    def __init__(
        self,
        reason: PluralExpressionErrorReason,
        message: str,
        offset: Optional[int] = None,
    ):
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)
        self.reason = reason
        self.offset = offset


class PackageNotRegisteredError(LocalizationError):
    """Raised when a package language is requested but was never registered."""

    pass


class PackageAlreadyRegisteredError(LocalizationError):
    """Raised when registering a package name twice."""

    pass


class LanguageAlreadySetUpError(LocalizationError):
    """Raised when a package language is given a second language domain."""

    pass
