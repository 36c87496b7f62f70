"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    MoMessage,
    make_catalog,
    make_mo_bytes,
    make_search_root,
    write_catalog,
)

__all__ = [
    "MoMessage",
    "make_catalog",
    "make_mo_bytes",
    "make_search_root",
    "write_catalog",
]
