"""pkglang - gettext message-catalog localization for packages.

Loads binary ``.mo`` catalogs from per-package search roots and serves
translated text for the active culture.
"""

__version__ = "1.0.0"
