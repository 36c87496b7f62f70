"""Feature-level fixtures for i18n system tests.

Provides search roots laid out like a package's asset and user-data
``Languages`` directories.
"""

import pytest

from pkglang.i18n import CatalogRepository, LanguageDomain
from tests.factories.i18n import MoMessage, make_search_root, write_catalog


@pytest.fixture
def asset_root(tmp_path):
    """Search root for catalogs shipped with the package."""
    return make_search_root(tmp_path / "assets" / "my-package" / "Languages")


@pytest.fixture
def data_root(tmp_path):
    """Search root for user-supplied catalogs (listed after asset_root)."""
    return make_search_root(tmp_path / "data" / "my-package" / "Languages")


@pytest.fixture
def search_roots(asset_root, data_root):
    return [asset_root, data_root]


@pytest.fixture
def french_catalog_file(asset_root):
    """fr.mo in the asset root with a context, a plural and a proper name."""
    return write_catalog(
        asset_root.directory,
        "fr",
        [
            MoMessage("Hello", ["Bonjour"]),
            MoMessage("New", ["Nouveau"], context="Action"),
            MoMessage("New", ["Neuf"], context="Condition"),
            MoMessage(
                "You ate an apple.",
                ["Vous avez mangé une pomme.", "Vous avez mangé {0} pommes."],
                msgid_plural="You ate {0} apples.",
            ),
            MoMessage(
                "One file",
                ["Un fichier", "{0} fichiers"],
                context="Files",
                msgid_plural="{0} files",
            ),
            MoMessage("Settings", ["Paramètres"], msgid_plural="Settings"),
            MoMessage("Paris", ["Paris"]),
            MoMessage("Munich", ["München (Munich)"]),
        ],
    )


@pytest.fixture
def repository():
    return CatalogRepository()


@pytest.fixture
def domain(repository, search_roots):
    return LanguageDomain(repository=repository, search_roots=search_roots)
