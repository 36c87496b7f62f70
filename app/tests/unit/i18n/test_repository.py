"""Tests for pkglang.i18n.repository module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from pkglang.i18n import CatalogParser, CatalogRepository, MessageKey, SearchRoot
from tests.factories.i18n import MoMessage, write_catalog

HELLO = MessageKey("", "Hello")


class _UnreadableParser(CatalogParser):
    """Parser that fails to read one specific path."""

    def __init__(self, unreadable):
        self.unreadable = unreadable

    def parse_file(self, path):
        if path == self.unreadable:
            raise PermissionError(13, "Permission denied", str(path))
        return super().parse_file(path)


@pytest.mark.unit
class TestCatalogRepositoryResolve:
    """Tests for CatalogRepository.resolve()."""

    def test_later_root_overrides_earlier(self, repository, asset_root, data_root):
        """A root listed later wins for identical keys of the same culture."""
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])
        write_catalog(data_root.directory, "fr", [MoMessage("Hello", ["Salut"])])

        catalog = repository.resolve([asset_root, data_root], ["fr"])

        assert catalog.get_forms(HELLO) == ("Salut",)

    def test_root_order_defines_precedence(self, repository, asset_root, data_root):
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])
        write_catalog(data_root.directory, "fr", [MoMessage("Hello", ["Salut"])])

        catalog = repository.resolve([data_root, asset_root], ["fr"])

        assert catalog.get_forms(HELLO) == ("Bonjour",)

    def test_merge_is_union_of_keys(self, repository, asset_root, data_root):
        write_catalog(
            asset_root.directory,
            "fr",
            [MoMessage("Hello", ["Bonjour"]), MoMessage("Bye", ["Au revoir"])],
        )
        write_catalog(data_root.directory, "fr", [MoMessage("Hello", ["Salut"])])

        catalog = repository.resolve([asset_root, data_root], ["fr"])

        assert catalog.get_forms(HELLO) == ("Salut",)
        assert catalog.get_forms(MessageKey("", "Bye")) == ("Au revoir",)
        assert len(catalog.sources) == 2

    def test_override_replaces_forms_wholesale(self, repository, asset_root, data_root):
        write_catalog(
            asset_root.directory,
            "fr",
            [MoMessage("one apple", ["une pomme", "{0} pommes"], msgid_plural="{0} apples")],
        )
        write_catalog(
            data_root.directory,
            "fr",
            [MoMessage("one apple", ["une seule pomme"], msgid_plural="{0} apples")],
        )

        catalog = repository.resolve([asset_root, data_root], ["fr"])

        assert catalog.get_forms(MessageKey("", "one apple")) == ("une seule pomme",)

    def test_fallback_chain_short_circuits(self, repository, asset_root, data_root):
        """The first culture with any file wins; later cultures are not merged."""
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])
        write_catalog(
            data_root.directory,
            "en-US",
            [MoMessage("Hello", ["Howdy"]), MoMessage("Bye", ["See ya"])],
        )

        catalog = repository.resolve([asset_root, data_root], ["fr-FR", "fr", "en-US"])

        assert catalog.culture == "fr"
        assert catalog.get_forms(HELLO) == ("Bonjour",)
        assert catalog.get_forms(MessageKey("", "Bye")) is None

    def test_most_specific_culture_preferred(self, repository, asset_root):
        write_catalog(asset_root.directory, "fr-FR", [MoMessage("Hello", ["Bonjour (FR)"])])
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])

        catalog = repository.resolve([asset_root], ["fr-FR", "fr"])

        assert catalog.culture == "fr-FR"
        assert catalog.get_forms(HELLO) == ("Bonjour (FR)",)

    def test_no_files_yields_empty_catalog(self, repository, search_roots):
        catalog = repository.resolve(search_roots, ["de-DE", "de", "en-US"])

        assert len(catalog) == 0
        assert catalog.plural_count == 1
        assert catalog.culture is None

    def test_missing_root_directory_is_ignored(self, repository, tmp_path, asset_root):
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])
        missing = SearchRoot(tmp_path / "nowhere")

        catalog = repository.resolve([missing, asset_root], ["fr"])

        assert catalog.get_forms(HELLO) == ("Bonjour",)

    def test_extension_filter(self, repository, asset_root):
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])], extension=".po")

        catalog = repository.resolve([asset_root], ["fr"])

        assert len(catalog) == 0


@pytest.mark.unit
class TestCatalogRepositoryErrors:
    """Malformed and unreadable files are skipped, never fatal."""

    def test_corrupt_file_is_skipped(self, repository, asset_root, data_root):
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])
        (data_root.directory / "fr.mo").write_bytes(b"not a catalog at all, clearly")

        with patch("pkglang.i18n.repository.logger") as mock_logger:
            catalog = repository.resolve([asset_root, data_root], ["fr"])

        assert catalog.get_forms(HELLO) == ("Bonjour",)
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "catalog_file_skipped"
        assert mock_logger.warning.call_args[1]["reason"] == "bad_magic"

    def test_culture_with_only_corrupt_files_falls_through(
        self, repository, asset_root, data_root
    ):
        (asset_root.directory / "fr-FR.mo").write_bytes(b"\x00" * 40)
        write_catalog(data_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])

        catalog = repository.resolve([asset_root, data_root], ["fr-FR", "fr"])

        assert catalog.culture == "fr"
        assert catalog.get_forms(HELLO) == ("Bonjour",)

    def test_unreadable_file_is_skipped(self, asset_root, data_root):
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])
        unreadable = write_catalog(data_root.directory, "fr", [MoMessage("Hello", ["Salut"])])
        repository = CatalogRepository(parser=_UnreadableParser(unreadable))

        with patch("pkglang.i18n.repository.logger") as mock_logger:
            catalog = repository.resolve([asset_root, data_root], ["fr"])

        assert catalog.get_forms(HELLO) == ("Bonjour",)
        assert mock_logger.warning.call_args[0][0] == "catalog_file_unreadable"


    def test_overlong_culture_name_falls_through(self, repository, asset_root):
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])

        catalog = repository.resolve([asset_root], ["x" * 300, "fr"])

        assert catalog.culture == "fr"
        assert catalog.get_forms(HELLO) == ("Bonjour",)

    def test_uninspectable_root_is_skipped(self, repository, asset_root, data_root):
        write_catalog(asset_root.directory, "fr", [MoMessage("Hello", ["Bonjour"])])
        blocked = write_catalog(data_root.directory, "fr", [MoMessage("Hello", ["Salut"])])
        original_is_file = Path.is_file

        def is_file(path):
            if path == blocked:
                raise PermissionError(13, "Permission denied", str(path))
            return original_is_file(path)

        with patch.object(Path, "is_file", autospec=True, side_effect=is_file), patch(
            "pkglang.i18n.repository.logger"
        ) as mock_logger:
            catalog = repository.resolve([asset_root, data_root], ["fr"])

        assert catalog.get_forms(HELLO) == ("Bonjour",)
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "catalog_file_unreadable"
        assert mock_logger.warning.call_args[1]["file"] == str(blocked)

    def test_uninspectable_root_is_skipped_during_discovery(
        self, repository, asset_root, data_root
    ):
        write_catalog(asset_root.directory, "fr")
        write_catalog(data_root.directory, "de")
        original_is_dir = Path.is_dir

        def is_dir(path):
            if path == data_root.directory:
                raise PermissionError(13, "Permission denied", str(path))
            return original_is_dir(path)

        with patch.object(Path, "is_dir", autospec=True, side_effect=is_dir), patch(
            "pkglang.i18n.repository.logger"
        ) as mock_logger:
            cultures = repository.discover_available_cultures([asset_root, data_root])

        assert cultures == ["fr"]
        assert mock_logger.warning.call_args[0][0] == "search_root_unreadable"


@pytest.mark.unit
class TestCatalogRepositoryDiscovery:
    """Tests for file discovery helpers."""

    def test_find_catalog_files_in_root_order(self, repository, asset_root, data_root):
        first = write_catalog(asset_root.directory, "fr")
        second = write_catalog(data_root.directory, "fr")

        assert repository.find_catalog_files([asset_root, data_root], "fr") == [first, second]
        assert repository.find_catalog_files([asset_root, data_root], "de") == []

    def test_discover_available_cultures(self, repository, asset_root, data_root, tmp_path):
        write_catalog(asset_root.directory, "fr")
        write_catalog(asset_root.directory, "de-DE")
        write_catalog(data_root.directory, "fr")
        write_catalog(data_root.directory, "ja")
        (data_root.directory / "notes.txt").write_text("not a catalog")

        cultures = repository.discover_available_cultures(
            [asset_root, data_root, SearchRoot(tmp_path / "missing")]
        )

        assert cultures == ["de-DE", "fr", "ja"]
