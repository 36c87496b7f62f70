"""Catalog discovery and merging across search roots.

Locates ``<culture><extension>`` files for a culture fallback chain, parses
them and merges files of the same culture in root order.
"""

from pathlib import Path
from typing import List, Optional, Sequence

from pkglang.i18n.exceptions import CatalogFormatError
from pkglang.i18n.models import Catalog, SearchRoot
from pkglang.i18n.parser import CatalogParser
from pkglang.logging import get_module_logger

logger = get_module_logger()


class CatalogRepository:
    """Resolves the effective catalog for a culture fallback chain.

    The first culture in the chain with at least one usable catalog file
    wins; cultures are never merged with each other. Within that culture,
    a root listed later overrides keys from earlier roots.

    Attributes:
        parser: CatalogParser used for every file.
    """

    def __init__(self, parser: Optional[CatalogParser] = None):
        self.parser = parser or CatalogParser()

    def find_catalog_files(
        self, roots: Sequence[SearchRoot], culture: str
    ) -> List[Path]:
        """List existing catalog files for one culture, in root order.

        A root that cannot be inspected (permissions, over-long culture
        names) is logged and skipped.

        Args:
            roots: Search roots in precedence order (lowest first).
            culture: Exact culture identifier (e.g. "fr-FR").

        Returns:
            Paths of matching files.
        """
        files = []
        for root in roots:
            path = root.catalog_path(culture)
            try:
                if path.is_file():
                    files.append(path)
            except OSError as e:
                logger.warning(
                    "catalog_file_unreadable",
                    file=str(path),
                    culture=culture,
                    error=str(e),
                )
        return files

    def resolve(
        self, roots: Sequence[SearchRoot], culture_chain: Sequence[str]
    ) -> Catalog:
        """Resolve the merged catalog for the first culture that has one.

        Unreadable or malformed files are logged and skipped. If every file
        of a culture is skipped, the next culture in the chain is tried.

        Args:
            roots: Search roots in precedence order (lowest first).
            culture_chain: Culture identifiers, most specific first.

        Returns:
            Merged Catalog, or an empty Catalog when nothing was found.
        """
        for culture in culture_chain:
            catalog = self._load_culture(roots, culture)
            if catalog is not None:
                logger.info(
                    "catalog_resolved",
                    culture=culture,
                    requested_culture=culture_chain[0],
                    file_count=len(catalog.sources),
                    entry_count=len(catalog),
                )
                return catalog

        logger.info(
            "no_catalog_found",
            culture_chain=list(culture_chain),
            root_count=len(roots),
        )
        return Catalog.empty()

    def discover_available_cultures(self, roots: Sequence[SearchRoot]) -> List[str]:
        """List culture identifiers that have a catalog file in any root.

        Returns:
            Sorted unique culture identifiers.
        """
        cultures = set()
        for root in roots:
            try:
                if not root.directory.is_dir():
                    continue
                for path in root.directory.glob(f"*{root.extension}"):
                    if path.is_file():
                        cultures.add(path.name[: -len(root.extension)] or path.stem)
            except OSError as e:
                logger.warning(
                    "search_root_unreadable",
                    directory=str(root.directory),
                    error=str(e),
                )
        return sorted(cultures)

    def _load_culture(
        self, roots: Sequence[SearchRoot], culture: str
    ) -> Optional[Catalog]:
        merged: Optional[Catalog] = None
        for path in self.find_catalog_files(roots, culture):
            try:
                catalog = self.parser.parse_file(path)
            except CatalogFormatError as e:
                logger.warning(
                    "catalog_file_skipped",
                    file=str(path),
                    culture=culture,
                    reason=e.reason.value,
                    pair_index=e.pair_index,
                    error=str(e),
                )
                continue
            except OSError as e:
                logger.warning(
                    "catalog_file_unreadable",
                    file=str(path),
                    culture=culture,
                    error=str(e),
                )
                continue

            merged = catalog if merged is None else merged.merged_with(catalog)

        if merged is None:
            return None
        return merged.with_culture(culture)
