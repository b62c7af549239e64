"""
Catalog loading from the feats JSON file.
"""

import os
import json
import logging

from .catalog import Catalog
from ..exceptions import CatalogLoadError, ErrorCode


class CatalogLoader:
    """Reads and validates the feat catalog file."""

    def __init__(self, catalog_path: str):
        self.logger = logging.getLogger(__name__)
        self.catalog_path = catalog_path

    def load(self) -> Catalog:
        """
        Load the catalog from disk.

        Returns:
            Catalog built from the file

        Raises:
            CatalogLoadError: If the file is missing, unreadable or malformed
        """
        if not os.path.exists(self.catalog_path):
            self.logger.error(f"Catalog file not found: {self.catalog_path}")
            raise CatalogLoadError(
                f"Catalog file not found: {self.catalog_path}",
                ErrorCode.CATALOG_NOT_FOUND,
                catalog_path=self.catalog_path,
            )

        try:
            with open(self.catalog_path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Error reading catalog {self.catalog_path}: {e}")
            raise CatalogLoadError(
                f"Could not parse catalog file: {e}",
                ErrorCode.CATALOG_PARSE_FAILED,
                catalog_path=self.catalog_path,
                original_exception=e,
            ) from e

        catalog = Catalog.from_records(records, source=self.catalog_path)
        self.logger.info(f"Loaded catalog with {len(catalog)} feats from {self.catalog_path}")
        return catalog
