"""
In-memory feat catalog.
"""
import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..exceptions import CatalogLoadError, ErrorCode
from ...models.feat import Feat

logger = logging.getLogger(__name__)

FeatId = Union[int, str]


class Catalog:
    """Immutable, ordered collection of feats with lookup by id."""

    def __init__(self, feats: Sequence[Feat] = ()):
        self._feats: Tuple[Feat, ...] = tuple(feats)
        self._by_id: Dict[FeatId, Feat] = {}
        for index, feat in enumerate(self._feats):
            if feat.id in self._by_id:
                raise CatalogLoadError(
                    f"Duplicate feat id {feat.id!r}",
                    ErrorCode.DUPLICATE_FEAT_ID,
                    record_index=index,
                    details={"feat_id": str(feat.id)},
                )
            self._by_id[feat.id] = feat

    @classmethod
    def from_records(cls, records: Any, source: Optional[str] = None) -> "Catalog":
        """
        Build a catalog from decoded JSON.

        Args:
            records: Decoded catalog document; must be a list of objects
            source: Where the records came from, for error details

        Returns:
            Catalog preserving the input order

        Raises:
            CatalogLoadError: If the document is not a list of objects or a record
                has no usable id
        """
        if not isinstance(records, list):
            raise CatalogLoadError(
                f"Catalog must be a JSON array of records, got {type(records).__name__}",
                ErrorCode.CATALOG_MALFORMED,
                catalog_path=source,
            )

        feats: List[Feat] = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise CatalogLoadError(
                    f"Catalog record {index} is not an object",
                    ErrorCode.CATALOG_MALFORMED,
                    catalog_path=source,
                    record_index=index,
                )
            try:
                feats.append(Feat.model_validate(record))
            except ValidationError as e:
                raise CatalogLoadError(
                    f"Catalog record {index} is invalid: {e.error_count()} validation error(s)",
                    ErrorCode.CATALOG_MALFORMED,
                    catalog_path=source,
                    record_index=index,
                    original_exception=e,
                ) from e

        catalog = cls(feats)
        logger.info(f"Built catalog with {len(catalog)} feats")
        return catalog

    @property
    def feats(self) -> Tuple[Feat, ...]:
        return self._feats

    def get(self, feat_id: FeatId) -> Optional[Feat]:
        """Look up a feat by id."""
        return self._by_id.get(feat_id)

    def __contains__(self, feat_id) -> bool:
        return feat_id in self._by_id

    def __iter__(self) -> Iterator[Feat]:
        return iter(self._feats)

    def __len__(self) -> int:
        return len(self._feats)

    def __bool__(self) -> bool:
        return bool(self._feats)
