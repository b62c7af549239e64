"""
Filter composition engine.

A result set is derived from the catalog in three stages, each reducing the
previous stage's output:

1. primary: union over Type, Ancestry and Class selections
2. tier: keep feats with at least one entry in a selected tier
3. advanced: union over the committed advanced-panel criteria
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

from .state import AdvancedSelection, FilterState, PrimarySelection
from ..catalog.matching import value_matches_field
from ...models.feat import Feat


@dataclass(frozen=True)
class FilterResult:
    """Output of one engine run; every stage is kept in catalog order."""
    primary_filtered: Tuple[Feat, ...]
    after_tier: Tuple[Feat, ...]
    results: Tuple[Feat, ...]

    @property
    def is_empty(self) -> bool:
        return not self.results


class FilterEngine:
    """Applies primary, tier and advanced filtering to feats."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def matches_primary(self, feat: Feat, selection: PrimarySelection) -> bool:
        """
        Check a feat against the sidebar union.

        A feat passes when its category equals a selected Type, or its
        ancestry or class field holds a selected value.
        """
        if not selection.has_union_selection:
            return True
        if feat.category is not None and feat.category in selection.types:
            return True
        if any(value_matches_field(feat.ancestry, a) for a in selection.ancestries):
            return True
        if any(value_matches_field(feat.class_, c) for c in selection.classes):
            return True
        return False

    def matches_tier(self, feat: Feat, tiers) -> bool:
        if not tiers:
            return True
        return any(tier in tiers for tier in feat.tier_names)

    def matches_advanced(self, feat: Feat, selection: AdvancedSelection) -> bool:
        """Check a feat against any committed advanced criterion."""
        if selection.is_empty():
            return True
        if feat.id in selection.feat_ids:
            return True
        if feat.parent_trait and feat.parent_trait in selection.parent_traits:
            return True
        if feat.spell_level and feat.spell_level in selection.spell_levels:
            return True
        if feat.feature_level and feat.feature_level in selection.feature_levels:
            return True
        return False

    def apply_primary_filters(self, feats: Iterable[Feat], selection: PrimarySelection) -> Tuple[Feat, ...]:
        feats = tuple(feats)
        if not selection.has_union_selection:
            return feats
        filtered = tuple(f for f in feats if self.matches_primary(f, selection))
        self.logger.debug(f"Primary stage kept {len(filtered)} of {len(feats)} feats")
        return filtered

    def apply_tier_filters(self, feats: Iterable[Feat], tiers) -> Tuple[Feat, ...]:
        feats = tuple(feats)
        if not tiers:
            return feats
        filtered = tuple(f for f in feats if self.matches_tier(f, tiers))
        self.logger.debug(f"Tier stage kept {len(filtered)} of {len(feats)} feats")
        return filtered

    def apply_advanced_filters(self, feats: Iterable[Feat], selection: AdvancedSelection) -> Tuple[Feat, ...]:
        feats = tuple(feats)
        if selection.is_empty():
            return feats
        filtered = tuple(f for f in feats if self.matches_advanced(f, selection))
        self.logger.debug(f"Advanced stage kept {len(filtered)} of {len(feats)} feats")
        return filtered

    def compute(self, feats: Iterable[Feat], state: FilterState) -> FilterResult:
        """
        Run all three stages.

        Args:
            feats: Catalog feats in catalog order
            state: Live filter state

        Returns:
            FilterResult holding the primary-filtered subset and the final results
        """
        primary_filtered = self.apply_primary_filters(feats, state.primary)
        after_tier = self.apply_tier_filters(primary_filtered, state.primary.tiers)
        results = self.apply_advanced_filters(after_tier, state.advanced)
        self.logger.info(
            f"Filtered to {len(results)} feats "
            f"(primary {len(primary_filtered)}, tier {len(after_tier)})"
        )
        return FilterResult(
            primary_filtered=primary_filtered,
            after_tier=after_tier,
            results=results,
        )


def compute_result_set(catalog: Iterable[Feat], state: FilterState) -> Tuple[Feat, ...]:
    """Pure entry point: the ordered result set for a catalog and filter state."""
    return FilterEngine().compute(catalog, state).results
