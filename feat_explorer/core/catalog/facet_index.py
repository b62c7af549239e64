"""
Distinct facet values for a catalog or any subset of it.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .matching import unique_field_values
from ...models.facets import PRIMARY_FACET_FIELDS, PrimaryFacet
from ...models.feat import Feat, tier_rank


@dataclass(frozen=True)
class FacetIndex:
    """Read-only lookup of the options offered per primary facet."""
    values: Dict[PrimaryFacet, List[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, feats: Iterable[Feat]) -> "FacetIndex":
        """
        Collect the distinct values of every primary facet.

        Type, Ancestry and Class are sorted alphabetically; Tier follows the
        canonical Adventurer, Champion, Epic order.
        """
        feats = list(feats)
        values = {
            facet: unique_field_values(feats, field_name)
            for facet, field_name in PRIMARY_FACET_FIELDS.items()
        }
        tiers = {tier for feat in feats for tier in feat.tier_names}
        values[PrimaryFacet.TIER] = sorted(tiers, key=lambda t: (tier_rank(t), t))
        return cls(values=values)

    def options(self, facet: PrimaryFacet) -> List[str]:
        return list(self.values.get(PrimaryFacet(facet), []))

    def as_dict(self) -> Dict[str, List[str]]:
        return {facet.value: self.options(facet) for facet in PrimaryFacet}
