"""
Facet names shared by the filter state, the engine and the API.
"""
from enum import Enum


class PrimaryFacet(str, Enum):
    """Sidebar facets."""
    TYPE = "Type"
    ANCESTRY = "Ancestry"
    CLASS = "Class"
    TIER = "Tier"


class AdvancedFacet(str, Enum):
    """Facets reachable only through the advanced panel."""
    PARENT_TRAIT = "Parent"
    FEAT = "Feat"
    SPELL_LEVEL = "Spell Lvl"
    FEATURE_LEVEL = "Req Lvl"


# Catalog field each primary facet compares against.
PRIMARY_FACET_FIELDS = {
    PrimaryFacet.TYPE: "category",
    PrimaryFacet.ANCESTRY: "ancestry",
    PrimaryFacet.CLASS: "class",
}
