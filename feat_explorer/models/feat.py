"""
Catalog record models.

A feat is loaded from one object of the catalog JSON array. Keys follow the
catalog's camelCase naming (``parentTrait``, ``spellLevel``...); the tier
entries live under ``feats`` in the published data and ``tiers`` elsewhere.
"""
from typing import Any, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

TIER_ORDER = ("Adventurer", "Champion", "Epic")

# Catalog key -> attribute name, for fields addressed by their facet name.
FIELD_ATTRIBUTES = {
    "class": "class_",
    "parentTrait": "parent_trait",
    "spellLevel": "spell_level",
    "featureLevel": "feature_level",
    "featureTier": "feature_tier",
}


def tier_rank(tier: Optional[str]) -> int:
    """Position of a tier in the canonical order; unknown tiers sort last."""
    try:
        return TIER_ORDER.index(tier)
    except ValueError:
        return len(TIER_ORDER)


def _label(v: Any) -> Optional[str]:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        v = str(v)
    if isinstance(v, str):
        return v.strip() or None
    return None


class TierEntry(BaseModel):
    """One tier's rules text for a feat."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    tier: Optional[str] = None
    description: str = ""

    @field_validator("tier", mode="before")
    @classmethod
    def normalize_tier(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, v):
        return "" if v is None else str(v)


class Feat(BaseModel):
    """An immutable catalog record."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: Union[int, str]
    name: str = ""
    category: Optional[str] = None
    # Multi-value fields keep whatever shape the catalog used.
    ancestry: Any = None
    class_: Any = Field(default=None, alias="class")
    group: Optional[str] = None
    parent_trait: Optional[str] = Field(default=None, alias="parentTrait")
    spell_level: Optional[str] = Field(default=None, alias="spellLevel")
    feature_level: Optional[str] = Field(default=None, alias="featureLevel")
    feature_tier: Optional[str] = Field(default=None, alias="featureTier")
    tag: Optional[str] = None
    tiers: Tuple[TierEntry, ...] = Field(
        default=(), validation_alias=AliasChoices("feats", "tiers")
    )

    @field_validator(
        "category", "group", "parent_trait", "spell_level",
        "feature_level", "feature_tier",
        mode="before",
    )
    @classmethod
    def normalize_label(cls, v):
        """Trim scalar labels; blank labels and non-scalar shapes count as absent."""
        return _label(v)

    @field_validator("tag", mode="before")
    @classmethod
    def normalize_tag(cls, v):
        # Tags are comma-separated; a list of tags is joined the same way.
        if isinstance(v, (list, tuple)):
            v = ", ".join(str(t).strip() for t in v if t is not None and str(t).strip())
        return _label(v)

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("tiers", mode="before")
    @classmethod
    def coerce_tiers(cls, v):
        """Accept a list of tier objects; anything else in it is skipped."""
        if not isinstance(v, (list, tuple)):
            return ()
        return tuple(entry for entry in v if isinstance(entry, dict))

    @field_validator("tiers", mode="after")
    @classmethod
    def order_tiers(cls, v):
        """Keep tier entries in Adventurer, Champion, Epic order."""
        return tuple(sorted(v, key=lambda entry: tier_rank(entry.tier)))

    def field_value(self, field_name: str) -> Any:
        """Read a field by its catalog key or attribute name."""
        return getattr(self, FIELD_ATTRIBUTES.get(field_name, field_name), None)

    @property
    def tier_names(self) -> Tuple[str, ...]:
        return tuple(entry.tier for entry in self.tiers if entry.tier)
