"""
Card view models for result rendering.

Cards carry the text a renderer needs (meta line, tier descriptions, tags)
without any markup.
"""
import re
from typing import Iterable, List

from ..catalog.matching import atomic_values
from ...models.feat import Feat
from ...models.schemas import FeatCard, TierDescription

_SURROUNDING_QUOTES = re.compile(r'^"|"$')


def meta_parts(feat: Feat) -> List[str]:
    """Summary fragments shown under a feat's name."""
    parts = []
    if feat.category == "Ancestry":
        if feat.ancestry:
            parts.append(_with_group(", ".join(atomic_values(feat.ancestry)), feat.group))
    elif feat.category == "Class":
        if feat.class_:
            parts.append(_with_group(", ".join(atomic_values(feat.class_)), feat.group))
    elif feat.category:
        parts.append(feat.category)

    if feat.parent_trait:
        parts.append(feat.parent_trait)
    if feat.feature_tier:
        parts.append(f"{feat.feature_tier} Tier")
    if feat.feature_level:
        parts.append(f"Req Level: {feat.feature_level}")
    if feat.spell_level:
        parts.append(f"{feat.spell_level} Level")
    return [part for part in parts if part]


def _with_group(label: str, group) -> str:
    return f"{label} {group}" if group else label


def clean_description(description: str) -> str:
    return _SURROUNDING_QUOTES.sub("", description or "").strip()


def build_card(feat: Feat, selected_tiers: Iterable[str] = ()) -> FeatCard:
    """
    Build the card for one result.

    Args:
        feat: Result feat
        selected_tiers: Current Tier selection; cards list every tier and,
            separately, the descriptions in selected tiers

    Returns:
        FeatCard
    """
    selected_tiers = set(selected_tiers)
    tiers = [
        TierDescription(tier=entry.tier or "", description=clean_description(entry.description))
        for entry in feat.tiers
    ]
    parts = meta_parts(feat)
    return FeatCard(
        id=feat.id,
        name=feat.name,
        meta=parts,
        meta_line=" | ".join(parts),
        tiers=tiers,
        matching_tiers=[t for t in tiers if t.tier in selected_tiers],
        tags=atomic_values(feat.tag),
    )
