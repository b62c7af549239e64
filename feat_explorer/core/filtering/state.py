"""
Filter state owned by the session.

There is exactly one live ``FilterState`` per session. It is mutated in place
by user actions and read by the filter engine on every recomputation.
"""
from dataclasses import dataclass, field
from typing import Any, Iterable, Set, Union

from ..exceptions import ErrorCode, FilterValidationError
from ...models.facets import AdvancedFacet, PrimaryFacet


def _facet(facet, facet_type):
    try:
        return facet_type(facet)
    except ValueError as e:
        raise FilterValidationError(
            f"Unknown facet: {facet}",
            ErrorCode.UNKNOWN_FACET,
            facet=str(facet),
        ) from e


@dataclass
class PrimarySelection:
    """Sidebar selections: Type, Ancestry, Class and Tier."""
    types: Set[str] = field(default_factory=set)
    ancestries: Set[str] = field(default_factory=set)
    classes: Set[str] = field(default_factory=set)
    tiers: Set[str] = field(default_factory=set)

    def values_for(self, facet: Union[PrimaryFacet, str]) -> Set[str]:
        facet = _facet(facet, PrimaryFacet)
        return {
            PrimaryFacet.TYPE: self.types,
            PrimaryFacet.ANCESTRY: self.ancestries,
            PrimaryFacet.CLASS: self.classes,
            PrimaryFacet.TIER: self.tiers,
        }[facet]

    @property
    def has_union_selection(self) -> bool:
        """True when Type, Ancestry or Class has any value selected."""
        return bool(self.types or self.ancestries or self.classes)

    def is_empty(self) -> bool:
        return not (self.has_union_selection or self.tiers)

    def clear(self) -> None:
        self.types.clear()
        self.ancestries.clear()
        self.classes.clear()
        self.tiers.clear()


@dataclass
class AdvancedSelection:
    """Committed advanced-panel selections."""
    parent_traits: Set[str] = field(default_factory=set)
    feat_ids: Set[Any] = field(default_factory=set)
    spell_levels: Set[str] = field(default_factory=set)
    feature_levels: Set[str] = field(default_factory=set)

    def values_for(self, facet: Union[AdvancedFacet, str]) -> Set[Any]:
        facet = _facet(facet, AdvancedFacet)
        return {
            AdvancedFacet.PARENT_TRAIT: self.parent_traits,
            AdvancedFacet.FEAT: self.feat_ids,
            AdvancedFacet.SPELL_LEVEL: self.spell_levels,
            AdvancedFacet.FEATURE_LEVEL: self.feature_levels,
        }[facet]

    def is_empty(self) -> bool:
        return not (self.parent_traits or self.feat_ids or self.spell_levels or self.feature_levels)

    def clear(self) -> None:
        self.parent_traits.clear()
        self.feat_ids.clear()
        self.spell_levels.clear()
        self.feature_levels.clear()

    def replace(self, parent_traits: Iterable[str] = (), feat_ids: Iterable[Any] = (),
                spell_levels: Iterable[str] = (), feature_levels: Iterable[str] = ()) -> None:
        """Overwrite every set with new contents (full replace, not merge)."""
        self.parent_traits = set(parent_traits)
        self.feat_ids = set(feat_ids)
        self.spell_levels = set(spell_levels)
        self.feature_levels = set(feature_levels)


@dataclass
class FilterState:
    """Primary plus advanced selection for one session."""
    primary: PrimarySelection = field(default_factory=PrimarySelection)
    advanced: AdvancedSelection = field(default_factory=AdvancedSelection)

    def set_primary(self, facet: Union[PrimaryFacet, str], value: str, selected: bool = True) -> None:
        """Select or deselect one sidebar value."""
        value = str(value).strip()
        values = self.primary.values_for(facet)
        if selected:
            if value:
                values.add(value)
        else:
            values.discard(value)

    def toggle_primary(self, facet: Union[PrimaryFacet, str], value: str) -> bool:
        """Flip one sidebar value and return its new state."""
        value = str(value).strip()
        selected = value not in self.primary.values_for(facet)
        self.set_primary(facet, value, selected)
        return selected

    def is_empty(self) -> bool:
        return self.primary.is_empty() and self.advanced.is_empty()

    def reset(self) -> None:
        """Clear both primary and advanced selections."""
        self.primary.clear()
        self.advanced.clear()

    def clear_advanced(self) -> None:
        """Clear only the advanced selections."""
        self.advanced.clear()
