"""
Active filter indicators ("pills").

Each pill is one atomic selection with a human-readable label; removing a pill
clears exactly that selection.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from .state import FilterState
from ..catalog.catalog import Catalog
from ..exceptions import ErrorCode, FilterValidationError
from ...models.facets import AdvancedFacet, PrimaryFacet

PRIMARY_PILL_ORDER = (PrimaryFacet.TYPE, PrimaryFacet.TIER, PrimaryFacet.ANCESTRY, PrimaryFacet.CLASS)
ADVANCED_PILL_ORDER = (
    AdvancedFacet.PARENT_TRAIT,
    AdvancedFacet.FEAT,
    AdvancedFacet.SPELL_LEVEL,
    AdvancedFacet.FEATURE_LEVEL,
)


@dataclass(frozen=True)
class ActiveFilter:
    facet: str
    value: Any
    label: str


def _sorted(values):
    return sorted(values, key=lambda v: (str(type(v).__name__), str(v)))


def list_active_filters(state: FilterState, catalog: Optional[Catalog] = None) -> List[ActiveFilter]:
    """
    Enumerate every active selection, sidebar facets first.

    Args:
        state: Live filter state
        catalog: Used to label individually selected feats by name

    Returns:
        List of ActiveFilter in display order
    """
    pills = []
    for facet in PRIMARY_PILL_ORDER:
        for value in _sorted(state.primary.values_for(facet)):
            pills.append(ActiveFilter(facet.value, value, f"{facet.value}: {value}"))

    for facet in ADVANCED_PILL_ORDER:
        for value in _sorted(state.advanced.values_for(facet)):
            label = f"{facet.value}: {value}"
            if facet is AdvancedFacet.FEAT and catalog is not None:
                feat = catalog.get(value)
                if feat is not None and feat.name:
                    label = f"{facet.value}: {feat.name}"
            pills.append(ActiveFilter(facet.value, value, label))
    return pills


def _facet_values(state: FilterState, facet: Union[str, PrimaryFacet, AdvancedFacet]):
    facet = getattr(facet, "value", facet)
    if facet in {f.value for f in PrimaryFacet}:
        return state.primary.values_for(facet)
    if facet in {f.value for f in AdvancedFacet}:
        return state.advanced.values_for(facet)
    raise FilterValidationError(f"Unknown facet: {facet}", ErrorCode.UNKNOWN_FACET, facet=str(facet))


def remove_active_filter(state: FilterState, facet: Union[str, PrimaryFacet, AdvancedFacet], value: Any) -> None:
    """
    Clear one atomic selection.

    Raises:
        FilterValidationError: If the facet is unknown or the value is not active
    """
    values = _facet_values(state, facet)
    if value not in values:
        raise FilterValidationError(
            f"Filter {getattr(facet, 'value', facet)}={value!r} is not active",
            ErrorCode.FILTER_NOT_ACTIVE,
            facet=str(getattr(facet, "value", facet)),
            value=value,
        )
    values.discard(value)
