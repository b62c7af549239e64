"""
Advanced panel option builder.

Derives the options offered by the advanced panel from the primary-filtered
subset: Class and Ancestry feats grouped by ``group``, split into standalone
feats and parent-trait clusters, plus which spell and feature levels occur.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ...models.feat import Feat

DEFAULT_CLASS_GROUP_ORDER = ("Feature", "Talent", "Multiclass", "Spell")
DEFAULT_ANCESTRY_GROUP_ORDER = ()
DEFAULT_LEVEL_ORDER = ("1st", "3rd", "5th", "7th", "9th")
OTHER_GROUP = "Other"

# Partition kind -> category value of the feats it holds.
PARTITION_KINDS = ("Class", "Ancestry")


@dataclass(frozen=True)
class ParentCluster:
    """Feats sharing one parent trait."""
    parent_trait: str
    feats: Tuple[Feat, ...]

    @property
    def feat_ids(self):
        return tuple(f.id for f in self.feats)


@dataclass(frozen=True)
class OptionGroup:
    name: str
    standalone: Tuple[Feat, ...]
    clusters: Tuple[ParentCluster, ...]


@dataclass(frozen=True)
class OptionPartition:
    kind: str
    groups: Tuple[OptionGroup, ...]


@dataclass(frozen=True)
class LevelOption:
    value: str
    available: bool


@dataclass(frozen=True)
class AdvancedOptions:
    partitions: Tuple[OptionPartition, ...]
    spell_levels: Tuple[LevelOption, ...]
    feature_levels: Tuple[LevelOption, ...]
    scope_size: int

    def partition(self, kind: str) -> Optional[OptionPartition]:
        for partition in self.partitions:
            if partition.kind == kind:
                return partition
        return None

    def iter_groups(self):
        for partition in self.partitions:
            yield from partition.groups

    def clusters(self) -> Dict[str, List[Feat]]:
        """Every cluster keyed by parent trait; same-named clusters merge."""
        merged: Dict[str, List[Feat]] = {}
        for group in self.iter_groups():
            for cluster in group.clusters:
                members = merged.setdefault(cluster.parent_trait, [])
                members.extend(f for f in cluster.feats if f not in members)
        return merged

    def standalone_ids(self) -> List:
        return [f.id for group in self.iter_groups() for f in group.standalone]


class AdvancedOptionBuilder:
    """Builds the advanced panel structure from a scope of feats."""

    def __init__(self,
                 class_group_order: Sequence[str] = DEFAULT_CLASS_GROUP_ORDER,
                 ancestry_group_order: Sequence[str] = DEFAULT_ANCESTRY_GROUP_ORDER,
                 level_order: Sequence[str] = DEFAULT_LEVEL_ORDER):
        self.logger = logging.getLogger(__name__)
        self.group_orders = {
            "Class": tuple(class_group_order),
            "Ancestry": tuple(ancestry_group_order),
        }
        self.level_order = tuple(level_order)

    def build(self, subset: Sequence[Feat], catalog: Iterable[Feat] = ()) -> AdvancedOptions:
        """
        Build panel options.

        Args:
            subset: Primary-filtered feats
            catalog: Full catalog, used when the subset is empty

        Returns:
            AdvancedOptions for the chosen scope
        """
        scope = tuple(subset) if subset else tuple(catalog)

        partitions = tuple(
            OptionPartition(kind=kind, groups=self._build_groups(kind, scope))
            for kind in PARTITION_KINDS
        )
        spell_levels = self._level_options(scope, "spell_level")
        feature_levels = self._level_options(scope, "feature_level")

        self.logger.debug(
            f"Built advanced options from {len(scope)} feats: "
            f"{sum(len(p.groups) for p in partitions)} groups"
        )
        return AdvancedOptions(
            partitions=partitions,
            spell_levels=spell_levels,
            feature_levels=feature_levels,
            scope_size=len(scope),
        )

    def _build_groups(self, kind: str, scope: Tuple[Feat, ...]) -> Tuple[OptionGroup, ...]:
        grouped: Dict[str, List[Feat]] = {}
        for feat in scope:
            if feat.category != kind:
                continue
            grouped.setdefault(feat.group or OTHER_GROUP, []).append(feat)

        canonical = [name for name in self.group_orders.get(kind, ()) if name in grouped]
        remaining = [name for name in grouped if name not in canonical]
        return tuple(self._build_group(name, grouped[name]) for name in canonical + remaining)

    def _build_group(self, name: str, feats: List[Feat]) -> OptionGroup:
        standalone = []
        clusters: Dict[str, List[Feat]] = {}
        for feat in feats:
            if feat.parent_trait:
                clusters.setdefault(feat.parent_trait, []).append(feat)
            else:
                standalone.append(feat)
        return OptionGroup(
            name=name,
            standalone=tuple(standalone),
            clusters=tuple(ParentCluster(trait, tuple(members)) for trait, members in clusters.items()),
        )

    def _level_options(self, scope: Tuple[Feat, ...], attribute: str) -> Tuple[LevelOption, ...]:
        present = {getattr(feat, attribute) for feat in scope}
        return tuple(LevelOption(value=level, available=level in present) for level in self.level_order)


def build_advanced_options(subset: Sequence[Feat], catalog: Iterable[Feat] = ()) -> AdvancedOptions:
    """Pure entry point using the default group and level orderings."""
    return AdvancedOptionBuilder().build(subset, catalog)
