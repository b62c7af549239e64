"""
Advanced panel selection with parent/child synchronization.

Each parent-trait cluster has one parent control and one control per child
feat. Setting the parent fans out to every child; setting a child recomputes
the parent as "all children checked". There is no indeterminate state.
"""
import logging
from typing import Any, Callable, Dict, List, Set

from .option_builder import AdvancedOptions
from ..exceptions import PanelSelectionError
from ..filtering.state import AdvancedSelection, FilterState

Listener = Callable[["PanelSelection"], None]


class PanelSelection:
    """Uncommitted checkbox state of the advanced panel."""

    def __init__(self, options: AdvancedOptions):
        self.logger = logging.getLogger(__name__)
        self.options = options
        self._clusters: Dict[str, List[Any]] = {
            trait: [f.id for f in feats] for trait, feats in options.clusters().items()
        }
        self._parent_of: Dict[Any, str] = {
            feat_id: trait for trait, ids in self._clusters.items() for feat_id in ids
        }
        self._standalone: Set[Any] = set(options.standalone_ids())
        self._spell_levels = {opt.value for opt in options.spell_levels}
        self._feature_levels = {opt.value for opt in options.feature_levels}

        self.checked_parents: Set[str] = set()
        self.checked_children: Set[Any] = set()
        self.checked_spell_levels: Set[str] = set()
        self.checked_feature_levels: Set[str] = set()
        self._listeners: List[Listener] = []

    @classmethod
    def from_committed(cls, options: AdvancedOptions, committed: AdvancedSelection) -> "PanelSelection":
        """
        Open a panel whose controls reflect the committed advanced selection.

        Committed values with no control in this panel are not shown. Parents
        follow their children: a parent is checked exactly when every feat of
        its cluster is, whatever the committed parent traits say.
        """
        panel = cls(options)
        panel.checked_children = {
            i for i in committed.feat_ids if i in panel._parent_of or i in panel._standalone
        }
        panel.checked_parents = {
            trait for trait, ids in panel._clusters.items()
            if all(i in panel.checked_children for i in ids)
        }
        panel.checked_spell_levels = committed.spell_levels & panel._spell_levels
        panel.checked_feature_levels = committed.feature_levels & panel._feature_levels
        return panel

    def add_listener(self, listener: Listener) -> None:
        """Register a callback invoked once after every mutation."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)

    @property
    def parent_traits(self) -> List[str]:
        return list(self._clusters)

    def children_of(self, parent_trait: str) -> List[Any]:
        if parent_trait not in self._clusters:
            raise PanelSelectionError(f"Unknown parent trait: {parent_trait}", control="parent", key=parent_trait)
        return list(self._clusters[parent_trait])

    def is_parent_checked(self, parent_trait: str) -> bool:
        return parent_trait in self.checked_parents

    def is_child_checked(self, feat_id: Any) -> bool:
        return feat_id in self.checked_children

    def set_parent(self, parent_trait: str, checked: bool) -> None:
        """Check or uncheck a parent and every child in its cluster."""
        children = self.children_of(parent_trait)
        if checked:
            self.checked_parents.add(parent_trait)
            self.checked_children.update(children)
        else:
            self.checked_parents.discard(parent_trait)
            self.checked_children.difference_update(children)
        self._notify()

    def toggle_parent(self, parent_trait: str) -> bool:
        checked = not self.is_parent_checked(parent_trait)
        self.set_parent(parent_trait, checked)
        return checked

    def set_child(self, feat_id: Any, checked: bool) -> None:
        """Check or uncheck one feat and resync its cluster's parent."""
        if feat_id not in self._parent_of and feat_id not in self._standalone:
            raise PanelSelectionError(f"Unknown feat in panel: {feat_id}", control="child", key=feat_id)

        if checked:
            self.checked_children.add(feat_id)
        else:
            self.checked_children.discard(feat_id)

        parent_trait = self._parent_of.get(feat_id)
        if parent_trait is not None:
            if all(child in self.checked_children for child in self._clusters[parent_trait]):
                self.checked_parents.add(parent_trait)
            else:
                self.checked_parents.discard(parent_trait)
        self._notify()

    def toggle_child(self, feat_id: Any) -> bool:
        checked = not self.is_child_checked(feat_id)
        self.set_child(feat_id, checked)
        return checked

    def _set_level(self, levels: Set[str], known: Set[str], control: str, level: str, checked: bool) -> None:
        if level not in known:
            raise PanelSelectionError(f"Unknown {control}: {level}", control=control, key=level)
        if checked:
            levels.add(level)
        else:
            levels.discard(level)
        self._notify()

    def set_spell_level(self, level: str, checked: bool) -> None:
        self._set_level(self.checked_spell_levels, self._spell_levels, "spell level", level, checked)

    def toggle_spell_level(self, level: str) -> bool:
        checked = level not in self.checked_spell_levels
        self.set_spell_level(level, checked)
        return checked

    def set_feature_level(self, level: str, checked: bool) -> None:
        self._set_level(self.checked_feature_levels, self._feature_levels, "feature level", level, checked)

    def toggle_feature_level(self, level: str) -> bool:
        checked = level not in self.checked_feature_levels
        self.set_feature_level(level, checked)
        return checked

    def clear(self) -> None:
        """Uncheck every control; the committed selection is not touched."""
        self.checked_parents.clear()
        self.checked_children.clear()
        self.checked_spell_levels.clear()
        self.checked_feature_levels.clear()
        self._notify()

    def commit(self, state: FilterState) -> None:
        """Replace the committed advanced selection with the panel's checked controls."""
        state.advanced.replace(
            parent_traits=self.checked_parents,
            feat_ids=self.checked_children,
            spell_levels=self.checked_spell_levels,
            feature_levels=self.checked_feature_levels,
        )
        self.logger.info(
            f"Committed advanced selection: {len(self.checked_parents)} parents, "
            f"{len(self.checked_children)} feats, {len(self.checked_spell_levels)} spell levels, "
            f"{len(self.checked_feature_levels)} feature levels"
        )
