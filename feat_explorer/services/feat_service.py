"""
Feat filtering service that owns one browsing session.

The service holds the catalog, the live filter state, the last filter result
and the open advanced panel. API handlers call into it; nothing else mutates
the filter state.
"""
import asyncio
from typing import Any, Optional

from ..core.catalog.catalog import Catalog
from ..core.catalog.facet_index import FacetIndex
from ..core.catalog.loader import CatalogLoader
from ..core.config import Settings, get_settings
from ..core.exceptions import (
    CatalogLoadError,
    CatalogNotLoadedError,
    ErrorCode,
    PanelSelectionError,
)
from ..core.filtering.active_filters import list_active_filters, remove_active_filter
from ..core.filtering.filter_engine import FilterEngine, FilterResult
from ..core.filtering.state import AdvancedSelection, FilterState
from ..core.panel.option_builder import AdvancedOptionBuilder, AdvancedOptions
from ..core.panel.selection import PanelSelection
from ..core.presentation.cards import build_card
from ..models.schemas import (
    ActiveFilterItem,
    AdvancedPanelResponse,
    FeatsResponse,
    PanelCluster,
    PanelFeatOption,
    PanelGroup,
    PanelLevel,
    PanelPartition,
)
from ..utils.logger import setup_logger

NO_MATCHES_MESSAGE = "No feats match your current filters."


class FeatService:
    """Service for one filtering session."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger = setup_logger("feat-service", log_level=self.settings.log_level,
                                   log_dir=self.settings.log_dir)
        self.loader = CatalogLoader(self.settings.catalog_path)
        self.engine = FilterEngine()
        self.option_builder = AdvancedOptionBuilder(
            class_group_order=self.settings.class_group_order,
            ancestry_group_order=self.settings.ancestry_group_order,
            level_order=self.settings.level_order,
        )
        self.state = FilterState()
        self.catalog: Optional[Catalog] = None
        self.load_error: Optional[CatalogLoadError] = None
        self.result: Optional[FilterResult] = None
        self.panel: Optional[PanelSelection] = None
        self.panel_revision = 0

    # Catalog lifecycle

    def load_catalog(self) -> Catalog:
        """Load the catalog from the configured path and run the first filter pass."""
        try:
            catalog = self.loader.load()
        except CatalogLoadError as e:
            self.load_error = e
            self.logger.error(f"Catalog load failed: {e.message}")
            raise
        self.set_catalog(catalog)
        return catalog

    async def load_catalog_async(self) -> Catalog:
        return await asyncio.to_thread(self.load_catalog)

    def set_catalog(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.load_error = None
        self.panel = None
        self.recompute()
        self.logger.info(f"Catalog ready with {len(catalog)} feats")

    @property
    def is_ready(self) -> bool:
        return self.catalog is not None

    def _require_catalog(self) -> Catalog:
        if self.catalog is None:
            details = self.load_error.to_dict() if self.load_error else {}
            raise CatalogNotLoadedError(details=details)
        return self.catalog

    # Filtering

    def recompute(self) -> FilterResult:
        catalog = self._require_catalog()
        self.result = self.engine.compute(catalog.feats, self.state)
        if self.panel is not None:
            self._refresh_panel()
        return self.result

    def current_result(self) -> FilterResult:
        self._require_catalog()
        if self.result is None:
            return self.recompute()
        return self.result

    def facets(self) -> FacetIndex:
        return FacetIndex.build(self._require_catalog())

    def set_primary(self, facet: str, value: str, selected: Optional[bool] = None) -> FilterResult:
        """Select, deselect or flip one sidebar value and recompute."""
        self._require_catalog()
        if selected is None:
            selected = self.state.toggle_primary(facet, value)
        else:
            self.state.set_primary(facet, value, selected)
        self.logger.info(f"{'Selected' if selected else 'Deselected'} {facet}={value}")
        return self.recompute()

    def reset(self) -> FilterResult:
        self._require_catalog()
        self.state.reset()
        self.logger.info("Reset all filters")
        return self.recompute()

    def clear_advanced(self) -> FilterResult:
        self._require_catalog()
        self.state.clear_advanced()
        self.logger.info("Cleared advanced filters")
        return self.recompute()

    def active_filters(self):
        return list_active_filters(self.state, self.catalog)

    def remove_filter(self, facet: str, value: Any) -> FilterResult:
        self._require_catalog()
        remove_active_filter(self.state, facet, value)
        self.logger.info(f"Removed filter {facet}={value}")
        return self.recompute()

    # Advanced panel

    def advanced_options(self) -> AdvancedOptions:
        catalog = self._require_catalog()
        return self.option_builder.build(self.current_result().primary_filtered, catalog.feats)

    def open_panel(self) -> PanelSelection:
        """Build panel options from the current scope and seed them from the committed selection."""
        self.panel = PanelSelection.from_committed(self.advanced_options(), self.state.advanced)
        self.panel.add_listener(self._on_panel_change)
        self.logger.info(f"Opened advanced panel over {self.panel.options.scope_size} feats")
        return self.panel

    def _refresh_panel(self) -> None:
        # Rebuild options for the new scope, carrying over controls that still exist.
        current = self.panel
        pending = AdvancedSelection(
            parent_traits=set(current.checked_parents),
            feat_ids=set(current.checked_children),
            spell_levels=set(current.checked_spell_levels),
            feature_levels=set(current.checked_feature_levels),
        )
        options = self.option_builder.build(self.result.primary_filtered, self.catalog.feats)
        self.panel = PanelSelection.from_committed(options, pending)
        self.panel.add_listener(self._on_panel_change)

    def _on_panel_change(self, panel: PanelSelection) -> None:
        self.panel_revision += 1
        self.logger.debug(f"Advanced panel changed (revision {self.panel_revision})")

    def require_panel(self) -> PanelSelection:
        self._require_catalog()
        if self.panel is None:
            raise PanelSelectionError("Advanced panel is not open", ErrorCode.PANEL_NOT_OPEN)
        return self.panel

    def clear_panel(self) -> PanelSelection:
        panel = self.require_panel()
        panel.clear()
        return panel

    def apply_panel(self) -> FilterResult:
        """Commit the panel's checked controls, close the panel and recompute."""
        panel = self.require_panel()
        panel.commit(self.state)
        self.panel = None
        return self.recompute()

    # Views

    def feats_view(self) -> FeatsResponse:
        result = self.current_result()
        tiers = sorted(self.state.primary.tiers)
        return FeatsResponse(
            count=len(result.results),
            results=[build_card(feat, tiers) for feat in result.results],
            selected_tiers=tiers,
            active_filters=[ActiveFilterItem(facet=p.facet, value=p.value, label=p.label)
                            for p in self.active_filters()],
            message=NO_MATCHES_MESSAGE if result.is_empty else None,
        )

    def panel_view(self, options: Optional[AdvancedOptions] = None,
                   panel: Optional[PanelSelection] = None) -> AdvancedPanelResponse:
        """Serialize panel options, with checkbox state when a panel is given."""
        if options is None:
            options = panel.options if panel is not None else self.advanced_options()

        def child_checked(feat_id):
            return panel is not None and panel.is_child_checked(feat_id)

        def feat_option(feat):
            return PanelFeatOption(id=feat.id, name=feat.name, checked=child_checked(feat.id))

        partitions = []
        for partition in options.partitions:
            groups = []
            for group in partition.groups:
                groups.append(PanelGroup(
                    name=group.name,
                    standalone=[feat_option(f) for f in group.standalone],
                    clusters=[
                        PanelCluster(
                            parent_trait=cluster.parent_trait,
                            checked=panel is not None and panel.is_parent_checked(cluster.parent_trait),
                            feats=[feat_option(f) for f in cluster.feats],
                        )
                        for cluster in group.clusters
                    ],
                ))
            partitions.append(PanelPartition(kind=partition.kind, groups=groups))

        spell_checked = panel.checked_spell_levels if panel is not None else set()
        feature_checked = panel.checked_feature_levels if panel is not None else set()
        return AdvancedPanelResponse(
            scope_size=options.scope_size,
            partitions=partitions,
            spell_levels=[PanelLevel(value=o.value, available=o.available, checked=o.value in spell_checked)
                          for o in options.spell_levels],
            feature_levels=[PanelLevel(value=o.value, available=o.available, checked=o.value in feature_checked)
                            for o in options.feature_levels],
        )
