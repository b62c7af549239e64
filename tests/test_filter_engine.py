"""
Tests for the filter engine's stage composition.
"""
import pytest

from feat_explorer.core.catalog.catalog import Catalog
from feat_explorer.core.catalog.facet_index import FacetIndex
from feat_explorer.core.exceptions import FilterValidationError
from feat_explorer.core.filtering.filter_engine import FilterEngine, compute_result_set
from feat_explorer.core.filtering.state import FilterState
from feat_explorer.models.facets import PrimaryFacet


def ids(feats):
    return [f.id for f in feats]


@pytest.fixture
def engine():
    return FilterEngine()


class TestPrimaryStage:
    """Union across Type, Ancestry and Class."""

    def test_empty_state_returns_full_catalog_in_order(self, catalog, state):
        assert ids(compute_result_set(catalog, state)) == ids(catalog)

    def test_class_uses_multi_value_matching(self, catalog, state):
        state.set_primary("Class", "Fighter")
        assert ids(compute_result_set(catalog, state)) == [1, 2, 3, 4]

    def test_comma_joined_class(self, catalog, state):
        state.set_primary("Class", "Barbarian")
        assert ids(compute_result_set(catalog, state)) == [2]

    def test_union_across_facets(self, catalog, state):
        state.set_primary("Class", "Fighter")
        state.set_primary("Ancestry", "Dwarf")
        assert ids(compute_result_set(catalog, state)) == [1, 2, 3, 4, 7, 8]

    def test_union_within_facet(self, catalog, state):
        state.set_primary("Class", "Wizard")
        state.set_primary("Class", "Rogue")
        assert ids(compute_result_set(catalog, state)) == [5, 6, 10]

    def test_type_is_exact_category(self, catalog, state):
        state.set_primary("Type", "General")
        assert ids(compute_result_set(catalog, state)) == [9]

    def test_malformed_field_never_matches(self, catalog, state):
        state.set_primary("Class", "unexpected")
        assert compute_result_set(catalog, state) == ()

    def test_value_matching_nothing_is_legal(self, catalog, state):
        state.set_primary("Ancestry", "Gnome")
        assert compute_result_set(catalog, state) == ()

    def test_tier_alone_does_not_count_as_primary_selection(self, catalog, state, engine):
        state.set_primary("Tier", "Epic")
        result = engine.compute(catalog.feats, state)
        assert ids(result.primary_filtered) == ids(catalog)

    def test_adding_values_only_grows_the_primary_stage(self, catalog, engine):
        state = FilterState()
        index = FacetIndex.build(catalog)
        previous = set()
        for facet in (PrimaryFacet.CLASS, PrimaryFacet.ANCESTRY, PrimaryFacet.TYPE):
            for value in index.options(facet):
                state.set_primary(facet, value)
                current = set(ids(engine.compute(catalog.feats, state).primary_filtered))
                assert previous <= current
                previous = current


class TestTierStage:
    """Tier narrows the primary stage output."""

    def test_tier_narrows_primary(self, catalog, state):
        state.set_primary("Class", "Fighter")
        state.set_primary("Tier", "Epic")
        assert ids(compute_result_set(catalog, state)) == [2, 4]

    def test_feats_without_tiers_fail_when_tier_selected(self, catalog, state):
        state.set_primary("Type", "General")
        state.set_primary("Tier", "Adventurer")
        assert compute_result_set(catalog, state) == ()

    def test_feats_without_tiers_stay_in_primary_subset(self, catalog, state, engine):
        state.set_primary("Type", "General")
        state.set_primary("Tier", "Adventurer")
        result = engine.compute(catalog.feats, state)
        assert ids(result.primary_filtered) == [9]
        assert result.after_tier == ()

    def test_multiple_tiers_are_alternatives(self, catalog, state):
        state.set_primary("Tier", "Epic")
        state.set_primary("Tier", "Champion")
        assert ids(compute_result_set(catalog, state)) == [1, 2, 3, 4, 6, 8]

    def test_adding_a_tier_never_widens_past_stage_one(self, catalog, engine):
        for tier in ("Adventurer", "Champion", "Epic"):
            state = FilterState()
            state.set_primary("Class", "Fighter")
            state.set_primary("Tier", tier)
            result = engine.compute(catalog.feats, state)
            assert set(ids(result.after_tier)) <= set(ids(result.primary_filtered))


class TestAdvancedStage:
    """Advanced criteria are a union, applied after the tier stage."""

    def test_single_feat_id(self, catalog, state):
        state.advanced.feat_ids.add(5)
        assert ids(compute_result_set(catalog, state)) == [5]

    def test_parent_trait(self, catalog, state):
        state.advanced.parent_traits.add("Weapon Mastery")
        assert ids(compute_result_set(catalog, state)) == [2, 3, 4]

    def test_spell_and_feature_levels(self, catalog, state):
        state.advanced.spell_levels.add("3rd")
        state.advanced.feature_levels.add("5th")
        assert ids(compute_result_set(catalog, state)) == [6, 8, 10]

    def test_criteria_are_a_union(self, catalog, state):
        state.advanced.parent_traits.add("Weapon Mastery")
        state.advanced.spell_levels.add("1st")
        state.advanced.feat_ids.add(9)
        assert ids(compute_result_set(catalog, state)) == [2, 3, 4, 5, 9]

    def test_advanced_narrows_prior_stages(self, catalog, state):
        state.set_primary("Class", "Wizard")
        state.advanced.feat_ids.add(1)
        assert compute_result_set(catalog, state) == ()

    def test_parent_and_child_ids_are_not_deduplicated(self, catalog, state):
        state.advanced.parent_traits.add("Weapon Mastery")
        state.advanced.feat_ids.update({2, 3})
        assert ids(compute_result_set(catalog, state)) == [2, 3, 4]


class TestFilterStateLifecycle:
    """Reset and clear-advanced actions."""

    def test_reset_clears_everything(self, catalog, state):
        state.set_primary("Class", "Fighter")
        state.advanced.feat_ids.add(1)
        state.reset()
        assert state.is_empty()
        assert ids(compute_result_set(catalog, state)) == ids(catalog)

    def test_clear_advanced_keeps_primary(self, catalog, state):
        state.set_primary("Class", "Wizard")
        state.advanced.feat_ids.add(5)
        state.clear_advanced()
        assert state.advanced.is_empty()
        assert ids(compute_result_set(catalog, state)) == [5, 6]

    def test_toggle_primary(self, state):
        assert state.toggle_primary("Class", "Fighter") is True
        assert state.primary.classes == {"Fighter"}
        assert state.toggle_primary("Class", "Fighter") is False
        assert state.primary.classes == set()

    def test_unknown_facet(self, state):
        with pytest.raises(FilterValidationError):
            state.set_primary("Colour", "Red")


class TestEndToEndScenario:
    """Class and Tier narrowing, then a widening Ancestry that the tier stage removes."""

    def test_fighter_epic_then_dwarf(self, scenario_catalog, state):
        state.set_primary("Class", "Fighter")
        state.set_primary("Tier", "Epic")
        assert ids(compute_result_set(scenario_catalog, state)) == [1]

        state.set_primary("Ancestry", "Dwarf")
        result = FilterEngine().compute(scenario_catalog.feats, state)
        assert ids(result.primary_filtered) == [1, 2]
        assert ids(result.results) == [1]

    def test_empty_catalog(self, state):
        state.set_primary("Class", "Fighter")
        state.set_primary("Tier", "Epic")
        state.advanced.feat_ids.add(1)
        result = FilterEngine().compute(Catalog().feats, state)
        assert result.primary_filtered == ()
        assert result.results == ()
        assert result.is_empty
