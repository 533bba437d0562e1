"""
tests/unit/test_advisor.py - Adjacency decision library and recommender tests
"""

import pytest

from manor.advisor.conditions import CONDITIONS, evaluate_condition
from manor.advisor.decisions import (
    ADJACENCY_DECISIONS,
    decisions_for_tier,
    default_option,
    get_decision,
    get_option,
)
from manor.advisor.recommender import (
    BASELINE_REASON,
    Confidence,
    PersonalizationChoice,
    apply_decisions_to_matrix,
    choices_from_recommendations,
    derive_bridge_config_from_choices,
    evaluate_decision,
    evaluate_personalization,
    recommend_adjacencies,
    recommend_for_decision,
    score_option,
)
from manor.errors import UnknownDecisionError, UnknownOptionError
from manor.intake.schema import IntakeResponse
from manor.program.enums import BridgeType, Relationship
from manor.program.presets import get_preset
from manor.program.schema import BridgeConfig, lookup


def _choice(decision_id, option_id):
    return PersonalizationChoice(decision_id=decision_id, option_id=option_id)


# =============================================================================
# DECISION LIBRARY
# =============================================================================

class TestDecisionLibrary:
    """Tests for the static decision records."""

    def test_ids_unique(self):
        ids = [d.decision_id for d in ADJACENCY_DECISIONS]
        assert len(ids) == len(set(ids)) == 10

    def test_one_default_per_decision(self):
        for decision in ADJACENCY_DECISIONS:
            defaults = [o for o in decision.options if o.is_default]
            assert len(defaults) == 1, decision.decision_id
            assert default_option(decision) is defaults[0]

    def test_trigger_conditions_are_known(self):
        for decision in ADJACENCY_DECISIONS:
            for option in decision.options:
                assert set(option.trigger_conditions) <= set(CONDITIONS), option.option_id

    @pytest.mark.parametrize("tier,count", [("5k", 8), ("10k", 9), ("15k", 10), ("20k", 10)])
    def test_decisions_for_tier(self, tier, count):
        decisions = decisions_for_tier(tier)
        assert len(decisions) == count
        assert [d.priority for d in decisions] == sorted(d.priority for d in decisions)

    def test_wellness_only_for_large_tiers(self):
        assert "wellness-placement" not in {d.decision_id for d in decisions_for_tier("10k")}

    def test_unknown_decision(self):
        with pytest.raises(UnknownDecisionError) as exc:
            get_decision("garage-layout")
        assert exc.value.http_status == 404
        assert exc.value.code == "MANOR_102"

    def test_unknown_option(self):
        with pytest.raises(UnknownOptionError):
            get_option(get_decision("office-location"), "off-garage")

    def test_to_dict(self):
        data = get_decision("media-acoustics").to_dict()
        isolated = next(o for o in data["options"] if o["id"] == "media-isolated")
        assert isolated["relationship"] == "S"
        assert isolated["bridge_required"] == "sound_lock"


class TestConditions:

    def test_young_children_means_under_twelve(self):
        intake = IntakeResponse.from_dict({"household": {"children_ages": [12, 15]}})
        assert evaluate_condition("has_young_children", intake) == (False, "")
        intake = IntakeResponse.from_dict({"household": {"children_ages": [11]}})
        assert evaluate_condition("has_young_children", intake) == (True,
                                                                    "You have young children")

    def test_heavy_deliveries(self, staffed_intake, default_intake):
        assert evaluate_condition("heavy_deliveries", staffed_intake)[0]
        assert not evaluate_condition("heavy_deliveries", default_intake)[0]

    def test_unknown_key(self, default_intake):
        with pytest.raises(KeyError):
            evaluate_condition("owns_boat", default_intake)


# =============================================================================
# RECOMMENDATION
# =============================================================================

class TestRecommender:
    """Option scoring and confidence."""

    def test_default_intake_keeps_default(self, default_intake):
        rec = recommend_for_decision(get_decision("office-location"), default_intake)
        assert rec.recommended_option.option_id == "off-entry"
        assert rec.confidence == Confidence.LOW
        assert rec.reasoning == BASELINE_REASON
        assert rec.alternative_option_ids == ["off-family", "off-primary"]

    def test_warning_penalty_below_three(self, default_intake):
        option = get_option(get_decision("office-location"), "off-primary")
        scored = score_option(option, default_intake)
        assert scored.score == 1
        assert scored.reasons == ["No client meetings at home"]

    def test_late_night_media(self):
        intake = IntakeResponse.from_dict({"privacy": {"late_night_media_use": True}})
        rec = recommend_for_decision(get_decision("media-acoustics"), intake)
        assert rec.recommended_option.option_id == "media-isolated"
        assert rec.score == 2
        assert rec.confidence == Confidence.LOW
        assert rec.reasoning == "You use media late at night"

    def test_full_service_deliveries(self):
        intake = IntakeResponse.from_dict({
            "staffing": {"preference": "full_service", "package_delivery_volume": "heavy"},
        })
        rec = recommend_for_decision(get_decision("mudroom-flow"), intake)
        assert rec.recommended_option.option_id == "mud-ops"
        assert rec.score == 4
        assert rec.confidence == Confidence.HIGH
        assert rec.reasoning == "You have full-service staffing. Heavy package delivery volume"

    def test_warnings_kept_at_three_or_more(self, staffed_intake):
        rec = recommend_for_decision(get_decision("kitchen-family"), staffed_intake)
        assert rec.recommended_option.option_id == "kit-separate"
        assert rec.score == 4

    def test_recommend_adjacencies_for_tier(self, staffed_intake):
        recs = recommend_adjacencies(staffed_intake, "15k")
        assert len(recs) == 10
        by_id = {r.decision.decision_id: r for r in recs}
        assert by_id["guest-independence"].recommended_option.option_id == "guest-independent"
        assert by_id["dining-formality"].recommended_option.option_id == "dr-formal"

    def test_recommendation_to_dict(self, default_intake):
        data = recommend_for_decision(get_decision("kitchen-family"), default_intake).to_dict()
        assert data["decision_id"] == "kitchen-family"
        assert data["confidence"] in {"high", "medium", "low"}

    def test_choices_from_recommendations(self, default_intake):
        recs = recommend_adjacencies(default_intake, "5k")
        choices = choices_from_recommendations(recs, {"kitchen-family": "kit-separate"})
        assert len(choices) == 8
        kitchen = next(c for c in choices if c.decision_id == "kitchen-family")
        assert kitchen.option_id == "kit-separate"
        assert not kitchen.is_default
        assert len(kitchen.warnings) == 2

    def test_override_with_unknown_option(self, default_intake):
        recs = recommend_adjacencies(default_intake, "5k")
        with pytest.raises(UnknownOptionError):
            choices_from_recommendations(recs, {"kitchen-family": "kit-outdoor"})


# =============================================================================
# EVALUATION
# =============================================================================

class TestEvaluation:

    def test_risk_tags(self):
        office = get_decision("office-location")
        assert evaluate_decision(office, "off-primary").risk_tags == ["Circulation path concerns"]
        assert evaluate_decision(office, "off-family").risk_tags == ["Potential acoustic issues"]
        assert evaluate_decision(office, "off-entry").risk_tags == []

    def test_bridge_and_area(self):
        evaluation = evaluate_decision(get_decision("mudroom-flow"), "mud-ops")
        assert evaluation.sf_impact == 150
        assert evaluation.bridges_required == [BridgeType.OPS_CORE]

    def test_personalization_totals(self):
        choices = [
            _choice("media-acoustics", "media-isolated"),
            _choice("guest-independence", "guest-independent"),
            _choice("kitchen-family", "kit-separate"),
            _choice("dining-formality", "dr-formal"),
        ]
        result = evaluate_personalization(choices)
        assert result.total_sf_impact == 210
        assert result.required_bridges == [
            BridgeType.SOUND_LOCK,
            BridgeType.GUEST_AUTONOMY,
            BridgeType.BUTLER_PANTRY,
        ]
        kitchen = result.choices[2]
        assert len(kitchen.warnings) == 2
        assert result.warning_count >= 2

    def test_personalization_does_not_mutate_input(self):
        choice = _choice("kitchen-family", "kit-open")
        result = evaluate_personalization([choice])
        assert result.choices[0].is_default
        assert not choice.is_default
        assert result.choices[0] is not choice

    def test_unknown_decision_in_choices(self):
        with pytest.raises(UnknownDecisionError):
            evaluate_personalization([_choice("boat-house", "dock")])


# =============================================================================
# MATRIX PROJECTION
# =============================================================================

class TestMatrixProjection:

    def test_apply_sets_both_directions(self):
        matrix = apply_decisions_to_matrix([], [_choice("media-acoustics", "media-isolated")])
        assert lookup(matrix, "MEDIA", "PRI") == Relationship.SEPARATED
        assert lookup(matrix, "PRI", "MEDIA") == Relationship.SEPARATED
        assert len(matrix) == 2

    def test_apply_replaces_existing(self):
        base = get_preset("10k").matrix
        matrix = apply_decisions_to_matrix(base, [_choice("kitchen-family", "kit-separate")])
        assert lookup(matrix, "KIT", "FR") == Relationship.BUFFERED
        assert lookup(matrix, "FR", "KIT") == Relationship.BUFFERED
        assert len(matrix) >= len(base)

    def test_apply_is_idempotent(self, staffed_intake):
        base = get_preset("15k").matrix
        choices = choices_from_recommendations(recommend_adjacencies(staffed_intake, "15k"))
        once = apply_decisions_to_matrix(base, choices)
        twice = apply_decisions_to_matrix(once, choices)
        assert twice == once

    def test_base_matrix_untouched(self):
        base = list(get_preset("10k").matrix)
        snapshot = list(base)
        apply_decisions_to_matrix(base, [_choice("kitchen-family", "kit-separate")])
        assert base == snapshot

    def test_derive_bridge_config(self):
        choices = [_choice("mudroom-flow", "mud-ops"), _choice("kitchen-family", "kit-open")]
        assert derive_bridge_config_from_choices(choices) == BridgeConfig(ops_core=True)

    def test_derive_bridge_config_merges_base(self):
        base = BridgeConfig(wet_feet=True)
        config = derive_bridge_config_from_choices([_choice("mudroom-flow", "mud-ops")], base)
        assert config == BridgeConfig(wet_feet=True, ops_core=True)
        assert base == BridgeConfig(wet_feet=True)
