"""
tests/unit/test_validation_engine.py - Validation engine tests
"""

import pytest

from manor.errors import ProgramInputError, UnknownTierError
from manor.program.enums import (
    BridgePresence,
    DetectionMode,
    GateStatus,
    PrivacyPosture,
    Relationship,
    StaffingLevel,
)
from manor.program.schema import BridgeConfig, LifestylePriorities, OperatingModel, Space
from manor.validation.engine import ValidationEngine, ValidationInput, validate_program
from manor.validation.scoring import ScoringPolicy


class TestValidationInput:
    """Request payload parsing."""

    def test_tier_payload(self):
        request = ValidationInput.from_dict({"tier": "10k"})
        assert request.program.tier == "10k"
        assert request.program.bridge_config is not None
        assert request.operating_model == OperatingModel()
        assert request.plan is None

    def test_program_payload_wins_over_tier(self, clean_program):
        request = ValidationInput.from_dict({"program": clean_program.to_dict(), "tier": "20k"})
        assert request.program.codes == ["KIT", "FR"]

    def test_null_bridge_config_clears_preset_bridges(self):
        request = ValidationInput.from_dict({"tier": "10k", "bridge_config": None})
        assert request.program.bridge_config is None

    def test_bridge_config_override(self):
        request = ValidationInput.from_dict({"tier": "5k", "bridge_config": {"sound_lock": True}})
        assert request.program.bridge_config == BridgeConfig(sound_lock=True)

    def test_operating_context_parsed(self):
        request = ValidationInput.from_dict({
            "tier": "15k",
            "operating_model": {"staffing": "live_in", "privacy_posture": "private"},
            "lifestyle": {"late_night_media": True},
            "plan": {"rooms": [{"id": "k", "name": "Kitchen"}]},
        })
        assert request.operating_model.staffing == StaffingLevel.LIVE_IN
        assert request.operating_model.privacy_posture == PrivacyPosture.PRIVATE
        assert request.lifestyle.late_night_media
        assert request.plan is not None

    def test_program_or_tier_required(self):
        with pytest.raises(ProgramInputError) as exc:
            ValidationInput.from_dict({"operating_model": {}})
        assert exc.value.http_status == 400

    def test_unknown_tier(self):
        with pytest.raises(UnknownTierError):
            ValidationInput.from_dict({"tier": "2k"})


class TestValidationEngine:
    """End-to-end runs of the engine."""

    def test_passing_program(self, clean_program, passing_operating_model, passing_lifestyle):
        result = validate_program(clean_program, passing_operating_model, passing_lifestyle)
        assert result.gate == GateStatus.PASS
        assert result.overall_score == 88
        assert result.red_flags == []
        assert len(result.required_bridges) == 5
        assert result.missing_bridges == []

    def test_unknown_bridges_warn(self, clean_program, passing_operating_model,
                                  passing_lifestyle):
        clean_program.bridge_config = None
        result = validate_program(clean_program, passing_operating_model, passing_lifestyle)
        assert result.gate == GateStatus.WARNING
        assert {b.presence for b in result.required_bridges} == {BridgePresence.UNKNOWN}

    def test_assume_bridges_present(self, clean_program, passing_operating_model,
                                    passing_lifestyle):
        clean_program.bridge_config = None
        engine = ValidationEngine(assume_bridges_present=True)
        result = validate_program(clean_program, passing_operating_model, passing_lifestyle,
                                  engine=engine)
        assert result.gate == GateStatus.PASS

    def test_critical_flag_fails(self, build_program, passing_operating_model,
                                 passing_lifestyle):
        program = build_program(
            [("KIT", "Kitchen"), ("PRI", "Primary Bedroom", 2), ("GUEST1", "Guest Suite", 2)],
            [("GUEST1", "PRI", "A")],
            bridge_config=BridgeConfig.all_present(),
        )
        result = validate_program(program, passing_operating_model, passing_lifestyle)
        assert result.gate == GateStatus.FAIL
        assert result.flag("RF-01").is_critical
        assert result.module("module-03").penalty == 10
        assert result.module("module-04").penalty == 10

    def test_default_context_below_threshold(self, clean_program):
        result = validate_program(clean_program)
        assert result.overall_score == 76
        assert result.gate == GateStatus.WARNING

    def test_policy_threshold(self, clean_program):
        engine = ValidationEngine(policy=ScoringPolicy(threshold=70))
        assert validate_program(clean_program, engine=engine).gate == GateStatus.PASS

    def test_benchmark_tier_warns(self, program_10k):
        result = validate_program(program_10k)
        assert result.gate == GateStatus.WARNING
        assert result.critical_flags == []
        assert result.tier == "10k"
        assert result.mode == DetectionMode.MATRIX

    def test_plan_switches_to_graph_mode(self, clean_program):
        request = ValidationInput.from_dict({
            "program": clean_program.to_dict(),
            "plan": {"rooms": [{"id": "k", "name": "Kitchen", "space_code": "KIT",
                                "level": 1}]},
        })
        result = ValidationEngine().validate(request)
        assert result.mode == DetectionMode.GRAPH
        assert result.red_flags == []

    def test_result_recomputed_each_run(self, clean_program, passing_operating_model,
                                        passing_lifestyle):
        engine = ValidationEngine()
        first = validate_program(clean_program, passing_operating_model, passing_lifestyle,
                                 engine=engine)
        clean_program.add_space(Space(code="MEDIA", name="Media Room"))
        clean_program.add_space(Space(code="PRI", name="Primary Bedroom"))
        clean_program.set_relationship("MEDIA", "PRI", Relationship.NEAR)
        second = validate_program(clean_program, passing_operating_model, passing_lifestyle,
                                  engine=engine)
        assert first.gate == GateStatus.PASS
        assert second.gate == GateStatus.WARNING
        assert second.flag("RF-03") is not None

    def test_to_dict_summary(self, program_10k):
        data = validate_program(program_10k, lifestyle=LifestylePriorities(
            late_night_media=True)).to_dict()
        assert data["gate"] == "warning"
        assert data["mode"] == "matrix"
        assert len(data["module_scores"]) == 8
        assert data["summary"]["critical_count"] == 0
        assert data["summary"]["missing_bridges"] == []
        assert data["required_bridges"][0]["type"] == "sound_lock"
