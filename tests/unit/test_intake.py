"""
tests/unit/test_intake.py - Intake questionnaire mapping tests
"""

import pytest
from pydantic import ValidationError

from manor.intake.mapping import (
    calculate_complexity,
    calculate_confidence,
    derive_bridge_config,
    derive_lifestyle_priorities,
    derive_operating_model,
    detect_conflicts,
    extract_unique_requirements,
    map_intake_to_validation,
    recommend_tier,
)
from manor.intake.schema import IntakeResponse
from manor.program.enums import (
    EntertainingLoad,
    PrivacyPosture,
    StaffingLevel,
    Typology,
    WetProgram,
)
from manor.program.schema import BridgeConfig, LifestylePriorities, OperatingModel


def _intake(**sections):
    return IntakeResponse.from_dict(sections)


class TestSchema:
    """Pydantic intake models."""

    def test_partial_response_uses_defaults(self):
        intake = _intake(kitchen={"cooking_style": "professional"})
        assert intake.kitchen.cooking_style == "professional"
        assert intake.household.composition == "couple_no_children"
        assert intake.property_context.estimated_sf == 10000

    def test_ids_stripped(self):
        assert IntakeResponse(intake_id="  INT-9 ").intake_id == "INT-9"

    def test_area_bounds(self):
        with pytest.raises(ValidationError):
            _intake(property_context={"estimated_sf": 500})

    def test_unknown_literal(self):
        with pytest.raises(ValidationError):
            _intake(privacy={"preference": "hermit"})


class TestOperatingModel:

    def test_defaults(self, default_intake):
        assert derive_operating_model(default_intake) == OperatingModel(
            typology=Typology.SINGLE_FAMILY,
            entertaining_load=EntertainingLoad.QUARTERLY,
            staffing=StaffingLevel.NONE,
            privacy_posture=PrivacyPosture.BALANCED,
            wet_program=WetProgram.NONE,
        )

    def test_staffed_household(self, staffed_intake):
        om = derive_operating_model(staffed_intake)
        assert om.entertaining_load == EntertainingLoad.WEEKLY
        assert om.staffing == StaffingLevel.FULL_TIME
        assert om.privacy_posture == PrivacyPosture.FORMAL
        assert om.wet_program == WetProgram.FULL_WELLNESS

    @pytest.mark.parametrize("wellness,expected", [
        ({"pool_desired": True}, WetProgram.POOL_ONLY),
        ({"pool_desired": True, "spa_features": ["sauna"]}, WetProgram.POOL_SPA),
        ({"interest": "resort"}, WetProgram.FULL_WELLNESS),
        ({"spa_features": ["steam"]}, WetProgram.NONE),
    ])
    def test_wet_program(self, wellness, expected):
        assert derive_operating_model(_intake(wellness=wellness)).wet_program == expected

    @pytest.mark.parametrize("residence,typology", [
        ("vacation", Typology.VACATION),
        ("winter", Typology.WINTER),
        ("investment", Typology.MULTI_FAMILY),
        ("secondary", Typology.SINGLE_FAMILY),
    ])
    def test_typology(self, residence, typology):
        intake = _intake(property_context={"residence_type": residence})
        assert derive_operating_model(intake).typology == typology


class TestLifestyleAndBridges:

    def test_defaults(self, default_intake):
        assert derive_lifestyle_priorities(default_intake) == LifestylePriorities()
        assert derive_bridge_config(default_intake) == BridgeConfig()

    def test_staffed_household(self, staffed_intake):
        lp = derive_lifestyle_priorities(staffed_intake)
        assert lp.chef_led
        assert lp.multi_family_hosting
        assert lp.late_night_media
        assert lp.fitness_recovery
        assert not lp.home_office
        assert not lp.pool_entertainment
        assert derive_bridge_config(staffed_intake) == BridgeConfig.all_present()

    def test_overnight_guests_are_not_multi_family(self):
        intake = _intake(privacy={"guest_stay_frequency": "frequently",
                                  "typical_guest_stay_duration": "overnight"})
        assert not derive_lifestyle_priorities(intake).multi_family_hosting

    def test_security_needs_ops_core(self):
        intake = _intake(staffing={"security_requirements": "enhanced"})
        assert derive_bridge_config(intake) == BridgeConfig(ops_core=True)


class TestUniqueRequirements:

    def test_none_by_default(self, default_intake):
        assert extract_unique_requirements(default_intake) == []

    def test_dog_and_wine(self, staffed_intake):
        reqs = {r.requirement_id: r for r in extract_unique_requirements(staffed_intake)}
        assert set(reqs) == {"pet-dog-wash", "pet-dog-run", "wine-expansion"}
        assert reqs["pet-dog-wash"].space_code == "DOGWASH"
        assert reqs["wine-expansion"].estimated_sf == 350
        assert reqs["wine-expansion"].priority == "required"

    def test_small_dog_needs_nothing(self):
        intake = _intake(household={"pets": [{"type": "dog", "size": "small"}]})
        assert extract_unique_requirements(intake) == []

    @pytest.mark.parametrize("bottles,sf", [(300, 110), (800, 200), (1500, 350), (2500, 500)])
    def test_wine_sizing(self, bottles, sf):
        intake = _intake(entertaining={"wine_collection": True, "wine_bottle_count": bottles})
        assert extract_unique_requirements(intake)[0].estimated_sf == sf

    def test_special_rooms(self):
        intake = _intake(
            special={
                "art_collection": True,
                "art_climate_control": True,
                "safe_room": True,
                "custom_spaces": [{"name": "Pottery Studio", "estimated_sf": 220,
                                   "adjacency_needs": "GAR"}],
            },
            wellness={"car_collection": True, "garage_bays": 6},
        )
        reqs = {r.requirement_id: r for r in extract_unique_requirements(intake)}
        assert reqs["art-gallery"].priority == "required"
        assert reqs["art-climate"].space_code == "ARTSTORE"
        assert reqs["car-collection"].estimated_sf == 1500
        assert reqs["custom-pottery-studio"].adjacency_needs == ["GAR"]
        assert "safe-room" in reqs

    def test_accessibility(self):
        intake = _intake(household={"elderly_residents": True})
        ids = [r.requirement_id for r in extract_unique_requirements(intake)]
        assert ids == ["accessibility", "main-level-suite"]


class TestTierAndConfidence:

    def test_default_complexity(self, default_intake):
        assert calculate_complexity(default_intake) == 0
        assert recommend_tier(default_intake) == "10k"

    def test_complexity_steps_up_one_tier(self):
        intake = _intake(entertaining={"frequency": "frequently", "max_event_scale": "grand"})
        assert calculate_complexity(intake) == 4
        assert recommend_tier(intake) == "15k"

    def test_complexity_at_limit_keeps_tier(self):
        intake = _intake(entertaining={"frequency": "frequently", "wine_collection": True})
        assert calculate_complexity(intake) == 3
        assert recommend_tier(intake) == "10k"

    def test_staffed_household_tier(self, staffed_intake):
        assert calculate_complexity(staffed_intake) == 6
        assert recommend_tier(staffed_intake) == "20k"

    def test_largest_tier_is_a_ceiling(self):
        intake = _intake(property_context={"estimated_sf": 30000},
                         staffing={"preference": "estate"},
                         wellness={"interest": "resort"},
                         special={"recording_studio": True})
        assert recommend_tier(intake) == "20k"

    def test_confidence_is_a_percentage(self, default_intake, staffed_intake):
        low = calculate_confidence(default_intake)
        high = calculate_confidence(staffed_intake)
        assert 0 < low < 100
        assert low < high <= 100


class TestConflicts:

    def test_private_multi_family(self):
        intake = _intake(privacy={"preference": "sanctuary", "multi_generational_hosting": True})
        warnings = map_intake_to_validation(intake).warnings
        assert warnings[0].startswith("Private posture conflicts with multi-family hosting")

    def test_grand_events_without_staff(self):
        intake = _intake(entertaining={"max_event_scale": "grand"})
        om = derive_operating_model(intake)
        warnings = detect_conflicts(intake, om, derive_lifestyle_priorities(intake))
        assert len(warnings) == 1
        assert "without staff" in warnings[0]

    def test_accessibility_on_multiple_levels(self):
        intake = _intake(household={"mobility_considerations": True})
        assert any("elevator" in w for w in map_intake_to_validation(intake).warnings)

    def test_no_conflicts_for_staffed_household(self, staffed_intake):
        assert map_intake_to_validation(staffed_intake).warnings == []


class TestMapIntake:

    def test_full_context(self, staffed_intake):
        context = map_intake_to_validation(staffed_intake)
        assert context.recommended_tier == "20k"
        assert context.complexity == 6
        assert context.bridge_config == BridgeConfig.all_present()
        data = context.to_dict()
        assert data["operating_model"]["staffing"] == "full_time"
        assert data["lifestyle"]["late_night_media"] is True
        assert len(data["unique_requirements"]) == 3
