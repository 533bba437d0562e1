"""
MANOR Test Configuration and Fixtures

Shared programs, operating contexts, intakes and site score sets.
"""

import pytest

from manor.intake.schema import IntakeResponse
from manor.program.enums import (
    EntertainingLoad,
    PrivacyPosture,
    Relationship,
    StaffingLevel,
    Typology,
    WetProgram,
)
from manor.program.presets import get_preset
from manor.program.schema import (
    AdjacencyRequirement,
    BridgeConfig,
    LifestylePriorities,
    OperatingModel,
    ProgramState,
    Space,
)
from manor.site.factors import FACTORS


def make_program(spaces, matrix=(), bridge_config=None, nodes=()):
    """
    Build a ProgramState from compact tuples.

    Usage:
        make_program([("KIT", "Kitchen")], [("KIT", "FR", "A")])
    """
    return ProgramState(
        spaces=[Space(code=s[0], name=s[1], level=s[2] if len(s) > 2 else 1) for s in spaces],
        matrix=[AdjacencyRequirement(a, b, Relationship.parse(r)) for a, b, r in matrix],
        nodes=list(nodes),
        bridge_config=bridge_config,
    )


@pytest.fixture
def program_10k():
    """Working program loaded from the 10k benchmark."""
    return ProgramState.from_preset(get_preset("10k"))


@pytest.fixture
def clean_program():
    """Level 1 kitchen joined to the family room, all bridges present."""
    return make_program(
        [("KIT", "Kitchen"), ("FR", "Family Room")],
        [("KIT", "FR", "A")],
        bridge_config=BridgeConfig.all_present(),
    )


@pytest.fixture
def passing_operating_model():
    """Operating model whose module scores average above the threshold."""
    return OperatingModel(
        typology=Typology.VACATION,
        entertaining_load=EntertainingLoad.WEEKLY,
        staffing=StaffingLevel.FULL_TIME,
        privacy_posture=PrivacyPosture.BALANCED,
        wet_program=WetProgram.POOL_SPA,
    )


@pytest.fixture
def passing_lifestyle():
    return LifestylePriorities(
        chef_led=True,
        multi_family_hosting=True,
        late_night_media=True,
        home_office=False,
        fitness_recovery=True,
        pool_entertainment=True,
    )


@pytest.fixture
def default_intake():
    """Intake with every section at its defaults."""
    return IntakeResponse()


@pytest.fixture
def staffed_intake():
    """Estate household that entertains often and hosts long guest stays."""
    return IntakeResponse.from_dict({
        "intake_id": "INT-001",
        "property_context": {"estimated_sf": 15000, "residence_type": "primary"},
        "household": {
            "composition": "couple_teenagers",
            "children_ages": [14, 16],
            "pets": [{"type": "dog", "size": "large"}],
        },
        "entertaining": {
            "frequency": "frequently",
            "typical_scale": "grand",
            "max_event_scale": "grand",
            "formal_dining_importance": 5,
            "wine_collection": True,
            "wine_bottle_count": 1500,
        },
        "staffing": {"preference": "full_service", "package_delivery_volume": "heavy"},
        "privacy": {
            "preference": "formal",
            "guest_stay_frequency": "frequently",
            "typical_guest_stay_duration": "week",
            "late_night_media_use": True,
        },
        "kitchen": {"cooking_style": "serious", "primary_cook": "staff"},
        "wellness": {"interest": "dedicated", "pool_desired": True,
                     "fitness_routine": "regular"},
    })


@pytest.fixture
def all_factors():
    """Every site factor id."""
    return list(FACTORS)


def uniform_scores(value, **overrides):
    """Score every factor with value; keyword overrides use '_' for '.' (f2_2=1)."""
    scores = {f: value for f in FACTORS}
    for key, v in overrides.items():
        scores[key.lstrip("f").replace("_", ".")] = v
    return scores


@pytest.fixture
def build_program():
    """Factory fixture wrapping make_program."""
    return make_program


@pytest.fixture
def site_scores():
    """Factory fixture wrapping uniform_scores."""
    return uniform_scores
