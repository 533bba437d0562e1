"""
intake/mapping.py - Intake to validation context mapping

Derives the operating model, lifestyle priorities, bridge configuration,
unique space requirements, recommended tier, completeness and conflict
warnings from an intake response.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import re

from ..program.enums import (
    EntertainingLoad,
    PrivacyPosture,
    StaffingLevel,
    Typology,
    WetProgram,
)
from ..program.presets import tier_for_area
from ..program.schema import BridgeConfig, LifestylePriorities, OperatingModel
from .schema import INTAKE_SECTIONS, IntakeResponse

logger = logging.getLogger(__name__)

__all__ = [
    "UniqueRequirement",
    "ValidationContext",
    "map_intake_to_validation",
    "derive_operating_model",
    "derive_lifestyle_priorities",
    "derive_bridge_config",
    "extract_unique_requirements",
    "calculate_complexity",
    "recommend_tier",
    "calculate_confidence",
    "detect_conflicts",
]


@dataclass
class UniqueRequirement:
    """Program change requested by the intake beyond the benchmark."""

    requirement_id: str
    requirement_type: str  # addition, modification
    category: str
    description: str
    priority: str = "preferred"  # required, preferred, optional
    source_question: str = ""
    space_code: Optional[str] = None
    estimated_sf: Optional[float] = None
    adjacency_needs: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.requirement_id,
            "type": self.requirement_type,
            "category": self.category,
            "description": self.description,
            "priority": self.priority,
            "source_question": self.source_question,
            "space_code": self.space_code,
            "estimated_sf": self.estimated_sf,
            "adjacency_needs": list(self.adjacency_needs),
        }


@dataclass
class ValidationContext:
    """Everything the validation engine needs, derived from intake."""

    operating_model: OperatingModel
    lifestyle: LifestylePriorities
    bridge_config: BridgeConfig
    unique_requirements: List[UniqueRequirement]
    recommended_tier: str
    complexity: int
    confidence: int
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operating_model": self.operating_model.to_dict(),
            "lifestyle": self.lifestyle.to_dict(),
            "bridge_config": self.bridge_config.to_dict(),
            "unique_requirements": [r.to_dict() for r in self.unique_requirements],
            "recommended_tier": self.recommended_tier,
            "complexity": self.complexity,
            "confidence": self.confidence,
            "warnings": list(self.warnings),
        }


# =============================================================================
# OPERATING MODEL
# =============================================================================

_TYPOLOGY = {
    "primary": Typology.SINGLE_FAMILY,
    "secondary": Typology.SINGLE_FAMILY,
    "vacation": Typology.VACATION,
    "winter": Typology.WINTER,
    "investment": Typology.MULTI_FAMILY,
}

_ENTERTAINING = {
    "rarely": EntertainingLoad.RARE,
    "occasionally": EntertainingLoad.QUARTERLY,
    "regularly": EntertainingLoad.MONTHLY,
    "frequently": EntertainingLoad.WEEKLY,
}

_STAFFING = {
    "self_sufficient": StaffingLevel.NONE,
    "occasional": StaffingLevel.NONE,
    "regular": StaffingLevel.PART_TIME,
    "full_service": StaffingLevel.FULL_TIME,
    "estate": StaffingLevel.LIVE_IN,
}

_PRIVACY = {
    "welcoming": PrivacyPosture.OPEN,
    "selective": PrivacyPosture.BALANCED,
    "formal": PrivacyPosture.FORMAL,
    "sanctuary": PrivacyPosture.PRIVATE,
}


def _wet_program(intake: IntakeResponse) -> WetProgram:
    wellness = intake.wellness
    if wellness.interest in ("resort", "dedicated"):
        return WetProgram.FULL_WELLNESS
    if wellness.pool_desired and wellness.spa_features:
        return WetProgram.POOL_SPA
    if wellness.pool_desired:
        return WetProgram.POOL_ONLY
    return WetProgram.NONE


def derive_operating_model(intake: IntakeResponse) -> OperatingModel:
    return OperatingModel(
        typology=_TYPOLOGY[intake.property_context.residence_type],
        entertaining_load=_ENTERTAINING[intake.entertaining.frequency],
        staffing=_STAFFING[intake.staffing.preference],
        privacy_posture=_PRIVACY[intake.privacy.preference],
        wet_program=_wet_program(intake),
    )


# =============================================================================
# LIFESTYLE PRIORITIES
# =============================================================================

def derive_lifestyle_priorities(intake: IntakeResponse) -> LifestylePriorities:
    kitchen = intake.kitchen
    privacy = intake.privacy
    wellness = intake.wellness
    composition = intake.household.composition

    return LifestylePriorities(
        chef_led=(kitchen.cooking_style in ("serious", "professional")
                  or kitchen.separate_catering_kitchen
                  or kitchen.primary_cook == "staff"),
        multi_family_hosting=(privacy.multi_generational_hosting
                              or composition in ("multi_generational", "blended_family")
                              or (privacy.guest_stay_frequency == "frequently"
                                  and privacy.typical_guest_stay_duration != "overnight")),
        late_night_media=privacy.late_night_media_use,
        home_office=privacy.work_from_home in ("primary", "executive"),
        fitness_recovery=(wellness.fitness_routine in ("regular", "intensive")
                          or len(wellness.spa_features) >= 2),
        pool_entertainment=(wellness.pool_desired
                            and intake.entertaining.outdoor_entertaining_importance >= 4),
    )


# =============================================================================
# BRIDGES
# =============================================================================

def derive_bridge_config(
    intake: IntakeResponse,
    operating_model: Optional[OperatingModel] = None,
    lifestyle: Optional[LifestylePriorities] = None,
) -> BridgeConfig:
    """Bridges the intake answers call for."""
    om = operating_model or derive_operating_model(intake)
    lp = lifestyle or derive_lifestyle_priorities(intake)

    return BridgeConfig(
        butler_pantry=(intake.entertaining.catering_support
                       or intake.entertaining.formal_dining_importance >= 4
                       or intake.kitchen.separate_catering_kitchen
                       or (om.entertaining_load == EntertainingLoad.WEEKLY
                           and om.privacy_posture != PrivacyPosture.OPEN)),
        guest_autonomy=(lp.multi_family_hosting
                        or intake.privacy.separate_guest_access
                        or intake.privacy.typical_guest_stay_duration in ("extended", "week")),
        sound_lock=(lp.late_night_media
                    or intake.privacy.media_room
                    or intake.special.recording_studio
                    or intake.special.music_room),
        wet_feet=(om.wet_program != WetProgram.NONE
                  or intake.wellness.pool_desired
                  or "hot_tub" in intake.wellness.spa_features),
        ops_core=(om.staffing != StaffingLevel.NONE
                  or intake.staffing.package_delivery_volume == "heavy"
                  or intake.staffing.security_requirements != "minimal"),
    )


# =============================================================================
# UNIQUE REQUIREMENTS
# =============================================================================

def _wine_sf(bottles: int) -> int:
    if bottles > 2000:
        return 500
    if bottles > 1000:
        return 350
    if bottles > 500:
        return 200
    return 110


def _slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


def extract_unique_requirements(intake: IntakeResponse) -> List[UniqueRequirement]:
    """Space additions and modifications the benchmark does not cover."""
    reqs: List[UniqueRequirement] = []
    special = intake.special
    household = intake.household

    for pet in household.pets:
        if pet.type.lower() == "dog" and pet.size != "small":
            reqs.append(UniqueRequirement(
                requirement_id=f"pet-{pet.type.lower()}-wash",
                requirement_type="addition",
                category="pets",
                description=f"Dog wash station for {pet.size or 'medium/large'} {pet.type}",
                space_code="DOGWASH",
                estimated_sf=40,
                adjacency_needs=["MUD", "GAR"],
                source_question="household.pets",
            ))
            reqs.append(UniqueRequirement(
                requirement_id=f"pet-{pet.type.lower()}-run",
                requirement_type="addition",
                category="pets",
                description="Dog run access from mudroom",
                source_question="household.pets",
            ))

    bottles = intake.entertaining.wine_bottle_count
    if intake.entertaining.wine_collection and bottles:
        reqs.append(UniqueRequirement(
            requirement_id="wine-expansion",
            requirement_type="modification",
            category="entertaining",
            description=f"Expanded wine storage for {bottles} bottles",
            space_code="WINE",
            estimated_sf=_wine_sf(bottles),
            adjacency_needs=["DR", "SCUL"],
            priority="required",
            source_question="entertaining.wine_bottle_count",
        ))

    if special.art_collection:
        reqs.append(UniqueRequirement(
            requirement_id="art-gallery",
            requirement_type="modification",
            category="special",
            description="Gallery-quality wall space and lighting for art collection",
            adjacency_needs=["FOY", "GR"],
            priority="required" if special.art_climate_control else "preferred",
            source_question="special.art_collection",
        ))
        if special.art_climate_control:
            reqs.append(UniqueRequirement(
                requirement_id="art-climate",
                requirement_type="addition",
                category="special",
                description="Climate-controlled art storage",
                space_code="ARTSTORE",
                estimated_sf=150,
                priority="required",
                source_question="special.art_climate_control",
            ))

    if special.music_room:
        reqs.append(UniqueRequirement(
            requirement_id="music-room",
            requirement_type="addition",
            category="special",
            description="Sound-isolated music room",
            space_code="MUSIC",
            estimated_sf=250,
            adjacency_needs=["MEDIA"],
            priority="required",
            source_question="special.music_room",
        ))

    if special.recording_studio:
        reqs.append(UniqueRequirement(
            requirement_id="recording-studio",
            requirement_type="addition",
            category="special",
            description="Professional recording studio with control room",
            space_code="STUDIO",
            estimated_sf=400,
            priority="required",
            source_question="special.recording_studio",
        ))

    if special.workshop:
        reqs.append(UniqueRequirement(
            requirement_id="workshop",
            requirement_type="addition",
            category="special",
            description="Workshop/maker space",
            space_code="WORKSHOP",
            estimated_sf=300,
            adjacency_needs=["GAR"],
            source_question="special.workshop",
        ))

    bays = intake.wellness.garage_bays
    if intake.wellness.car_collection and bays > 4:
        reqs.append(UniqueRequirement(
            requirement_id="car-collection",
            requirement_type="modification",
            category="automotive",
            description=f"Expanded garage for {bays} vehicles with display area",
            space_code="GAR",
            estimated_sf=bays * 250,
            priority="required",
            source_question="wellness.garage_bays",
        ))

    if special.safe_room:
        reqs.append(UniqueRequirement(
            requirement_id="safe-room",
            requirement_type="addition",
            category="security",
            description="Secure safe room / panic room",
            space_code="SAFE",
            estimated_sf=100,
            adjacency_needs=["PRI"],
            priority="required",
            source_question="special.safe_room",
        ))

    if household.mobility_considerations or household.elderly_residents:
        reqs.append(UniqueRequirement(
            requirement_id="accessibility",
            requirement_type="modification",
            category="accessibility",
            description="Elevator and accessible design throughout",
            priority="required",
            source_question="household.mobility_considerations",
        ))
        reqs.append(UniqueRequirement(
            requirement_id="main-level-suite",
            requirement_type="modification",
            category="accessibility",
            description="Full suite capability on main level",
            adjacency_needs=["GYM", "SPA"],
            priority="required",
            source_question="household.elderly_residents",
        ))

    for custom in special.custom_spaces:
        reqs.append(UniqueRequirement(
            requirement_id=f"custom-{_slug(custom.name)}",
            requirement_type="addition",
            category="custom",
            description=custom.description or custom.name,
            estimated_sf=custom.estimated_sf,
            adjacency_needs=[custom.adjacency_needs] if custom.adjacency_needs else [],
            source_question="special.custom_spaces",
        ))

    if intake.privacy.client_meetings_at_home:
        reqs.append(UniqueRequirement(
            requirement_id="executive-office",
            requirement_type="modification",
            category="work",
            description="Executive office with separate visitor access",
            space_code="OFF",
            estimated_sf=300,
            adjacency_needs=["FOY"],
            priority="required",
            source_question="privacy.client_meetings_at_home",
        ))

    return reqs


# =============================================================================
# TIER, CONFIDENCE, CONFLICTS
# =============================================================================

def calculate_complexity(intake: IntakeResponse) -> int:
    """Program complexity points from household, entertaining, staff and extras."""
    h = intake.household
    e = intake.entertaining
    w = intake.wellness
    s = intake.special

    score = 0
    if h.composition == "multi_generational":
        score += 2
    if h.composition == "blended_family":
        score += 1
    if h.elderly_residents:
        score += 1
    if len(h.pets) > 1:
        score += 1

    if e.frequency == "frequently":
        score += 2
    if e.max_event_scale == "grand":
        score += 2
    if e.wine_collection:
        score += 1

    if intake.staffing.preference == "estate":
        score += 2
    if intake.staffing.preference == "full_service":
        score += 1

    if w.interest == "resort":
        score += 2
    if len(w.spa_features) >= 3:
        score += 1

    if s.art_climate_control:
        score += 1
    if s.recording_studio:
        score += 2
    if s.safe_room:
        score += 1
    score += len(s.custom_spaces)

    return score


_TIER_ORDER = ("5k", "10k", "15k", "20k")


def recommend_tier(intake: IntakeResponse, complexity: Optional[int] = None) -> str:
    """
    Benchmark tier for the intake.

    Starts from the area tier and steps up one tier when complexity
    exceeds what that tier absorbs (3 points up to 10k, 4 at 15k).
    """
    if complexity is None:
        complexity = calculate_complexity(intake)
    tier = tier_for_area(intake.property_context.estimated_sf)
    limit = {"5k": 3, "10k": 3, "15k": 4}.get(tier)
    if limit is not None and complexity > limit:
        tier = _TIER_ORDER[_TIER_ORDER.index(tier) + 1]
    return tier


def _answered(value: Any) -> bool:
    if value is None or value == "":
        return False
    if isinstance(value, (list, tuple)) and not value:
        return False
    return True


def calculate_confidence(intake: IntakeResponse) -> int:
    """Percentage of intake fields carrying an answer."""
    completed = 0
    total = 0
    for name in INTAKE_SECTIONS:
        section = getattr(intake, name).model_dump()
        for value in section.values():
            total += 1
            if _answered(value):
                completed += 1
    if total == 0:
        return 0
    return int(round(completed / total * 100))


def detect_conflicts(
    intake: IntakeResponse,
    operating_model: OperatingModel,
    lifestyle: LifestylePriorities,
) -> List[str]:
    warnings: List[str] = []
    om = operating_model
    lp = lifestyle
    household = intake.household

    if om.privacy_posture == PrivacyPosture.PRIVATE and lp.multi_family_hosting:
        warnings.append(
            "Private posture conflicts with multi-family hosting. Consider redesigning guest "
            "circulation to maintain primary suite sanctuary."
        )
    if intake.entertaining.max_event_scale == "grand" and om.staffing == StaffingLevel.NONE:
        warnings.append(
            "Grand-scale entertaining (50+ guests) without staff may create service "
            "bottlenecks. Consider at least part-time staff or enhanced self-service design."
        )
    if lp.late_night_media and om.privacy_posture == PrivacyPosture.PRIVATE:
        warnings.append(
            "Late-night media use requires sound lock vestibule to protect bedroom acoustics. "
            "Ensure media room is not adjacent to primary suite."
        )
    if om.wet_program == WetProgram.FULL_WELLNESS and om.typology == Typology.WINTER:
        warnings.append(
            "Full wellness program in winter residence requires enhanced MEP for humidity "
            "control. Budget for dedicated dehumidification systems."
        )
    if ((household.elderly_residents or household.mobility_considerations)
            and intake.property_context.number_of_levels > 1):
        warnings.append(
            "Multi-level home with accessibility needs requires elevator. Also ensure "
            "main-level suite capability."
        )
    if intake.wellness.car_collection and intake.wellness.garage_bays < 4:
        warnings.append(
            "Car collection indicated but garage bays seem insufficient. Recommend minimum "
            "4+ bays with climate control."
        )
    if intake.special.art_collection and not intake.special.art_climate_control:
        warnings.append(
            "Significant art collection may require climate control for preservation. "
            "Consider adding climate-controlled storage."
        )
    if intake.privacy.client_meetings_at_home and not intake.privacy.separate_guest_access:
        warnings.append(
            "Client meetings at home should have separate visitor routing. Office should "
            "connect to foyer without crossing family spaces."
        )
    return warnings


def map_intake_to_validation(intake: IntakeResponse) -> ValidationContext:
    """Transform an intake response into a validation context."""
    om = derive_operating_model(intake)
    lp = derive_lifestyle_priorities(intake)
    complexity = calculate_complexity(intake)

    context = ValidationContext(
        operating_model=om,
        lifestyle=lp,
        bridge_config=derive_bridge_config(intake, om, lp),
        unique_requirements=extract_unique_requirements(intake),
        recommended_tier=recommend_tier(intake, complexity),
        complexity=complexity,
        confidence=calculate_confidence(intake),
        warnings=detect_conflicts(intake, om, lp),
    )
    logger.info(f"Intake {intake.intake_id or '<anonymous>'} mapped: "
                f"tier={context.recommended_tier}, complexity={complexity}, "
                f"confidence={context.confidence}%")
    return context
