"""
MANOR Intake Module

Client intake questionnaire models and their mapping onto the
validation context (operating model, lifestyle, bridges, tier).
"""

from .schema import (
    Pet,
    StaffMember,
    CustomSpace,
    PropertyContext,
    HouseholdProfile,
    EntertainingProfile,
    StaffingProfile,
    PrivacyProfile,
    KitchenProfile,
    WellnessProfile,
    SpecialRequirements,
    IntakeResponse,
)

from .mapping import (
    UniqueRequirement,
    ValidationContext,
    map_intake_to_validation,
    derive_operating_model,
    derive_lifestyle_priorities,
    derive_bridge_config,
    extract_unique_requirements,
    calculate_complexity,
    recommend_tier,
    calculate_confidence,
    detect_conflicts,
)

__all__ = [
    "Pet",
    "StaffMember",
    "CustomSpace",
    "PropertyContext",
    "HouseholdProfile",
    "EntertainingProfile",
    "StaffingProfile",
    "PrivacyProfile",
    "KitchenProfile",
    "WellnessProfile",
    "SpecialRequirements",
    "IntakeResponse",
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
