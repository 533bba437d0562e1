"""
intake/schema.py - Client intake questionnaire models

Pydantic models for the structured output of the client intake
questionnaire. Every section has defaults so partial responses parse.
"""

from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

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
    "INTAKE_SECTIONS",
]

ResidenceType = Literal["primary", "secondary", "vacation", "winter", "investment"]
HouseholdComposition = Literal[
    "couple_no_children",
    "couple_young_children",
    "couple_teenagers",
    "couple_adult_children",
    "multi_generational",
    "single_occupant",
    "blended_family",
]
Frequency = Literal["rarely", "occasionally", "regularly", "frequently"]
EventScale = Literal["intimate", "moderate", "large", "grand"]
StaffingPreference = Literal["self_sufficient", "occasional", "regular", "full_service", "estate"]
PrivacyPreference = Literal["welcoming", "selective", "formal", "sanctuary"]
CookingStyle = Literal["minimal", "casual", "enthusiast", "serious", "professional"]
WellnessInterest = Literal["none", "basic", "active", "dedicated", "resort"]
WorkFromHome = Literal["never", "occasional", "regular", "primary", "executive"]
SpaFeature = Literal["sauna", "steam", "hot_tub", "cold_plunge", "massage_room", "meditation"]


class Pet(BaseModel):
    """Household pet."""
    type: str
    size: Optional[Literal["small", "medium", "large"]] = None
    count: int = 1
    special_needs: Optional[str] = None


class StaffMember(BaseModel):
    """Current household staff role."""
    role: str
    live_in: bool = False
    full_time: bool = False


class CustomSpace(BaseModel):
    """Free-form space requested by the client."""
    name: str
    description: str = ""
    estimated_sf: Optional[float] = None
    adjacency_needs: Optional[str] = None


class PropertyContext(BaseModel):
    """Section 1: property context."""
    residence_type: ResidenceType = "primary"
    estimated_sf: float = Field(10000, ge=1000, le=100000, description="Target gross SF")
    site_lot_size: Optional[str] = None
    has_basement: bool = False
    number_of_levels: int = Field(2, ge=1, le=5)
    climate_zone: Optional[str] = None
    existing_structure: bool = False
    target_completion_date: Optional[str] = None


class HouseholdProfile(BaseModel):
    """Section 2: household."""
    composition: HouseholdComposition = "couple_no_children"
    primary_residents: int = Field(2, ge=1, le=10)
    children_ages: List[int] = Field(default_factory=list)
    elderly_residents: bool = False
    mobility_considerations: bool = False
    pets: List[Pet] = Field(default_factory=list)


class EntertainingProfile(BaseModel):
    """Section 3: entertaining."""
    frequency: Frequency = "occasionally"
    typical_scale: EventScale = "moderate"
    max_event_scale: EventScale = "large"
    formal_dining_importance: int = Field(3, ge=1, le=5)
    outdoor_entertaining_importance: int = Field(3, ge=1, le=5)
    catering_support: bool = False
    wine_collection: bool = False
    wine_bottle_count: Optional[int] = Field(None, ge=0)
    bar_entertaining_importance: int = Field(3, ge=1, le=5)


class StaffingProfile(BaseModel):
    """Section 4: staffing and service."""
    preference: StaffingPreference = "self_sufficient"
    current_staff: List[StaffMember] = Field(default_factory=list)
    planned_staff: List[str] = Field(default_factory=list)
    security_requirements: Literal["minimal", "moderate", "enhanced", "comprehensive"] = "minimal"
    package_delivery_volume: Literal["light", "moderate", "heavy"] = "moderate"


class PrivacyProfile(BaseModel):
    """Section 5: privacy and lifestyle."""
    preference: PrivacyPreference = "selective"
    guest_stay_frequency: Frequency = "occasionally"
    typical_guest_stay_duration: Literal["overnight", "weekend", "week", "extended"] = "weekend"
    multi_generational_hosting: bool = False
    separate_guest_access: bool = False
    work_from_home: WorkFromHome = "occasional"
    client_meetings_at_home: bool = False
    media_room: bool = False
    late_night_media_use: bool = False


class KitchenProfile(BaseModel):
    """Section 6: kitchen and dining."""
    cooking_style: CookingStyle = "casual"
    primary_cook: Literal["self", "spouse", "both", "staff", "mixed"] = "self"
    breakfast_style: Literal["quick", "casual", "formal"] = "casual"
    daily_meals_at_home: int = Field(2, ge=0, le=3)
    show_kitchen_importance: int = Field(3, ge=1, le=5)
    professional_appliances: bool = False
    multiple_ovens: bool = False
    wine_storage: bool = False
    separate_catering_kitchen: bool = False


class WellnessProfile(BaseModel):
    """Section 7: wellness and recreation."""
    interest: WellnessInterest = "basic"
    fitness_routine: Literal["none", "light", "regular", "intensive"] = "light"
    pool_desired: bool = False
    pool_type: Optional[Literal["lap", "recreational", "infinity", "indoor"]] = None
    spa_features: List[SpaFeature] = Field(default_factory=list)
    outdoor_activities: List[str] = Field(default_factory=list)
    garage_bays: int = Field(2, ge=1, le=10)
    car_collection: bool = False


class SpecialRequirements(BaseModel):
    """Section 8: special requirements."""
    accessibility: List[str] = Field(default_factory=list)
    medical_equipment: bool = False
    art_collection: bool = False
    art_climate_control: bool = False
    music_room: bool = False
    recording_studio: bool = False
    workshop: bool = False
    wine_room: bool = False
    safe_room: bool = False
    custom_spaces: List[CustomSpace] = Field(default_factory=list)


class IntakeResponse(BaseModel):
    """Complete intake questionnaire response."""
    intake_id: str = ""
    client_id: str = ""
    property_context: PropertyContext = Field(default_factory=PropertyContext)
    household: HouseholdProfile = Field(default_factory=HouseholdProfile)
    entertaining: EntertainingProfile = Field(default_factory=EntertainingProfile)
    staffing: StaffingProfile = Field(default_factory=StaffingProfile)
    privacy: PrivacyProfile = Field(default_factory=PrivacyProfile)
    kitchen: KitchenProfile = Field(default_factory=KitchenProfile)
    wellness: WellnessProfile = Field(default_factory=WellnessProfile)
    special: SpecialRequirements = Field(default_factory=SpecialRequirements)
    additional_notes: Optional[str] = None

    @field_validator("intake_id", "client_id")
    @classmethod
    def strip_ids(cls, v):
        return v.strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IntakeResponse":
        return cls.model_validate(data)


INTAKE_SECTIONS = (
    "property_context",
    "household",
    "entertaining",
    "staffing",
    "privacy",
    "kitchen",
    "wellness",
    "special",
)
