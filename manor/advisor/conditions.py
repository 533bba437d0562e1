"""
advisor/conditions.py - Intake trigger conditions

Named predicates over an intake response. Decision options list the
condition keys that argue for them; each key carries the sentence shown
to the client when it matches.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from ..intake.schema import IntakeResponse

__all__ = ["Condition", "CONDITIONS", "evaluate_condition"]


@dataclass(frozen=True)
class Condition:
    predicate: Callable[[IntakeResponse], bool]
    reason: str


def _children(intake: IntakeResponse) -> int:
    return len(intake.household.children_ages)


CONDITIONS: Dict[str, Condition] = {
    # Work
    "work_from_home_executive": Condition(
        lambda i: i.privacy.work_from_home == "executive",
        "You have an executive home office"),
    "work_from_home_primary": Condition(
        lambda i: i.privacy.work_from_home == "primary",
        "You work from home primarily"),
    "work_from_home_occasional": Condition(
        lambda i: i.privacy.work_from_home == "occasional",
        "You work from home occasionally"),
    "client_meetings": Condition(
        lambda i: i.privacy.client_meetings_at_home,
        "You host client meetings at home"),
    "no_client_meetings": Condition(
        lambda i: not i.privacy.client_meetings_at_home,
        "No client meetings at home"),

    # Household
    "has_children": Condition(lambda i: _children(i) > 0, "You have children"),
    "multiple_children": Condition(lambda i: _children(i) >= 2, "You have multiple children"),
    "has_young_children": Condition(
        lambda i: any(age < 12 for age in i.household.children_ages),
        "You have young children"),
    "elderly_residents": Condition(
        lambda i: i.household.elderly_residents, "You have elderly residents"),
    "mobility_considerations": Condition(
        lambda i: i.household.mobility_considerations, "Mobility considerations apply"),
    "has_pets": Condition(lambda i: len(i.household.pets) > 0, "You have pets"),
    "family_with_children": Condition(
        lambda i: i.household.composition in ("couple_young_children", "couple_teenagers",
                                              "blended_family"),
        "Family with children"),
    "multi_generational_household": Condition(
        lambda i: i.household.composition == "multi_generational",
        "Multi-generational household"),
    "blended_family": Condition(
        lambda i: i.household.composition == "blended_family", "Blended family"),

    # Privacy and guests
    "privacy_sanctuary": Condition(
        lambda i: i.privacy.preference == "sanctuary", "You prefer maximum privacy"),
    "privacy_selective": Condition(
        lambda i: i.privacy.preference == "selective", "You prefer selective privacy"),
    "privacy_formal": Condition(
        lambda i: i.privacy.preference == "formal", "You prefer formal separation"),
    "late_night_media": Condition(
        lambda i: i.privacy.late_night_media_use, "You use media late at night"),
    "no_late_night_media": Condition(
        lambda i: not i.privacy.late_night_media_use, "No late-night media use"),
    "guests_frequently": Condition(
        lambda i: i.privacy.guest_stay_frequency == "frequently",
        "You host guests frequently"),
    "guests_occasionally": Condition(
        lambda i: i.privacy.guest_stay_frequency == "occasionally",
        "You host guests occasionally"),
    "guests_rarely": Condition(
        lambda i: i.privacy.guest_stay_frequency == "rarely",
        "You rarely host overnight guests"),
    "guest_stay_extended": Condition(
        lambda i: i.privacy.typical_guest_stay_duration == "extended",
        "Guests stay for extended periods"),
    "guest_stay_week": Condition(
        lambda i: i.privacy.typical_guest_stay_duration == "week",
        "Guests typically stay a week"),
    "multi_generational_hosting": Condition(
        lambda i: i.privacy.multi_generational_hosting,
        "You host multi-generational gatherings"),

    # Kitchen
    "cooking_enthusiast": Condition(
        lambda i: i.kitchen.cooking_style == "enthusiast", "You're an enthusiast cook"),
    "cooking_casual": Condition(
        lambda i: i.kitchen.cooking_style == "casual", "You have a casual cooking style"),
    "cooking_serious": Condition(
        lambda i: i.kitchen.cooking_style == "serious", "You're a serious home cook"),
    "cooking_professional": Condition(
        lambda i: i.kitchen.cooking_style == "professional",
        "You cook at a professional level"),
    "family_cooks": Condition(
        lambda i: i.kitchen.primary_cook in ("self", "spouse", "both"),
        "Family members do the cooking"),
    "staff_cooks": Condition(
        lambda i: i.kitchen.primary_cook == "staff", "Staff handles cooking"),

    # Staffing and service
    "staffing_full_service": Condition(
        lambda i: i.staffing.preference == "full_service", "You have full-service staffing"),
    "staffing_estate": Condition(
        lambda i: i.staffing.preference == "estate", "You have estate-level staffing"),
    "staffing_self_sufficient": Condition(
        lambda i: i.staffing.preference == "self_sufficient",
        "You prefer self-sufficient living"),
    "heavy_deliveries": Condition(
        lambda i: i.staffing.package_delivery_volume == "heavy",
        "Heavy package delivery volume"),

    # Entertaining
    "formal_dining_important": Condition(
        lambda i: i.entertaining.formal_dining_importance >= 4,
        "Formal dining is important to you"),
    "casual_dining": Condition(
        lambda i: i.entertaining.formal_dining_importance <= 3, "Casual dining preference"),
    "entertains_frequently": Condition(
        lambda i: i.entertaining.frequency == "frequently", "You entertain frequently"),
    "entertains_occasionally": Condition(
        lambda i: i.entertaining.frequency == "occasionally", "You entertain occasionally"),
    "grand_scale_events": Condition(
        lambda i: i.entertaining.typical_scale == "grand", "You host grand-scale events"),
    "wine_collection_large": Condition(
        lambda i: (i.entertaining.wine_bottle_count or 0) >= 200,
        "You have a significant wine collection"),

    # Wellness
    "fitness_intensive": Condition(
        lambda i: i.wellness.fitness_routine == "intensive",
        "You have an intensive fitness routine"),
    "fitness_regular": Condition(
        lambda i: i.wellness.fitness_routine == "regular", "You exercise regularly"),
    "wellness_resort": Condition(
        lambda i: i.wellness.interest == "resort", "You want resort-level wellness"),
    "wellness_dedicated": Condition(
        lambda i: i.wellness.interest == "dedicated",
        "You want dedicated wellness facilities"),
    "wellness_basic": Condition(
        lambda i: i.wellness.interest == "basic", "You have basic wellness interest"),
    "pool_desired": Condition(lambda i: i.wellness.pool_desired, "You want a pool"),

    # Property
    "multi_level": Condition(
        lambda i: i.property_context.number_of_levels >= 2, "Multi-level home"),
    "single_level": Condition(
        lambda i: i.property_context.number_of_levels == 1, "Single-level home"),
    "has_basement": Condition(
        lambda i: i.property_context.has_basement, "Home has basement"),
}


def evaluate_condition(key: str, intake: IntakeResponse) -> Tuple[bool, str]:
    """Return (matched, reason) for a condition key."""
    condition = CONDITIONS[key]
    if condition.predicate(intake):
        return True, condition.reason
    return False, ""
