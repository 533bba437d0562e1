"""
advisor/decisions.py - Adjacency decision library

The relationship choices a client personalizes on top of the benchmark
matrix. Each decision positions one primary space; each option names the
target space, the relationship, and what the choice costs.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..errors import UnknownDecisionError, UnknownOptionError
from ..program.enums import BridgeType, Relationship

__all__ = [
    "DecisionOption",
    "AdjacencyDecision",
    "ADJACENCY_DECISIONS",
    "get_decision",
    "decisions_for_tier",
    "default_option",
    "get_option",
]

ALL_TIERS = ("5k", "10k", "15k", "20k")


@dataclass(frozen=True)
class DecisionOption:
    """One way of resolving an adjacency decision."""

    option_id: str
    label: str
    description: str
    target_space: str
    relationship: Relationship
    is_default: bool = False
    warnings: Tuple[str, ...] = ()
    sf_impact: int = 0
    bridge_required: Optional[BridgeType] = None
    trigger_conditions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.option_id,
            "label": self.label,
            "description": self.description,
            "target_space": self.target_space,
            "relationship": self.relationship.value,
            "is_default": self.is_default,
            "warnings": list(self.warnings),
            "sf_impact": self.sf_impact,
            "bridge_required": self.bridge_required.value if self.bridge_required else None,
            "trigger_conditions": list(self.trigger_conditions),
        }


@dataclass(frozen=True)
class AdjacencyDecision:
    """A relationship question with its candidate options."""

    decision_id: str
    title: str
    question: str
    context: str
    primary_space: str
    options: Tuple[DecisionOption, ...]
    priority: int
    applicable_tiers: Tuple[str, ...] = ALL_TIERS
    intake_fields: Tuple[str, ...] = ()

    def option(self, option_id: str) -> Optional[DecisionOption]:
        for opt in self.options:
            if opt.option_id == option_id:
                return opt
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.decision_id,
            "title": self.title,
            "question": self.question,
            "context": self.context,
            "primary_space": self.primary_space,
            "priority": self.priority,
            "applicable_tiers": list(self.applicable_tiers),
            "intake_fields": list(self.intake_fields),
            "options": [o.to_dict() for o in self.options],
        }


A = Relationship.ADJACENT
N = Relationship.NEAR
B = Relationship.BUFFERED
S = Relationship.SEPARATED


ADJACENCY_DECISIONS: Tuple[AdjacencyDecision, ...] = (
    AdjacencyDecision(
        decision_id="office-location",
        title="Home Office Location",
        question="Where should your home office connect?",
        context="Office placement affects both your productivity and your household's daily "
                "flow. Consider who visits and when you work.",
        primary_space="OFF",
        priority=1,
        intake_fields=("work_from_home", "client_meetings_at_home", "children_ages"),
        options=(
            DecisionOption(
                option_id="off-entry",
                label="Near Entry (Front of House)",
                description="Professional separation. Clients enter without seeing private "
                            "areas. Best for executive home offices.",
                target_space="FOY",
                relationship=A,
                is_default=True,
                trigger_conditions=("client_meetings", "work_from_home_executive",
                                    "work_from_home_primary"),
            ),
            DecisionOption(
                option_id="off-family",
                label="Near Family Room",
                description="Stay connected to household activities. Supervise children while "
                            "working. Casual work style.",
                target_space="FR",
                relationship=N,
                warnings=(
                    "Acoustic conflict: Family room noise may disrupt video calls",
                    "Privacy concern: Work visible to household members",
                ),
                trigger_conditions=("has_children", "work_from_home_occasional"),
            ),
            DecisionOption(
                option_id="off-primary",
                label="Near Primary Suite",
                description="Maximum privacy and quiet. Early morning or late night work "
                            "without disturbing household.",
                target_space="PRIHALL",
                relationship=N,
                warnings=(
                    "Circulation conflict: Clients would need to enter private zone",
                    "Separation concern: May feel isolated from family",
                ),
                trigger_conditions=("no_client_meetings", "privacy_sanctuary"),
            ),
        ),
    ),
    AdjacencyDecision(
        decision_id="kitchen-family",
        title="Kitchen & Family Room Connection",
        question="How should your kitchen relate to family living spaces?",
        context="This defines the heart of your home. Open plans maximize togetherness; "
                "separation allows focused cooking and reduces noise.",
        primary_space="KIT",
        priority=2,
        intake_fields=("cooking_style", "primary_cook", "staffing.preference",
                       "entertaining.frequency"),
        options=(
            DecisionOption(
                option_id="kit-open",
                label="Open to Family Room",
                description="Modern open plan. Cook while engaging with family. Clear "
                            "sightlines throughout.",
                target_space="FR",
                relationship=A,
                is_default=True,
                trigger_conditions=("cooking_enthusiast", "cooking_casual", "family_cooks"),
            ),
            DecisionOption(
                option_id="kit-semi",
                label="Connected but Defined",
                description="Visual connection with partial separation. Island or half-wall "
                            "defines spaces while maintaining openness.",
                target_space="FR",
                relationship=N,
                trigger_conditions=("privacy_selective", "entertains_frequently"),
            ),
            DecisionOption(
                option_id="kit-separate",
                label="Separate Kitchen",
                description="Traditional separation. Staff can work unseen. Formal "
                            "entertaining without kitchen visibility.",
                target_space="FR",
                relationship=B,
                warnings=(
                    "Lifestyle impact: May feel disconnected from family activities",
                    "Supervision concern: Cannot see children from kitchen",
                ),
                bridge_required=BridgeType.BUTLER_PANTRY,
                trigger_conditions=("staffing_full_service", "staffing_estate", "staff_cooks"),
            ),
        ),
    ),
    AdjacencyDecision(
        decision_id="media-acoustics",
        title="Media Room Placement",
        question="How should your media room relate to sleeping areas?",
        context="Late-night movie watching requires acoustic separation from bedrooms. "
                "Consider who uses the media room and when.",
        primary_space="MEDIA",
        priority=3,
        intake_fields=("late_night_media_use", "children_ages", "entertaining.frequency"),
        options=(
            DecisionOption(
                option_id="media-family-zone",
                label="Part of Family Zone",
                description="Easy access from family room. Shared use by all household "
                            "members. No late-night use expected.",
                target_space="FR",
                relationship=N,
                is_default=True,
                trigger_conditions=("no_late_night_media", "has_children"),
            ),
            DecisionOption(
                option_id="media-isolated",
                label="Acoustically Isolated",
                description="Sound lock vestibule between media and sleeping areas. Full "
                            "theater experience without disturbing others.",
                target_space="PRI",
                relationship=S,
                sf_impact=60,
                bridge_required=BridgeType.SOUND_LOCK,
                trigger_conditions=("late_night_media",),
            ),
            DecisionOption(
                option_id="media-basement",
                label="Basement Location",
                description="Natural sound isolation. Dedicated entertainment level. Premium "
                            "theater experience.",
                target_space="STAIR",
                relationship=N,
                warnings=(
                    "Accessibility: Requires stairs for every use",
                    "Integration: Separated from main living flow",
                ),
                trigger_conditions=("has_basement",),
            ),
        ),
    ),
    AdjacencyDecision(
        decision_id="guest-independence",
        title="Guest Suite Relationship",
        question="How independent should your guest suite be?",
        context="Extended family visits benefit from independence. Occasional guests may "
                "prefer connection to family life.",
        primary_space="GSL1",
        priority=4,
        intake_fields=("guest_stay_frequency", "typical_guest_stay_duration",
                       "multi_generational_hosting", "elderly_residents"),
        options=(
            DecisionOption(
                option_id="guest-independent",
                label="Fully Independent",
                description="Separate entry option. Own kitchenette. Complete autonomy for "
                            "extended stays.",
                target_space="FOY",
                relationship=S,
                sf_impact=150,
                bridge_required=BridgeType.GUEST_AUTONOMY,
                trigger_conditions=("guests_frequently", "guest_stay_extended",
                                    "guest_stay_week", "multi_generational_hosting"),
            ),
            DecisionOption(
                option_id="guest-connected",
                label="Connected to Family Areas",
                description="Part of main house flow. Shared amenities. Guests feel included "
                            "in family life.",
                target_space="FR",
                relationship=N,
                is_default=True,
                trigger_conditions=("guests_occasionally", "guests_rarely"),
            ),
            DecisionOption(
                option_id="guest-near-primary",
                label="Near Primary Suite",
                description="Close proximity for elderly parents or young guests needing "
                            "attention.",
                target_space="PRIHALL",
                relationship=N,
                warnings=(
                    "Privacy impact: Guest activity within private zone",
                    "Noise concern: Less separation from your sleeping area",
                ),
                trigger_conditions=("elderly_residents",),
            ),
        ),
    ),
    AdjacencyDecision(
        decision_id="primary-privacy",
        title="Primary Suite Privacy",
        question="How separated should your primary suite be from household activity?",
        context="Your private retreat. Balance accessibility with sanctuary.",
        primary_space="PRI",
        priority=5,
        intake_fields=("privacy.preference", "children_ages", "number_of_levels"),
        options=(
            DecisionOption(
                option_id="pri-separate-level",
                label="Separate Level",
                description="Primary suite on its own floor. Maximum privacy and acoustic "
                            "separation.",
                target_space="STAIR",
                relationship=N,
                is_default=True,
                trigger_conditions=("multi_level", "privacy_sanctuary", "privacy_formal"),
            ),
            DecisionOption(
                option_id="pri-wing",
                label="Dedicated Wing",
                description="Same level but separate wing. Good privacy with single-floor "
                            "living option.",
                target_space="FR",
                relationship=B,
                trigger_conditions=("single_level", "mobility_considerations"),
            ),
            DecisionOption(
                option_id="pri-connected",
                label="Connected to Family",
                description="Close to children's rooms. Easy nighttime access for young "
                            "families.",
                target_space="FR",
                relationship=N,
                warnings=(
                    "Privacy reduced: More household traffic near suite",
                    "Acoustic impact: Less buffer from family activities",
                ),
                trigger_conditions=("has_children", "has_young_children"),
            ),
        ),
    ),
    AdjacencyDecision(
        decision_id="dining-formality",
        title="Dining Room Relationship",
        question="How formal should your dining experience be?",
        context="Formal entertaining benefits from separation. Casual families prefer open "
                "connection.",
        primary_space="DR",
        priority=6,
        intake_fields=("formal_dining_importance", "entertaining.frequency", "typical_scale",
                       "staffing.preference"),
        options=(
            DecisionOption(
                option_id="dr-formal",
                label="Formal Separation",
                description="Dedicated dining room near entry. Impressive arrival sequence "
                            "for guests. Butler pantry service.",
                target_space="FOY",
                relationship=N,
                bridge_required=BridgeType.BUTLER_PANTRY,
                trigger_conditions=("formal_dining_important", "entertains_frequently",
                                    "grand_scale_events"),
            ),
            DecisionOption(
                option_id="dr-great-room",
                label="Part of Great Room",
                description="Open to living areas. Flexible space for various occasions. "
                            "Modern casual elegance.",
                target_space="GR",
                relationship=A,
                is_default=True,
                trigger_conditions=("casual_dining", "entertains_occasionally"),
            ),
            DecisionOption(
                option_id="dr-kitchen",
                label="Kitchen Adjacent",
                description="Direct kitchen connection. Easy serving. Chef's table experience.",
                target_space="KIT",
                relationship=A,
                warnings=(
                    "Formality reduced: Kitchen activities visible during meals",
                    "Noise: Cooking sounds during dinner",
                ),
                trigger_conditions=("cooking_professional", "cooking_serious"),
            ),
        ),
    ),
    AdjacencyDecision(
        decision_id="wellness-placement",
        title="Wellness Zone Placement",
        question="Where should your gym and spa facilities connect?",
        context="Morning workout routines benefit from primary suite proximity. Pool "
                "entertainment benefits from family room connection.",
        primary_space="GYM",
        priority=7,
        applicable_tiers=("15k", "20k"),
        intake_fields=("fitness_routine", "wellness.interest", "pool_desired", "spa_features"),
        options=(
            DecisionOption(
                option_id="wellness-primary",
                label="Near Primary Suite",
                description="Morning workout without traversing house. Direct access from "
                            "suite.",
                target_space="PRIHALL",
                relationship=N,
                warnings=("Separation: Wellness traffic in private zone",),
                trigger_conditions=("fitness_intensive", "fitness_regular"),
            ),
            DecisionOption(
                option_id="wellness-pool",
                label="Pool-Integrated Zone",
                description="Gym, spa, and pool as unified wellness destination. Resort-style "
                            "experience.",
                target_space="POOL",
                relationship=A,
                is_default=True,
                bridge_required=BridgeType.WET_FEET,
                trigger_conditions=("pool_desired", "wellness_resort", "wellness_dedicated"),
            ),
            DecisionOption(
                option_id="wellness-family",
                label="Family Zone Adjacent",
                description="Easy access for all family members. Supervision of children "
                            "during workouts.",
                target_space="FR",
                relationship=N,
                trigger_conditions=("has_children", "wellness_basic"),
            ),
        ),
    ),
    AdjacencyDecision(
        decision_id="mudroom-flow",
        title="Mudroom & Service Entry",
        question="How should your service entry connect to the house?",
        context="The mudroom handles daily chaos: groceries, packages, pets, kids. Good flow "
                "prevents bottlenecks.",
        primary_space="MUD",
        priority=8,
        intake_fields=("pets", "children_ages", "staffing.preference",
                       "package_delivery_volume"),
        options=(
            DecisionOption(
                option_id="mud-kitchen",
                label="Direct to Kitchen",
                description="Groceries straight to kitchen. Efficient daily flow. May track "
                            "through food prep area.",
                target_space="KIT",
                relationship=A,
                warnings=("Cleanliness: Outdoor elements enter near food prep",),
                trigger_conditions=("staffing_self_sufficient",),
            ),
            DecisionOption(
                option_id="mud-scullery",
                label="Through Scullery",
                description="Buffer zone between garage and kitchen. Drop packages, clean up, "
                            "then enter kitchen clean.",
                target_space="SCUL",
                relationship=A,
                is_default=True,
                trigger_conditions=("has_pets", "has_children"),
            ),
            DecisionOption(
                option_id="mud-ops",
                label="Operations Core Hub",
                description="Dedicated service zone for staff. Package staging. Deliveries "
                            "processed before entering house.",
                target_space="OPSCORE",
                relationship=A,
                sf_impact=150,
                bridge_required=BridgeType.OPS_CORE,
                trigger_conditions=("staffing_full_service", "staffing_estate",
                                    "heavy_deliveries"),
            ),
        ),
    ),
    AdjacencyDecision(
        decision_id="wine-access",
        title="Wine Storage Access",
        question="How should your wine storage be accessed?",
        context="Wine service style: formal butler presentation, casual kitchen grab, or "
                "dedicated tasting experience.",
        primary_space="WINE",
        priority=9,
        applicable_tiers=("10k", "15k", "20k"),
        intake_fields=("wine_collection", "wine_bottle_count", "formal_dining_importance",
                       "entertaining.frequency"),
        options=(
            DecisionOption(
                option_id="wine-dining",
                label="Near Dining Room",
                description="Formal wine service. Display cellar visible from dining. "
                            "Impressive presentation.",
                target_space="DR",
                relationship=A,
                is_default=True,
                trigger_conditions=("formal_dining_important", "wine_collection_large"),
            ),
            DecisionOption(
                option_id="wine-kitchen",
                label="Kitchen Adjacent",
                description="Casual access while cooking. Wine as cooking ingredient. "
                            "Everyday convenience.",
                target_space="KIT",
                relationship=N,
                warnings=("Temperature: Kitchen heat may affect wine storage",),
                trigger_conditions=("cooking_serious", "cooking_professional"),
            ),
            DecisionOption(
                option_id="wine-scullery",
                label="Service Access",
                description="Staff retrieves wine unseen. Back-of-house staging. Professional "
                            "service model.",
                target_space="SCUL",
                relationship=A,
                trigger_conditions=("staffing_full_service", "staffing_estate"),
            ),
        ),
    ),
    AdjacencyDecision(
        decision_id="secondary-clustering",
        title="Secondary Bedroom Arrangement",
        question="How should secondary bedrooms be organized?",
        context="Children benefit from clustering. Adult children or guests may prefer "
                "separation for privacy.",
        primary_space="SEC1",
        priority=10,
        intake_fields=("children_ages", "composition", "guest_stay_frequency"),
        options=(
            DecisionOption(
                option_id="sec-clustered",
                label="Clustered Together",
                description="All secondary bedrooms in one wing. Shared bathroom options. Easy "
                            "supervision.",
                target_space="SEC2",
                relationship=A,
                is_default=True,
                trigger_conditions=("multiple_children", "family_with_children"),
            ),
            DecisionOption(
                option_id="sec-distributed",
                label="Distributed for Privacy",
                description="Bedrooms separated. Each feels like private suite. Adult "
                            "children or frequent guests.",
                target_space="SEC2",
                relationship=B,
                warnings=(
                    "Supervision: Harder to monitor young children",
                    "Circulation: More hallway required",
                ),
                trigger_conditions=("multi_generational_household", "blended_family"),
            ),
            DecisionOption(
                option_id="sec-split-level",
                label="Split by Level",
                description="Some secondary rooms on different floor. Separation by "
                            "generation or use.",
                target_space="STAIR",
                relationship=N,
                trigger_conditions=("multi_level", "guests_frequently"),
            ),
        ),
    ),
)

_BY_ID: Dict[str, AdjacencyDecision] = {d.decision_id: d for d in ADJACENCY_DECISIONS}


def get_decision(decision_id: str) -> AdjacencyDecision:
    try:
        return _BY_ID[decision_id]
    except KeyError:
        raise UnknownDecisionError(decision_id) from None


def decisions_for_tier(tier: str) -> List[AdjacencyDecision]:
    """Decisions applicable to a tier, in priority order."""
    return sorted(
        (d for d in ADJACENCY_DECISIONS if tier in d.applicable_tiers),
        key=lambda d: d.priority,
    )


def default_option(decision: AdjacencyDecision) -> DecisionOption:
    for opt in decision.options:
        if opt.is_default:
            return opt
    return decision.options[0]


def get_option(decision: AdjacencyDecision, option_id: str) -> DecisionOption:
    opt = decision.option(option_id)
    if opt is None:
        raise UnknownOptionError(decision.decision_id, option_id)
    return opt
