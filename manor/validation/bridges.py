"""
MANOR Bridge Requirement Engine (v1.0)

Derives which connective "bridge" spaces the operating model demands
and whether the program includes them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from ..program.enums import (
    BridgePresence,
    BridgeType,
    EntertainingLoad,
    PrivacyPosture,
    StaffingLevel,
    Typology,
    WetProgram,
)
from ..program.schema import BridgeConfig, LifestylePriorities, OperatingModel

logger = logging.getLogger(__name__)

__all__ = [
    "RequiredBridge",
    "BridgeRule",
    "BRIDGE_RULES",
    "detect_required_bridges",
]


def _capitalize(value: str) -> str:
    text = value.replace("_", " ")
    return text[:1].upper() + text[1:]


_STAFFING_LABELS = {
    StaffingLevel.PART_TIME: "Part-time",
    StaffingLevel.FULL_TIME: "Full-time",
    StaffingLevel.LIVE_IN: "Live-in",
}


@dataclass
class RequiredBridge:
    """Bridge demanded by the operating model."""

    bridge_type: BridgeType
    name: str
    trigger: str
    description: str
    presence: BridgePresence = BridgePresence.UNKNOWN

    @property
    def is_present(self) -> bool:
        return self.presence == BridgePresence.PRESENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.bridge_type.value,
            "name": self.name,
            "trigger": self.trigger,
            "description": self.description,
            "presence": self.presence.value,
            "present": self.is_present,
        }


@dataclass(frozen=True)
class BridgeRule:
    bridge_type: BridgeType
    name: str
    description: str
    applies: Callable[[OperatingModel, LifestylePriorities], bool]
    trigger: Callable[[OperatingModel, LifestylePriorities], str]


def _butler_applies(om: OperatingModel, lp: LifestylePriorities) -> bool:
    return (om.entertaining_load in (EntertainingLoad.MONTHLY, EntertainingLoad.WEEKLY)
            and om.privacy_posture in (PrivacyPosture.BALANCED, PrivacyPosture.FORMAL))


def _guest_trigger(om: OperatingModel, lp: LifestylePriorities) -> str:
    if lp.multi_family_hosting:
        return "Multi-family hosting enabled"
    return f"{_capitalize(om.typology.value)} typology"


def _wet_trigger(om: OperatingModel, lp: LifestylePriorities) -> str:
    if om.wet_program != WetProgram.NONE:
        return f"{_capitalize(om.wet_program.value)} program"
    return "Pool entertainment enabled"


BRIDGE_RULES: Tuple[BridgeRule, ...] = (
    BridgeRule(
        bridge_type=BridgeType.BUTLER_PANTRY,
        name="Butler Pantry Bridge",
        description="Service corridor between kitchen and formal dining for seamless staff "
                    "operation.",
        applies=_butler_applies,
        trigger=lambda om, lp: (f"{_capitalize(om.entertaining_load.value)} entertaining with "
                                f"{om.privacy_posture.value} posture"),
    ),
    BridgeRule(
        bridge_type=BridgeType.GUEST_AUTONOMY,
        name="Guest Autonomy Node",
        description="Self-contained guest zone with independent entry, kitchenette, and "
                    "living area.",
        applies=lambda om, lp: (lp.multi_family_hosting
                                or om.typology in (Typology.VACATION, Typology.WINTER)),
        trigger=_guest_trigger,
    ),
    BridgeRule(
        bridge_type=BridgeType.SOUND_LOCK,
        name="Sound Lock Vestibule",
        description="Acoustic buffer zone (double-door vestibule) between media room and "
                    "bedroom wing.",
        applies=lambda om, lp: lp.late_night_media,
        trigger=lambda om, lp: "Late-night media use enabled",
    ),
    BridgeRule(
        bridge_type=BridgeType.WET_FEET,
        name="Wet-Feet Intercept",
        description="Transition zone with drainage, towel storage, and outdoor shower "
                    "between pool and main house.",
        applies=lambda om, lp: om.wet_program != WetProgram.NONE or lp.pool_entertainment,
        trigger=_wet_trigger,
    ),
    BridgeRule(
        bridge_type=BridgeType.OPS_CORE,
        name="Ops Core",
        description="Dedicated operations hub for staff including secure package receipt "
                    "and deliveries staging.",
        applies=lambda om, lp: om.staffing != StaffingLevel.NONE,
        trigger=lambda om, lp: f"{_STAFFING_LABELS.get(om.staffing, 'Staffed')} staffing",
    ),
)


def detect_required_bridges(
    operating_model: OperatingModel,
    lifestyle: LifestylePriorities,
    bridge_config: Optional[BridgeConfig] = None,
    assume_present: bool = False,
) -> List[RequiredBridge]:
    """
    List the bridges the operating model requires.

    Presence mirrors bridge_config when given. Without a config it is
    UNKNOWN, which the gate treats as missing, unless assume_present is
    set, in which case every required bridge counts as present.

    Args:
        operating_model: Household operating model
        lifestyle: Lifestyle priority flags
        bridge_config: Bridges included in the program, if known
        assume_present: Treat unknown presence as present

    Returns:
        Required bridges in fixed table order
    """
    required = []
    for rule in BRIDGE_RULES:
        if not rule.applies(operating_model, lifestyle):
            continue
        if bridge_config is not None:
            presence = (BridgePresence.PRESENT if bridge_config.includes(rule.bridge_type)
                        else BridgePresence.ABSENT)
        elif assume_present:
            presence = BridgePresence.PRESENT
        else:
            presence = BridgePresence.UNKNOWN
        required.append(RequiredBridge(
            bridge_type=rule.bridge_type,
            name=rule.name,
            trigger=rule.trigger(operating_model, lifestyle),
            description=rule.description,
            presence=presence,
        ))

    missing = [b.name for b in required if not b.is_present]
    if missing:
        logger.debug(f"Bridges not confirmed present: {', '.join(missing)}")
    return required
