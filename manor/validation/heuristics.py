"""
validation/heuristics.py - Operating model heuristics

Warnings raised from the operating model and lifestyle flags alone,
before any plan exists.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Tuple

from ..program.enums import (
    EntertainingLoad,
    FlagClass,
    PrivacyPosture,
    Severity,
    StaffingLevel,
    Typology,
    WetProgram,
)
from ..program.schema import LifestylePriorities, OperatingModel
from .red_flags import RedFlag


@dataclass(frozen=True)
class HeuristicRule:
    rule_id: str
    predicate: Callable[[OperatingModel, LifestylePriorities], bool]
    description: str
    affected: Tuple[Tuple[str, str], ...]  # (code, name)
    corrective_action: str


HEURISTIC_RULES: Tuple[HeuristicRule, ...] = (
    HeuristicRule(
        rule_id="acoustic-001",
        predicate=lambda om, lp: (lp.late_night_media
                                  and om.privacy_posture == PrivacyPosture.PRIVATE),
        description="Late-night media use may conflict with private posture - ensure "
                    "sound isolation",
        affected=(("MEDIA", "Media Room"), ("PRI", "Primary Suite")),
        corrective_action="Add sound lock vestibule between media and sleeping zones",
    ),
    HeuristicRule(
        rule_id="service-001",
        predicate=lambda om, lp: (om.entertaining_load == EntertainingLoad.WEEKLY
                                  and om.staffing == StaffingLevel.NONE),
        description="Weekly entertaining without staff may create service bottlenecks",
        affected=(("KIT", "Kitchen"), ("DR", "Dining"), ("MUD", "Service Areas")),
        corrective_action="Consider part-time staffing or enhanced self-service design",
    ),
    HeuristicRule(
        rule_id="wellness-001",
        predicate=lambda om, lp: (om.wet_program == WetProgram.FULL_WELLNESS
                                  and om.typology == Typology.WINTER),
        description="Full wellness program in winter residence requires enhanced humidity "
                    "control",
        affected=(("SPA", "Spa"), ("POOL", "Pool Area")),
        corrective_action="Confirm MEP dehumidification strategy for cold climate operation",
    ),
    HeuristicRule(
        rule_id="privacy-001",
        predicate=lambda om, lp: (lp.multi_family_hosting
                                  and om.privacy_posture == PrivacyPosture.PRIVATE),
        description="Multi-family hosting with private posture requires careful circulation "
                    "design",
        affected=(("PRI", "Primary Suite"), ("GUEST1", "Guest Wing")),
        corrective_action="Verify guest circulation does not cross primary suite threshold",
    ),
    HeuristicRule(
        rule_id="kitchen-001",
        predicate=lambda om, lp: lp.chef_led and om.staffing == StaffingLevel.LIVE_IN,
        description="Chef-led cooking with live-in staff requires clear kitchen territory "
                    "boundaries",
        affected=(("KIT", "Show Kitchen"), ("SCUL", "Scullery")),
        corrective_action="Define primary cook zones and service support areas",
    ),
)


def detect_heuristic_flags(
    operating_model: OperatingModel,
    lifestyle: LifestylePriorities,
) -> List[RedFlag]:
    flags = []
    for rule in HEURISTIC_RULES:
        if not rule.predicate(operating_model, lifestyle):
            continue
        flags.append(RedFlag(
            flag_id=rule.rule_id,
            rule_id=rule.rule_id,
            name=rule.rule_id,
            severity=Severity.WARNING,
            flag_class=FlagClass.HEURISTIC,
            description=rule.description,
            affected_spaces=[name for _, name in rule.affected],
            affected_codes=[code for code, _ in rule.affected],
            corrective_action=rule.corrective_action,
        ))
    return flags
