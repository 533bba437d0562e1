"""
MANOR Module Scoring Engine (v1.0)

Scores the program per functional module from the operating model,
applies red flag penalties, and decides the validation gate.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence, Tuple
import logging
import math

from ..program.enums import (
    EntertainingLoad,
    GateStatus,
    PrivacyPosture,
    StaffingLevel,
    Typology,
    WetProgram,
)
from ..program.schema import LifestylePriorities, OperatingModel
from .bridges import RequiredBridge
from .red_flags import RedFlag

logger = logging.getLogger(__name__)

__all__ = [
    "ModuleDefinition",
    "ModuleRule",
    "ModuleScore",
    "ScoringPolicy",
    "MODULES",
    "MODULE_RULES",
    "SPACE_MODULE_MAP",
    "ModuleScorer",
    "modules_for_flag",
    "overall_score",
    "determine_gate",
]


@dataclass(frozen=True)
class ModuleDefinition:
    module_id: str
    name: str
    min_score: int = 0


@dataclass(frozen=True)
class ModuleRule:
    """Score adjustment applied to one module when predicate holds."""
    module_id: str
    adjustment: int
    reason: str
    predicate: Callable[[OperatingModel, LifestylePriorities], bool]


@dataclass(frozen=True)
class ScoringPolicy:
    """Numeric knobs of the scoring engine."""
    base_score: int = 75
    threshold: int = 80
    penalty_unit: int = 5
    critical_units: int = 2
    warning_units: int = 1
    penalty_floor: int = 40
    max_modules_per_flag: int = 2


@dataclass
class ModuleScore:
    """Score for one functional module."""

    module_id: str
    name: str
    score: int
    base_score: int
    threshold: int = 80
    adjustments: List[Tuple[str, int]] = field(default_factory=list)
    penalty: int = 0
    flag_ids: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.score >= self.threshold

    def to_dict(self) -> Dict[str, Any]:
        return {
            "module_id": self.module_id,
            "name": self.name,
            "score": self.score,
            "base_score": self.base_score,
            "threshold": self.threshold,
            "passed": self.passed,
            "adjustments": [{"reason": r, "points": p} for r, p in self.adjustments],
            "penalty": self.penalty,
            "flag_ids": list(self.flag_ids),
        }


# =============================================================================
# TABLES
# =============================================================================

MODULES: Tuple[ModuleDefinition, ...] = (
    ModuleDefinition("module-01", "Kitchen Rules"),
    ModuleDefinition("module-02", "Entertaining Spine"),
    ModuleDefinition("module-03", "Primary Suite"),
    ModuleDefinition("module-04", "Guest Wing"),
    ModuleDefinition("module-05", "Media & Acoustic Control", min_score=50),
    ModuleDefinition("module-06", "Service Spine"),
    ModuleDefinition("module-07", "Wellness"),
    ModuleDefinition("module-08", "Staff Layer"),
)

_ENTERTAINS = (EntertainingLoad.MONTHLY, EntertainingLoad.WEEKLY)
_SENIOR_STAFF = (StaffingLevel.FULL_TIME, StaffingLevel.LIVE_IN)

MODULE_RULES: Tuple[ModuleRule, ...] = (
    ModuleRule("module-01", 10, "Chef-led cooking", lambda om, lp: lp.chef_led),
    ModuleRule("module-01", 5, "Weekly entertaining",
               lambda om, lp: om.entertaining_load == EntertainingLoad.WEEKLY),
    ModuleRule("module-01", 5, "Staff support",
               lambda om, lp: om.staffing != StaffingLevel.NONE),

    ModuleRule("module-02", 10, "Frequent entertaining",
               lambda om, lp: om.entertaining_load in _ENTERTAINS),
    ModuleRule("module-02", 5, "Pool entertainment", lambda om, lp: lp.pool_entertainment),
    ModuleRule("module-02", 5, "Open or balanced posture",
               lambda om, lp: om.privacy_posture in (PrivacyPosture.OPEN,
                                                     PrivacyPosture.BALANCED)),

    ModuleRule("module-03", 10, "Private or formal posture",
               lambda om, lp: om.privacy_posture in (PrivacyPosture.PRIVATE,
                                                     PrivacyPosture.FORMAL)),
    ModuleRule("module-03", 5, "Staff support",
               lambda om, lp: om.staffing != StaffingLevel.NONE),

    ModuleRule("module-04", 10, "Multi-family hosting", lambda om, lp: lp.multi_family_hosting),
    ModuleRule("module-04", 5, "Second-home typology",
               lambda om, lp: om.typology in (Typology.VACATION, Typology.WINTER)),

    ModuleRule("module-05", 5, "Late-night media", lambda om, lp: lp.late_night_media),
    ModuleRule("module-05", -5, "Private posture raises isolation demand",
               lambda om, lp: om.privacy_posture == PrivacyPosture.PRIVATE),

    ModuleRule("module-06", 10, "Full-time or live-in staff",
               lambda om, lp: om.staffing in _SENIOR_STAFF),
    ModuleRule("module-06", 5, "Weekly entertaining",
               lambda om, lp: om.entertaining_load == EntertainingLoad.WEEKLY),

    ModuleRule("module-07", 15, "Full wellness program",
               lambda om, lp: om.wet_program == WetProgram.FULL_WELLNESS),
    ModuleRule("module-07", 10, "Pool and spa program",
               lambda om, lp: om.wet_program == WetProgram.POOL_SPA),
    ModuleRule("module-07", 5, "Pool program",
               lambda om, lp: om.wet_program == WetProgram.POOL_ONLY),
    ModuleRule("module-07", 5, "Fitness and recovery", lambda om, lp: lp.fitness_recovery),

    ModuleRule("module-08", 15, "Live-in staff",
               lambda om, lp: om.staffing == StaffingLevel.LIVE_IN),
    ModuleRule("module-08", 10, "Full-time staff",
               lambda om, lp: om.staffing == StaffingLevel.FULL_TIME),
    ModuleRule("module-08", 5, "Part-time staff",
               lambda om, lp: om.staffing == StaffingLevel.PART_TIME),
)

SPACE_MODULE_MAP: Dict[str, str] = {
    **{c: "module-01" for c in ("KIT", "SCUL", "BKF", "BKFST", "CHEF")},
    **{c: "module-02" for c in ("FOY", "GR", "FDR", "DR", "TERR", "WINE", "SAL", "BAR")},
    **{c: "module-03" for c in ("PRI", "PRIBATH", "PRICL", "PRILNG", "PRILOUNGE", "PRISIT")},
    **{c: "module-04" for c in ("GUEST1", "GUEST2", "GUEST3", "GUEST4", "GST1", "GST2",
                                "GSL1", "GSL1A", "GSL1B", "SEC1", "SEC2")},
    **{c: "module-05" for c in ("MEDIA", "THR", "LIB", "GAME", "MUSIC", "STUDIO")},
    **{c: "module-06" for c in ("MUD", "LAUN", "LAUN1", "LAUN2", "LND", "MEP", "GAR")},
    **{c: "module-07" for c in ("GYM", "SPA", "POOL", "POOLSUP", "WLINK")},
    **{c: "module-08" for c in ("STAFF", "STF", "STFQ", "OPSCORE")},
}


# =============================================================================
# SCORING
# =============================================================================

def modules_for_flag(flag: RedFlag, limit: int = 2) -> List[str]:
    """First distinct modules touched by a flag's affected spaces."""
    modules: List[str] = []
    for code in flag.affected_codes:
        module_id = SPACE_MODULE_MAP.get(code)
        if module_id and module_id not in modules:
            modules.append(module_id)
            if len(modules) >= limit:
                break
    return modules


def overall_score(scores: Sequence[ModuleScore]) -> int:
    """Mean of module scores, rounded half up."""
    if not scores:
        return 0
    mean = sum(s.score for s in scores) / len(scores)
    return int(math.floor(mean + 0.5))


def determine_gate(
    flags: Sequence[RedFlag],
    bridges: Sequence[RequiredBridge],
    overall: int,
    threshold: int = 80,
) -> GateStatus:
    """
    Decide the validation gate.

    FAIL on any critical flag. WARNING when a required bridge is not
    present, the overall score is under threshold, or any flag exists.
    PASS otherwise.
    """
    if any(f.is_critical for f in flags):
        return GateStatus.FAIL
    if any(not b.is_present for b in bridges):
        return GateStatus.WARNING
    if overall < threshold:
        return GateStatus.WARNING
    if flags:
        return GateStatus.WARNING
    return GateStatus.PASS


class ModuleScorer:
    """Computes the eight module scores."""

    def __init__(self, policy: ScoringPolicy = None):
        self.policy = policy or ScoringPolicy()

    def score(
        self,
        operating_model: OperatingModel,
        lifestyle: LifestylePriorities,
        flags: Sequence[RedFlag] = (),
    ) -> List[ModuleScore]:
        policy = self.policy
        penalties: Dict[str, int] = {}
        flagged: Dict[str, List[str]] = {}
        for flag in flags:
            units = policy.critical_units if flag.is_critical else policy.warning_units
            for module_id in modules_for_flag(flag, policy.max_modules_per_flag):
                penalties[module_id] = penalties.get(module_id, 0) + units * policy.penalty_unit
                flagged.setdefault(module_id, []).append(flag.flag_id)

        scores = []
        for module in MODULES:
            adjustments = [
                (rule.reason, rule.adjustment)
                for rule in MODULE_RULES
                if rule.module_id == module.module_id
                and rule.predicate(operating_model, lifestyle)
            ]
            value = policy.base_score + sum(points for _, points in adjustments)
            value = max(module.min_score, min(100, value))

            penalty = penalties.get(module.module_id, 0)
            if penalty:
                value = max(min(value, policy.penalty_floor), value - penalty)
            value = max(0, min(100, value))

            scores.append(ModuleScore(
                module_id=module.module_id,
                name=module.name,
                score=value,
                base_score=policy.base_score,
                threshold=policy.threshold,
                adjustments=adjustments,
                penalty=penalty,
                flag_ids=flagged.get(module.module_id, []),
            ))

        logger.debug("Module scores: " + ", ".join(f"{s.module_id}={s.score}" for s in scores))
        return scores
