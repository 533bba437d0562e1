"""
MANOR Red Flag Schema (v1.0)

Red flag records and the declarative table of path-tracing rules.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from ..program.enums import FlagClass, Severity

__all__ = [
    "CheckKind",
    "RedFlag",
    "RedFlagRule",
    "RuleHit",
    "RED_FLAG_RULES",
    "get_rule",
]


class CheckKind(Enum):
    """Condition a red flag rule tests for."""
    GUEST_PRIMARY = "guest_primary"
    SERVICE_FOH = "service_foh"
    ACOUSTIC_BLEED = "acoustic_bleed"
    SHOW_KITCHEN = "show_kitchen"
    GUEST_KITCHEN = "guest_kitchen"
    KITCHEN_ENTRY = "kitchen_entry"
    ACOUSTIC_LIVING = "acoustic_living"


@dataclass(frozen=True)
class RedFlagRule:
    """Declarative red flag rule."""

    rule_id: str
    name: str
    severity: Severity
    check: CheckKind
    corrective_action: str
    parent_rule: str = ""  # Set on rules derived from another named rule


@dataclass
class RuleHit:
    """Strategy output for one triggered rule."""

    description: str
    affected: List[Tuple[str, str]] = field(default_factory=list)  # (code, name)


@dataclass
class RedFlag:
    """Finding raised against a program or plan."""

    flag_id: str
    rule_id: str
    name: str
    severity: Severity
    flag_class: FlagClass
    description: str
    affected_spaces: List[str] = field(default_factory=list)
    affected_codes: List[str] = field(default_factory=list)
    corrective_action: str = ""

    @property
    def is_critical(self) -> bool:
        return self.severity == Severity.CRITICAL

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.flag_id,
            "rule_id": self.rule_id,
            "name": self.name,
            "severity": self.severity.value,
            "class": self.flag_class.value,
            "description": self.description,
            "affected_spaces": list(self.affected_spaces),
            "affected_codes": list(self.affected_codes),
            "corrective_action": self.corrective_action,
        }

    @classmethod
    def from_rule(cls, rule: RedFlagRule, hit: RuleHit) -> "RedFlag":
        seen = set()
        affected = []
        for code, name in sorted(hit.affected):
            if code not in seen:
                seen.add(code)
                affected.append((code, name))
        return cls(
            flag_id=rule.rule_id,
            rule_id=rule.rule_id,
            name=rule.name,
            severity=rule.severity,
            flag_class=FlagClass.RULE,
            description=hit.description,
            affected_spaces=[name for _, name in affected],
            affected_codes=[code for code, _ in affected],
            corrective_action=rule.corrective_action,
        )


# =============================================================================
# RULE TABLE
# =============================================================================

RED_FLAG_RULES: Tuple[RedFlagRule, ...] = (
    RedFlagRule(
        rule_id="RF-01",
        name="Guest circulation reaches primary suite",
        severity=Severity.CRITICAL,
        check=CheckKind.GUEST_PRIMARY,
        corrective_action="Reroute guest circulation so it never crosses or opens onto the "
                          "primary suite; add a vestibule or gallery buffer at the threshold.",
    ),
    RedFlagRule(
        rule_id="RF-02",
        name="Service route through front-of-house",
        severity=Severity.CRITICAL,
        check=CheckKind.SERVICE_FOH,
        corrective_action="Provide a dedicated service entry and corridor so deliveries and "
                          "refuse bypass formal rooms.",
    ),
    RedFlagRule(
        rule_id="RF-03",
        name="High-noise space shares assembly with bedroom",
        severity=Severity.WARNING,
        check=CheckKind.ACOUSTIC_BLEED,
        corrective_action="Separate high-noise rooms from sleeping rooms with a buffer space "
                          "or a sound lock vestibule and rated assemblies.",
    ),
    RedFlagRule(
        rule_id="RF-04",
        name="No principal-level show kitchen",
        severity=Severity.CRITICAL,
        check=CheckKind.SHOW_KITCHEN,
        corrective_action="Add a show kitchen to Level 1 with island, tall glazing, and "
                          "direct connection to the family room.",
    ),
    RedFlagRule(
        rule_id="RF-05",
        name="Guest route crosses kitchen work aisle",
        severity=Severity.CRITICAL,
        check=CheckKind.GUEST_KITCHEN,
        corrective_action="Route guests to dining and terrace around the kitchen work zone; "
                          "keep the work aisle off any guest path.",
    ),
    RedFlagRule(
        rule_id="RF-04A",
        name="Kitchen exposed at entry",
        severity=Severity.WARNING,
        check=CheckKind.KITCHEN_ENTRY,
        corrective_action="Screen the kitchen from the foyer with a gallery, pantry wall, "
                          "or doored transition.",
        parent_rule="RF-04",
    ),
    RedFlagRule(
        rule_id="RF-03A",
        name="High-noise space adjoins living space",
        severity=Severity.WARNING,
        check=CheckKind.ACOUSTIC_LIVING,
        corrective_action="Add acoustic separation between high-noise rooms and "
                          "conversation-zone rooms.",
        parent_rule="RF-03",
    ),
)


def get_rule(rule_id: str) -> RedFlagRule:
    for rule in RED_FLAG_RULES:
        if rule.rule_id == rule_id:
            return rule
    raise KeyError(rule_id)
