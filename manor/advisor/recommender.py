"""
MANOR Adjacency Recommender (v1.0)

Maps intake answers onto the adjacency decision library, evaluates the
client's choices, and projects them onto a benchmark matrix.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence
import logging

from ..intake.schema import IntakeResponse
from ..program.enums import BridgeType
from ..program.schema import AdjacencyRequirement, BridgeConfig
from .conditions import evaluate_condition
from .decisions import (
    AdjacencyDecision,
    DecisionOption,
    decisions_for_tier,
    get_decision,
    get_option,
)

logger = logging.getLogger(__name__)

__all__ = [
    "Confidence",
    "OptionScore",
    "RecommendedDecision",
    "PersonalizationChoice",
    "DecisionEvaluation",
    "PersonalizationResult",
    "score_option",
    "recommend_for_decision",
    "recommend_adjacencies",
    "evaluate_decision",
    "evaluate_personalization",
    "apply_decisions_to_matrix",
    "derive_bridge_config_from_choices",
    "choices_from_recommendations",
]

BASELINE_REASON = "Default recommendation based on baseline preset."


class Confidence(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class OptionScore:
    option: DecisionOption
    score: int
    reasons: List[str] = field(default_factory=list)


@dataclass
class RecommendedDecision:
    """Recommended option for one decision."""

    decision: AdjacencyDecision
    recommended_option: DecisionOption
    confidence: Confidence
    reasoning: str
    alternative_option_ids: List[str] = field(default_factory=list)
    score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "decision_id": self.decision.decision_id,
            "title": self.decision.title,
            "recommended_option": self.recommended_option.to_dict(),
            "confidence": self.confidence.value,
            "reasoning": self.reasoning,
            "alternative_option_ids": list(self.alternative_option_ids),
            "score": self.score,
        }


@dataclass
class PersonalizationChoice:
    """Option selected by the client for a decision."""

    decision_id: str
    option_id: str
    is_default: bool = False
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "decision_id": self.decision_id,
            "option_id": self.option_id,
            "is_default": self.is_default,
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalizationChoice":
        return cls(
            decision_id=data["decision_id"],
            option_id=data["option_id"],
            is_default=bool(data.get("is_default", False)),
            warnings=list(data.get("warnings", [])),
        )


@dataclass
class DecisionEvaluation:
    warnings: List[str] = field(default_factory=list)
    risk_tags: List[str] = field(default_factory=list)
    sf_impact: int = 0
    bridges_required: List[BridgeType] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "warnings": list(self.warnings),
            "risk_tags": list(self.risk_tags),
            "sf_impact": self.sf_impact,
            "bridges_required": [b.value for b in self.bridges_required],
        }


@dataclass
class PersonalizationResult:
    """Aggregate consequences of a full set of choices."""

    choices: List[PersonalizationChoice]
    total_sf_impact: int = 0
    required_bridges: List[BridgeType] = field(default_factory=list)
    warning_count: int = 0
    red_flag_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "choices": [c.to_dict() for c in self.choices],
            "total_sf_impact": self.total_sf_impact,
            "required_bridges": [b.value for b in self.required_bridges],
            "warning_count": self.warning_count,
            "red_flag_count": self.red_flag_count,
        }


# =============================================================================
# RECOMMENDATION
# =============================================================================

def score_option(option: DecisionOption, intake: IntakeResponse) -> OptionScore:
    """
    Score how well an option fits the intake.

    Default options start at 1, every matched trigger adds 2, and an
    option carrying warnings loses 1 unless it already scores 3 or more.
    """
    score = 1 if option.is_default else 0
    reasons = []
    for key in option.trigger_conditions:
        matched, reason = evaluate_condition(key, intake)
        if matched:
            score += 2
            if reason:
                reasons.append(reason)

    if option.warnings and score < 3:
        score -= 1

    return OptionScore(option=option, score=score, reasons=reasons)


def recommend_for_decision(decision: AdjacencyDecision, intake: IntakeResponse) -> RecommendedDecision:
    scored = sorted(
        (score_option(opt, intake) for opt in decision.options),
        key=lambda s: s.score,
        reverse=True,
    )
    best = scored[0]
    runner_up = scored[1] if len(scored) > 1 else None

    if best.score >= 3:
        confidence = Confidence.HIGH
    elif best.score <= 1 or (runner_up is not None and runner_up.score >= best.score - 1):
        confidence = Confidence.LOW
    else:
        confidence = Confidence.MEDIUM

    return RecommendedDecision(
        decision=decision,
        recommended_option=best.option,
        confidence=confidence,
        reasoning=". ".join(best.reasons) or BASELINE_REASON,
        alternative_option_ids=[s.option.option_id for s in scored[1:] if s.score > 0],
        score=best.score,
    )


def recommend_adjacencies(intake: IntakeResponse, tier: str) -> List[RecommendedDecision]:
    """Recommend an option for every decision that applies to the tier."""
    recommendations = [recommend_for_decision(d, intake) for d in decisions_for_tier(tier)]
    logger.info(f"Recommended {len(recommendations)} adjacency decisions for tier {tier}")
    return recommendations


def choices_from_recommendations(
    recommendations: Iterable[RecommendedDecision],
    overrides: Optional[Dict[str, str]] = None,
) -> List[PersonalizationChoice]:
    """
    Turn recommendations into choices.

    Args:
        recommendations: Output of recommend_adjacencies
        overrides: decision_id -> option_id picked by the client; these win

    Returns:
        One choice per recommendation, in the same order
    """
    overrides = overrides or {}
    choices = []
    for rec in recommendations:
        option = rec.recommended_option
        override = overrides.get(rec.decision.decision_id)
        if override is not None:
            option = get_option(rec.decision, override)
        choices.append(PersonalizationChoice(
            decision_id=rec.decision.decision_id,
            option_id=option.option_id,
            is_default=option.is_default,
            warnings=list(option.warnings),
        ))
    return choices


# =============================================================================
# EVALUATION
# =============================================================================

_RISK_TAGS = (
    ("acoustic conflict", "Potential acoustic issues"),
    ("circulation conflict", "Circulation path concerns"),
)


def evaluate_decision(decision: AdjacencyDecision, option_id: str) -> DecisionEvaluation:
    option = get_option(decision, option_id)
    lowered = [w.lower() for w in option.warnings]
    return DecisionEvaluation(
        warnings=list(option.warnings),
        risk_tags=[tag for needle, tag in _RISK_TAGS if any(needle in w for w in lowered)],
        sf_impact=option.sf_impact,
        bridges_required=[option.bridge_required] if option.bridge_required else [],
    )


def evaluate_personalization(choices: Sequence[PersonalizationChoice]) -> PersonalizationResult:
    """Aggregate SF delta, warning and risk counts, and required bridges."""
    result = PersonalizationResult(choices=[])
    for choice in choices:
        decision = get_decision(choice.decision_id)
        evaluation = evaluate_decision(decision, choice.option_id)

        result.total_sf_impact += evaluation.sf_impact
        result.warning_count += len(evaluation.warnings)
        result.red_flag_count += len(evaluation.risk_tags)
        for bridge in evaluation.bridges_required:
            if bridge not in result.required_bridges:
                result.required_bridges.append(bridge)

        result.choices.append(replace(
            choice,
            is_default=decision.option(choice.option_id).is_default,
            warnings=evaluation.warnings,
        ))

    logger.debug(f"Personalization: {len(result.choices)} choices, "
                 f"{result.total_sf_impact:+d} SF, {result.warning_count} warnings")
    return result


# =============================================================================
# MATRIX PROJECTION
# =============================================================================

def _upsert(matrix: List[AdjacencyRequirement], entry: AdjacencyRequirement) -> None:
    for index, existing in enumerate(matrix):
        if existing.from_code == entry.from_code and existing.to_code == entry.to_code:
            matrix[index] = entry
            return
    matrix.append(entry)


def apply_decisions_to_matrix(
    base_matrix: Iterable[AdjacencyRequirement],
    choices: Sequence[PersonalizationChoice],
) -> List[AdjacencyRequirement]:
    """
    Project choices onto a matrix.

    Returns a new list. For each choice the forward and reverse entries
    between the decision's primary space and the option's target space
    take the option's relationship; missing entries are appended.
    Reapplying the same choices to the output changes nothing.
    """
    matrix = list(base_matrix)
    for choice in choices:
        decision = get_decision(choice.decision_id)
        option = get_option(decision, choice.option_id)
        primary, target = decision.primary_space, option.target_space
        _upsert(matrix, AdjacencyRequirement(primary, target, option.relationship))
        _upsert(matrix, AdjacencyRequirement(target, primary, option.relationship))
    return matrix


def derive_bridge_config_from_choices(
    choices: Sequence[PersonalizationChoice],
    base: Optional[BridgeConfig] = None,
) -> BridgeConfig:
    """Bridge configuration with every bridge a chosen option requires switched on."""
    config = replace(base) if base is not None else BridgeConfig()
    for choice in choices:
        option = get_option(get_decision(choice.decision_id), choice.option_id)
        if option.bridge_required is not None:
            setattr(config, option.bridge_required.value, True)
    return config
