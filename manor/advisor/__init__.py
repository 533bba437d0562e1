"""
MANOR Advisor Module

Adjacency decision library and the intake-driven recommender.
"""

from .decisions import (
    DecisionOption,
    AdjacencyDecision,
    ADJACENCY_DECISIONS,
    get_decision,
    decisions_for_tier,
    default_option,
    get_option,
)

from .conditions import (
    Condition,
    CONDITIONS,
    evaluate_condition,
)

from .recommender import (
    Confidence,
    OptionScore,
    RecommendedDecision,
    PersonalizationChoice,
    DecisionEvaluation,
    PersonalizationResult,
    score_option,
    recommend_for_decision,
    recommend_adjacencies,
    evaluate_decision,
    evaluate_personalization,
    apply_decisions_to_matrix,
    derive_bridge_config_from_choices,
    choices_from_recommendations,
)

__all__ = [
    "DecisionOption",
    "AdjacencyDecision",
    "ADJACENCY_DECISIONS",
    "get_decision",
    "decisions_for_tier",
    "default_option",
    "get_option",
    "Condition",
    "CONDITIONS",
    "evaluate_condition",
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
