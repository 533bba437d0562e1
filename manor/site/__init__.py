"""
MANOR Site Module

Site acquisition assessment: weighted categories, deal-breakers and
traffic-light verdicts, plus multi-site comparison.
"""

from .factors import (
    Factor,
    Category,
    DealBreaker,
    CATEGORIES,
    DEAL_BREAKERS,
    FACTORS,
    get_category,
    category_for_factor,
)

from .engine import (
    TrafficLight,
    SitePolicy,
    SiteScores,
    Assessment,
    SiteRanking,
    SiteAssessmentEngine,
    classify,
    normalize_scores,
    category_score,
    completion_percentage,
    assess_site,
    compare_sites,
    best_per_category,
)

__all__ = [
    "Factor",
    "Category",
    "DealBreaker",
    "CATEGORIES",
    "DEAL_BREAKERS",
    "FACTORS",
    "get_category",
    "category_for_factor",
    "TrafficLight",
    "SitePolicy",
    "SiteScores",
    "Assessment",
    "SiteRanking",
    "SiteAssessmentEngine",
    "classify",
    "normalize_scores",
    "category_score",
    "completion_percentage",
    "assess_site",
    "compare_sites",
    "best_per_category",
]
