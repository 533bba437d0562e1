"""
MANOR Site Assessment Engine (v1.0)

Scores a candidate site against the validated program: category means,
weighted overall score, deal-breakers and the traffic-light verdict.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from numbers import Real
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import logging

from ..errors import InvalidFactorScoreError
from .factors import CATEGORIES, DEAL_BREAKERS, FACTORS, Category, DealBreaker

logger = logging.getLogger(__name__)

__all__ = [
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


class TrafficLight(Enum):
    GREEN = "green"
    AMBER = "amber"
    RED = "red"


@dataclass(frozen=True)
class SitePolicy:
    """Band thresholds and category override counts."""
    green_threshold: float = 4.0
    amber_threshold: float = 2.5
    red_category_override: int = 2
    amber_category_override: int = 3


DEFAULT_POLICY = SitePolicy()


def classify(score: Optional[float], policy: SitePolicy = DEFAULT_POLICY) -> Optional[TrafficLight]:
    """Traffic-light band for a 0-5 score. None stays None."""
    if score is None:
        return None
    if score >= policy.green_threshold:
        return TrafficLight.GREEN
    if score >= policy.amber_threshold:
        return TrafficLight.AMBER
    return TrafficLight.RED


def normalize_scores(raw: Mapping[str, Any]) -> Dict[str, Optional[float]]:
    """
    Validate factor scores.

    Accepts plain numbers or {"score": n, "notes": ...} entries. Missing
    or None scores count as unscored.

    Raises:
        InvalidFactorScoreError: Unknown factor id, non-numeric score, or
            a score outside 1-5
    """
    scores: Dict[str, Optional[float]] = {}
    for factor_id, value in raw.items():
        if factor_id not in FACTORS:
            raise InvalidFactorScoreError(factor_id, value, reason="unknown factor")
        if isinstance(value, Mapping):
            value = value.get("score")
        if value is None:
            scores[factor_id] = None
            continue
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidFactorScoreError(factor_id, value, reason="score must be a number")
        if not 1 <= value <= 5:
            raise InvalidFactorScoreError(factor_id, value, reason=f"{value} is outside 1-5")
        scores[factor_id] = float(value)
    return scores


def category_score(category: Category, scores: Mapping[str, Optional[float]]) -> Optional[float]:
    """Weighted mean of the category's scored factors, or None if none are scored."""
    total = 0.0
    weight = 0.0
    for factor in category.factors:
        value = scores.get(factor.factor_id)
        if value is not None:
            total += factor.weight * value
            weight += factor.weight
    if weight == 0:
        return None
    return total / weight


def completion_percentage(scores: Mapping[str, Optional[float]]) -> int:
    scored = sum(1 for f in FACTORS if scores.get(f) is not None)
    return int(round(scored / len(FACTORS) * 100))


@dataclass
class SiteScores:
    """Factor scores for one candidate site."""

    site_id: str
    scores: Dict[str, Any] = field(default_factory=dict)
    name: str = ""
    waived: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SiteScores":
        return cls(
            site_id=data.get("id") or data.get("site_id") or data.get("name", ""),
            name=data.get("name", ""),
            scores=dict(data.get("scores", {})),
            waived=tuple(data.get("waived_deal_breakers", data.get("waived", ()))),
        )


@dataclass
class Assessment:
    """Site assessment result."""

    category_scores: Dict[str, Optional[float]]
    category_lights: Dict[str, Optional[TrafficLight]]
    overall_score: Optional[float]
    verdict: Optional[TrafficLight]
    recommendation: str
    triggered_deal_breakers: List[DealBreaker] = field(default_factory=list)
    waived_deal_breakers: List[DealBreaker] = field(default_factory=list)
    completion_pct: int = 0
    site_id: str = ""
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def display_score(self) -> Optional[float]:
        if self.overall_score is None:
            return None
        return round(self.overall_score, 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "site_id": self.site_id,
            "timestamp": self.timestamp,
            "overall_score": self.overall_score,
            "display_score": self.display_score,
            "verdict": self.verdict.value if self.verdict else None,
            "recommendation": self.recommendation,
            "category_scores": dict(self.category_scores),
            "category_lights": {
                k: v.value if v else None for k, v in self.category_lights.items()
            },
            "triggered_deal_breakers": [d.to_dict() for d in self.triggered_deal_breakers],
            "waived_deal_breakers": [d.to_dict() for d in self.waived_deal_breakers],
            "completion_pct": self.completion_pct,
        }


@dataclass
class SiteRanking:
    rank: int
    site: SiteScores
    assessment: Assessment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "site_id": self.site.site_id,
            "name": self.site.name,
            "assessment": self.assessment.to_dict(),
        }


# =============================================================================
# ENGINE
# =============================================================================

_GREEN_TEXT = "Proceed with acquisition. Site can accommodate the validated program."
_AMBER_TEXT = ("Proceed only with documented mitigation strategy addressing identified "
               "concerns.")
_RED_TEXT = ("Do not acquire this site for this program. Fundamental misalignment across "
             "multiple categories.")
_EMPTY_TEXT = "No factors scored yet."


class SiteAssessmentEngine:
    """
    Site assessment scoring engine.

    Verdict precedence: any deal-breaker that is not waived gives RED;
    else enough RED categories give RED; else enough AMBER categories
    cap the verdict at AMBER; else the overall score band decides.
    """

    def __init__(self, policy: Optional[SitePolicy] = None):
        self.policy = policy or SitePolicy()

    def assess(
        self,
        raw_scores: Mapping[str, Any],
        waived: Iterable[str] = (),
        site_id: str = "",
    ) -> Assessment:
        scores = normalize_scores(raw_scores)
        waived = set(waived)
        policy = self.policy

        category_scores = {c.category_id: category_score(c, scores) for c in CATEGORIES}
        category_lights = {k: classify(v, policy) for k, v in category_scores.items()}

        weighted = 0.0
        total_pct = 0
        for category in CATEGORIES:
            value = category_scores[category.category_id]
            if value is not None:
                weighted += category.weight_pct * value
                total_pct += category.weight_pct
        overall = weighted / total_pct if total_pct else None

        triggered = []
        waived_hits = []
        for db in DEAL_BREAKERS:
            if db.triggered(scores):
                (waived_hits if db.db_id in waived else triggered).append(db)

        lights = [light for light in category_lights.values() if light is not None]
        red_count = lights.count(TrafficLight.RED)
        amber_count = lights.count(TrafficLight.AMBER)

        verdict = classify(overall, policy)
        if triggered:
            verdict = TrafficLight.RED
        elif red_count >= policy.red_category_override:
            verdict = TrafficLight.RED
        elif amber_count >= policy.amber_category_override and verdict == TrafficLight.GREEN:
            verdict = TrafficLight.AMBER

        assessment = Assessment(
            category_scores=category_scores,
            category_lights=category_lights,
            overall_score=overall,
            verdict=verdict,
            recommendation=self._recommendation(verdict, triggered),
            triggered_deal_breakers=triggered,
            waived_deal_breakers=waived_hits,
            completion_pct=completion_percentage(scores),
            site_id=site_id,
        )
        logger.info(f"Site {site_id or '<unnamed>'}: verdict="
                    f"{verdict.value if verdict else 'none'}, overall={assessment.display_score}, "
                    f"deal-breakers={len(triggered)}")
        return assessment

    @staticmethod
    def _recommendation(verdict: Optional[TrafficLight], triggered: Sequence[DealBreaker]) -> str:
        if verdict is None:
            return _EMPTY_TEXT
        if verdict == TrafficLight.GREEN:
            return _GREEN_TEXT
        if verdict == TrafficLight.AMBER:
            return _AMBER_TEXT
        if triggered:
            names = "; ".join(db.name for db in triggered)
            return (f"Do not acquire this site for this program. {len(triggered)} "
                    f"deal-breaker(s) identified: {names}.")
        return _RED_TEXT


def assess_site(
    site: SiteScores,
    engine: Optional[SiteAssessmentEngine] = None,
) -> Assessment:
    engine = engine or SiteAssessmentEngine()
    return engine.assess(site.scores, waived=site.waived, site_id=site.site_id)


def compare_sites(
    sites: Sequence[SiteScores],
    engine: Optional[SiteAssessmentEngine] = None,
) -> List[SiteRanking]:
    """Rank sites: fewest deal-breakers first, then highest overall score."""
    engine = engine or SiteAssessmentEngine()
    assessed = [(site, assess_site(site, engine)) for site in sites]
    assessed.sort(key=lambda pair: (len(pair[1].triggered_deal_breakers),
                                    -(pair[1].overall_score or 0)))
    return [SiteRanking(rank=i + 1, site=s, assessment=a) for i, (s, a) in enumerate(assessed)]


def best_per_category(sites: Sequence[SiteScores]) -> Dict[str, Optional[Tuple[str, float]]]:
    """Highest-scoring site per category as (site_id, score). First site wins ties."""
    best: Dict[str, Optional[Tuple[str, float]]] = {}
    normalized = [(site, normalize_scores(site.scores)) for site in sites]
    for category in CATEGORIES:
        winner = None
        for site, scores in normalized:
            value = category_score(category, scores)
            if value is not None and (winner is None or value > winner[1]):
                winner = (site.site_id, value)
        best[category.category_id] = winner
    return best
