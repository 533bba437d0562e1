"""
tests/unit/test_site.py - Site assessment engine tests
"""

import pytest

from manor.errors import InvalidFactorScoreError
from manor.site.engine import (
    SiteAssessmentEngine,
    SitePolicy,
    SiteScores,
    TrafficLight,
    assess_site,
    best_per_category,
    category_score,
    classify,
    compare_sites,
    completion_percentage,
    normalize_scores,
)
from manor.site.factors import (
    CATEGORIES,
    DEAL_BREAKERS,
    FACTORS,
    category_for_factor,
    get_category,
)


def _category_scores(value, **by_category):
    """Score every factor with value, overriding whole categories by id."""
    scores = {}
    for category in CATEGORIES:
        for factor in category.factors:
            scores[factor.factor_id] = by_category.get(category.category_id, value)
    return scores


# =============================================================================
# FACTOR TABLES
# =============================================================================

class TestFactorTables:

    def test_weights_sum_to_hundred(self):
        assert sum(c.weight_pct for c in CATEGORIES) == 100

    def test_seven_categories(self):
        assert len(CATEGORIES) == 7
        assert get_category("views_aspect").weight == pytest.approx(0.18)
        assert get_category("nope") is None

    def test_factor_lookup(self):
        assert len(FACTORS) == 31
        assert category_for_factor("6.3") == "vision_compatibility"
        assert category_for_factor("9.9") is None

    def test_deal_breakers_reference_factors(self):
        for db in DEAL_BREAKERS:
            assert all(f in FACTORS for f, _ in db.conditions), db.db_id
            assert get_category(db.category_id) is not None


# =============================================================================
# SCORING HELPERS
# =============================================================================

class TestScoringHelpers:

    @pytest.mark.parametrize("score,light", [
        (5, TrafficLight.GREEN),
        (4.0, TrafficLight.GREEN),
        (3.99, TrafficLight.AMBER),
        (2.5, TrafficLight.AMBER),
        (2.499999, TrafficLight.RED),
        (None, None),
    ])
    def test_classify(self, score, light):
        assert classify(score) == light

    def test_normalize_accepts_entries(self):
        scores = normalize_scores({"1.1": {"score": 4, "notes": "wide lot"}, "1.2": None, "1.3": 3})
        assert scores == {"1.1": 4.0, "1.2": None, "1.3": 3.0}

    @pytest.mark.parametrize("raw", [{"1.1": 7}, {"1.1": 0.5}, {"1.1": "4"}, {"1.1": True},
                                     {"8.1": 3}])
    def test_normalize_rejects(self, raw):
        with pytest.raises(InvalidFactorScoreError) as exc:
            normalize_scores(raw)
        assert exc.value.code == "MANOR_201"
        assert exc.value.http_status == 400

    def test_category_score_ignores_unscored(self):
        category = get_category("views_aspect")
        assert category_score(category, {"2.1": 4.0, "2.2": 2.0}) == pytest.approx(3.0)
        assert category_score(category, {}) is None

    def test_completion(self, site_scores):
        assert completion_percentage({}) == 0
        assert completion_percentage(normalize_scores(site_scores(3))) == 100


# =============================================================================
# VERDICT
# =============================================================================

class TestVerdict:
    """Deal-breakers, category overrides and bands."""

    def test_nothing_scored(self):
        result = SiteAssessmentEngine().assess({})
        assert result.verdict is None
        assert result.overall_score is None
        assert result.recommendation == "No factors scored yet."

    def test_boundary_is_amber(self, site_scores):
        result = SiteAssessmentEngine().assess(site_scores(2.5))
        assert result.overall_score == 2.5
        assert result.verdict == TrafficLight.AMBER

    def test_just_below_boundary_is_red(self, site_scores):
        assert SiteAssessmentEngine().assess(site_scores(2.499999)).verdict == TrafficLight.RED

    def test_green(self, site_scores):
        result = SiteAssessmentEngine().assess(site_scores(4.5))
        assert result.verdict == TrafficLight.GREEN
        assert result.recommendation.startswith("Proceed with acquisition")

    def test_deal_breaker_forces_red(self, site_scores):
        result = SiteAssessmentEngine().assess(site_scores(5, f2_2=1))
        assert result.verdict == TrafficLight.RED
        assert [db.db_id for db in result.triggered_deal_breakers] == ["DB2"]
        assert "1 deal-breaker(s) identified" in result.recommendation
        assert "Primary views cannot be achieved" in result.recommendation
        assert result.overall_score > 4

    def test_compound_deal_breaker(self, site_scores):
        engine = SiteAssessmentEngine()
        assert engine.assess(site_scores(5, f6_2=2, f6_3=2)).triggered_deal_breakers[0].db_id == "DB6"
        assert engine.assess(site_scores(5, f6_2=2, f6_3=3)).triggered_deal_breakers == []

    def test_unscored_factor_never_triggers(self, site_scores):
        scores = site_scores(5)
        del scores["2.2"]
        assert SiteAssessmentEngine().assess(scores).triggered_deal_breakers == []

    def test_waived_deal_breaker(self, site_scores):
        result = SiteAssessmentEngine().assess(site_scores(5, f2_2=1), waived=["DB2"])
        assert result.triggered_deal_breakers == []
        assert [db.db_id for db in result.waived_deal_breakers] == ["DB2"]
        assert result.verdict == TrafficLight.GREEN

    def test_two_red_categories(self):
        scores = _category_scores(3.6, regulatory_practical=2.0, market_alignment=2.0)
        result = SiteAssessmentEngine().assess(scores)
        assert result.overall_score == pytest.approx(3.2)
        assert result.verdict == TrafficLight.RED
        assert result.recommendation.startswith("Do not acquire")

    def test_three_amber_categories_cap_green(self):
        scores = _category_scores(5, physical_capacity=3.0, views_aspect=3.0,
                                  privacy_boundaries=3.0)
        result = SiteAssessmentEngine().assess(scores)
        assert result.overall_score == pytest.approx(4.04)
        assert result.verdict == TrafficLight.AMBER

    def test_policy_override(self, site_scores):
        engine = SiteAssessmentEngine(SitePolicy(green_threshold=4.6))
        assert engine.assess(site_scores(4.5)).verdict == TrafficLight.AMBER

    def test_partial_scores_reweight(self):
        result = SiteAssessmentEngine().assess({"2.1": 5, "2.2": 4})
        assert result.overall_score == pytest.approx(4.5)
        assert result.category_scores["physical_capacity"] is None
        assert result.completion_pct == 6

    def test_to_dict(self, site_scores):
        data = SiteAssessmentEngine().assess(site_scores(3.33), site_id="lot-7").to_dict()
        assert data["site_id"] == "lot-7"
        assert data["verdict"] == "amber"
        assert data["display_score"] == 3.3
        assert set(data["category_lights"]) == {c.category_id for c in CATEGORIES}


# =============================================================================
# COMPARISON
# =============================================================================

class TestComparison:

    @pytest.fixture
    def sites(self, site_scores):
        return [
            SiteScores("hill", site_scores(4.0), name="Hilltop"),
            SiteScores("shore", site_scores(4.8, f2_2=1), name="Shoreline"),
            SiteScores("glen", site_scores(3.0), name="Glen"),
        ]

    def test_from_dict(self):
        site = SiteScores.from_dict({"id": "a", "name": "Acre", "scores": {"1.1": 3},
                                     "waived_deal_breakers": ["DB1"]})
        assert site.site_id == "a"
        assert site.waived == ("DB1",)

    def test_assess_site_applies_waivers(self, site_scores):
        site = SiteScores("shore", site_scores(4.8, f2_2=1), waived=("DB2",))
        assert assess_site(site).verdict == TrafficLight.GREEN

    def test_deal_breakers_rank_last(self, sites):
        ranking = compare_sites(sites)
        assert [r.site.site_id for r in ranking] == ["hill", "glen", "shore"]
        assert [r.rank for r in ranking] == [1, 2, 3]
        assert ranking[0].to_dict()["name"] == "Hilltop"

    def test_best_per_category(self, sites):
        best = best_per_category(sites)
        assert best["physical_capacity"] == ("shore", pytest.approx(4.8))
        assert best["views_aspect"][0] == "hill"

    def test_best_per_category_unscored(self):
        best = best_per_category([SiteScores("empty", {})])
        assert all(v is None for v in best.values())
