"""
api/router.py - Advisor REST API routes v1.0

FastAPI endpoints over the advisor engines.

Endpoints:
- GET  /presets - List benchmark tiers
- GET  /presets/tier-for-area - Tier for a target area
- GET  /presets/{tier} - Benchmark program
- POST /validate - Validate a program
- POST /recommendations - Adjacency recommendations for an intake
- POST /personalization/evaluate - Aggregate consequences of choices
- POST /personalization/apply - Project choices onto a matrix
- POST /intake/map - Intake to validation context
- GET  /site/factors - Site categories, factors and deal-breakers
- POST /site/assess - Assess one site
- POST /site/compare - Rank several sites
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from ..advisor.decisions import decisions_for_tier
from ..advisor.recommender import (
    PersonalizationChoice,
    apply_decisions_to_matrix,
    choices_from_recommendations,
    derive_bridge_config_from_choices,
    evaluate_personalization,
    recommend_adjacencies,
)
from ..bootstrap.config import ManorConfig, get_config
from ..errors import ManorError
from ..intake.mapping import map_intake_to_validation
from ..intake.schema import IntakeResponse
from ..program.presets import get_preset, list_tiers, tier_for_area
from ..program.schema import AdjacencyRequirement
from ..site.engine import SiteScores, assess_site, best_per_category, compare_sites
from ..site.factors import CATEGORIES, DEAL_BREAKERS
from ..validation.engine import ValidationInput

__all__ = [
    'create_advisor_router',
    'ValidateRequest',
    'RecommendationRequest',
    'ChoiceModel',
    'PersonalizationRequest',
    'ApplyRequest',
    'SiteRequest',
    'SiteCompareRequest',
    'TierSummary',
    'TierForAreaResponse',
]

logger = logging.getLogger(__name__)


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class ValidateRequest(BaseModel):
    """Program and context to validate."""
    tier: Optional[str] = Field(None, description="Benchmark tier used when no program is given")
    program: Optional[Dict[str, Any]] = None
    operating_model: Dict[str, Any] = Field(default_factory=dict)
    lifestyle: Dict[str, Any] = Field(default_factory=dict)
    plan: Optional[Dict[str, Any]] = None
    bridge_config: Optional[Dict[str, bool]] = None


class RecommendationRequest(BaseModel):
    """Intake to recommend adjacencies for."""
    intake: IntakeResponse
    tier: Optional[str] = Field(None, description="Defaults to the intake's recommended tier")
    overrides: Dict[str, str] = Field(default_factory=dict,
                                      description="decision_id -> option_id")


class ChoiceModel(BaseModel):
    decision_id: str
    option_id: str


class PersonalizationRequest(BaseModel):
    choices: List[ChoiceModel]


class ApplyRequest(BaseModel):
    """Choices to project onto a matrix."""
    choices: List[ChoiceModel]
    tier: Optional[str] = Field("10k", description="Benchmark matrix used when none is given")
    matrix: Optional[List[Dict[str, Any]]] = None


class SiteRequest(BaseModel):
    """Factor scores for one site."""
    site_id: str = ""
    name: str = ""
    scores: Dict[str, Any] = Field(default_factory=dict)
    waived_deal_breakers: List[str] = Field(default_factory=list)

    def to_site(self) -> SiteScores:
        return SiteScores(
            site_id=self.site_id or self.name,
            name=self.name,
            scores=dict(self.scores),
            waived=tuple(self.waived_deal_breakers),
        )


class SiteCompareRequest(BaseModel):
    sites: List[SiteRequest]


class TierSummary(BaseModel):
    tier: str
    label: str
    space_count: int
    total_sf: int


class TierForAreaResponse(BaseModel):
    sf: float
    tier: str


def _http_error(error: ManorError) -> HTTPException:
    logger.info(f"Request rejected: {error}")
    return HTTPException(status_code=error.http_status, detail=error.to_dict())


def _choices(models: List[ChoiceModel]) -> List[PersonalizationChoice]:
    return [PersonalizationChoice(decision_id=c.decision_id, option_id=c.option_id)
            for c in models]


# =============================================================================
# ROUTER FACTORY
# =============================================================================

def create_advisor_router(config: Optional[ManorConfig] = None) -> APIRouter:
    """
    Create FastAPI router for the advisor endpoints.

    Args:
        config: Application configuration (defaults to get_config())

    Returns:
        FastAPI APIRouter
    """
    config = config or get_config()
    validation_engine = config.validation.create_engine()
    site_engine = config.site.create_engine()

    router = APIRouter(
        prefix="/api/v1",
        tags=["advisor"],
    )

    # =========================================================================
    # PRESETS
    # =========================================================================

    @router.get("/presets", response_model=List[TierSummary])
    async def list_presets() -> List[TierSummary]:
        """List benchmark tiers."""
        summaries = []
        for tier in list_tiers():
            preset = get_preset(tier)
            summaries.append(TierSummary(
                tier=preset.tier,
                label=preset.label,
                space_count=len(preset.spaces),
                total_sf=preset.total_sf,
            ))
        return summaries

    @router.get("/presets/tier-for-area", response_model=TierForAreaResponse)
    async def preset_tier_for_area(sf: float = Query(..., description="Target gross SF")):
        """Benchmark tier for a target area."""
        try:
            return TierForAreaResponse(sf=sf, tier=tier_for_area(sf))
        except ManorError as e:
            raise _http_error(e)

    @router.get("/presets/{tier}")
    async def get_preset_program(tier: str) -> Dict[str, Any]:
        """Benchmark program with its decisions."""
        try:
            preset = get_preset(tier)
        except ManorError as e:
            raise _http_error(e)
        data = preset.to_dict()
        data["decisions"] = [d.to_dict() for d in decisions_for_tier(tier)]
        return data

    # =========================================================================
    # VALIDATION
    # =========================================================================

    @router.post("/validate")
    async def validate(request: ValidateRequest) -> Dict[str, Any]:
        """
        Validate a program.

        Runs red flag detection (graph mode when a plan is supplied),
        bridge derivation, module scoring and the gate.
        """
        try:
            payload = request.model_dump(exclude_unset=True)
            result = validation_engine.validate(ValidationInput.from_dict(payload))
        except ManorError as e:
            raise _http_error(e)
        return result.to_dict()

    # =========================================================================
    # RECOMMENDER
    # =========================================================================

    @router.post("/recommendations")
    async def recommendations(request: RecommendationRequest) -> Dict[str, Any]:
        """Recommend adjacency options for an intake."""
        try:
            tier = request.tier or map_intake_to_validation(request.intake).recommended_tier
            get_preset(tier)
            recs = recommend_adjacencies(request.intake, tier)
            choices = choices_from_recommendations(recs, request.overrides)
            summary = evaluate_personalization(choices)
        except ManorError as e:
            raise _http_error(e)
        return {
            "tier": tier,
            "recommendations": [r.to_dict() for r in recs],
            "personalization": summary.to_dict(),
        }

    @router.post("/personalization/evaluate")
    async def evaluate(request: PersonalizationRequest) -> Dict[str, Any]:
        """SF delta, warnings, risks and bridges implied by choices."""
        try:
            return evaluate_personalization(_choices(request.choices)).to_dict()
        except ManorError as e:
            raise _http_error(e)

    @router.post("/personalization/apply")
    async def apply(request: ApplyRequest) -> Dict[str, Any]:
        """Project choices onto a matrix and derive the bridge configuration."""
        try:
            if request.matrix is not None:
                base = [AdjacencyRequirement.from_dict(r) for r in request.matrix]
            else:
                base = list(get_preset(request.tier).matrix)
            choices = _choices(request.choices)
            matrix = apply_decisions_to_matrix(base, choices)
            bridges = derive_bridge_config_from_choices(choices)
        except ManorError as e:
            raise _http_error(e)
        return {
            "matrix": [r.to_dict() for r in matrix],
            "bridge_config": bridges.to_dict(),
        }

    # =========================================================================
    # INTAKE
    # =========================================================================

    @router.post("/intake/map")
    async def map_intake(intake: IntakeResponse) -> Dict[str, Any]:
        """Operating model, lifestyle, bridges and tier derived from an intake."""
        return map_intake_to_validation(intake).to_dict()

    # =========================================================================
    # SITE ASSESSMENT
    # =========================================================================

    @router.get("/site/factors")
    async def site_factors() -> Dict[str, Any]:
        """Assessment categories, factors and deal-breakers."""
        return {
            "categories": [c.to_dict() for c in CATEGORIES],
            "deal_breakers": [d.to_dict() for d in DEAL_BREAKERS],
        }

    @router.post("/site/assess")
    async def site_assess(request: SiteRequest) -> Dict[str, Any]:
        """Assess one site."""
        try:
            return assess_site(request.to_site(), site_engine).to_dict()
        except ManorError as e:
            raise _http_error(e)

    @router.post("/site/compare")
    async def site_compare(request: SiteCompareRequest) -> Dict[str, Any]:
        """Rank sites and pick the best per category."""
        try:
            sites = [s.to_site() for s in request.sites]
            rankings = compare_sites(sites, site_engine)
            best = best_per_category(sites)
        except ManorError as e:
            raise _http_error(e)
        return {
            "rankings": [r.to_dict() for r in rankings],
            "best_per_category": {
                k: ({"site_id": v[0], "score": v[1]} if v else None) for k, v in best.items()
            },
        }

    return router
