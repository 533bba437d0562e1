"""
site/factors.py - Site assessment categories, factors and deal-breakers

Seven weighted categories of 1-5 scored factors, and the deal-breakers
that veto a site regardless of its weighted score.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

__all__ = [
    "Factor",
    "Category",
    "DealBreaker",
    "CATEGORIES",
    "DEAL_BREAKERS",
    "FACTORS",
    "get_category",
    "category_for_factor",
]


@dataclass(frozen=True)
class Factor:
    factor_id: str
    name: str
    description: str
    guide: str
    weight: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.factor_id,
            "name": self.name,
            "description": self.description,
            "guide": self.guide,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class Category:
    """Assessment category. Weight is held in whole percent."""

    category_id: str
    name: str
    weight_pct: int
    description: str
    factors: Tuple[Factor, ...]

    @property
    def weight(self) -> float:
        return self.weight_pct / 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.category_id,
            "name": self.name,
            "weight": self.weight,
            "description": self.description,
            "factors": [f.to_dict() for f in self.factors],
        }


@dataclass(frozen=True)
class DealBreaker:
    """
    Site veto.

    Triggers when every (factor_id, max_score) condition holds, i.e. each
    named factor is scored and at or below its ceiling.
    """

    db_id: str
    name: str
    category_id: str
    description: str
    conditions: Tuple[Tuple[str, float], ...]

    def triggered(self, scores: Mapping[str, Optional[float]]) -> bool:
        for factor_id, ceiling in self.conditions:
            value = scores.get(factor_id)
            if value is None or value > ceiling:
                return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.db_id,
            "name": self.name,
            "category": self.category_id,
            "description": self.description,
            "conditions": [{"factor": f, "max_score": c} for f, c in self.conditions],
        }


# =============================================================================
# CATEGORIES
# =============================================================================

CATEGORIES: Tuple[Category, ...] = (
    Category(
        category_id="physical_capacity",
        name="Physical Site Capacity",
        weight_pct=15,
        description="Evaluates whether the lot can physically accommodate the vision",
        factors=(
            Factor("1.1", "Lot dimensions & geometry", "Width-to-depth ratio and overall shape",
                   "5=Ideal proportions, 3=Workable with design adjustments, "
                   "1=Severely constrained"),
            Factor("1.2", "Buildable area vs total", "Percentage of lot that can be built upon",
                   "5=80%+ buildable, 3=60-79% buildable, 1=under 50% buildable"),
            Factor("1.3", "Topography and grade", "Slope, drainage, and level changes",
                   "5=Level/gently sloped, 3=Moderate grade requiring engineering, "
                   "1=Severe grade issues"),
            Factor("1.4", "Orientation flexibility", "Options for building placement and "
                   "orientation",
                   "5=Multiple optimal orientations, 3=One good orientation, "
                   "1=Single forced orientation"),
            Factor("1.5", "Geotechnical conditions", "Soil stability, rock, water table issues",
                   "5=Standard foundation, 3=Some engineering required, "
                   "1=Major engineering required"),
        ),
    ),
    Category(
        category_id="views_aspect",
        name="Views & Aspect",
        weight_pct=18,
        description="Assesses view quality and distribution potential",
        factors=(
            Factor("2.1", "Primary view quality & permanence", "Quality and protection of main "
                   "views",
                   "5=Premium protected views, 3=Good views with some risk, "
                   "1=No significant views"),
            Factor("2.2", "View breadth", "Percentage of principal rooms that can have views",
                   "5=80%+ of rooms, 3=50-79% of rooms, 1=under 30% of rooms"),
            Factor("2.3", "Solar orientation", "Sun exposure for key living spaces",
                   "5=Optimal for lifestyle, 3=Acceptable with design, 1=Poor orientation"),
            Factor("2.4", "Exposure to elements", "Wind, weather, and climate factors",
                   "5=Naturally protected, 3=Manageable exposure, 1=Severe exposure concerns"),
        ),
    ),
    Category(
        category_id="privacy_boundaries",
        name="Privacy & Boundaries",
        weight_pct=15,
        description="Evaluates privacy potential and boundary conditions",
        factors=(
            Factor("3.1", "Setbacks from boundaries", "Distance from property lines",
                   "5=Generous setbacks (over 50ft), 3=Standard setbacks, "
                   "1=Minimal setbacks (under 15ft)"),
            Factor("3.2", "Visual screening potential", "Natural or achievable privacy "
                   "screening",
                   "5=Natural screening exists, 3=Can be created, "
                   "1=Fully exposed, difficult to screen"),
            Factor("3.3", "Acoustic separation", "Sound isolation from neighbors/roads",
                   "5=Quiet/isolated, 3=Some noise, manageable, 1=Significant noise concerns"),
            Factor("3.4", "Elevation relative to neighbors", "Height relationship to "
                   "surrounding properties",
                   "5=Commanding position, 3=Level with neighbors, 1=Overlooked by neighbors"),
            Factor("3.5", "Entry sequence potential", "Ability to create a private arrival "
                   "experience",
                   "5=Long private drive possible, 3=Modest entry sequence, "
                   "1=Street-facing entry only"),
        ),
    ),
    Category(
        category_id="adjacencies_context",
        name="Adjacencies & Context",
        weight_pct=15,
        description="Evaluates neighborhood context and surrounding properties",
        factors=(
            Factor("4.1", "Neighboring property values", "Value alignment with target "
                   "investment",
                   "5=Comparable values, 3=Within 30% of target, 1=Value mismatch over 50%"),
            Factor("4.2", "Stylistic harmony", "Architectural compatibility with surroundings",
                   "5=Compatible context, 3=Acceptable contrast, 1=Severe stylistic clash"),
            Factor("4.3", "Commercial/institutional proximity", "Distance from non-residential "
                   "uses",
                   "5=None visible/adjacent, 3=Some commercial nearby, "
                   "1=Adjacent commercial/hotel"),
            Factor("4.4", "Road noise & traffic", "Traffic volume and noise exposure",
                   "5=Private/quiet road, 3=Moderate traffic, 1=Major thoroughfare"),
            Factor("4.5", "Future development risk", "Risk of unwanted development nearby",
                   "5=Protected/unlikely, 3=Some risk, 1=High development risk"),
        ),
    ),
    Category(
        category_id="market_alignment",
        name="Market & Demographic Alignment",
        weight_pct=15,
        description="Assesses market fit for the intended product",
        factors=(
            Factor("5.1", "Style resonance with buyers", "Market demand for intended style",
                   "5=Strong demand, 3=Moderate demand, 1=No market for this style"),
            Factor("5.2", "Price positioning", "Target price vs comparable sales",
                   "5=In-line with market, 3=10-25% premium, 1=over 50% above comps"),
            Factor("5.3", "Absorption history", "Sales velocity for similar product",
                   "5=Quick sales (under 6 mo), 3=Normal (6-18 mo), "
                   "1=No comparable sales/4+ years"),
            Factor("5.4", "Buyer demographic match", "Alignment with likely buyer profile",
                   "5=Perfect match, 3=Reasonable alignment, 1=Misaligned demographics"),
        ),
    ),
    Category(
        category_id="vision_compatibility",
        name="Vision Compatibility",
        weight_pct=12,
        description="Evaluates alignment between client vision and site constraints",
        factors=(
            Factor("6.1", "Vision manifestation potential", "Can the vision physically be "
                   "built here?",
                   "5=Fully achievable, 3=Achievable with modifications, "
                   "1=Impossible on this site"),
            Factor("6.2", "Required compromises", "Severity of needed vision adjustments",
                   "5=Minor/none, 3=Moderate compromises, 1=Vision-breaking compromises"),
            Factor("6.3", "Client flexibility index", "Client willingness to adapt",
                   "5=Highly adaptable, 3=Somewhat flexible, 1=Fixed vision"),
        ),
    ),
    Category(
        category_id="regulatory_practical",
        name="Regulatory & Practical",
        weight_pct=10,
        description="Assesses regulatory constraints and practical considerations",
        factors=(
            Factor("7.1", "Zoning & FAR constraints", "Building rights and density limits",
                   "5=Favorable for vision, 3=Workable with variance, 1=Prohibitive"),
            Factor("7.2", "Height & envelope restrictions", "Building height and massing limits",
                   "5=Accommodates vision, 3=Minor adjustments needed, "
                   "1=Blocks key elements"),
            Factor("7.3", "Historic/design review", "Review board requirements",
                   "5=None/favorable, 3=Manageable review, "
                   "1=Restrictive review likely to block"),
            Factor("7.4", "Permitting complexity", "Expected approval timeline",
                   "5=Standard process (under 12 mo), 3=Extended (12-24 mo), "
                   "1=Over 24 month risk"),
            Factor("7.5", "HOA/community covenants", "Private restrictions on design",
                   "5=None/favorable, 3=Minor restrictions, 1=Prohibits vision"),
        ),
    ),
)


# =============================================================================
# DEAL-BREAKERS
# =============================================================================

DEAL_BREAKERS: Tuple[DealBreaker, ...] = (
    DealBreaker("DB1", "Lot geometry incompatible with vision massing", "physical_capacity",
                "The lot shape fundamentally cannot accommodate the intended building form",
                (("1.1", 1),)),
    DealBreaker("DB2", "Primary views cannot be achieved for principal rooms", "views_aspect",
                "Less than 30% of principal rooms can have views",
                (("2.2", 1),)),
    DealBreaker("DB3", "Adjacent commercial/institutional creates context mismatch",
                "adjacencies_context",
                "Commercial or institutional adjacency incompatible with luxury residential",
                (("4.3", 1),)),
    DealBreaker("DB4", "Neighboring values create price ceiling below target",
                "adjacencies_context",
                "Surrounding property values cannot support target finished value",
                (("4.1", 1.5),)),
    DealBreaker("DB5", "Style vision has no absorption history in market", "market_alignment",
                "No comparable product has sold in this micro-market in recent years",
                (("5.3", 1),)),
    DealBreaker("DB6", "Fixed vision client with site requiring major compromises",
                "vision_compatibility",
                "Client will not adapt, but site requires vision-breaking changes",
                (("6.3", 2), ("6.2", 2))),
    DealBreaker("DB7", "Zoning prohibits intended use or scale", "regulatory_practical",
                "Zoning fundamentally prevents the intended development",
                (("7.1", 1),)),
    DealBreaker("DB8", "Historic/design review would block key design elements",
                "regulatory_practical",
                "Review board likely to reject core vision elements",
                (("7.3", 1),)),
    DealBreaker("DB9", "Geotechnical conditions make construction infeasible",
                "physical_capacity",
                "Soil or geological conditions prevent practical construction",
                (("1.5", 1),)),
    DealBreaker("DB10", "HOA covenants prohibit intended style or features",
                "regulatory_practical",
                "Community restrictions fundamentally block the vision",
                (("7.5", 1),)),
)

FACTORS: Dict[str, Factor] = {f.factor_id: f for c in CATEGORIES for f in c.factors}

_FACTOR_CATEGORY: Dict[str, str] = {
    f.factor_id: c.category_id for c in CATEGORIES for f in c.factors
}


def get_category(category_id: str) -> Optional[Category]:
    for category in CATEGORIES:
        if category.category_id == category_id:
            return category
    return None


def category_for_factor(factor_id: str) -> Optional[str]:
    return _FACTOR_CATEGORY.get(factor_id)
