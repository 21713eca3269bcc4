"""Transfer models for market analysis inputs and reports."""

from enum import Enum
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Language(str, Enum):
    """Report language switch."""

    AR = "ar"
    EN = "en"


class OpportunityType(str, Enum):
    """Classification tag of a detected market condition."""

    GREEN = "green"
    PRICE_GAP = "priceGap"
    CONTENT_QUALITY = "contentQuality"
    EMERGING = "emerging"
    NICHE = "niche"


class WireModel(BaseModel):
    """Base model: snake_case attributes, camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ============================================================================
# Inputs
# ============================================================================


class Competitor(WireModel):
    """An observed competitor listing."""

    model_config = ConfigDict(extra="ignore")

    price: Optional[float] = None
    rating: float = 0.0

    store_name: Optional[str] = None
    shipping_days: Optional[int] = None
    stock_status: Optional[str] = None
    url: Optional[str] = None

    @field_validator("rating", mode="before")
    @classmethod
    def _missing_rating_is_zero(cls, value):
        return 0.0 if value is None else value


class MarketStats(WireModel):
    """Aggregate market figures supplied alongside the competitor list."""

    model_config = ConfigDict(extra="ignore")

    average_price: Optional[float] = None
    highest_price: Optional[float] = None
    lowest_price: Optional[float] = None
    market_saturation: Optional[float] = None


def to_competitors(items: Optional[Iterable[Union[Competitor, Dict[str, Any]]]]) -> List[Competitor]:
    """Validate a competitor sequence; ``None`` becomes an empty list."""
    if not items:
        return []
    return [
        item if isinstance(item, Competitor) else Competitor.model_validate(item)
        for item in items
    ]


class MarketSignals(WireModel):
    """Everything the scoring engine needs for one category report."""

    model_config = ConfigDict(extra="ignore")

    demand_score: float
    competitor_strength: float
    profit_margin: float
    competitors: List[Competitor] = Field(default_factory=list)
    market_stats: MarketStats = Field(default_factory=MarketStats)
    intent_score: Optional[float] = None

    @field_validator("competitors", "market_stats", mode="before")
    @classmethod
    def _null_is_empty(cls, value, info):
        if value is None:
            return [] if info.field_name == "competitors" else {}
        return value


# ============================================================================
# Opportunity Classifier output
# ============================================================================


class PriceGapMetrics(WireModel):
    kind: Literal["priceGap"] = "priceGap"
    avg_competitor_price: str
    suggested_price: str
    price_gap: str
    competitor_count: int


class ContentQualityMetrics(WireModel):
    kind: Literal["contentQuality"] = "contentQuality"
    avg_rating: float
    competitor_count: int


class EmergingMetrics(WireModel):
    kind: Literal["emerging"] = "emerging"
    estimated_monthly_units: int
    market_size: str
    competitor_count: int


OpportunityMetrics = Annotated[
    Union[PriceGapMetrics, ContentQualityMetrics, EmergingMetrics],
    Field(discriminator="kind"),
]


class Opportunity(WireModel):
    """A ranked, bilingual description of how a seller could act on a market."""

    type: OpportunityType
    title: str
    title_ar: str
    description: str
    description_ar: str
    potential_score: int
    action_items: List[str] = Field(default_factory=list)
    action_items_ar: List[str] = Field(default_factory=list)
    metrics: Optional[OpportunityMetrics] = None


class OpportunityMap(WireModel):
    """Per-type counts (niche opportunities are not tallied)."""

    green_zone: int = 0
    price_gap: int = 0
    content_quality: int = 0
    emerging: int = 0


class OpportunityFinderResult(WireModel):
    opportunities: List[Opportunity]
    total_opportunities_found: int
    best_opportunity: Optional[Opportunity] = None
    opportunity_map: OpportunityMap


# ============================================================================
# Profitability Estimator output
# ============================================================================


class CostBreakdown(WireModel):
    product_cost: int
    shipping_cost: int
    platform_fee: int
    margin_percentage: int


class BreakEvenAnalysis(WireModel):
    units_sold_needed: int
    months_to_break_even: int
    estimated_capital: int


class ProfitabilityLevels(WireModel):
    """Monthly profit under three sales scenarios."""

    conservative: int
    moderate: int
    optimistic: int


class RevenueBreakdown(WireModel):
    """How the monthly revenue estimate was reached."""

    estimated_monthly_units: int
    average_price: int
    total_revenue: int
    demand_basis: str


class ProfitabilityResult(WireModel):
    average_sale_price: int
    estimated_profit_margin: int
    break_even_point: int
    profitability_score: int
    price_sensitivity: str
    estimated_monthly_revenue: str
    cost_breakdown: CostBreakdown
    break_even_analysis: BreakEvenAnalysis
    profitability_levels: ProfitabilityLevels
    revenue_breakdown: RevenueBreakdown
    profit_per_unit: int


# ============================================================================
# Growth scenarios
# ============================================================================


class ScenarioName(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    OPTIMISTIC = "optimistic"


class ScenarioCosts(WireModel):
    """Monthly cost build-up of one growth scenario."""

    product_costs: int
    shipping_costs: int
    platform_fees: int
    marketing_budget: int
    operational_expenses: int
    total_costs: int
    units_sold: int
    price_per_unit: int
    cost_per_unit: int
    profit_per_unit: int


class GrowthScenario(WireModel):
    monthly_revenue: int
    monthly_profit: int
    growth_rate: int
    timeframe: str
    assumptions: List[str]
    cost_breakdown: ScenarioCosts


class GrowthScenariosResult(WireModel):
    """Three monthly sales scenarios and the one that suits the market."""

    conservative: GrowthScenario
    moderate: GrowthScenario
    optimistic: GrowthScenario
    recommended_scenario: ScenarioName
    scalability_factors: List[str]


# ============================================================================
# Decision metrics and the assembled report
# ============================================================================


class Recommendation(str, Enum):
    GO = "GO"
    CAUTION = "CAUTION"
    NO_GO = "NO-GO"


class CheckStatus(str, Enum):
    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"


class ChecklistItem(WireModel):
    item: str
    status: CheckStatus


class DetailedAnalysis(WireModel):
    demand_factor: float
    competition_factor: float
    profit_factor: float
    risk_factors: List[str]
    confidence_level: Literal["High", "Medium", "Low"]


class DecisionMetrics(WireModel):
    """Go / no-go verdict derived from the market signals."""

    success_score: int
    risk_score: int
    beginner_friendly: bool
    estimated_capital: int
    capital_required: str
    months_to_profit: int
    time_to_profit: str
    recommendation: Recommendation
    detailed_analysis: DetailedAnalysis
    viability_checklist: List[ChecklistItem]


class MarketReport(WireModel):
    language: Language
    opportunities: OpportunityFinderResult
    profitability: ProfitabilityResult
    decision: DecisionMetrics
    growth: GrowthScenariosResult
