"""Scoring engine for market opportunity and profitability analysis"""

from .decision import DecisionScorer, calculate_decision_metrics
from .errors import DegenerateInputError
from .growth import GrowthScenarioScorer, calculate_growth_scenarios
from .models import (
    Competitor,
    GrowthScenariosResult,
    Language,
    MarketReport,
    MarketSignals,
    MarketStats,
    Opportunity,
    OpportunityFinderResult,
    OpportunityType,
    ProfitabilityResult,
)
from .opportunity import OpportunityFinder, find_opportunities
from .profitability import ProfitabilityCalculator, calculate_profitability
from .report import MarketReportBuilder, build_market_report

__all__ = [
    "OpportunityFinder",
    "ProfitabilityCalculator",
    "DecisionScorer",
    "GrowthScenarioScorer",
    "MarketReportBuilder",
    "find_opportunities",
    "calculate_profitability",
    "calculate_decision_metrics",
    "calculate_growth_scenarios",
    "build_market_report",
    "DegenerateInputError",
    "Competitor",
    "Language",
    "GrowthScenariosResult",
    "MarketReport",
    "MarketSignals",
    "MarketStats",
    "Opportunity",
    "OpportunityFinderResult",
    "OpportunityType",
    "ProfitabilityResult",
]
