"""Report assembly: runs every scorer over one set of market signals."""

from typing import Any, Dict, Optional, Union

from loguru import logger

from .decision import DecisionScorer
from .growth import GrowthScenarioScorer
from .models import Language, MarketReport, MarketSignals
from .opportunity import OpportunityFinder
from .profitability import ProfitabilityCalculator


class MarketReportBuilder:
    """Combines the opportunity, profitability, decision and growth scorers.

    The opportunity and profitability components are independent; the
    decision metrics and growth scenarios read the profitability forecast.
    Faults raised by any component propagate, so a report is either complete
    or not produced.
    """

    def __init__(self, config: Optional[Dict] = None):
        """Initialize report builder.

        Args:
            config: Optional configuration dictionary
        """
        self.default_language = Language.EN
        if config:
            self.default_language = Language(
                config.get("report", {}).get("default_language", Language.EN.value)
            )

        self.opportunity_finder = OpportunityFinder(config)
        self.profitability_calculator = ProfitabilityCalculator(config)
        self.decision_scorer = DecisionScorer(config)
        self.growth_scorer = GrowthScenarioScorer(config)

    def build(
        self,
        signals: Union[MarketSignals, Dict[str, Any]],
        lang: Optional[Union[Language, str]] = None,
    ) -> MarketReport:
        """Build a full market report.

        Args:
            signals: Market signals, as a model or a (camelCase or snake_case) dict
            lang: Report language, defaults to the configured language

        Returns:
            MarketReport instance

        Raises:
            DegenerateInputError: If the profitability forecast cannot be computed
        """
        if not isinstance(signals, MarketSignals):
            signals = MarketSignals.model_validate(signals)
        lang = Language(lang) if lang is not None else self.default_language

        opportunities = self.opportunity_finder.find(
            signals.demand_score,
            signals.competitor_strength,
            signals.profit_margin,
            signals.competitors,
        )

        profitability = self.profitability_calculator.calculate(
            signals.market_stats,
            signals.competitors,
            signals.demand_score,
            lang,
        )

        decision = self.decision_scorer.calculate(
            signals.demand_score,
            signals.competitor_strength,
            signals.profit_margin,
            profitability=profitability,
            active_competitors=len(signals.competitors),
            lang=lang,
        )

        growth = self.growth_scorer.calculate(
            signals.demand_score,
            profitability,
            signals.competitor_strength,
            signals.market_stats,
            intent_score=signals.intent_score,
            lang=lang,
        )

        logger.info(
            f"Market report built: {opportunities.total_opportunities_found} opportunities, "
            f"profitability {profitability.profitability_score}, "
            f"recommendation {decision.recommendation.value}, "
            f"growth scenario {growth.recommended_scenario.value}"
        )

        return MarketReport(
            language=lang,
            opportunities=opportunities,
            profitability=profitability,
            decision=decision,
            growth=growth,
        )


def build_market_report(
    signals: Union[MarketSignals, Dict[str, Any]],
    lang: Union[Language, str] = Language.EN,
) -> MarketReport:
    """Build a market report with the default configuration."""
    return MarketReportBuilder().build(signals, lang)
