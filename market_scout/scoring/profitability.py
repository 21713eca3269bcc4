"""Profitability estimator: unit economics, break-even and revenue scenarios."""

import math
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
from loguru import logger

from ..utils.formatting import clamp, format_money, round_half_away
from .errors import DegenerateInputError
from .models import (
    BreakEvenAnalysis,
    Competitor,
    CostBreakdown,
    Language,
    MarketStats,
    ProfitabilityLevels,
    ProfitabilityResult,
    RevenueBreakdown,
    to_competitors,
)

PRICE_SENSITIVITY_LABELS = {
    "high": {
        Language.EN: "High - Consider competitive pricing",
        Language.AR: "مرتفع - يُنصح بالتسعير التنافسي",
    },
    "medium": {
        Language.EN: "Medium",
        Language.AR: "متوسط",
    },
    "low": {
        Language.EN: "Low - Standardized pricing market",
        Language.AR: "منخفض - سوق بأسعار موحدة",
    },
}

DEMAND_BASIS_LABELS = {
    "very_high": {Language.EN: "Very High", Language.AR: "مرتفع جداً"},
    "high": {Language.EN: "High", Language.AR: "مرتفع"},
    "medium": {Language.EN: "Medium", Language.AR: "متوسط"},
    "low": {Language.EN: "Low", Language.AR: "منخفض"},
}


class ProfitabilityCalculator:
    """Estimate unit economics for a product category.

    Cost model (fractions of the sale price):
    - Product cost: 40%
    - Shipping: 5%
    - Platform fee: 5%

    A fixed monthly overhead drives the break-even point. Monthly volume is
    derived from the demand score (5-75 units/month).

    Profitability score weighting:
    - Margin: 40% (40% margin or better scores full marks)
    - Demand: 35%
    - Competition: 25% (each competitor costs 5 points, at most 50)

    Inputs that would make break-even undefined raise DegenerateInputError.
    """

    PRODUCT_COST_PERCENT = 0.40
    SHIPPING_COST_PERCENT = 0.05
    PLATFORM_FEE_PERCENT = 0.05
    MONTHLY_FIXED_COSTS = 2000.0
    FALLBACK_PRICE = 100.0
    MAX_MONTHLY_UNITS = 75
    MIN_MONTHLY_UNITS = 5
    HIGH_SENSITIVITY = 0.15
    LOW_SENSITIVITY = 0.05

    WEIGHTS = {
        "margin": 0.40,
        "demand": 0.35,
        "competition": 0.25,
    }

    CURRENCY_CODE = "SAR"

    def __init__(self, config: Optional[Dict] = None):
        """Initialize profitability calculator.

        Args:
            config: Optional configuration dictionary
        """
        if config:
            for key, value in config.get("profitability", {}).items():
                attr = key.upper()
                if hasattr(self, attr):
                    setattr(self, attr, value)

            self.CURRENCY_CODE = config.get("currency", {}).get("code", self.CURRENCY_CODE)

    def calculate(
        self,
        market_stats: Optional[Union[MarketStats, Dict[str, Any]]],
        competitors: Optional[Sequence[Union[Competitor, Dict[str, Any]]]],
        demand_score: float,
        lang: Union[Language, str] = Language.EN,
    ) -> ProfitabilityResult:
        """Calculate the profitability forecast.

        Args:
            market_stats: Aggregate market figures; ``average_price`` overrides
                the competitor average when set
            competitors: Observed competitors; ``None`` is treated as empty
            demand_score: Market demand strength (0-100)
            lang: Language of the label fields

        Returns:
            ProfitabilityResult instance

        Raises:
            DegenerateInputError: If profit per unit is not positive or the
                demand score is zero, or either is too small for break-even to
                be finite
        """
        lang = Language(lang)
        competitors = to_competitors(competitors)
        if market_stats is None:
            market_stats = MarketStats()
        elif not isinstance(market_stats, MarketStats):
            market_stats = MarketStats.model_validate(market_stats)

        sale_price = self._average_sale_price(market_stats, competitors)

        product_cost = sale_price * self.PRODUCT_COST_PERCENT
        shipping_cost = sale_price * self.SHIPPING_COST_PERCENT
        platform_fee = sale_price * self.PLATFORM_FEE_PERCENT
        profit_per_unit = sale_price - (product_cost + shipping_cost + platform_fee)

        if profit_per_unit <= 0:
            self._fault(
                "break_even_units",
                f"profit per unit is {profit_per_unit:g} at an average sale price of {sale_price:g}",
            )

        margin_percentage = profit_per_unit / sale_price * 100

        price_sensitivity = self._price_sensitivity(competitors, sale_price, lang)

        # Break-even; quotients are checked, tiny divisors overflow or underflow
        units_ratio = self.MONTHLY_FIXED_COSTS / profit_per_unit
        if not math.isfinite(units_ratio):
            self._fault(
                "break_even_units",
                f"fixed costs over a profit per unit of {profit_per_unit:g} is not finite",
            )
        break_even_units = math.ceil(units_ratio)

        demand_share = demand_score / 100
        if demand_share == 0:
            self._fault("months_to_break_even", f"demand score {demand_score:g} leaves no demand share")
        months_ratio = 2 / demand_share
        if not math.isfinite(months_ratio):
            self._fault(
                "months_to_break_even",
                f"demand score {demand_score:g} is too small to reach break-even",
            )
        months_to_break_even = max(1, math.ceil(months_ratio))

        # Revenue estimate
        monthly_units = max(
            self.MIN_MONTHLY_UNITS,
            round_half_away(demand_score / 100 * self.MAX_MONTHLY_UNITS),
        )
        monthly_revenue = monthly_units * sale_price

        # Profitability score
        margin_component = min(margin_percentage / 40 * 100, 100)
        competition_component = 100 - min(len(competitors) * 5, 50)
        score = (
            margin_component * self.WEIGHTS["margin"]
            + demand_score * self.WEIGHTS["demand"]
            + competition_component * self.WEIGHTS["competition"]
        )

        # Only the conservative scenario is floored at zero
        conservative = max(
            0, round_half_away((monthly_units * 0.5 - break_even_units) * profit_per_unit)
        )
        moderate = round_half_away(monthly_units * profit_per_unit)
        optimistic = round_half_away((monthly_units * 1.5 - break_even_units) * profit_per_unit)

        logger.debug(
            f"Profitability: price={sale_price:.2f}, profit/unit={profit_per_unit:.2f}, "
            f"break-even={break_even_units} units, {monthly_units} units/month"
        )

        return ProfitabilityResult(
            average_sale_price=round_half_away(sale_price),
            estimated_profit_margin=round_half_away(margin_percentage),
            break_even_point=break_even_units,
            profitability_score=clamp(round_half_away(score)),
            price_sensitivity=price_sensitivity,
            estimated_monthly_revenue=format_money(monthly_revenue, self.CURRENCY_CODE),
            cost_breakdown=CostBreakdown(
                product_cost=round_half_away(product_cost),
                shipping_cost=round_half_away(shipping_cost),
                platform_fee=round_half_away(platform_fee),
                margin_percentage=round_half_away(margin_percentage),
            ),
            break_even_analysis=BreakEvenAnalysis(
                units_sold_needed=break_even_units,
                months_to_break_even=months_to_break_even,
                estimated_capital=round_half_away(
                    self.MONTHLY_FIXED_COSTS * months_to_break_even
                    + product_cost * break_even_units
                ),
            ),
            profitability_levels=ProfitabilityLevels(
                conservative=conservative,
                moderate=moderate,
                optimistic=optimistic,
            ),
            revenue_breakdown=RevenueBreakdown(
                estimated_monthly_units=monthly_units,
                average_price=round_half_away(sale_price),
                total_revenue=round_half_away(monthly_revenue),
                demand_basis=self._demand_basis(demand_score, lang),
            ),
            profit_per_unit=round_half_away(profit_per_unit),
        )

    def _average_sale_price(self, market_stats: MarketStats, competitors: List[Competitor]) -> float:
        """Market average if known, else the competitor mean, else the fallback.

        Unpriced competitors count as zero in the mean.
        """
        if market_stats.average_price:
            return market_stats.average_price

        if competitors:
            return sum(c.price or 0 for c in competitors) / len(competitors)

        return self.FALLBACK_PRICE

    def _price_sensitivity(
        self, competitors: List[Competitor], sale_price: float, lang: Language
    ) -> str:
        """Label price dispersion around the average sale price.

        Args:
            competitors: Observed competitors
            sale_price: Average sale price used by the cost model
            lang: Label language

        Returns:
            Localized sensitivity label
        """
        prices = np.array(
            [c.price for c in competitors if c.price is not None and c.price > 0],
            dtype=float,
        )

        level = "medium"
        if len(prices) > 1:
            deviation = float(np.sqrt(np.mean((prices - sale_price) ** 2))) / sale_price
            if deviation > self.HIGH_SENSITIVITY:
                level = "high"
            elif deviation < self.LOW_SENSITIVITY:
                level = "low"

        return PRICE_SENSITIVITY_LABELS[level][lang]

    def _demand_basis(self, demand_score: float, lang: Language) -> str:
        if demand_score >= 80:
            tier = "very_high"
        elif demand_score >= 60:
            tier = "high"
        elif demand_score < 40:
            tier = "low"
        else:
            tier = "medium"
        return DEMAND_BASIS_LABELS[tier][lang]

    def _fault(self, quantity: str, reason: str):
        error = DegenerateInputError(quantity, reason)
        logger.warning(f"Profitability estimate aborted: {error}")
        raise error


_default_calculator = ProfitabilityCalculator()


def calculate_profitability(
    market_stats: Optional[Union[MarketStats, Dict[str, Any]]],
    competitors: Optional[Sequence[Union[Competitor, Dict[str, Any]]]],
    demand_score: float,
    lang: Union[Language, str] = Language.EN,
) -> ProfitabilityResult:
    """Calculate profitability with the default cost model."""
    return _default_calculator.calculate(market_stats, competitors, demand_score, lang)
