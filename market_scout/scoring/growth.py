"""Growth scenarios: conservative, moderate and optimistic monthly projections."""

from typing import Any, Dict, List, Optional, Union

from loguru import logger

from ..utils.formatting import format_money, round_half_away
from .models import (
    GrowthScenario,
    GrowthScenariosResult,
    Language,
    MarketStats,
    ProfitabilityResult,
    ScenarioCosts,
    ScenarioName,
)

TIMEFRAME_LABELS = {
    ScenarioName.CONSERVATIVE: {Language.EN: "6-12 months", Language.AR: "6-12 شهر"},
    ScenarioName.MODERATE: {Language.EN: "3-6 months", Language.AR: "3-6 أشهر"},
    ScenarioName.OPTIMISTIC: {Language.EN: "1-3 months", Language.AR: "1-3 أشهر"},
}

STRATEGY_LABELS = {
    ScenarioName.CONSERVATIVE: {
        Language.EN: "Slow start with focus on risk minimization",
        Language.AR: "بدء بطيء مع تركيز على تقليل المخاطر",
    },
    ScenarioName.MODERATE: {
        Language.EN: "Balanced strategy between growth and caution",
        Language.AR: "استراتيجية متوازنة بين النمو والحذر",
    },
    ScenarioName.OPTIMISTIC: {
        Language.EN: "Aggressive growth strategy with major investment",
        Language.AR: "استراتيجية نمو عدوانية مع استثمار كبير",
    },
}

SCALABILITY_LABELS = {
    "strong_demand": {
        Language.EN: "Strong market demand supports rapid expansion",
        Language.AR: "طلب سوق قوي يدعم التوسع السريع",
    },
    "good_margin": {
        Language.EN: "Good profit margins allow for reinvestment",
        Language.AR: "هوامش ربح جيدة تسمح بإعادة الاستثمار",
    },
    "moderate_competition": {
        Language.EN: "Moderate competition facilitates market entry",
        Language.AR: "منافسة معتدلة تسهل دخول السوق",
    },
    "similar_products": {
        Language.EN: "Potential to expand into similar products",
        Language.AR: "إمكانية التوسع في منتجات مشابهة",
    },
    "sales_channels": {
        Language.EN: "Multiple sales channels available (Noon, Amazon, own store)",
        Language.AR: "يمكن استخدام قنوات بيع متعددة (نون، أمازون، متجر خاص)",
    },
    "low_price": {
        Language.EN: "Low-priced product facilitates high-volume sales",
        Language.AR: "منتج منخفض السعر يسهل البيع بكميات كبيرة",
    },
}


class GrowthScenarioScorer:
    """Project monthly revenue and profit under three growth strategies.

    Each scenario sells a share of the expected monthly units (reduced under
    strong competition, never below a floor) and pays product, shipping and
    platform costs per unit plus a marketing share of revenue and fixed plus
    variable operating expenses. The optimistic scenario gets volume
    discounts on product and shipping costs.

    Recommendation:
    - Optimistic: demand >= 70, competition < 50 and margin > 25
    - Conservative: demand < 40, competition > 70 or margin < 15
    - Moderate: otherwise

    Buyer intent of 70 or more lifts conservative to moderate; below 40 it
    lowers optimistic to moderate.
    """

    SCENARIOS = {
        ScenarioName.CONSERVATIVE: {
            "unit_share": 0.3,
            "min_units": 5,
            "marketing_share": 0.08,
            "fixed_operating": 1500,
            "variable_operating": 0.05,
            "product_discount": 1.0,
            "shipping_discount": 1.0,
            "unit_profit_uplift": 1.0,
            "growth_rate": 5,
        },
        ScenarioName.MODERATE: {
            "unit_share": 0.6,
            "min_units": 15,
            "marketing_share": 0.12,
            "fixed_operating": 2000,
            "variable_operating": 0.04,
            "product_discount": 1.0,
            "shipping_discount": 1.0,
            "unit_profit_uplift": 1.0,
            "growth_rate": 15,
        },
        ScenarioName.OPTIMISTIC: {
            "unit_share": 1.0,
            "min_units": 30,
            "marketing_share": 0.18,
            "fixed_operating": 2500,
            "variable_operating": 0.03,
            "product_discount": 0.95,
            "shipping_discount": 0.9,
            "unit_profit_uplift": 1.05,
            "growth_rate": 30,
        },
    }

    FALLBACK_PRICE = 100.0
    FALLBACK_MARGIN = 25.0
    FALLBACK_MAX_UNITS = 50
    PRODUCT_COST_PERCENT = 0.40
    SHIPPING_COST_PERCENT = 0.05
    PLATFORM_FEE_PERCENT = 0.05
    LOW_PRICE_THRESHOLD = 500.0

    CURRENCY_CODE = "SAR"
    CURRENCY_SUFFIX = "ر.س"

    def __init__(self, config: Optional[Dict] = None):
        """Initialize growth scenario scorer.

        Args:
            config: Optional configuration dictionary
        """
        if config:
            for key, value in config.get("growth", {}).items():
                attr = key.upper()
                if hasattr(self, attr):
                    setattr(self, attr, value)

            profitability = config.get("profitability", {})
            for key in ("product_cost_percent", "shipping_cost_percent", "platform_fee_percent"):
                if key in profitability:
                    setattr(self, key.upper(), profitability[key])

            currency = config.get("currency", {})
            self.CURRENCY_CODE = currency.get("code", self.CURRENCY_CODE)
            self.CURRENCY_SUFFIX = currency.get("suffix", self.CURRENCY_SUFFIX)

    def calculate(
        self,
        demand_score: float,
        profitability: Optional[ProfitabilityResult],
        competitor_strength: float,
        market_stats: Optional[Union[MarketStats, Dict[str, Any]]] = None,
        intent_score: Optional[float] = None,
        lang: Union[Language, str] = Language.EN,
    ) -> GrowthScenariosResult:
        """Calculate growth scenarios.

        Figures come from the profitability forecast when one is given;
        otherwise the market average price and the default cost model are
        used.

        Args:
            demand_score: Market demand strength (0-100)
            profitability: Profitability forecast, if one was computed
            competitor_strength: Aggregate competitive intensity (0-100)
            market_stats: Aggregate market figures
            intent_score: Buyer intent (0-100), if known
            lang: Language of the label fields

        Returns:
            GrowthScenariosResult instance
        """
        lang = Language(lang)
        if market_stats is None:
            market_stats = MarketStats()
        elif not isinstance(market_stats, MarketStats):
            market_stats = MarketStats.model_validate(market_stats)

        if profitability is not None:
            average_price = profitability.average_sale_price or self.FALLBACK_PRICE
            profit_margin = profitability.estimated_profit_margin or self.FALLBACK_MARGIN
            product_cost = profitability.cost_breakdown.product_cost
            shipping_cost = profitability.cost_breakdown.shipping_cost
            platform_fee = profitability.cost_breakdown.platform_fee
            profit_per_unit = profitability.profit_per_unit
            base_units = profitability.revenue_breakdown.estimated_monthly_units
        else:
            average_price = market_stats.average_price or self.FALLBACK_PRICE
            profit_margin = self.FALLBACK_MARGIN
            product_cost = shipping_cost = platform_fee = 0
            profit_per_unit = 0
            base_units = round_half_away(demand_score / 100 * self.FALLBACK_MAX_UNITS)

        # Zero figures fall back to the default cost model
        product_cost = product_cost or average_price * self.PRODUCT_COST_PERCENT
        shipping_cost = shipping_cost or average_price * self.SHIPPING_COST_PERCENT
        platform_fee = platform_fee or average_price * self.PLATFORM_FEE_PERCENT
        profit_per_unit = profit_per_unit or (
            average_price - product_cost - shipping_cost - platform_fee
        )

        if competitor_strength > 70:
            competition_multiplier = 0.6
        elif competitor_strength > 50:
            competition_multiplier = 0.8
        else:
            competition_multiplier = 1.0

        scenarios = {
            name: self._scenario(
                name,
                base_units,
                competition_multiplier,
                average_price,
                product_cost,
                shipping_cost,
                platform_fee,
                profit_per_unit,
                profit_margin,
                lang,
            )
            for name in ScenarioName
        }

        recommended = self._recommend(demand_score, competitor_strength, profit_margin, intent_score)

        logger.debug(
            f"Growth scenarios: base={base_units} units/month, "
            f"multiplier={competition_multiplier}, recommended={recommended.value}"
        )

        return GrowthScenariosResult(
            conservative=scenarios[ScenarioName.CONSERVATIVE],
            moderate=scenarios[ScenarioName.MODERATE],
            optimistic=scenarios[ScenarioName.OPTIMISTIC],
            recommended_scenario=recommended,
            scalability_factors=self._scalability_factors(
                demand_score, profit_margin, competitor_strength, average_price, lang
            ),
        )

    def _scenario(
        self,
        name: ScenarioName,
        base_units: int,
        competition_multiplier: float,
        average_price: float,
        product_cost: float,
        shipping_cost: float,
        platform_fee: float,
        profit_per_unit: float,
        profit_margin: float,
        lang: Language,
    ) -> GrowthScenario:
        params = self.SCENARIOS[name]

        units = max(
            params["min_units"],
            round_half_away(base_units * params["unit_share"] * competition_multiplier),
        )
        revenue = units * average_price

        product_costs = round_half_away(units * product_cost * params["product_discount"])
        shipping_costs = round_half_away(units * shipping_cost * params["shipping_discount"])
        platform_fees = round_half_away(units * platform_fee)
        marketing_budget = round_half_away(revenue * params["marketing_share"])
        operational_expenses = round_half_away(
            params["fixed_operating"] + revenue * params["variable_operating"]
        )
        total_costs = (
            product_costs + shipping_costs + platform_fees + marketing_budget + operational_expenses
        )

        costs = ScenarioCosts(
            product_costs=product_costs,
            shipping_costs=shipping_costs,
            platform_fees=platform_fees,
            marketing_budget=marketing_budget,
            operational_expenses=operational_expenses,
            total_costs=total_costs,
            units_sold=units,
            price_per_unit=round_half_away(average_price),
            cost_per_unit=round_half_away(product_cost * params["product_discount"]),
            profit_per_unit=round_half_away(profit_per_unit * params["unit_profit_uplift"]),
        )

        return GrowthScenario(
            monthly_revenue=round_half_away(revenue),
            monthly_profit=round_half_away(max(0, revenue - total_costs)),
            growth_rate=params["growth_rate"],
            timeframe=TIMEFRAME_LABELS[name][lang],
            assumptions=self._assumptions(name, costs, profit_margin, lang),
            cost_breakdown=costs,
        )

    def _assumptions(
        self, name: ScenarioName, costs: ScenarioCosts, profit_margin: float, lang: Language
    ) -> List[str]:
        units = costs.units_sold
        marketing = costs.marketing_budget
        code, suffix = self.CURRENCY_CODE, self.CURRENCY_SUFFIX

        if lang == Language.AR:
            selling = {
                ScenarioName.CONSERVATIVE: f"بيع {units} وحدة شهرياً في البداية",
                ScenarioName.MODERATE: f"بيع {units} وحدة شهرياً",
                ScenarioName.OPTIMISTIC: f"بيع {units} وحدة شهرياً",
            }[name]
            budget = {
                ScenarioName.CONSERVATIVE: "ميزانية تسويق محدودة",
                ScenarioName.MODERATE: "ميزانية تسويق متوسطة",
                ScenarioName.OPTIMISTIC: "ميزانية تسويق قوية",
            }[name]
            detail = {
                ScenarioName.CONSERVATIVE: f"تكلفة الوحدة: {costs.cost_per_unit} {suffix}",
                ScenarioName.MODERATE: f"سعر البيع: {costs.price_per_unit} {suffix}",
                ScenarioName.OPTIMISTIC: f"هامش ربح متوقع: {round_half_away(profit_margin)}%",
            }[name]
            budget_line = f"{budget}: {marketing:,} {suffix}/شهر"
        else:
            selling = {
                ScenarioName.CONSERVATIVE: f"Selling {units} units monthly initially",
                ScenarioName.MODERATE: f"Selling {units} units monthly",
                ScenarioName.OPTIMISTIC: f"Selling {units} units monthly",
            }[name]
            budget = {
                ScenarioName.CONSERVATIVE: "Limited marketing budget",
                ScenarioName.MODERATE: "Moderate marketing budget",
                ScenarioName.OPTIMISTIC: "Strong marketing budget",
            }[name]
            detail = {
                ScenarioName.CONSERVATIVE: f"Unit cost: {format_money(costs.cost_per_unit, code)}",
                ScenarioName.MODERATE: f"Selling price: {format_money(costs.price_per_unit, code)}",
                ScenarioName.OPTIMISTIC: f"Expected profit margin: {round_half_away(profit_margin)}%",
            }[name]
            budget_line = f"{budget}: {format_money(marketing, code)}/month"

        return [STRATEGY_LABELS[name][lang], selling, budget_line, detail]

    def _recommend(
        self,
        demand_score: float,
        competitor_strength: float,
        profit_margin: float,
        intent_score: Optional[float],
    ) -> ScenarioName:
        if demand_score >= 70 and competitor_strength < 50 and profit_margin > 25:
            recommended = ScenarioName.OPTIMISTIC
        elif demand_score < 40 or competitor_strength > 70 or profit_margin < 15:
            recommended = ScenarioName.CONSERVATIVE
        else:
            recommended = ScenarioName.MODERATE

        # Buyer intent moves the recommendation one step at most
        if intent_score is not None:
            if intent_score >= 70 and recommended == ScenarioName.CONSERVATIVE:
                recommended = ScenarioName.MODERATE
            elif intent_score < 40 and recommended == ScenarioName.OPTIMISTIC:
                recommended = ScenarioName.MODERATE

        return recommended

    def _scalability_factors(
        self,
        demand_score: float,
        profit_margin: float,
        competitor_strength: float,
        average_price: float,
        lang: Language,
    ) -> List[str]:
        keys = []
        if demand_score > 60:
            keys.append("strong_demand")
        if profit_margin > 25:
            keys.append("good_margin")
        if competitor_strength < 60:
            keys.append("moderate_competition")
        keys.extend(["similar_products", "sales_channels"])
        if average_price < self.LOW_PRICE_THRESHOLD:
            keys.append("low_price")

        return [SCALABILITY_LABELS[key][lang] for key in keys]


_default_scorer = GrowthScenarioScorer()


def calculate_growth_scenarios(
    demand_score: float,
    profitability: Optional[ProfitabilityResult],
    competitor_strength: float,
    market_stats: Optional[Union[MarketStats, Dict[str, Any]]] = None,
    intent_score: Optional[float] = None,
    lang: Union[Language, str] = Language.EN,
) -> GrowthScenariosResult:
    """Calculate growth scenarios with the default assumptions."""
    return _default_scorer.calculate(
        demand_score, profitability, competitor_strength, market_stats, intent_score, lang
    )
