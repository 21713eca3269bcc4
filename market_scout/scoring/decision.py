"""Decision metrics: a go / no-go verdict with capital and time-to-profit estimates."""

import math
from typing import Dict, List, Optional, Tuple, Union

from loguru import logger

from ..utils.formatting import clamp, round_half_away
from .models import (
    CheckStatus,
    ChecklistItem,
    DecisionMetrics,
    DetailedAnalysis,
    Language,
    ProfitabilityResult,
    Recommendation,
)

# (upper bound, labels); the last band is open-ended
CAPITAL_BANDS: List[Tuple[float, Dict[Language, str]]] = [
    (5_000, {
        Language.EN: "Very Low (< SAR 5,000)",
        Language.AR: "منخفض جداً (< 5,000 ر.س)",
    }),
    (15_000, {
        Language.EN: "Low (SAR 5,000 - 15,000)",
        Language.AR: "منخفض (5,000 - 15,000 ر.س)",
    }),
    (30_000, {
        Language.EN: "Medium (SAR 15,000 - 30,000)",
        Language.AR: "متوسط (15,000 - 30,000 ر.س)",
    }),
    (50_000, {
        Language.EN: "High (SAR 30,000 - 50,000)",
        Language.AR: "مرتفع (30,000 - 50,000 ر.س)",
    }),
    (100_000, {
        Language.EN: "Very High (SAR 50,000 - 100,000)",
        Language.AR: "مرتفع جداً (50,000 - 100,000 ر.س)",
    }),
    (math.inf, {
        Language.EN: "Enterprise (> SAR 100,000)",
        Language.AR: "مشاريع كبرى (> 100,000 ر.س)",
    }),
]

# (max months, labels); inclusive upper bounds
TIME_TO_PROFIT_BANDS: List[Tuple[float, Dict[Language, str]]] = [
    (2, {Language.EN: "1-2 months (Very Fast)", Language.AR: "1-2 شهر (سريع جداً)"}),
    (4, {Language.EN: "2-4 months (Fast)", Language.AR: "2-4 أشهر (سريع)"}),
    (6, {Language.EN: "4-6 months (Moderate)", Language.AR: "4-6 أشهر (معتدل)"}),
    (9, {Language.EN: "6-9 months (Average)", Language.AR: "6-9 أشهر (متوسط)"}),
    (12, {Language.EN: "9-12 months (Slow)", Language.AR: "9-12 شهر (بطيء)"}),
    (18, {Language.EN: "12-18 months (Very Slow)", Language.AR: "12-18 شهر (بطيء جداً)"}),
    (math.inf, {Language.EN: "18+ months (Long-term)", Language.AR: "أكثر من 18 شهر (طويل الأمد)"}),
]

RISK_FACTOR_LABELS = {
    "very_low_demand": {
        Language.EN: "Very low demand - High volume needed to profitability",
        Language.AR: "طلب منخفض جداً - يتطلب حجم مبيعات كبير لتحقيق الربح",
    },
    "moderate_demand": {
        Language.EN: "Moderate demand - Requires effective marketing",
        Language.AR: "طلب متوسط - يتطلب تسويقاً فعالاً",
    },
    "strong_competition": {
        Language.EN: "Strong competition - Difficult to gain market share",
        Language.AR: "منافسة قوية - صعوبة في الحصول على حصة سوقية",
    },
    "moderate_competition": {
        Language.EN: "Moderate competition - Need differentiation strategy",
        Language.AR: "منافسة متوسطة - تحتاج إلى استراتيجية تميّز",
    },
    "low_margin": {
        Language.EN: "Low profit margins - High volume required for viability",
        Language.AR: "هوامش ربح منخفضة - يتطلب حجم مبيعات كبير للاستمرارية",
    },
    "saturated": {
        Language.EN: "Highly saturated market - Difficult for new entrants",
        Language.AR: "سوق مشبع للغاية - صعب على الداخلين الجدد",
    },
    "long_payback": {
        Language.EN: "Long time to profitability - Requires sustained funding",
        Language.AR: "وقت طويل لتحقيق الربح - يتطلب تمويلاً مستمراً",
    },
}

CHECKLIST_LABELS = {
    "demand": {
        Language.EN: "Market Demand (> 50 score)",
        Language.AR: "الطلب في السوق (> 50 نقطة)",
    },
    "competition": {
        Language.EN: "Competitive Pressure (< 60 strength)",
        Language.AR: "ضغط المنافسة (< 60 قوة)",
    },
    "profit": {
        Language.EN: "Profit Potential (> 20% margin)",
        Language.AR: "إمكانية الربح (> 20% هامش)",
    },
    "capital": {
        Language.EN: "Capital Efficiency (< SAR 30,000)",
        Language.AR: "كفاءة رأس المال (< 30,000 ر.س)",
    },
    "time_to_roi": {
        Language.EN: "Time to ROI (< 6 months)",
        Language.AR: "وقت استرداد الاستثمار (< 6 أشهر)",
    },
    "saturation": {
        Language.EN: "Market Saturation (< 15 competitors)",
        Language.AR: "تشبع السوق (< 15 منافس)",
    },
}


def _status(value: float, pass_if, warn_if) -> CheckStatus:
    if pass_if(value):
        return CheckStatus.PASS
    if warn_if(value):
        return CheckStatus.WARN
    return CheckStatus.FAIL


class DecisionScorer:
    """Combine market signals and the profitability forecast into a verdict.

    Weighting of the success score:
    - Demand: 30%
    - Competition (inverse of strength): 30%
    - Profit (margin x 2): 40%

    Classification:
    - 70-100: GO
    - 50-69: CAUTION
    - 0-49: NO-GO

    Three or more failed viability checks force NO-GO, two force CAUTION.
    """

    WEIGHTS = {
        "demand": 0.30,
        "competition": 0.30,
        "profit": 0.40,
    }

    MONTHLY_OPERATING_COSTS = 1500.0
    INVENTORY_MONTHS = 3
    MARKETING_SHARE = 0.15
    EMERGENCY_RESERVE = 0.20
    DEFAULT_COMPETITOR_COUNT = 5

    def __init__(self, config: Optional[Dict] = None):
        """Initialize decision scorer.

        Args:
            config: Optional configuration dictionary
        """
        if config:
            for key, value in config.get("decision", {}).items():
                attr = key.upper()
                if hasattr(self, attr):
                    setattr(self, attr, value)

    def calculate(
        self,
        demand_score: float,
        competitor_strength: float,
        profit_margin: float,
        profitability: Optional[ProfitabilityResult] = None,
        active_competitors: Optional[int] = None,
        lang: Union[Language, str] = Language.EN,
    ) -> DecisionMetrics:
        """Calculate decision metrics.

        Args:
            demand_score: Market demand strength (0-100)
            competitor_strength: Aggregate competitive intensity (0-100)
            profit_margin: Expected profit margin in percent
            profitability: Profitability forecast, if one was computed
            active_competitors: Number of active competitors
            lang: Language of the label fields

        Returns:
            DecisionMetrics instance
        """
        lang = Language(lang)

        demand_factor = clamp(demand_score)
        competition_factor = clamp(100 - competitor_strength)
        profit_factor = clamp(profit_margin * 2)

        success_score = round_half_away(
            demand_factor * self.WEIGHTS["demand"]
            + competition_factor * self.WEIGHTS["competition"]
            + profit_factor * self.WEIGHTS["profit"]
        )

        competitor_count = (
            active_competitors if active_competitors is not None else self.DEFAULT_COMPETITOR_COUNT
        )
        risk_score = 100 - success_score
        if competitor_count > 15:
            risk_score = min(100, risk_score + 15)
        elif competitor_count > 10:
            risk_score = min(100, risk_score + 10)

        if profitability is not None:
            average_price = profitability.average_sale_price
            product_cost = profitability.cost_breakdown.product_cost
            monthly_units = profitability.revenue_breakdown.estimated_monthly_units
            months_to_break_even = profitability.break_even_analysis.months_to_break_even
            monthly_profit = profitability.profitability_levels.moderate
        else:
            average_price = 100
            product_cost = average_price * 0.4
            monthly_units = 30
            months_to_break_even = 3
            # 30% net on half the price
            monthly_profit = monthly_units * (average_price * 0.5) * 0.3

        estimated_capital = self._estimated_capital(average_price, product_cost, monthly_units)

        beginner_friendly = (
            estimated_capital < 25_000
            and competition_factor > 45
            and profit_factor > 30
            and months_to_break_even <= 4
        )

        if monthly_profit > 0:
            months_to_profit = max(1, math.ceil(estimated_capital / monthly_profit))
        else:
            months_to_profit = 12

        risk_factors = self._risk_factors(
            demand_factor,
            competitor_strength,
            profit_margin,
            competitor_count,
            months_to_profit,
            lang,
        )

        checklist = [
            ChecklistItem(
                item=CHECKLIST_LABELS["demand"][lang],
                status=_status(demand_factor, lambda v: v > 50, lambda v: v > 30),
            ),
            ChecklistItem(
                item=CHECKLIST_LABELS["competition"][lang],
                status=_status(competitor_strength, lambda v: v < 60, lambda v: v < 75),
            ),
            ChecklistItem(
                item=CHECKLIST_LABELS["profit"][lang],
                status=_status(profit_margin, lambda v: v > 20, lambda v: v > 10),
            ),
            ChecklistItem(
                item=CHECKLIST_LABELS["capital"][lang],
                status=_status(estimated_capital, lambda v: v < 30_000, lambda v: v < 50_000),
            ),
            ChecklistItem(
                item=CHECKLIST_LABELS["time_to_roi"][lang],
                status=_status(months_to_profit, lambda v: v < 6, lambda v: v < 12),
            ),
            ChecklistItem(
                item=CHECKLIST_LABELS["saturation"][lang],
                status=_status(competitor_count, lambda v: v < 15, lambda v: v < 25),
            ),
        ]

        recommendation, confidence = self._classify(success_score, checklist)

        capital_labels = self._band(estimated_capital, CAPITAL_BANDS, inclusive=False)
        time_labels = self._band(months_to_profit, TIME_TO_PROFIT_BANDS, inclusive=True)

        logger.debug(
            f"Decision: success={success_score}, risk={risk_score}, "
            f"capital={estimated_capital}, recommendation={recommendation.value}"
        )

        return DecisionMetrics(
            success_score=clamp(success_score),
            risk_score=clamp(risk_score),
            beginner_friendly=beginner_friendly,
            estimated_capital=estimated_capital,
            capital_required=capital_labels[lang],
            months_to_profit=months_to_profit,
            time_to_profit=time_labels[lang],
            recommendation=recommendation,
            detailed_analysis=DetailedAnalysis(
                demand_factor=demand_factor,
                competition_factor=competition_factor,
                profit_factor=profit_factor,
                risk_factors=risk_factors,
                confidence_level=confidence,
            ),
            viability_checklist=checklist,
        )

    def _estimated_capital(self, average_price: float, product_cost: float, monthly_units: int) -> int:
        """Capital to launch: stock, marketing and running costs plus a reserve.

        Args:
            average_price: Average sale price
            product_cost: Product cost per unit
            monthly_units: Expected units sold per month

        Returns:
            Rounded capital estimate
        """
        inventory = product_cost * monthly_units * self.INVENTORY_MONTHS
        marketing = average_price * monthly_units * self.MARKETING_SHARE * self.INVENTORY_MONTHS
        operating = self.MONTHLY_OPERATING_COSTS * self.INVENTORY_MONTHS

        subtotal = inventory + marketing + operating
        return round_half_away(subtotal * (1 + self.EMERGENCY_RESERVE))

    def _risk_factors(
        self,
        demand_factor: float,
        competitor_strength: float,
        profit_margin: float,
        competitor_count: int,
        months_to_profit: int,
        lang: Language,
    ) -> List[str]:
        factors = []

        if demand_factor < 30:
            factors.append("very_low_demand")
        elif demand_factor < 50:
            factors.append("moderate_demand")

        if competitor_strength > 70:
            factors.append("strong_competition")
        elif competitor_strength > 50:
            factors.append("moderate_competition")

        if profit_margin < 15:
            factors.append("low_margin")

        if competitor_count > 20:
            factors.append("saturated")

        if months_to_profit > 12:
            factors.append("long_payback")

        return [RISK_FACTOR_LABELS[key][lang] for key in factors]

    def _classify(
        self, success_score: int, checklist: List[ChecklistItem]
    ) -> Tuple[Recommendation, str]:
        if success_score >= 70:
            result = (Recommendation.GO, "High")
        elif success_score >= 50:
            result = (Recommendation.CAUTION, "Medium")
        else:
            result = (Recommendation.NO_GO, "Low")

        # Critical failures override the score
        fail_count = sum(1 for c in checklist if c.status == CheckStatus.FAIL)
        if fail_count >= 3:
            result = (Recommendation.NO_GO, "Low")
        elif fail_count >= 2:
            result = (Recommendation.CAUTION, "Medium")

        return result

    @staticmethod
    def _band(
        value: float, bands: List[Tuple[float, Dict[Language, str]]], inclusive: bool
    ) -> Dict[Language, str]:
        for bound, labels in bands:
            if value < bound or (inclusive and value == bound):
                return labels
        return bands[-1][1]


_default_scorer = DecisionScorer()


def calculate_decision_metrics(
    demand_score: float,
    competitor_strength: float,
    profit_margin: float,
    profitability: Optional[ProfitabilityResult] = None,
    active_competitors: Optional[int] = None,
    lang: Union[Language, str] = Language.EN,
) -> DecisionMetrics:
    """Calculate decision metrics with the default assumptions."""
    return _default_scorer.calculate(
        demand_score, competitor_strength, profit_margin, profitability, active_competitors, lang
    )
