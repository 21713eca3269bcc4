"""Opportunity classifier: turns market signals into ranked seller opportunities."""

from collections import Counter
from typing import Any, Dict, List, Optional, Sequence, Union

from loguru import logger

from ..utils.formatting import clamp, format_amount, round_half_away
from .models import (
    Competitor,
    ContentQualityMetrics,
    EmergingMetrics,
    Opportunity,
    OpportunityFinderResult,
    OpportunityMap,
    OpportunityType,
    PriceGapMetrics,
    to_competitors,
)


class OpportunityFinder:
    """Detect market opportunities with five independent heuristic rules.

    Rules (each may add one opportunity):
    - Green zone: strong demand, weak competition
    - Price gap: healthy margin against at least three priced competitors
    - Content quality: demand outpaces poorly rated competitors
    - Emerging: mid-range demand with manageable competition
    - Niche: low demand but high margin and little competition

    Results are ranked by potential score (0-100), highest first. Ties keep
    the rule order above.
    """

    GREEN_MIN_DEMAND = 60.0
    GREEN_MAX_COMPETITION = 50.0
    PRICE_GAP_MIN_MARGIN = 30.0
    PRICE_GAP_MIN_COMPETITORS = 2
    PRICE_GAP_THRESHOLD = 0.2  # gap must exceed 20% of the average price
    PRICE_GAP_UNDERCUT = 0.8  # suggest 20% below the average price
    CONTENT_MIN_DEMAND = 50.0
    CONTENT_MAX_RATING = 3.5
    EMERGING_MIN_DEMAND = 40.0
    EMERGING_MAX_DEMAND = 70.0
    EMERGING_MAX_COMPETITION = 60.0
    EMERGING_MARKET_UNITS = 2000
    NICHE_MAX_DEMAND = 40.0
    NICHE_MIN_MARGIN = 35.0
    NICHE_MAX_COMPETITION = 40.0

    CURRENCY_CODE = "SAR"
    CURRENCY_SUFFIX = "ر.س"

    def __init__(self, config: Optional[Dict] = None):
        """Initialize opportunity finder.

        Args:
            config: Optional configuration dictionary
        """
        if config:
            for key, value in config.get("opportunity", {}).items():
                attr = key.upper()
                if hasattr(self, attr):
                    setattr(self, attr, value)

            currency = config.get("currency", {})
            self.CURRENCY_CODE = currency.get("code", self.CURRENCY_CODE)
            self.CURRENCY_SUFFIX = currency.get("suffix", self.CURRENCY_SUFFIX)

    def find(
        self,
        demand_score: float,
        competitor_strength: float,
        profit_margin: float,
        competitors: Optional[Sequence[Union[Competitor, Dict[str, Any]]]] = None,
    ) -> OpportunityFinderResult:
        """Evaluate every rule and rank what fired.

        Args:
            demand_score: Market demand strength (0-100)
            competitor_strength: Aggregate competitive intensity (0-100)
            profit_margin: Expected profit margin in percent
            competitors: Observed competitors; ``None`` is treated as empty

        Returns:
            OpportunityFinderResult instance
        """
        competitors = to_competitors(competitors)

        candidates = [
            self._green_zone(demand_score, competitor_strength),
            self._price_gap(profit_margin, competitors),
            self._content_quality(demand_score, competitors),
            self._emerging(demand_score, competitor_strength, competitors),
            self._niche(demand_score, competitor_strength, profit_margin),
        ]
        opportunities = [o for o in candidates if o is not None]

        # sorted() is stable, so ties stay in rule order
        opportunities = sorted(opportunities, key=lambda o: o.potential_score, reverse=True)

        counts = Counter(o.type for o in opportunities)
        opportunity_map = OpportunityMap(
            green_zone=counts[OpportunityType.GREEN],
            price_gap=counts[OpportunityType.PRICE_GAP],
            content_quality=counts[OpportunityType.CONTENT_QUALITY],
            emerging=counts[OpportunityType.EMERGING],
        )

        logger.debug(
            f"Found {len(opportunities)} opportunities "
            f"(demand={demand_score}, competition={competitor_strength}, margin={profit_margin})"
        )

        return OpportunityFinderResult(
            opportunities=opportunities,
            total_opportunities_found=len(opportunities),
            best_opportunity=opportunities[0] if opportunities else None,
            opportunity_map=opportunity_map,
        )

    def _green_zone(self, demand: float, competition: float) -> Optional[Opportunity]:
        if not (demand > self.GREEN_MIN_DEMAND and competition < self.GREEN_MAX_COMPETITION):
            return None

        score = clamp(round_half_away(demand * 0.6 + (100 - competition) * 0.4))

        return Opportunity(
            type=OpportunityType.GREEN,
            title="Green Zone Opportunity",
            title_ar="فرصة المنطقة الخضراء",
            description=(
                "High demand market with weak competitive presence. "
                "Ideal for market entry."
            ),
            description_ar="سوق عالي الطلب مع وجود منافسة ضعيفة. مثالي لدخول السوق.",
            potential_score=score,
            action_items=[
                "Enter market quickly before competitors strengthen",
                "Build brand presence and customer loyalty",
                "Focus on quality and customer service to establish dominance",
            ],
            action_items_ar=[
                "ادخل السوق بسرعة قبل أن يقوى المنافسون",
                "ابنِ حضوراً للعلامة التجارية وولاءً لدى العملاء",
                "ركّز على الجودة وخدمة العملاء لتثبيت الريادة",
            ],
        )

    def _price_gap(self, margin: float, competitors: List[Competitor]) -> Optional[Opportunity]:
        if not (margin > self.PRICE_GAP_MIN_MARGIN and len(competitors) > self.PRICE_GAP_MIN_COMPETITORS):
            return None

        prices = [c.price for c in competitors if c.price is not None and c.price > 0]
        if not prices:
            return None

        avg_price = sum(prices) / len(prices)
        price_gap = avg_price * margin / 100
        if price_gap <= avg_price * self.PRICE_GAP_THRESHOLD:
            return None

        suggested_price = avg_price * self.PRICE_GAP_UNDERCUT
        score = round_half_away(min(margin * 1.5, 100))

        avg_label = f"{avg_price:.2f}"
        suggested_label = f"{suggested_price:.2f}"

        return Opportunity(
            type=OpportunityType.PRICE_GAP,
            title="Price Gap Opportunity",
            title_ar="فرصة الفجوة السعرية",
            description=(
                f"Significant price gap identified. Average competitor price is "
                f"{avg_label} {self.CURRENCY_CODE}. You can sell at {suggested_label} "
                f"{self.CURRENCY_CODE} with {margin:g}% margin."
            ),
            description_ar=(
                f"تم تحديد فجوة سعرية كبيرة. متوسط سعر المنافسين {avg_label} {self.CURRENCY_SUFFIX}. "
                f"يمكنك البيع بـ {suggested_label} {self.CURRENCY_SUFFIX} مع هامش {margin:g}%."
            ),
            potential_score=score,
            action_items=[
                "Implement premium positioning strategy",
                "Emphasize unique value proposition",
                "Target quality-conscious customers willing to pay more",
            ],
            action_items_ar=[
                "طبّق استراتيجية تموضع متميزة",
                "أبرز القيمة الفريدة لعرضك",
                "استهدف العملاء المهتمين بالجودة والمستعدين لدفع المزيد",
            ],
            metrics=PriceGapMetrics(
                avg_competitor_price=format_amount(avg_price, self.CURRENCY_SUFFIX),
                suggested_price=format_amount(suggested_price, self.CURRENCY_SUFFIX),
                price_gap=format_amount(avg_price - suggested_price, self.CURRENCY_SUFFIX),
                competitor_count=len(competitors),
            ),
        )

    def _content_quality(self, demand: float, competitors: List[Competitor]) -> Optional[Opportunity]:
        if not (demand > self.CONTENT_MIN_DEMAND and competitors):
            return None

        avg_rating = sum(c.rating for c in competitors) / len(competitors)
        if avg_rating >= self.CONTENT_MAX_RATING:
            return None

        score = clamp(round_half_away(50 + (demand - avg_rating * 20)))

        return Opportunity(
            type=OpportunityType.CONTENT_QUALITY,
            title="Content Quality Opportunity",
            title_ar="فرصة جودة المحتوى",
            description=(
                f"Competitors have low ratings ({avg_rating:.1f}/5) despite high demand. "
                "Excellence in customer service and product quality can capture market share."
            ),
            description_ar=(
                f"المنافسون لديهم تقييمات منخفضة ({avg_rating:.1f}/5) رغم الطلب العالي. "
                "التفوق في خدمة العملاء والجودة يمكنه الاستيلاء على حصة السوق."
            ),
            potential_score=score,
            action_items=[
                "Focus on customer experience and satisfaction",
                "Build strong reviews and testimonials",
                "Emphasize quality control and product excellence",
                "Implement superior after-sales service",
            ],
            action_items_ar=[
                "ركّز على تجربة العملاء ورضاهم",
                "ابنِ تقييمات وشهادات قوية",
                "اهتم بمراقبة الجودة وتميز المنتج",
                "قدّم خدمة ما بعد البيع متفوقة",
            ],
            metrics=ContentQualityMetrics(
                avg_rating=avg_rating,
                competitor_count=len(competitors),
            ),
        )

    def _emerging(
        self, demand: float, competition: float, competitors: List[Competitor]
    ) -> Optional[Opportunity]:
        if not (
            self.EMERGING_MIN_DEMAND < demand < self.EMERGING_MAX_DEMAND
            and competition < self.EMERGING_MAX_COMPETITION
        ):
            return None

        score = clamp(round_half_away(40 + (demand - 50) * 2 + (100 - competition) * 0.5))
        monthly_units = round_half_away(demand / 100 * self.EMERGING_MARKET_UNITS)
        competitor_count = len(competitors)

        return Opportunity(
            type=OpportunityType.EMERGING,
            title="Emerging Market Opportunity",
            title_ar="فرصة السوق الناشئ",
            description=(
                "Category showing growth potential with manageable competition. "
                f"Estimated {monthly_units} units/month market size with "
                f"{competitor_count} active competitors."
            ),
            description_ar=(
                "فئة تظهر إمكانية نمو مع منافسة قابلة للإدارة. "
                f"حجم سوق مقدر {monthly_units} وحدة/شهر مع {competitor_count} منافسين نشطين."
            ),
            potential_score=score,
            action_items=[
                "Build brand awareness early in market development",
                "Invest in content marketing and education",
                "Establish partnerships with complementary services",
                "Create community and customer loyalty programs",
            ],
            action_items_ar=[
                "ابنِ الوعي بالعلامة التجارية مبكراً في مرحلة تطور السوق",
                "استثمر في التسويق بالمحتوى والتثقيف",
                "أقم شراكات مع خدمات مكمّلة",
                "أنشئ مجتمعاً وبرامج لولاء العملاء",
            ],
            metrics=EmergingMetrics(
                estimated_monthly_units=monthly_units,
                market_size=f"{monthly_units} وحدة/شهر",
                competitor_count=competitor_count,
            ),
        )

    def _niche(self, demand: float, competition: float, margin: float) -> Optional[Opportunity]:
        if not (
            demand < self.NICHE_MAX_DEMAND
            and margin > self.NICHE_MIN_MARGIN
            and competition < self.NICHE_MAX_COMPETITION
        ):
            return None

        # Upper bound only
        score = min(100, round_half_away(margin * 0.7 + (100 - competition) * 0.3))

        return Opportunity(
            type=OpportunityType.NICHE,
            title="Niche Market Opportunity",
            title_ar="فرصة السوق المتخصصة",
            description=(
                "Untapped niche market with high profitability potential. "
                "Requires targeted marketing to specific audience."
            ),
            description_ar=(
                "سوق متخصصة غير مستغلة مع إمكانية ربحية عالية. تتطلب تسويقاً موجهاً لجمهور محدد."
            ),
            potential_score=score,
            action_items=[
                "Target specific customer segments with precision marketing",
                "Build expertise and thought leadership in the niche",
                "Create exclusive products or services for the niche",
                "Develop partnerships within the niche community",
            ],
            action_items_ar=[
                "استهدف شرائح محددة من العملاء بتسويق دقيق",
                "ابنِ خبرة وريادة فكرية في هذا المجال",
                "أنشئ منتجات أو خدمات حصرية لهذه الشريحة",
                "طوّر شراكات داخل مجتمع هذه الشريحة",
            ],
        )


_default_finder = OpportunityFinder()


def find_opportunities(
    demand_score: float,
    competitor_strength: float,
    profit_margin: float,
    competitors: Optional[Sequence[Union[Competitor, Dict[str, Any]]]] = None,
) -> OpportunityFinderResult:
    """Find market opportunities with the default rule thresholds."""
    return _default_finder.find(demand_score, competitor_strength, profit_margin, competitors)
