import pytest

from market_scout.scoring import (
    DegenerateInputError,
    Language,
    MarketReportBuilder,
    MarketSignals,
    build_market_report,
)
from market_scout.scoring.models import OpportunityType, Recommendation, ScenarioName


@pytest.fixture
def signals():
    return {
        "demandScore": 65,
        "competitorStrength": 30,
        "profitMargin": 40,
        "competitors": [
            {"storeName": "Noon", "price": 100, "rating": 2},
            {"storeName": "Amazon", "price": 120, "rating": 3},
            {"storeName": "Extra", "price": 140},
        ],
        "marketStats": {"averagePrice": 120, "highestPrice": 140, "lowestPrice": 100},
    }


def test_report_combines_all_components(signals):
    report = build_market_report(signals)

    assert report.language == Language.EN
    assert report.opportunities.total_opportunities_found == 4
    assert report.opportunities.best_opportunity.type == OpportunityType.EMERGING
    assert report.profitability.average_sale_price == 120
    assert report.decision.recommendation in set(Recommendation)


def test_report_passes_language_to_labels(signals):
    report = build_market_report(signals, "ar")

    assert report.language == Language.AR
    assert report.profitability.revenue_breakdown.demand_basis == "مرتفع"


def test_report_accepts_snake_case_model():
    signals = MarketSignals(demand_score=80, competitor_strength=20, profit_margin=10)

    report = build_market_report(signals)

    assert report.opportunities.best_opportunity.type == OpportunityType.GREEN
    assert report.profitability.average_sale_price == 100


def test_report_uses_competitor_count_for_decision(signals):
    report = build_market_report(signals)

    saturation = report.decision.viability_checklist[-1]
    assert saturation.item == "Market Saturation (< 15 competitors)"
    assert saturation.status.value == "PASS"


def test_report_fault_propagates(signals):
    signals["demandScore"] = 0

    with pytest.raises(DegenerateInputError):
        build_market_report(signals)


def test_builder_default_language_from_config(signals):
    builder = MarketReportBuilder({"report": {"default_language": "ar"}})

    report = builder.build(signals)

    assert report.language == Language.AR
    assert report.profitability.price_sensitivity == "متوسط"


def test_report_serializes_to_camel_case(signals):
    payload = build_market_report(signals).model_dump(mode="json", by_alias=True)

    assert set(payload) == {"language", "opportunities", "profitability", "decision", "growth"}
    assert payload["opportunities"]["opportunityMap"]["greenZone"] == 1
    assert payload["profitability"]["estimatedMonthlyRevenue"] == "SAR 5,880"
    assert payload["decision"]["viabilityChecklist"][0]["status"] in {"PASS", "WARN", "FAIL"}


def test_null_collections_in_signals_are_empty():
    signals = MarketSignals.model_validate(
        {
            "demandScore": 55,
            "competitorStrength": 45,
            "profitMargin": 45,
            "competitors": None,
            "marketStats": None,
        }
    )

    report = build_market_report(signals)

    assert signals.competitors == []
    assert report.profitability.average_sale_price == 100
    assert report.opportunities.best_opportunity.metrics.competitor_count == 0


def test_report_includes_growth_scenarios(signals):
    report = build_market_report(signals)

    # 49 expected units at 120
    assert report.growth.optimistic.cost_breakdown.units_sold == 49
    assert report.growth.optimistic.monthly_revenue == 5880
    assert report.growth.recommended_scenario == ScenarioName.MODERATE


def test_report_passes_intent_to_growth(signals):
    signals["intentScore"] = 20
    signals["demandScore"] = 80

    report = build_market_report(signals)

    assert report.growth.recommended_scenario == ScenarioName.MODERATE


def test_report_decision_labels_follow_language(signals):
    report = build_market_report(signals, "ar")

    # (48*49*3 + 120*49*0.15*3 + 1500*3) * 1.2
    assert report.decision.estimated_capital == 17042
    assert report.decision.capital_required == "متوسط (15,000 - 30,000 ر.س)"
    assert report.decision.viability_checklist[-1].item == "تشبع السوق (< 15 منافس)"
    assert report.growth.conservative.timeframe == "6-12 شهر"
