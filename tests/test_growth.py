import pytest

from market_scout.scoring import (
    GrowthScenarioScorer,
    Language,
    calculate_growth_scenarios,
    calculate_profitability,
)
from market_scout.scoring.models import ScenarioName


@pytest.fixture
def strong_forecast():
    # Sale price 200, 60 units/month, 50% margin
    return calculate_profitability({"averagePrice": 200}, [], 80)


def test_scenario_units_follow_the_forecast(strong_forecast):
    result = calculate_growth_scenarios(80, strong_forecast, 30)

    assert result.conservative.cost_breakdown.units_sold == 18
    assert result.moderate.cost_breakdown.units_sold == 36
    assert result.optimistic.cost_breakdown.units_sold == 60


def test_optimistic_cost_breakdown(strong_forecast):
    result = calculate_growth_scenarios(80, strong_forecast, 30)

    optimistic = result.optimistic
    costs = optimistic.cost_breakdown
    assert optimistic.monthly_revenue == 12000
    assert costs.product_costs == 4560  # 5% volume discount
    assert costs.shipping_costs == 540  # 10% shipping discount
    assert costs.platform_fees == 600
    assert costs.marketing_budget == 2160
    assert costs.operational_expenses == 2860
    assert costs.total_costs == 10720
    assert optimistic.monthly_profit == 1280
    assert costs.price_per_unit == 200
    assert costs.cost_per_unit == 76
    assert costs.profit_per_unit == 105
    assert optimistic.growth_rate == 30
    assert optimistic.timeframe == "1-3 months"


def test_moderate_marketing_is_a_share_of_its_own_revenue(strong_forecast):
    result = calculate_growth_scenarios(80, strong_forecast, 30)

    moderate = result.moderate
    assert moderate.monthly_revenue == 7200
    assert moderate.cost_breakdown.marketing_budget == 864
    assert moderate.cost_breakdown.total_costs == 6752
    assert moderate.monthly_profit == 448


def test_conservative_profit_is_floored_at_zero(strong_forecast):
    result = calculate_growth_scenarios(80, strong_forecast, 30)

    conservative = result.conservative
    assert conservative.monthly_revenue == 3600
    assert conservative.cost_breakdown.total_costs == 3768
    assert conservative.monthly_profit == 0
    assert conservative.growth_rate == 5


@pytest.mark.parametrize(
    "strength, units",
    [
        (55, (14, 29, 48)),
        (75, (11, 22, 36)),
    ],
)
def test_strong_competition_reduces_units(strong_forecast, strength, units):
    result = calculate_growth_scenarios(80, strong_forecast, strength)

    assert (
        result.conservative.cost_breakdown.units_sold,
        result.moderate.cost_breakdown.units_sold,
        result.optimistic.cost_breakdown.units_sold,
    ) == units


def test_unit_floors_apply_to_small_markets():
    forecast = calculate_profitability({}, [], 5)

    result = calculate_growth_scenarios(5, forecast, 30)

    assert result.conservative.cost_breakdown.units_sold == 5
    assert result.moderate.cost_breakdown.units_sold == 15
    assert result.optimistic.cost_breakdown.units_sold == 30


@pytest.mark.parametrize(
    "demand, strength, intent, expected",
    [
        (80, 30, None, ScenarioName.OPTIMISTIC),
        (80, 75, None, ScenarioName.CONSERVATIVE),
        (30, 30, None, ScenarioName.CONSERVATIVE),
        (60, 30, None, ScenarioName.MODERATE),
        (80, 75, 80, ScenarioName.MODERATE),
        (80, 30, 30, ScenarioName.MODERATE),
        (80, 30, 80, ScenarioName.OPTIMISTIC),
        (60, 30, 50, ScenarioName.MODERATE),
    ],
)
def test_recommended_scenario(strong_forecast, demand, strength, intent, expected):
    result = calculate_growth_scenarios(demand, strong_forecast, strength, intent_score=intent)

    assert result.recommended_scenario == expected


def test_low_intent_of_zero_still_counts(strong_forecast):
    result = calculate_growth_scenarios(80, strong_forecast, 30, intent_score=0)

    assert result.recommended_scenario == ScenarioName.MODERATE


def test_scalability_factors(strong_forecast):
    result = calculate_growth_scenarios(80, strong_forecast, 30)

    assert result.scalability_factors == [
        "Strong market demand supports rapid expansion",
        "Good profit margins allow for reinvestment",
        "Moderate competition facilitates market entry",
        "Potential to expand into similar products",
        "Multiple sales channels available (Noon, Amazon, own store)",
        "Low-priced product facilitates high-volume sales",
    ]


def test_expensive_crowded_market_has_only_generic_factors():
    forecast = calculate_profitability({"averagePrice": 800}, [], 30)

    result = calculate_growth_scenarios(30, forecast, 80)

    assert result.scalability_factors == [
        "Good profit margins allow for reinvestment",
        "Potential to expand into similar products",
        "Multiple sales channels available (Noon, Amazon, own store)",
    ]


def test_english_assumptions(strong_forecast):
    result = calculate_growth_scenarios(80, strong_forecast, 30)

    assert result.conservative.assumptions == [
        "Slow start with focus on risk minimization",
        "Selling 18 units monthly initially",
        "Limited marketing budget: SAR 288/month",
        "Unit cost: SAR 80",
    ]
    assert result.optimistic.assumptions[2] == "Strong marketing budget: SAR 2,160/month"
    assert result.optimistic.assumptions[3] == "Expected profit margin: 50%"


def test_arabic_labels(strong_forecast):
    result = calculate_growth_scenarios(80, strong_forecast, 30, lang="ar")

    assert result.moderate.timeframe == "3-6 أشهر"
    assert result.moderate.assumptions == [
        "استراتيجية متوازنة بين النمو والحذر",
        "بيع 36 وحدة شهرياً",
        "ميزانية تسويق متوسطة: 864 ر.س/شهر",
        "سعر البيع: 200 ر.س",
    ]
    assert result.scalability_factors[0] == "طلب سوق قوي يدعم التوسع السريع"


def test_language_does_not_change_figures(strong_forecast):
    english = calculate_growth_scenarios(80, strong_forecast, 30)
    arabic = calculate_growth_scenarios(80, strong_forecast, 30, lang=Language.AR)

    assert arabic.optimistic.cost_breakdown == english.optimistic.cost_breakdown
    assert arabic.recommended_scenario == english.recommended_scenario


def test_without_forecast_uses_market_price_and_default_costs():
    result = calculate_growth_scenarios(40, None, 40, {"averagePrice": 120})

    conservative = result.conservative.cost_breakdown
    assert conservative.units_sold == 6
    assert conservative.price_per_unit == 120
    assert conservative.cost_per_unit == 48
    assert conservative.profit_per_unit == 60
    assert result.moderate.cost_breakdown.units_sold == 15
    assert result.optimistic.cost_breakdown.units_sold == 30
    assert result.optimistic.cost_breakdown.cost_per_unit == 46
    assert result.optimistic.monthly_revenue == 3600
    assert result.recommended_scenario == ScenarioName.MODERATE
    assert len(result.scalability_factors) == 4


def test_without_forecast_or_market_price_uses_fallback_price():
    result = calculate_growth_scenarios(40, None, 40)

    assert result.moderate.cost_breakdown.price_per_unit == 100


def test_cost_model_follows_config():
    scorer = GrowthScenarioScorer({"profitability": {"product_cost_percent": 0.5}})

    result = scorer.calculate(40, None, 40)

    assert result.conservative.cost_breakdown.cost_per_unit == 50


def test_currency_follows_config(strong_forecast):
    scorer = GrowthScenarioScorer({"currency": {"code": "AED", "suffix": "د.إ"}})

    english = scorer.calculate(80, strong_forecast, 30)
    arabic = scorer.calculate(80, strong_forecast, 30, lang="ar")

    assert english.conservative.assumptions[2] == "Limited marketing budget: AED 288/month"
    assert arabic.conservative.assumptions[3] == "تكلفة الوحدة: 80 د.إ"


def test_wire_format_uses_camel_case(strong_forecast):
    payload = calculate_growth_scenarios(80, strong_forecast, 30).model_dump(
        mode="json", by_alias=True
    )

    assert payload["recommendedScenario"] == "optimistic"
    assert payload["optimistic"]["costBreakdown"]["marketingBudget"] == 2160
    assert payload["conservative"]["monthlyProfit"] == 0
