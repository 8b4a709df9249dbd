import pytest

from usage_tracker.analytics import (
    Priority,
    RecommendationType,
    RiskLevel,
    RiskScore,
    Trend,
    generate_recommendations,
    get_motivational_message,
)
from usage_tracker.analytics.recommendations import RULES

from conftest import window

LOW = RiskScore(value=10, level=RiskLevel.LOW)
MODERATE = RiskScore(value=50, level=RiskLevel.MODERATE)
HIGH = RiskScore(value=90, level=RiskLevel.HIGH)


def types(recommendations):
    return [r.type for r in recommendations]


def test_rule_table_order():
    assert [rule.name for rule in RULES] == [
        "high_risk",
        "moderate_risk",
        "high_daily_average",
        "increasing_trend",
        "decreasing_trend",
        "active_every_day",
        "high_peak_day",
    ]


def test_fallback_when_nothing_fires():
    weekly = window(average=30, days_active=3, peak=60)

    recommendations = generate_recommendations(LOW, weekly, weekly, 60)

    assert len(recommendations) == 1
    assert recommendations[0].type == RecommendationType.GENERAL
    assert recommendations[0].priority == Priority.LOW
    assert recommendations[0].actionable is False
    assert recommendations[0].title == "Stay Mindful"


def test_high_risk_adds_two_high_priority_recommendations():
    weekly = window(average=100, days_active=5, peak=200)

    recommendations = generate_recommendations(HIGH, weekly, weekly, 200)

    assert types(recommendations) == [RecommendationType.USAGE, RecommendationType.AWARENESS]
    assert [r.priority for r in recommendations] == [Priority.HIGH, Priority.HIGH]
    assert [r.actionable for r in recommendations] == [True, False]


def test_moderate_risk_adds_balance():
    weekly = window(average=100, days_active=5, peak=200)

    recommendations = generate_recommendations(MODERATE, weekly, weekly, 200)

    assert types(recommendations) == [RecommendationType.BALANCE]
    assert recommendations[0].priority == Priority.MEDIUM
    assert recommendations[0].actionable is True


def test_break_rule_is_strictly_above_240():
    at_limit = window(average=240, days_active=3, peak=240)
    above = window(average=240.5, days_active=3, peak=240)

    assert RecommendationType.BREAK not in types(generate_recommendations(LOW, at_limit, at_limit, 240))
    assert RecommendationType.BREAK in types(generate_recommendations(LOW, above, above, 240))


@pytest.mark.parametrize("trend, expected", [
    (Trend.INCREASING, RecommendationType.TREND),
    (Trend.DECREASING, RecommendationType.POSITIVE),
])
def test_trend_rules(trend, expected):
    weekly = window(average=30, days_active=3, peak=60, trend=trend)

    recommendations = generate_recommendations(LOW, weekly, weekly, 60)

    assert types(recommendations) == [expected]


def test_positive_reinforcement_is_low_priority_and_not_actionable():
    weekly = window(average=30, days_active=3, peak=60, trend=Trend.DECREASING)

    recommendation = generate_recommendations(LOW, weekly, weekly, 60)[0]

    assert recommendation.priority == Priority.LOW
    assert recommendation.actionable is False


def test_variety_requires_every_day_active():
    six = window(average=30, days_active=6, peak=60)
    seven = window(average=30, days_active=7, peak=60)

    assert RecommendationType.VARIETY not in types(generate_recommendations(LOW, six, six, 60))
    assert types(generate_recommendations(LOW, seven, seven, 60)) == [RecommendationType.VARIETY]


def test_peak_rule_is_strictly_above_360():
    weekly = window(average=30, days_active=3, peak=360)

    assert types(generate_recommendations(LOW, weekly, weekly, 360)) == [RecommendationType.GENERAL]
    assert types(generate_recommendations(LOW, weekly, weekly, 361)) == [RecommendationType.PEAK]


def test_rule_order_is_preserved():
    weekly = window(average=300, days_active=7, peak=300)

    recommendations = generate_recommendations(HIGH, weekly, weekly, 300)

    assert types(recommendations) == [
        RecommendationType.USAGE,
        RecommendationType.AWARENESS,
        RecommendationType.BREAK,
        RecommendationType.VARIETY,
    ]


def test_list_is_truncated_to_five_without_resorting():
    weekly = window(average=300, days_active=7, peak=500, trend=Trend.INCREASING)

    recommendations = generate_recommendations(HIGH, weekly, weekly, 500)

    # peak (rule 7) falls off the end even though it is high priority
    assert types(recommendations) == [
        RecommendationType.USAGE,
        RecommendationType.AWARENESS,
        RecommendationType.BREAK,
        RecommendationType.TREND,
        RecommendationType.VARIETY,
    ]


def test_types_are_unique():
    weekly = window(average=300, days_active=7, peak=500, trend=Trend.DECREASING)

    recommendations = generate_recommendations(MODERATE, weekly, weekly, 500)

    assert len(types(recommendations)) == len(set(types(recommendations)))
    assert len(recommendations) <= 5


@pytest.mark.parametrize("level", [RiskLevel.LOW, RiskLevel.MODERATE, RiskLevel.HIGH])
def test_motivational_message_per_level(level):
    assert get_motivational_message(level)
    assert get_motivational_message(level.value) == get_motivational_message(level)


def test_motivational_message_falls_back_to_low():
    assert get_motivational_message("extreme") == get_motivational_message(RiskLevel.LOW)
    assert get_motivational_message(None) == get_motivational_message(RiskLevel.LOW)
