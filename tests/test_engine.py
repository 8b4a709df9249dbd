import pytest

from usage_tracker.analytics import (
    RecommendationType,
    RiskLevel,
    Trend,
    aggregate,
    build_analytics,
    score_and_recommend,
)

from conftest import NOW, daily_entries, entry, window


def types(assessment):
    return [r.type for r in assessment.recommendations]


def test_score_and_recommend_is_deterministic():
    stats = aggregate(daily_entries(range(7), 300) + [entry(2, 90, "TikTok")], NOW)

    first = score_and_recommend(stats.weekly_stats, stats.monthly_stats)
    second = score_and_recommend(stats.weekly_stats, stats.monthly_stats)

    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_seven_heavy_days_scenario():
    stats = aggregate(daily_entries(range(7), 300), NOW)

    assessment = score_and_recommend(stats.weekly_stats, stats.monthly_stats, stats.weekly_stats.peak_minutes)

    assert stats.weekly_stats.days_active == 7
    assert stats.weekly_stats.average_daily_minutes == 300
    assert assessment.risk_score.level == RiskLevel.HIGH
    assert types(assessment) == [
        RecommendationType.USAGE,
        RecommendationType.AWARENESS,
        RecommendationType.BREAK,
        RecommendationType.VARIETY,
    ]


def test_single_heavy_day_scenario():
    stats = aggregate([entry(4, 400)], NOW)

    assessment = score_and_recommend(stats.weekly_stats, stats.monthly_stats, stats.weekly_stats.peak_minutes)

    assert stats.weekly_stats.peak_minutes == 400
    assert stats.weekly_stats.average_daily_minutes == pytest.approx(57.1, abs=0.05)
    assert RecommendationType.PEAK in types(assessment)


def test_peak_defaults_to_highest_day_across_windows():
    # The spike is outside the week but inside the month
    stats = aggregate([entry(0, 20), entry(20, 420)], NOW)

    assessment = score_and_recommend(stats.weekly_stats, stats.monthly_stats)

    assert stats.weekly_stats.peak_minutes == 20
    assert stats.monthly_stats.peak_minutes == 420
    assert RecommendationType.PEAK in types(assessment)


def test_explicit_peak_overrides_default():
    weekly = window(average=30, days_active=2, peak=40)
    monthly = window(average=30, days_active=2, peak=500, days=30)

    assessment = score_and_recommend(weekly, monthly, peak_minutes=40)

    assert types(assessment) == [RecommendationType.GENERAL]


def test_quiet_user_gets_single_general_recommendation():
    stats = aggregate([entry(1, 15), entry(3, 20)], NOW)

    assessment = score_and_recommend(stats.weekly_stats, stats.monthly_stats)

    assert assessment.risk_score.level == RiskLevel.LOW
    assert types(assessment) == [RecommendationType.GENERAL]


def test_score_and_recommend_does_not_mutate_inputs():
    stats = aggregate(daily_entries(range(7), 250), NOW)
    before = stats.model_dump_json()

    score_and_recommend(stats.weekly_stats, stats.monthly_stats)

    assert stats.model_dump_json() == before


def test_build_analytics_json_shape():
    records = daily_entries(range(7), 100) + daily_entries(range(7, 11), 100, "TikTok")

    report = build_analytics(records, NOW).to_response()

    assert set(report) == {
        "riskScore", "weeklyStats", "monthlyStats", "recommendations", "motivationalMessage"
    }
    assert set(report["riskScore"]) == {"value", "level"}
    weekly = report["weeklyStats"]
    for key in ("totalMinutes", "averageDailyMinutes", "daysActive", "trend", "peakMinutes", "breakdown"):
        assert key in weekly
    assert weekly["trend"] == Trend.INCREASING.value
    assert weekly["breakdown"] == {"Instagram": 700}
    assert report["monthlyStats"]["breakdown"] == {"Instagram": 700, "TikTok": 400}
    assert weekly["dailyTotals"][-1] == {"date": NOW.isoformat(), "minutes": 100}
    assert set(report["recommendations"][0]) == {"type", "priority", "title", "message", "actionable"}
    assert len(report["recommendations"]) <= 5


def test_build_analytics_with_no_records():
    report = build_analytics([], NOW)

    assert report.risk_score.value == 0
    assert report.risk_score.level == RiskLevel.LOW
    assert [r.type for r in report.recommendations] == [RecommendationType.GENERAL]
    assert report.motivational_message.startswith("Your usage patterns are well-balanced")
