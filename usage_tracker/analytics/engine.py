"""
Analytics engine facade.

``score_and_recommend`` turns aggregated statistics into a risk score and
recommendations; ``build_analytics`` runs the whole pipeline from raw
records. Both are pure: same inputs, same output.
"""

import logging
from datetime import date
from typing import Optional, Sequence

from .aggregator import aggregate
from .models import AnalyticsReport, RiskAssessment, UsageLogEntry, WindowStats
from .policy import (
    DEFAULT_RECOMMENDATION_POLICY,
    DEFAULT_RISK_POLICY,
    DEFAULT_TREND_POLICY,
    RecommendationPolicy,
    RiskPolicy,
    TrendPolicy,
)
from .recommendations import generate_recommendations, get_motivational_message
from .risk import compute_risk_score

logger = logging.getLogger(__name__)


def score_and_recommend(
    weekly_stats: WindowStats,
    monthly_stats: WindowStats,
    peak_minutes: Optional[float] = None,
    risk_policy: RiskPolicy = DEFAULT_RISK_POLICY,
    recommendation_policy: RecommendationPolicy = DEFAULT_RECOMMENDATION_POLICY,
) -> RiskAssessment:
    """Risk score and ordered recommendations for one user's statistics.

    When ``peak_minutes`` is not given, the highest single day across both
    windows is used.
    """
    if peak_minutes is None:
        peak_minutes = max(weekly_stats.peak_minutes, monthly_stats.peak_minutes)

    risk_score = compute_risk_score(weekly_stats, peak_minutes, risk_policy)
    recommendations = generate_recommendations(
        risk_score, weekly_stats, monthly_stats, peak_minutes, recommendation_policy
    )
    return RiskAssessment(risk_score=risk_score, recommendations=recommendations)


def build_analytics(
    records: Sequence[UsageLogEntry],
    now: date,
    trend_policy: TrendPolicy = DEFAULT_TREND_POLICY,
    risk_policy: RiskPolicy = DEFAULT_RISK_POLICY,
    recommendation_policy: RecommendationPolicy = DEFAULT_RECOMMENDATION_POLICY,
) -> AnalyticsReport:
    stats = aggregate(records, now, trend_policy)
    assessment = score_and_recommend(
        stats.weekly_stats,
        stats.monthly_stats,
        risk_policy=risk_policy,
        recommendation_policy=recommendation_policy,
    )
    logger.debug(
        f"Analytics as of {now.isoformat()}: risk {assessment.risk_score.value} "
        f"({assessment.risk_score.level.value}), {len(assessment.recommendations)} recommendation(s)"
    )
    return AnalyticsReport(
        risk_score=assessment.risk_score,
        weekly_stats=stats.weekly_stats,
        monthly_stats=stats.monthly_stats,
        recommendations=assessment.recommendations,
        motivational_message=get_motivational_message(assessment.risk_score.level),
    )
