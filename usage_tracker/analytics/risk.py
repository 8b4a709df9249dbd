"""Risk scoring over aggregated usage statistics."""

import logging

from .models import RiskLevel, RiskScore, WindowStats
from .policy import DEFAULT_RISK_POLICY, RiskPolicy

logger = logging.getLogger(__name__)


def _saturating(value: float, saturation: float) -> float:
    if saturation <= 0:
        return 0.0
    return min(max(value, 0.0) / saturation, 1.0)


def classify_risk(value: int, policy: RiskPolicy = DEFAULT_RISK_POLICY) -> RiskLevel:
    """Map a 0-100 score to a level; both moderate bounds are inclusive."""
    if value < policy.moderate_threshold:
        return RiskLevel.LOW
    if value <= policy.high_threshold:
        return RiskLevel.MODERATE
    return RiskLevel.HIGH


def compute_risk_score(weekly_stats: WindowStats, peak_minutes: float,
                       policy: RiskPolicy = DEFAULT_RISK_POLICY) -> RiskScore:
    """Combine average, consistency and peak contributions into a RiskScore."""
    average_part = policy.average_weight * _saturating(
        weekly_stats.average_daily_minutes, policy.average_saturation_minutes
    )
    consistency_part = policy.consistency_weight * _saturating(
        weekly_stats.days_active, policy.consistency_saturation_days
    )
    peak_part = policy.peak_weight * _saturating(peak_minutes, policy.peak_saturation_minutes)

    value = int(round(average_part + consistency_part + peak_part))
    value = min(max(value, 0), 100)

    logger.debug(
        f"Risk components average={average_part:.2f} consistency={consistency_part:.2f} "
        f"peak={peak_part:.2f} -> {value}"
    )
    return RiskScore(value=value, level=classify_risk(value, policy))
