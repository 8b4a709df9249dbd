"""
Tunable policy tables for the analytics engine.

All thresholds used by the aggregator, the risk scorer and the
recommendation rules live here so they can be swapped as a unit.
"""

from dataclasses import dataclass

WEEK_DAYS = 7
MONTH_DAYS = 30

# Input limits shared by the API validators and the aggregator
MAX_MINUTES_PER_DAY = 1440
MAX_APP_NAME_LENGTH = 100


@dataclass(frozen=True)
class TrendPolicy:
    """Tolerance a window must exceed, relative to the prior window, to count as a trend.

    The tolerance is the larger of the two, so a change must beat both the
    relative and the absolute threshold. This is the stricter reading: a
    window of 500 minutes against a prior 480 is stable (20 < max(24, 10)),
    which the looser min() would call increasing.
    """
    relative_tolerance: float = 0.05
    absolute_tolerance_minutes: float = 10.0


@dataclass(frozen=True)
class RiskPolicy:
    """Weights and saturation points for the 0-100 risk score."""
    average_weight: float = 50.0
    average_saturation_minutes: float = 360.0
    consistency_weight: float = 20.0
    consistency_saturation_days: int = WEEK_DAYS
    peak_weight: float = 30.0
    peak_saturation_minutes: float = 480.0
    # value < moderate_threshold -> low, value > high_threshold -> high
    moderate_threshold: int = 34
    high_threshold: int = 66


@dataclass(frozen=True)
class RecommendationPolicy:
    high_average_minutes: float = 240.0
    high_peak_minutes: float = 360.0
    full_week_days: int = WEEK_DAYS
    max_recommendations: int = 5


DEFAULT_TREND_POLICY = TrendPolicy()
DEFAULT_RISK_POLICY = RiskPolicy()
DEFAULT_RECOMMENDATION_POLICY = RecommendationPolicy()
