from .aggregator import aggregate, aggregate_window, classify_trend, validate_records
from .engine import build_analytics, score_and_recommend
from .models import (
    AggregatedStats,
    AnalyticsReport,
    Priority,
    Recommendation,
    RecommendationType,
    RiskAssessment,
    RiskLevel,
    RiskScore,
    Trend,
    UsageLogEntry,
    WindowStats,
)
from .recommendations import generate_recommendations, get_motivational_message
from .risk import classify_risk, compute_risk_score

__all__ = [
    'aggregate',
    'aggregate_window',
    'classify_trend',
    'validate_records',
    'build_analytics',
    'score_and_recommend',
    'AggregatedStats',
    'AnalyticsReport',
    'Priority',
    'Recommendation',
    'RecommendationType',
    'RiskAssessment',
    'RiskLevel',
    'RiskScore',
    'Trend',
    'UsageLogEntry',
    'WindowStats',
    'generate_recommendations',
    'get_motivational_message',
    'classify_risk',
    'compute_risk_score',
]
