import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Trend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class RecommendationType(str, Enum):
    USAGE = "usage"
    AWARENESS = "awareness"
    BALANCE = "balance"
    BREAK = "break"
    TREND = "trend"
    POSITIVE = "positive"
    VARIETY = "variety"
    PEAK = "peak"
    GENERAL = "general"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AnalyticsModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class UsageLogEntry(AnalyticsModel):
    """One user's recorded minutes on one app on one date."""
    user_id: Optional[str] = None
    app_name: str
    minutes_spent: float
    date: datetime.date

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "UsageLogEntry":
        """Build an entry from a stored ``usage_logs`` document."""
        raw_date = doc["date"]
        if isinstance(raw_date, datetime.datetime):
            raw_date = raw_date.date()
        elif isinstance(raw_date, str):
            raw_date = datetime.date.fromisoformat(raw_date)
        user_id = doc.get("user_id")
        return cls(
            user_id=str(user_id) if user_id is not None else None,
            app_name=doc["app_name"],
            minutes_spent=float(doc["minutes_spent"]),
            date=raw_date,
        )


class DailyTotal(AnalyticsModel):
    date: datetime.date
    minutes: float


class WindowStats(AnalyticsModel):
    days_in_window: int
    total_minutes: float
    average_daily_minutes: float
    days_active: int
    trend: Trend
    peak_minutes: float
    breakdown: Dict[str, float]
    daily_totals: List[DailyTotal]


# Weekly and monthly stats share one shape; only the window length differs.
WeeklyStats = WindowStats
MonthlyStats = WindowStats


class AggregatedStats(AnalyticsModel):
    weekly_stats: WindowStats
    monthly_stats: WindowStats


class RiskScore(AnalyticsModel):
    value: int
    level: RiskLevel


class Recommendation(AnalyticsModel):
    type: RecommendationType
    priority: Priority
    title: str
    message: str
    actionable: bool


class RiskAssessment(AnalyticsModel):
    risk_score: RiskScore
    recommendations: List[Recommendation]


class AnalyticsReport(AnalyticsModel):
    risk_score: RiskScore
    weekly_stats: WindowStats
    monthly_stats: WindowStats
    recommendations: List[Recommendation]
    motivational_message: str
