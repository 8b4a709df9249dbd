"""
Usage aggregation.

Turns a user's raw usage-log entries into weekly and monthly window
statistics. Windows end on the reference date (inclusive) and are compared
against the window of equal length immediately before them to classify the
trend.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Sequence

from ..core.exceptions import InvalidInputError
from .models import AggregatedStats, DailyTotal, Trend, UsageLogEntry, WindowStats
from .policy import (
    DEFAULT_TREND_POLICY,
    MAX_APP_NAME_LENGTH,
    MAX_MINUTES_PER_DAY,
    MONTH_DAYS,
    WEEK_DAYS,
    TrendPolicy,
)

logger = logging.getLogger(__name__)


def validate_records(records: Iterable[UsageLogEntry], now: date) -> None:
    """Reject the batch if any record is out of range.

    Raises InvalidInputError listing every problem found; nothing is clamped.
    """
    errors = []
    for index, record in enumerate(records):
        app_name = record.app_name.strip() if record.app_name else ""
        if not app_name:
            errors.append(f"Record {index}: app name is required")
        elif len(app_name) > MAX_APP_NAME_LENGTH:
            errors.append(f"Record {index}: app name cannot exceed {MAX_APP_NAME_LENGTH} characters")
        if not 0 <= record.minutes_spent <= MAX_MINUTES_PER_DAY:
            errors.append(
                f"Record {index}: minutes spent must be between 0 and {MAX_MINUTES_PER_DAY}"
            )
        if record.date > now:
            errors.append(f"Record {index}: date {record.date.isoformat()} is in the future")

    if errors:
        logger.warning(f"Rejecting usage batch with {len(errors)} invalid record(s)")
        raise InvalidInputError(errors)


def classify_trend(current_total: float, prior_total: float,
                   policy: TrendPolicy = DEFAULT_TREND_POLICY) -> Trend:
    """Compare a window total against the prior window of the same length."""
    if prior_total <= 0:
        # No baseline to compare against
        return Trend.STABLE

    tolerance = max(prior_total * policy.relative_tolerance, policy.absolute_tolerance_minutes)
    delta = current_total - prior_total
    if delta > tolerance:
        return Trend.INCREASING
    if -delta > tolerance:
        return Trend.DECREASING
    return Trend.STABLE


class _WindowAccumulator:
    """Collects the current and prior window for one window length."""

    def __init__(self, length: int):
        self.length = length
        self.daily: Dict[date, float] = defaultdict(float)
        self.apps: Dict[str, float] = defaultdict(float)
        self.prior_total = 0.0

    def add(self, offset: int, record: UsageLogEntry) -> None:
        if offset < self.length:
            self.daily[record.date] += record.minutes_spent
            self.apps[record.app_name.strip()] += record.minutes_spent
        elif offset < 2 * self.length:
            self.prior_total += record.minutes_spent

    def build(self, now: date, policy: TrendPolicy) -> WindowStats:
        total = sum(self.daily.values())
        # An empty current window is stable whatever came before it
        trend = classify_trend(total, self.prior_total, policy) if self.daily else Trend.STABLE
        start = now - timedelta(days=self.length - 1)
        daily_totals = [
            DailyTotal(date=day, minutes=self.daily.get(day, 0.0))
            for day in (start + timedelta(days=i) for i in range(self.length))
        ]
        breakdown = dict(sorted(self.apps.items(), key=lambda item: (-item[1], item[0])))

        return WindowStats(
            days_in_window=self.length,
            total_minutes=total,
            average_daily_minutes=total / self.length,
            days_active=len(self.daily),
            trend=trend,
            peak_minutes=max(self.daily.values(), default=0.0),
            breakdown=breakdown,
            daily_totals=daily_totals,
        )


def aggregate_window(records: Sequence[UsageLogEntry], now: date, length: int,
                     policy: TrendPolicy = DEFAULT_TREND_POLICY) -> WindowStats:
    """Statistics for a single window of ``length`` days ending on ``now``."""
    validate_records(records, now)
    accumulator = _WindowAccumulator(length)
    for record in records:
        accumulator.add((now - record.date).days, record)
    return accumulator.build(now, policy)


def aggregate(records: Sequence[UsageLogEntry], now: date,
              policy: TrendPolicy = DEFAULT_TREND_POLICY) -> AggregatedStats:
    """Weekly and monthly statistics for one user's records.

    Records older than twice the longest window are ignored. A single pass
    over the records feeds both windows.
    """
    validate_records(records, now)

    weekly = _WindowAccumulator(WEEK_DAYS)
    monthly = _WindowAccumulator(MONTH_DAYS)
    accumulators: List[_WindowAccumulator] = [weekly, monthly]

    for record in records:
        offset = (now - record.date).days
        for accumulator in accumulators:
            accumulator.add(offset, record)

    stats = AggregatedStats(
        weekly_stats=weekly.build(now, policy),
        monthly_stats=monthly.build(now, policy),
    )
    logger.debug(
        f"Aggregated {len(records)} record(s) as of {now.isoformat()}: "
        f"weekly={stats.weekly_stats.total_minutes} monthly={stats.monthly_stats.total_minutes}"
    )
    return stats
