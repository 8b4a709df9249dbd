"""
Recommendation engine.

Behavioral suggestions derived from aggregated usage, written in a
supportive, non-judgmental tone. Rules are a fixed ordered table of
(guard, payloads) pairs; the table order is the output order.
"""

import logging
from typing import Callable, List, NamedTuple, Optional, Tuple

from .models import (
    Priority,
    Recommendation,
    RecommendationType,
    RiskLevel,
    RiskScore,
    Trend,
    WindowStats,
)
from .policy import DEFAULT_RECOMMENDATION_POLICY, RecommendationPolicy

logger = logging.getLogger(__name__)


class RuleContext(NamedTuple):
    """Everything a rule guard may look at."""
    risk_score: RiskScore
    weekly_stats: WindowStats
    monthly_stats: WindowStats
    peak_minutes: float
    policy: RecommendationPolicy


class RecommendationRule(NamedTuple):
    name: str
    guard: Callable[[RuleContext], bool]
    recommendations: Tuple[Recommendation, ...]


SET_TIME_BOUNDARIES = Recommendation(
    type=RecommendationType.USAGE,
    priority=Priority.HIGH,
    title="Consider Setting Time Boundaries",
    message=(
        "Your usage patterns suggest frequent engagement. You might benefit from setting "
        "specific time limits or break reminders during your most active hours."
    ),
    actionable=True,
)

TRACK_PEAK_HOURS = Recommendation(
    type=RecommendationType.AWARENESS,
    priority=Priority.HIGH,
    title="Track Your Peak Hours",
    message=(
        "You're most active during peak usage periods. Being aware of these patterns can "
        "help you make more intentional choices about when to engage."
    ),
    actionable=False,
)

MAINTAIN_BALANCE = Recommendation(
    type=RecommendationType.BALANCE,
    priority=Priority.MEDIUM,
    title="Maintain Healthy Balance",
    message=(
        "Your usage is moderate. Consider maintaining awareness and setting gentle reminders "
        "to ensure your engagement remains balanced with other activities."
    ),
    actionable=True,
)

TAKE_BREAKS = Recommendation(
    type=RecommendationType.BREAK,
    priority=Priority.MEDIUM,
    title="Take Regular Breaks",
    message=(
        "Consider incorporating short breaks between sessions. Even 5-10 minute breaks can "
        "help refresh your focus."
    ),
    actionable=True,
)

NOTICE_TREND = Recommendation(
    type=RecommendationType.TREND,
    priority=Priority.MEDIUM,
    title="Notice Usage Trends",
    message=(
        "Your usage has been increasing recently. This might be a good time to reflect on "
        "your goals and set some gentle boundaries if needed."
    ),
    actionable=True,
)

GREAT_PROGRESS = Recommendation(
    type=RecommendationType.POSITIVE,
    priority=Priority.LOW,
    title="Great Progress!",
    message=(
        "You've been reducing your usage recently. Keep up the awareness and continue making "
        "choices that align with your goals."
    ),
    actionable=False,
)

DIVERSIFY_ACTIVITIES = Recommendation(
    type=RecommendationType.VARIETY,
    priority=Priority.MEDIUM,
    title="Diversify Your Activities",
    message=(
        "You engage daily. Consider exploring other activities or hobbies on some days to "
        "create variety in your routine."
    ),
    actionable=True,
)

MANAGE_HIGH_USAGE_DAYS = Recommendation(
    type=RecommendationType.PEAK,
    priority=Priority.HIGH,
    title="Manage High-Usage Days",
    message=(
        "Some days show particularly high usage. You might find it helpful to plan alternative "
        "activities for days when you notice you're spending extended time."
    ),
    actionable=True,
)

STAY_MINDFUL = Recommendation(
    type=RecommendationType.GENERAL,
    priority=Priority.LOW,
    title="Stay Mindful",
    message=(
        "Regular tracking helps build awareness. Continue monitoring your patterns and make "
        "adjustments that feel right for you."
    ),
    actionable=False,
)

RULES: Tuple[RecommendationRule, ...] = (
    RecommendationRule(
        "high_risk",
        lambda ctx: ctx.risk_score.level == RiskLevel.HIGH,
        (SET_TIME_BOUNDARIES, TRACK_PEAK_HOURS),
    ),
    RecommendationRule(
        "moderate_risk",
        lambda ctx: ctx.risk_score.level == RiskLevel.MODERATE,
        (MAINTAIN_BALANCE,),
    ),
    RecommendationRule(
        "high_daily_average",
        lambda ctx: ctx.weekly_stats.average_daily_minutes > ctx.policy.high_average_minutes,
        (TAKE_BREAKS,),
    ),
    RecommendationRule(
        "increasing_trend",
        lambda ctx: ctx.weekly_stats.trend == Trend.INCREASING,
        (NOTICE_TREND,),
    ),
    RecommendationRule(
        "decreasing_trend",
        lambda ctx: ctx.weekly_stats.trend == Trend.DECREASING,
        (GREAT_PROGRESS,),
    ),
    RecommendationRule(
        "active_every_day",
        lambda ctx: ctx.weekly_stats.days_active == ctx.policy.full_week_days,
        (DIVERSIFY_ACTIVITIES,),
    ),
    RecommendationRule(
        "high_peak_day",
        lambda ctx: ctx.peak_minutes > ctx.policy.high_peak_minutes,
        (MANAGE_HIGH_USAGE_DAYS,),
    ),
)

FALLBACK = STAY_MINDFUL

MOTIVATIONAL_MESSAGES = {
    RiskLevel.LOW: "Your usage patterns are well-balanced. Keep up the great awareness!",
    RiskLevel.MODERATE: (
        "You're maintaining moderate engagement. Continue being mindful of your patterns."
    ),
    RiskLevel.HIGH: (
        "Your usage patterns show frequent engagement. Awareness is the first step toward "
        "intentional choices. You've got this!"
    ),
}


def matching_rules(context: RuleContext,
                   rules: Tuple[RecommendationRule, ...] = RULES) -> List[RecommendationRule]:
    """Rules whose guard holds, in table order."""
    return [rule for rule in rules if rule.guard(context)]


def generate_recommendations(
    risk_score: RiskScore,
    weekly_stats: WindowStats,
    monthly_stats: WindowStats,
    peak_minutes: float,
    policy: RecommendationPolicy = DEFAULT_RECOMMENDATION_POLICY,
    rules: Tuple[RecommendationRule, ...] = RULES,
) -> List[Recommendation]:
    """Ordered recommendations, capped at ``policy.max_recommendations``.

    Output is never re-sorted: table order is the priority order, and the
    list is cut after the cap.
    """
    context = RuleContext(risk_score, weekly_stats, monthly_stats, peak_minutes, policy)

    recommendations: List[Recommendation] = []
    fired = matching_rules(context, rules)
    for rule in fired:
        recommendations.extend(rule.recommendations)

    if not fired:
        recommendations.append(FALLBACK)

    logger.debug(f"Recommendation rules fired: {[rule.name for rule in fired] or ['fallback']}")
    return recommendations[:policy.max_recommendations]


def get_motivational_message(level: Optional[RiskLevel]) -> str:
    """Supportive sentence for a risk level; unknown levels read as low."""
    try:
        return MOTIVATIONAL_MESSAGES[RiskLevel(level)]
    except ValueError:
        return MOTIVATIONAL_MESSAGES[RiskLevel.LOW]
