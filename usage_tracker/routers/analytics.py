from fastapi import APIRouter, Depends, Query
from datetime import date
from typing import Optional
import logging

from ..analytics import aggregate, build_analytics, get_motivational_message, score_and_recommend
from ..core.security import get_current_user
from ..services.mongodb import get_db
from ..services.usage_service import usage_service
from ..utils.helpers import today_in_timezone
from ..utils.validators import validate_usage_date

logger = logging.getLogger(__name__)

router = APIRouter()

def reference_date(as_of: Optional[date] = Query(None, alias="date")) -> date:
    """Day the analytics windows end on; defaults to today."""
    today = today_in_timezone()
    if as_of is None:
        return today
    validate_usage_date(as_of, today)
    return as_of

@router.get("/dashboard")
async def get_dashboard(
    now: date = Depends(reference_date),
    current_user: dict = Depends(get_current_user),
    db=Depends(get_db)
):
    """Risk score, weekly/monthly stats and recommendations"""
    records = await usage_service.get_analytics_records(db, current_user["_id"], now)
    report = build_analytics(records, now)
    logger.info(
        f"Dashboard for user {current_user['_id']} as of {now.isoformat()}: "
        f"risk {report.risk_score.value} ({report.risk_score.level.value})"
    )
    return {"success": True, **report.to_response()}

@router.get("/stats")
async def get_stats(
    now: date = Depends(reference_date),
    current_user: dict = Depends(get_current_user),
    db=Depends(get_db)
):
    """Weekly and monthly usage statistics"""
    records = await usage_service.get_analytics_records(db, current_user["_id"], now)
    stats = aggregate(records, now)
    return {"success": True, **stats.to_response()}

@router.get("/risk-score")
async def get_risk_score(
    now: date = Depends(reference_date),
    current_user: dict = Depends(get_current_user),
    db=Depends(get_db)
):
    """Risk score with recommendations"""
    records = await usage_service.get_analytics_records(db, current_user["_id"], now)
    stats = aggregate(records, now)
    assessment = score_and_recommend(stats.weekly_stats, stats.monthly_stats)
    return {
        "success": True,
        **assessment.to_response(),
        "motivationalMessage": get_motivational_message(assessment.risk_score.level)
    }
