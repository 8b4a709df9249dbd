from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import Optional
import logging

from ..core.security import get_current_user
from ..models.database import UsageLog
from ..services.mongodb import get_db
from ..services.usage_service import usage_service
from ..utils.helpers import pagination_info, parse_object_id, today_in_timezone
from ..utils.validators import (
    validate_app_name,
    validate_date_range,
    validate_minutes_spent,
    validate_pagination_params,
    validate_usage_date
)

logger = logging.getLogger(__name__)

router = APIRouter()

class UsageLogRequest(BaseModel):
    app_name: str = Field(alias="appName")
    minutes_spent: float = Field(alias="minutesSpent")
    usage_date: Optional[date] = Field(default=None, alias="date")

    model_config = ConfigDict(populate_by_name=True)

def _validated_fields(data: UsageLogRequest):
    """Trimmed app name, minutes and usage date (defaulting to today)."""
    today = today_in_timezone()
    app_name = validate_app_name(data.app_name)
    validate_minutes_spent(data.minutes_spent)
    usage_date = data.usage_date or today
    validate_usage_date(usage_date, today)
    return app_name, data.minutes_spent, usage_date

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_usage_log(
    data: UsageLogRequest,
    current_user: dict = Depends(get_current_user),
    db=Depends(get_db)
):
    """Record time spent on an app"""
    app_name, minutes_spent, usage_date = _validated_fields(data)
    log = await usage_service.create_log(db, current_user["_id"], app_name, minutes_spent, usage_date)
    return {
        "success": True,
        "message": "Usage log created",
        "data": UsageLog.from_document(log).to_response()
    }

@router.get("")
async def get_usage_logs(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    app_name: Optional[str] = Query(None, alias="appName"),
    page: int = Query(1),
    limit: int = Query(50),
    current_user: dict = Depends(get_current_user),
    db=Depends(get_db)
):
    """Get a paginated list of the current user's usage logs"""
    validate_date_range(start_date, end_date)
    validate_pagination_params(page, limit)

    logs, total = await usage_service.list_logs(
        db,
        current_user["_id"],
        start_date=start_date,
        end_date=end_date,
        app_name=app_name.strip() if app_name else None,
        page=page,
        limit=limit
    )
    return {
        "success": True,
        "data": [UsageLog.from_document(log).to_response() for log in logs],
        "pagination": pagination_info(total, page, limit)
    }

@router.get("/{log_id}")
async def get_usage_log(
    log_id: str,
    current_user: dict = Depends(get_current_user),
    db=Depends(get_db)
):
    """Get a single usage log"""
    log = await usage_service.get_log(db, current_user["_id"], parse_object_id(log_id, "Usage log"))
    return {"success": True, "data": UsageLog.from_document(log).to_response()}

@router.put("/{log_id}")
async def update_usage_log(
    log_id: str,
    data: UsageLogRequest,
    current_user: dict = Depends(get_current_user),
    db=Depends(get_db)
):
    """Update a usage log"""
    object_id = parse_object_id(log_id, "Usage log")
    app_name, minutes_spent, usage_date = _validated_fields(data)
    log = await usage_service.update_log(
        db, current_user["_id"], object_id, app_name, minutes_spent, usage_date
    )
    return {
        "success": True,
        "message": "Usage log updated",
        "data": UsageLog.from_document(log).to_response()
    }

@router.delete("/{log_id}")
async def delete_usage_log(
    log_id: str,
    current_user: dict = Depends(get_current_user),
    db=Depends(get_db)
):
    """Delete a usage log"""
    await usage_service.delete_log(db, current_user["_id"], parse_object_id(log_id, "Usage log"))
    return {"success": True, "message": "Usage log deleted"}
