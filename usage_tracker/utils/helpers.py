from datetime import date, datetime, timezone
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo
import logging

from bson import ObjectId
from bson.errors import InvalidId

from ..core.config import get_settings
from ..core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

def ensure_timezone_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime object is timezone-aware by adding UTC timezone if needed."""
    if dt and dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def today_in_timezone(tz_name: Optional[str] = None) -> date:
    """Current calendar date in the configured reference timezone."""
    tz_name = tz_name or get_settings().TIMEZONE
    return datetime.now(ZoneInfo(tz_name)).date()

def parse_object_id(value: str, resource: str = "Resource") -> ObjectId:
    """Parse a path id; malformed ids are reported as not found."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFoundError(f"{resource} not found")

def pagination_info(total: int, page: int, per_page: int) -> Dict[str, Any]:
    return {
        "total": total,
        "page": page,
        "per_page": per_page,
        "pages": (total + per_page - 1) // per_page
    }
