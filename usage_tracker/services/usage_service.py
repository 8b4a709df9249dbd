"""
Usage log service: CRUD over the ``usage_logs`` collection and the
per-request snapshot handed to the analytics engine.
"""
import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from ..analytics.models import UsageLogEntry
from ..analytics.policy import MONTH_DAYS
from ..core.exceptions import DatabaseError, NotFoundError
from ..utils.helpers import utc_now

logger = logging.getLogger(__name__)

# Current month plus the prior month used as the trend baseline
ANALYTICS_LOOKBACK_DAYS = 2 * MONTH_DAYS

class UsageService:
    """Service for handling usage-log operations"""

    async def create_log(self, db, user_id: ObjectId, app_name: str,
                         minutes_spent: float, usage_date: date) -> Dict[str, Any]:
        """Record minutes spent on one app on one date."""
        now = utc_now()
        doc = {
            "user_id": user_id,
            "app_name": app_name,
            "minutes_spent": float(minutes_spent),
            "date": usage_date.isoformat(),
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await db.usage_logs.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"Failed to store usage log for user {user_id}: {str(e)}")
            raise DatabaseError("Failed to save usage log")
        doc["_id"] = result.inserted_id
        logger.info(f"Usage log {doc['_id']} created for user {user_id}: {app_name} {minutes_spent}m on {doc['date']}")
        return doc

    async def list_logs(self, db, user_id: ObjectId, start_date: Optional[date] = None,
                        end_date: Optional[date] = None, app_name: Optional[str] = None,
                        page: int = 1, limit: int = 50) -> Tuple[List[Dict[str, Any]], int]:
        """Get a page of a user's logs, newest first, with the total match count."""
        query: Dict[str, Any] = {"user_id": user_id}

        date_filter = {}
        if start_date:
            date_filter["$gte"] = start_date.isoformat()
        if end_date:
            date_filter["$lte"] = end_date.isoformat()
        if date_filter:
            query["date"] = date_filter
        if app_name:
            query["app_name"] = app_name

        total = await db.usage_logs.count_documents(query)
        skip = (page - 1) * limit
        logs = await db.usage_logs.find(
            query,
            sort=[("date", DESCENDING), ("created_at", DESCENDING)],
            skip=skip,
            limit=limit
        ).to_list(length=limit)
        return logs, total

    async def get_log(self, db, user_id: ObjectId, log_id: ObjectId) -> Dict[str, Any]:
        """Get one of the user's logs; other users' logs are reported as missing."""
        log = await db.usage_logs.find_one({"_id": log_id, "user_id": user_id})
        if not log:
            raise NotFoundError("Usage log not found")
        return log

    async def update_log(self, db, user_id: ObjectId, log_id: ObjectId, app_name: str,
                         minutes_spent: float, usage_date: date) -> Dict[str, Any]:
        """Replace the editable fields of a log."""
        await self.get_log(db, user_id, log_id)
        try:
            await db.usage_logs.update_one(
                {"_id": log_id, "user_id": user_id},
                {"$set": {
                    "app_name": app_name,
                    "minutes_spent": float(minutes_spent),
                    "date": usage_date.isoformat(),
                    "updated_at": utc_now(),
                }}
            )
        except PyMongoError as e:
            logger.error(f"Failed to update usage log {log_id}: {str(e)}")
            raise DatabaseError("Failed to update usage log")
        logger.info(f"Usage log {log_id} updated for user {user_id}")
        return await self.get_log(db, user_id, log_id)

    async def delete_log(self, db, user_id: ObjectId, log_id: ObjectId) -> None:
        try:
            result = await db.usage_logs.delete_one({"_id": log_id, "user_id": user_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete usage log {log_id}: {str(e)}")
            raise DatabaseError("Failed to delete usage log")
        if result.deleted_count == 0:
            raise NotFoundError("Usage log not found")
        logger.info(f"Usage log {log_id} deleted for user {user_id}")

    async def get_analytics_records(self, db, user_id: ObjectId, now: date,
                                    lookback_days: int = ANALYTICS_LOOKBACK_DAYS) -> List[UsageLogEntry]:
        """Snapshot of the logs the analytics windows can see as of ``now``."""
        start = now - timedelta(days=lookback_days - 1)
        docs = await db.usage_logs.find({
            "user_id": user_id,
            "date": {"$gte": start.isoformat(), "$lte": now.isoformat()}
        }).to_list(length=None)
        logger.debug(f"Fetched {len(docs)} usage log(s) for analytics of user {user_id}")
        return [UsageLogEntry.from_document(doc) for doc in docs]

# Create a singleton instance
usage_service = UsageService()
