from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import logging
import psutil
import time

from ..services.mongodb import get_database

logger = logging.getLogger(__name__)

router = APIRouter()

MEMORY_WARNING_MB = 500

@router.get("")
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    health_data = {
        "status": "healthy",
        "components": {},
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

    start_time = getattr(request.app.state, "start_time", None)
    if start_time is not None:
        health_data["uptime_seconds"] = round(time.time() - start_time, 1)

    # Check database connection
    db = get_database()
    try:
        if db is None:
            raise RuntimeError("Database connection not available")

        start_time = time.time()
        await db.command("ping")
        db_response_time = time.time() - start_time

        health_data["components"]["database"] = {
            "status": "connected",
            "response_time_ms": round(db_response_time * 1000, 2)
        }
    except Exception as e:
        logger.error(f"Database health check error: {str(e)}")
        health_data["status"] = "unhealthy"
        health_data["components"]["database"] = {
            "status": "error",
            "error": str(e)
        }

    # Check memory usage
    try:
        memory_mb = psutil.Process().memory_info().rss / 1024 / 1024
        health_data["components"]["memory"] = {
            "status": "ok" if memory_mb < MEMORY_WARNING_MB else "warning",
            "usage_mb": round(memory_mb, 2)
        }
    except psutil.Error as e:
        logger.warning(f"Memory health check error: {str(e)}")
        health_data["components"]["memory"] = {
            "status": "unknown",
            "error": str(e)
        }

    status_code = 200 if health_data["status"] == "healthy" else 503
    return JSONResponse(status_code=status_code, content=health_data)
