from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import time
import logging
from typing import Callable

from ..core.logging_config import log_request

logger = logging.getLogger(__name__)

class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = getattr(request.state, "request_id", "unknown")

        logger.info(
            f"Request started: {request.method} {request.url.path} "
            f"[{request_id}]"
        )

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path} "
                f"[{request_id}] - Error: {str(e)} "
                f"Time: {process_time:.2f}s"
            )
            raise

        log_request(request_id, request.method, request.url.path, response.status_code, time.time() - start_time)
        return response
