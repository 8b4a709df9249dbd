from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from typing import Callable, Dict, List, Optional
import time
import logging
from .exceptions import RateLimitError

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60

class RateLimiter:
    def __init__(self, requests_per_minute: int = 60):
        self.requests_per_minute = requests_per_minute
        self.requests: Dict[str, List[float]] = {}
        self.last_sweep = 0.0

    def is_rate_limited(self, client_ip: str, current_time: Optional[float] = None) -> bool:
        """Check if a client has exceeded the rate limit."""
        if current_time is None:
            current_time = time.time()

        if current_time - self.last_sweep >= WINDOW_SECONDS:
            self.sweep(current_time)

        # Drop requests older than the window
        recent = [
            req_time for req_time in self.requests.get(client_ip, [])
            if current_time - req_time < WINDOW_SECONDS
        ]

        if len(recent) >= self.requests_per_minute:
            self.requests[client_ip] = recent
            return True

        recent.append(current_time)
        self.requests[client_ip] = recent
        return False

    def sweep(self, current_time: float) -> None:
        """Forget clients with no request inside the window."""
        expired = [
            client_ip for client_ip, times in self.requests.items()
            if not times or current_time - times[-1] >= WINDOW_SECONDS
        ]
        for client_ip in expired:
            del self.requests[client_ip]
        self.last_sweep = current_time
        if expired:
            logger.debug(f"Rate limiter forgot {len(expired)} idle client(s)")

class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, requests_per_minute: int = 60, trust_proxy_headers: bool = False):
        super().__init__(app)
        self.rate_limiter = RateLimiter(requests_per_minute)
        self.trust_proxy_headers = trust_proxy_headers

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        client_ip = get_client_ip(request, self.trust_proxy_headers)

        if self.rate_limiter.is_rate_limited(client_ip):
            logger.warning(f"Rate limit exceeded for IP: {client_ip}")
            error = RateLimitError("Rate limit exceeded. Please try again later.")
            return JSONResponse(status_code=error.status_code, content=error.to_content())

        return await call_next(request)

def get_client_ip(request: Request, trust_proxy_headers: bool = False) -> str:
    """Get client IP address from request.

    ``X-Forwarded-For`` is only read when the app sits behind a trusted proxy.
    """
    if trust_proxy_headers:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
