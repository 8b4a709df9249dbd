from .health import router as health_router
from .auth import router as auth_router
from .usage import router as usage_router
from .analytics import router as analytics_router

__all__ = [
    'health_router',
    'auth_router',
    'usage_router',
    'analytics_router'
]
