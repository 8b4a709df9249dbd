from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import logging
import time

from .core.config import get_settings
from .core.logging_config import setup_logging
from .core.rate_limit import RateLimitMiddleware
from .middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    RequestIDMiddleware,
    register_exception_handlers
)
from .routers import analytics_router, auth_router, health_router, usage_router
from .services.mongodb import connect_to_mongodb, close_mongodb_connection

settings = get_settings()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="API for tracking social media usage and mindful-usage analytics",
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

register_exception_handlers(app)

# Innermost first: errors are rendered before logging sees the response
app.add_middleware(ErrorHandlerMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    RateLimitMiddleware,
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    trust_proxy_headers=settings.TRUST_PROXY_HEADERS
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
    max_age=600,
)

# Include routers with proper prefixes
app.include_router(health_router, prefix="/api/health", tags=["Health"])
app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(usage_router, prefix="/api/usage", tags=["Usage"])
app.include_router(analytics_router, prefix="/api/analytics", tags=["Analytics"])

@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    if not await connect_to_mongodb():
        logger.error("❌ Failed to connect to MongoDB; database routes will answer 503")

    # Store start time for uptime calculation
    app.state.start_time = time.time()

    logger.info("Application startup complete")

@app.on_event("shutdown")
async def shutdown_event():
    """Clean up resources on shutdown."""
    await close_mongodb_connection()

    logger.info("Application shutdown complete")

@app.get("/api")
async def root():
    """Root endpoint for health check."""
    return {"status": "ok", "message": f"{settings.APP_NAME} API is running"}
