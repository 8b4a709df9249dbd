from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "Social Media Usage Tracker"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # MongoDB settings
    MONGO_URI: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "usage_tracker"

    # Security settings
    JWT_ACCESS_SECRET: str = "change-me-access-secret"
    JWT_REFRESH_SECRET: str = "change-me-refresh-secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 60
    # Read client IPs from X-Forwarded-For; enable only behind a reverse proxy
    TRUST_PROXY_HEADERS: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Reference timezone for "today" in usage dates and analytics windows
    TIMEZONE: str = "UTC"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

settings = get_settings()
