import os

# Settings are read at import time
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "100000")
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")

import pytest
from datetime import date, timedelta
from typing import List, Optional
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from usage_tracker.analytics.models import Trend, UsageLogEntry, WindowStats
from usage_tracker.main import app
from usage_tracker.services.mongodb import mongodb

# Fixed reference day for the pure analytics tests
NOW = date(2024, 3, 31)

def entry(days_ago: int, minutes: float, app_name: str = "Instagram",
          now: date = NOW, user_id: Optional[str] = "user-1") -> UsageLogEntry:
    return UsageLogEntry(
        user_id=user_id,
        app_name=app_name,
        minutes_spent=minutes,
        date=now - timedelta(days=days_ago),
    )

def daily_entries(days: range, minutes: float, app_name: str = "Instagram",
                  now: date = NOW) -> List[UsageLogEntry]:
    return [entry(d, minutes, app_name, now) for d in days]

def window(average: float = 0.0, days_active: int = 0, peak: float = 0.0,
           days: int = 7, trend: Trend = Trend.STABLE) -> WindowStats:
    """Hand-built window stats for engine tests."""
    return WindowStats(
        days_in_window=days,
        total_minutes=average * days,
        average_daily_minutes=average,
        days_active=days_active,
        trend=trend,
        peak_minutes=peak,
        breakdown={},
        daily_totals=[],
    )

@pytest.fixture
def db():
    client = AsyncMongoMockClient()
    mongodb.client = client
    mongodb.db = client["test_usage_tracker"]
    yield mongodb.db
    mongodb.client = None
    mongodb.db = None

@pytest.fixture
def test_client(db):
    # Not used as a context manager so startup does not dial a real MongoDB
    return TestClient(app)

@pytest.fixture
def registered_user(test_client):
    response = test_client.post("/api/auth/register", json={
        "username": "mindful_user",
        "email": "Mindful@Example.com",
        "password": "secret123"
    })
    assert response.status_code == 201
    return response.json()["data"]

@pytest.fixture
def auth_headers(registered_user):
    token = registered_user["tokens"]["accessToken"]
    return {"Authorization": f"Bearer {token}"}
