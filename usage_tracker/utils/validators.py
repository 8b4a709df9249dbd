from datetime import date
from typing import Optional
import re
from ..analytics.policy import MAX_APP_NAME_LENGTH, MAX_MINUTES_PER_DAY
from ..core.exceptions import ValidationError

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

def validate_username(username: str) -> str:
    """Validate username format and return it trimmed."""
    username = (username or "").strip()
    if not username:
        raise ValidationError("Username is required")

    if not 3 <= len(username) <= 30:
        raise ValidationError("Username must be between 3 and 30 characters")

    if not USERNAME_PATTERN.match(username):
        raise ValidationError("Username can only contain letters, numbers, and underscores")
    return username

def validate_email(email: str) -> str:
    """Validate email format and return it normalized to lower case."""
    email = (email or "").strip().lower()
    if not email:
        raise ValidationError("Email is required")

    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Please provide a valid email address")
    return email

def validate_password(password: str) -> None:
    """Validate password length."""
    if not password:
        raise ValidationError("Password is required")

    if len(password) < 6:
        raise ValidationError("Password must be at least 6 characters long")

def validate_app_name(app_name: str) -> str:
    """Validate app name and return it trimmed."""
    app_name = (app_name or "").strip()
    if not app_name:
        raise ValidationError("App name is required")

    if len(app_name) > MAX_APP_NAME_LENGTH:
        raise ValidationError(f"App name cannot exceed {MAX_APP_NAME_LENGTH} characters")
    return app_name

def validate_minutes_spent(minutes: float) -> None:
    """Minutes must fit in a single day."""
    if minutes is None or not 0 <= minutes <= MAX_MINUTES_PER_DAY:
        raise ValidationError(f"Minutes spent must be between 0 and {MAX_MINUTES_PER_DAY}")

def validate_usage_date(usage_date: date, today: date) -> None:
    """Usage cannot be logged for a future date."""
    if usage_date > today:
        raise ValidationError("Date cannot be in the future")

def validate_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    """Validate date range for queries."""
    if start_date and end_date and end_date < start_date:
        raise ValidationError("End date must be after start date")

def validate_pagination_params(page: int, page_size: int) -> None:
    """Validate pagination parameters."""
    if page < 1:
        raise ValidationError("Page number must be greater than 0")

    if page_size < 1:
        raise ValidationError("Page size must be greater than 0")

    if page_size > 100:
        raise ValidationError("Page size must not exceed 100")
