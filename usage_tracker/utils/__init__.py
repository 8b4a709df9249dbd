from .helpers import (
    ensure_timezone_aware,
    utc_now,
    today_in_timezone,
    parse_object_id,
    pagination_info
)

from .validators import (
    validate_username,
    validate_email,
    validate_password,
    validate_app_name,
    validate_minutes_spent,
    validate_usage_date,
    validate_date_range,
    validate_pagination_params
)

__all__ = [
    # Helper functions
    'ensure_timezone_aware',
    'utc_now',
    'today_in_timezone',
    'parse_object_id',
    'pagination_info',

    # Validator functions
    'validate_username',
    'validate_email',
    'validate_password',
    'validate_app_name',
    'validate_minutes_spent',
    'validate_usage_date',
    'validate_date_range',
    'validate_pagination_params'
]
