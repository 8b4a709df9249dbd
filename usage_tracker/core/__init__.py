from .config import Settings, get_settings, settings
from .exceptions import (
    BaseError,
    ValidationError,
    InvalidInputError,
    AuthenticationError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    DatabaseError,
    ServiceUnavailableError
)
from .logging_config import setup_logging, get_logger

__all__ = [
    'Settings',
    'get_settings',
    'settings',
    'BaseError',
    'ValidationError',
    'InvalidInputError',
    'AuthenticationError',
    'NotFoundError',
    'ConflictError',
    'RateLimitError',
    'DatabaseError',
    'ServiceUnavailableError',
    'setup_logging',
    'get_logger'
]
