from .database import (
    User,
    UsageLog,
    PyObjectId
)

__all__ = [
    'User',
    'UsageLog',
    'PyObjectId'
]
