from .request_id import RequestIDMiddleware
from .logging import LoggingMiddleware
from .error_handler import ErrorHandlerMiddleware, register_exception_handlers

__all__ = [
    'RequestIDMiddleware',
    'LoggingMiddleware',
    'ErrorHandlerMiddleware',
    'register_exception_handlers'
]
