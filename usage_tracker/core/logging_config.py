import logging
import sys
from typing import Optional

LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging for the application."""
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Avoid stacking handlers when the app is reloaded
    for handler in list(root_logger.handlers):
        if getattr(handler, "_usage_tracker", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler._usage_tracker = True
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler._usage_tracker = True
        root_logger.addHandler(file_handler)

def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name."""
    return logging.getLogger(name)

def log_error(endpoint: str, error: Exception) -> None:
    """Log error with endpoint context."""
    logger = get_logger(__name__)
    logger.error(
        f"Error in {endpoint}: {str(error)}",
        exc_info=error
    )

def log_request(request_id: str, method: str, path: str, status_code: int, duration: float) -> None:
    """Log request details."""
    logger = get_logger(__name__)
    logger.info(
        f"Request {request_id}: {method} {path} - {status_code} ({duration:.3f}s)"
    )
