from fastapi import HTTPException, status
from typing import Any, Dict, List, Optional

class BaseError(HTTPException):
    """Base error class for all custom exceptions."""
    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)

    def to_content(self) -> Dict[str, Any]:
        """JSON body rendered by the exception handlers."""
        return {"success": False, "message": self.detail}

class ValidationError(BaseError):
    """Raised when input validation fails."""
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)

class InvalidInputError(ValidationError):
    """Raised when a batch of usage records cannot be aggregated.

    The whole batch is rejected; ``errors`` lists every offending record.
    """
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        detail = self.errors[0] if len(self.errors) == 1 else f"{len(self.errors)} invalid usage records"
        super().__init__(detail=detail)

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        content["errors"] = self.errors
        return content

class AuthenticationError(BaseError):
    """Raised when authentication fails."""
    def __init__(self, detail: str = "Authentication failed", code: Optional[str] = None):
        super().__init__(detail=detail, status_code=status.HTTP_401_UNAUTHORIZED)
        self.code = code

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        if self.code:
            content["code"] = self.code
        return content

class NotFoundError(BaseError):
    """Raised when a requested resource is not found."""
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)

class ConflictError(BaseError):
    """Raised when a resource already exists."""
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(detail=detail, status_code=status.HTTP_409_CONFLICT)

class RateLimitError(BaseError):
    """Raised when rate limit is exceeded."""
    def __init__(self, detail: str = "Rate limit exceeded"):
        super().__init__(detail=detail, status_code=status.HTTP_429_TOO_MANY_REQUESTS)

class DatabaseError(BaseError):
    """Raised when database operation fails."""
    def __init__(self, detail: str = "Database operation failed"):
        super().__init__(detail=detail, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

class ServiceUnavailableError(BaseError):
    """Raised when a required service is unavailable."""
    def __init__(self, detail: str = "Service unavailable"):
        super().__init__(detail=detail, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
