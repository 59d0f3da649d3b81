"""
Shared exception classes and error handling utilities for the Health Score Service.

This module provides:
- Custom exception hierarchy for domain-specific errors
- Consistent error response formatting
- Exception handlers for FastAPI integration

Usage:
    from core.exceptions import StoreUnavailableError

    # In service layer - raise domain exceptions
    raise StoreUnavailableError(operation="compute_health_score") from e

    # In FastAPI - register handlers via setup_exception_handlers(app)
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION CLASSES
# =============================================================================

class GenieServiceError(Exception):
    """
    Base exception for all Health Score Service domain errors.

    Provides consistent error structure with status code and detail message.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any
    ):
        """
        Initialize the exception.

        Args:
            detail: Human-readable error message. Uses class default if not provided.
            status_code: HTTP status code. Uses class default if not provided.
            **kwargs: Additional context to include in error response.
        """
        self.detail = detail or self.__class__.detail
        self.status_code = status_code or self.__class__.status_code
        self.context = kwargs
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result = {"detail": self.detail}
        if self.context:
            result["context"] = self.context
        return result


# =============================================================================
# CALLER EXCEPTIONS
# =============================================================================

class PreconditionError(GenieServiceError):
    """Raised at the API boundary when no user identity could be resolved."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "User not authenticated"


class InvalidRecordDataError(GenieServiceError):
    """Raised when log data passes schema validation but is inconsistent."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid record data"


# =============================================================================
# STORE EXCEPTIONS
# =============================================================================

class DatabaseError(GenieServiceError):
    """Raised when a database write fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Database operation failed"

    def __init__(self, operation: Optional[str] = None, **kwargs: Any):
        detail = f"Database error during {operation}" if operation else self.detail
        super().__init__(detail=detail, operation=operation, **kwargs)


class StoreUnavailableError(DatabaseError):
    """
    Raised when the log store cannot be read while computing a health score.

    The whole computation fails; callers never receive a partial score.
    """

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "Could not compute health score"

    def __init__(self, operation: Optional[str] = None, **kwargs: Any):
        GenieServiceError.__init__(self, detail=self.detail, operation=operation, **kwargs)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def genie_service_exception_handler(
    request: Request,
    exc: GenieServiceError
) -> JSONResponse:
    """
    Handle GenieServiceError exceptions and return consistent JSON responses.
    """
    logger.warning(
        f"GenieServiceError: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "context": exc.context
        }
    )
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "ApiKey"}
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(GenieServiceError, genie_service_exception_handler)
