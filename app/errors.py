# app/errors.py

from typing import Any, Dict, Optional
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError


class ErrorCode:
    """Stable machine-readable codes carried in the error envelope."""
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    INVALID_FILE_SIZE = "INVALID_FILE_SIZE"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    DB_QUERY_ERROR = "DB_QUERY_ERROR"
    DB_TIMEOUT = "DB_TIMEOUT"
    CACHE_ERROR = "CACHE_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ApiError(Exception):
    """Base class for errors that are rendered as the standard error envelope."""

    status_code = 500
    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 code: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or None
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 400
    code = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, field: Optional[str] = None, **context: Any) -> None:
        details = {"field": field, **context} if field else (context or None)
        super().__init__(message, details)
        self.field = field


class NotFoundError(ApiError):
    status_code = 404
    code = ErrorCode.NOT_FOUND


class ForbiddenError(ApiError):
    status_code = 403
    code = ErrorCode.FORBIDDEN


class FileTooLargeError(ApiError):
    status_code = 413
    code = ErrorCode.INVALID_FILE_SIZE


class RateLimitError(ApiError):
    status_code = 429
    code = ErrorCode.RATE_LIMIT_EXCEEDED


class DatabaseError(ApiError):
    status_code = 500
    code = ErrorCode.DB_QUERY_ERROR


class DatabaseUnavailableError(DatabaseError):
    status_code = 503
    code = ErrorCode.DB_TIMEOUT


# Fragments of driver messages that mean the server could not be reached.
_UNAVAILABLE_MARKERS = ("connection refused", "timed out", "timeout", "could not connect", "server closed")


def classify_database_error(exc: Exception) -> DatabaseError:
    """Map a SQLAlchemy/driver exception to a 500 query error or a 503 outage."""
    if isinstance(exc, PoolTimeoutError):
        return DatabaseUnavailableError("Database server is not responding")
    if isinstance(exc, OperationalError):
        text = str(getattr(exc, "orig", exc)).lower()
        if any(marker in text for marker in _UNAVAILABLE_MARKERS):
            return DatabaseUnavailableError("Database server is not responding")
    return DatabaseError("Error executing database query")
