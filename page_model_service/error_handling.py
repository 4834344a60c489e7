"""Error model for page model operations.

Transport failures never propagate out of the gateway; they are classified
here and carried back to callers inside ``Result.err``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

import httpx
from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class PageModelError(BaseModel):
    """Failure of a page model fetch or component update."""

    error_code: ErrorCode
    message: str
    operation: str
    service: str = "page_model_service"
    status_code: int | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


def error_from_exception(operation: str, error: Exception) -> PageModelError:
    """Classify a transport-level exception raised during ``operation``."""
    status_code: int | None = None
    if isinstance(error, httpx.TimeoutException):
        error_code = ErrorCode.TIMEOUT
    elif isinstance(error, httpx.HTTPStatusError):
        error_code = ErrorCode.EXTERNAL_SERVICE_ERROR
        status_code = error.response.status_code
    elif isinstance(error, httpx.DecodingError):
        error_code = ErrorCode.INVALID_RESPONSE
    elif isinstance(error, httpx.RequestError):
        error_code = ErrorCode.CONNECTION_ERROR
    elif isinstance(error, ValueError):
        # json.JSONDecodeError and pydantic.ValidationError both land here
        error_code = ErrorCode.INVALID_RESPONSE
    else:
        error_code = ErrorCode.UNKNOWN_ERROR

    return PageModelError(
        error_code=error_code,
        message=str(error) or type(error).__name__,
        operation=operation,
        status_code=status_code,
    )
