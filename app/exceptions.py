# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
#
# Upstream failures map onto these:
# - Airtable unreachable / rejected the call  -> DataStoreError (502)
# - Unsubscribe id with no stored record      -> RecordNotFoundError (404)
# - Webhook failures are logged, never raised to the client
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class FormRelayException(Exception):
    """
    Base exception for the FormRelay API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "FORM_RELAY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Relay Exceptions
# =============================================================================

class RecordNotFoundError(FormRelayException):
    """Raised when an unsubscribe id doesn't name a stored record."""

    def __init__(self, record_id: str):
        super().__init__(
            message=f"Record not found: {record_id}",
            code="RECORD_NOT_FOUND",
            status_code=404,
            suggestion="The link may have been used already or the id is mistyped",
            details={"record_id": record_id}
        )


class DataStoreError(FormRelayException):
    """Raised when Airtable fails or rejects a call."""

    def __init__(
        self,
        operation: str,
        error: str,
        upstream_status: int | None = None,
    ):
        details: dict[str, Any] = {"operation": operation, "error": error}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status

        super().__init__(
            message=f"Data store {operation} failed: {error}",
            code="DATA_STORE_ERROR",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details=details
        )


class InvalidSubmissionError(FormRelayException):
    """Raised when a subscribe body isn't a JSON object."""

    def __init__(self, received: str):
        super().__init__(
            message=f"Submission must be a JSON object, got {received}",
            code="INVALID_SUBMISSION",
            status_code=422,
            suggestion='Send the form fields as an object, e.g. {"email": "a@b.com"}',
            details={"received": received}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def form_relay_exception_handler(
    request: Request,
    exc: FormRelayException
) -> JSONResponse:
    """
    Convert FormRelayException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
