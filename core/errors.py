# core/errors.py

from typing import Any, Optional

from fastapi import HTTPException


class CoreError(Exception):
    """Base class for errors raised by the navigation core."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ApiError(CoreError):
    """Backend request failed (non-2xx status, transport error or bad payload)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Any] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message, original_error=original_error)
        self.status_code = status_code
        self.response_data = response_data

    def __str__(self):
        return f"{self.message} (Status: {self.status_code})"


class AuthError(ApiError):
    """Login rejected by the backend."""


class CapabilityFetchError(ApiError):
    """Capability list for a building could not be loaded."""


def extract_api_error(error: Any) -> str:
    """
    Safely extract readable details from a backend error.
    Handles:
      • Laravel JSON bodies ({"message": ...}, {"error": ...}, {"errors": {field: [...]}})
      • ApiError instances
      • Generic Python exceptions
    """

    # Case 1: already one of ours
    if isinstance(error, CoreError):
        if isinstance(error, ApiError) and error.response_data is not None:
            detail = extract_api_error(error.response_data)
            if detail:
                return detail
        return error.message

    # Case 2: decoded JSON body
    if isinstance(error, dict):
        errors = error.get("errors")
        if isinstance(errors, dict) and errors:
            first = next(iter(errors.values()))
            if isinstance(first, list) and first:
                return str(first[0])
            if first:
                return str(first)
        for key in ("message", "error", "detail"):
            if error.get(key):
                return str(error[key])
        return ""

    # Case 3: exceptions with args
    if isinstance(error, BaseException) and error.args:
        return str(error.args[0])

    # Case 4: plain string fallback
    try:
        return str(error)
    except Exception:
        return "Unknown backend error"


def handle_api_error(error: Exception, operation: str = "Backend request", status_code: int = 502) -> HTTPException:
    """
    Handle backend errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    Args:
        error: The exception that occurred
        operation: Description of what operation failed (e.g., "Failed to load capabilities")
        status_code: HTTP status code used when the backend status is not meaningful (default 502)

    Returns:
        HTTPException with standardized error message
    """
    from core.logging_config import logger

    error_detail = extract_api_error(error)
    logger.error(f"{operation}: {error_detail}")

    backend_status = getattr(error, "status_code", None)
    if backend_status == 422:
        return HTTPException(status_code=422, detail=f"{operation}: {error_detail}")
    elif isinstance(error, AuthError):
        return HTTPException(status_code=401, detail=f"{operation}: {error_detail}")
    elif backend_status == 404:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    elif backend_status == 403:
        return HTTPException(status_code=403, detail=f"{operation}: Access denied")
    else:
        return HTTPException(status_code=status_code, detail=f"{operation} failed")
