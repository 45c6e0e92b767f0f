"""Response utilities and error handling for the API.

This module provides:
- Error code constants for requests rejected before analysis
- HTTP status codes for each analysis error code
- raise_api_error() helper for raising HTTP exceptions with error envelopes

Exception handlers in app.py convert raised API errors to ErrorEnvelope format.
"""

from typing import Dict, Optional

from fastapi import HTTPException

from reddit_psychiatrist.utils.errors import (
    ANALYSIS_TIMEOUT,
    INTEREST_EXTRACTION_FAILED,
    RETRIEVAL_FAILED,
    SUMMARY_GENERATION_FAILED,
)


# Error Code Constants
# These codes are returned in the ErrorEnvelope.error.code field
VALIDATION_ERROR = "VALIDATION_ERROR"  # Missing or invalid request body (400)
NOT_FOUND = "NOT_FOUND"  # Unknown route (404)
INTERNAL_ERROR = "INTERNAL_ERROR"  # Unhandled server error (500)


# Error Code to HTTP Status Code Mapping
ERROR_STATUS_CODES: Dict[str, int] = {
    VALIDATION_ERROR: 400,
    NOT_FOUND: 404,
    INTERNAL_ERROR: 500,
    RETRIEVAL_FAILED: 500,
    INTEREST_EXTRACTION_FAILED: 500,
    SUMMARY_GENERATION_FAILED: 500,
    ANALYSIS_TIMEOUT: 504,
}


def status_for_code(code: str) -> int:
    """HTTP status for an error code; unknown codes map to 500."""
    return ERROR_STATUS_CODES.get(code, 500)


def raise_api_error(code: str, message: str, status_code: Optional[int] = None) -> None:
    """Raise an HTTPException with consistent error envelope structure.

    Args:
        code: Error code constant (e.g., VALIDATION_ERROR)
        message: Human-readable error message
        status_code: Optional HTTP status code (defaults to mapped code for known errors)

    Raises:
        HTTPException with the specified status code and detail dict containing
        the error code and message.

    Example:
        if not username:
            raise_api_error(VALIDATION_ERROR, "Missing or invalid 'username' in request body")
    """
    if status_code is None:
        status_code = status_for_code(code)

    raise HTTPException(
        status_code=status_code,
        detail={"code": code, "message": message}
    )
