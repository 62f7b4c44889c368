"""
Service error -> HTTP status mapping.
"""

from fastapi import HTTPException

from signaldesk.services.base import (
    DataQualityServiceError,
    ExternalAPIError,
    InsufficientHistoryError,
    PaymentRequiredError,
    RateLimitError,
    ServiceError,
    ValidationError,
)

STATUS_CODES: list[tuple[type, int]] = [
    (ValidationError, 400),
    (PaymentRequiredError, 402),
    (InsufficientHistoryError, 422),
    (RateLimitError, 429),
    (DataQualityServiceError, 502),
    (ExternalAPIError, 502),
]


def to_http_exception(error: ServiceError) -> HTTPException:
    """Build the HTTPException for a service error (500 if unmapped)."""
    status_code = next(
        (code for error_type, code in STATUS_CODES if isinstance(error, error_type)),
        500,
    )
    detail = {"error": error.message}
    if error.details:
        detail["details"] = error.details
    return HTTPException(status_code=status_code, detail=detail)
