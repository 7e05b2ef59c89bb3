"""HTTP mapping for domain errors."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from wellness_booking.domain.errors import DomainError, ErrorCode

STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SLOT_FULL: status.HTTP_409_CONFLICT,
    ErrorCode.TRANSIENT_CONFLICT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_CONTENT,
    ErrorCode.SLOT_HAS_BOOKINGS: status.HTTP_409_CONFLICT,
    ErrorCode.SESSION_TYPE_HAS_BOOKINGS: status.HTTP_409_CONFLICT,
}


def error_response(code: ErrorCode, message: str) -> JSONResponse:
    """Build the JSON body returned for a domain failure."""
    return JSONResponse(
        status_code=STATUS_BY_CODE[code],
        content={"error": code.value, "message": message},
    )


async def domain_error_handler(_request: Request, exc: DomainError) -> JSONResponse:
    """Translate a raised domain error into its HTTP response."""
    return error_response(exc.code, exc.message)
