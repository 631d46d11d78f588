"""Map booking engine errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from booking_engine.errors import (
    AvailabilityConflict,
    BookingError,
    BookingNotFound,
    DeadlinePassed,
    InvalidState,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES: list[tuple[type[BookingError], int]] = [
    (BookingNotFound, status.HTTP_404_NOT_FOUND),
    (ValidationError, 422),
    (AvailabilityConflict, status.HTTP_409_CONFLICT),
    (InvalidState, status.HTTP_409_CONFLICT),
    (DeadlinePassed, status.HTTP_409_CONFLICT),
]


def status_code_for(exc: BookingError) -> int:
    for exc_type, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the handler that renders every ``BookingError`` as JSON."""

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
        code = status_code_for(exc)
        if isinstance(exc, InvalidState):
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)

        body: dict = {"detail": exc.message, "code": exc.code}
        if isinstance(exc, InvalidState):
            body["current_status"] = exc.current
            body["attempted_status"] = exc.target
            if exc.expected is not None:
                body["required_status"] = exc.expected if isinstance(exc.expected, str) else list(exc.expected)
        if isinstance(exc, AvailabilityConflict):
            body["conflicting_booking_ids"] = [str(i) for i in exc.conflicting_ids]
        return JSONResponse(status_code=code, content=body)
