"""Typed, recoverable failures raised by the booking engine.

Every error carries a stable ``code`` so API clients can branch on it
without parsing messages. None of them is fatal to the process.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime


class BookingError(Exception):
    """Base class for all booking engine failures."""

    code = "booking_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Malformed, caller-correctable input. Raised before any state mutation."""

    code = "validation_error"


class BookingNotFound(BookingError):
    code = "booking_not_found"

    def __init__(self, booking_id: uuid.UUID) -> None:
        super().__init__(f"Booking {booking_id} not found")
        self.booking_id = booking_id


class AvailabilityConflict(BookingError):
    """An active booking already holds part of the requested date range."""

    code = "availability_conflict"

    def __init__(
        self,
        property_id: uuid.UUID,
        check_in: date,
        check_out: date,
        conflicting_ids: list[uuid.UUID] | None = None,
    ) -> None:
        super().__init__(
            f"Property {property_id} is not available from {check_in.isoformat()} to {check_out.isoformat()}"
        )
        self.property_id = property_id
        self.check_in = check_in
        self.check_out = check_out
        self.conflicting_ids = conflicting_ids or []


class InvalidState(BookingError):
    """An operation was attempted on a booking that is not in the required state.

    ``expected`` is the status the operation requires; ``target`` is the
    status it would have moved the booking to, when known.
    """

    code = "invalid_state"

    def __init__(
        self,
        current: str,
        expected: str | tuple[str, ...],
        operation: str | None = None,
        target: str | None = None,
    ) -> None:
        if isinstance(expected, tuple):
            expected_text = " or ".join(f"'{s}'" for s in expected)
        else:
            expected_text = f"'{expected}'"
        prefix = f"Cannot {operation}: " if operation else ""
        super().__init__(f"{prefix}booking status is '{current}', expected {expected_text}")
        self.current = current
        self.expected = expected
        self.target = target


class InvalidTransition(InvalidState):
    """The requested status change is not in the transition table."""

    code = "invalid_transition"

    def __init__(self, current: str, target: str) -> None:
        BookingError.__init__(self, f"Invalid status transition from '{current}' to '{target}'")
        self.current = current
        self.expected = None
        self.target = target


class DeadlinePassed(BookingError):
    """Payment was submitted after the booking's payment deadline."""

    code = "deadline_passed"

    def __init__(self, booking_id: uuid.UUID, deadline: datetime | None) -> None:
        when = deadline.isoformat() if deadline else "unknown"
        super().__init__(f"Payment deadline for booking {booking_id} passed at {when}; please re-book")
        self.booking_id = booking_id
        self.deadline = deadline
