"""Booking status transitions.

``TRANSITIONS`` is the only place that decides which status changes are
legal. ``apply_transition`` is the only code path that writes
``Booking.status``: it issues a compare-and-set ``UPDATE ... WHERE
status = :current`` so two concurrent writers (e.g. the expiration sweep
and an admin verifying payment) cannot both win.
"""

import logging
from typing import Any

from sqlalchemy import ColumnElement, update
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.errors import InvalidTransition
from booking_engine.models.booking import Booking, BookingStatus

logger = logging.getLogger(__name__)

TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.AWAITING_PAYMENT, BookingStatus.CANCELLED}),
    BookingStatus.AWAITING_PAYMENT: frozenset(
        {BookingStatus.AWAITING_CONFIRMATION, BookingStatus.EXPIRED, BookingStatus.CANCELLED}
    ),
    BookingStatus.AWAITING_CONFIRMATION: frozenset({BookingStatus.CONFIRMED, BookingStatus.PAYMENT_FAILED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    # Support escape hatch only; see booking_service.reopen_payment.
    BookingStatus.PAYMENT_FAILED: frozenset({BookingStatus.AWAITING_PAYMENT}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.EXPIRED: frozenset(),
}

TERMINAL_STATUSES: frozenset[BookingStatus] = frozenset(
    {
        BookingStatus.CANCELLED,
        BookingStatus.COMPLETED,
        BookingStatus.EXPIRED,
        BookingStatus.PAYMENT_FAILED,
    }
)

# Statuses that hold the property's dates for overlap purposes.
ACTIVE_STATUSES: frozenset[BookingStatus] = frozenset(BookingStatus) - {
    BookingStatus.CANCELLED,
    BookingStatus.EXPIRED,
    BookingStatus.PAYMENT_FAILED,
}


def initial_status(requires_approval: bool) -> BookingStatus:
    """Status a new booking starts in, per the property's approval policy."""
    return BookingStatus.PENDING if requires_approval else BookingStatus.AWAITING_PAYMENT


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in TRANSITIONS[current]


def validate_transition(current: BookingStatus, target: BookingStatus) -> None:
    """Raise ``InvalidTransition`` unless ``current -> target`` is in the table."""
    if not can_transition(current, target):
        logger.warning("Rejected transition %s -> %s", current.value, target.value)
        raise InvalidTransition(current.value, target.value)


async def apply_transition(
    db: AsyncSession,
    booking: Booking,
    target: BookingStatus,
    *,
    where: tuple[ColumnElement[bool], ...] = (),
    **values: Any,
) -> Booking:
    """Move ``booking`` to ``target`` atomically, writing ``values`` alongside.

    ``where`` adds extra guard conditions to the compare-and-set. If no row
    matches (the status changed underneath us, or a guard failed) the booking
    is reloaded and ``InvalidTransition`` is raised with its actual status.
    """
    current = booking.status
    validate_transition(current, target)

    stmt = (
        update(Booking)
        .where(Booking.id == booking.id, Booking.status == current, *where)
        .values(status=target, **values)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    await db.refresh(booking)

    if result.rowcount != 1:
        logger.warning(
            "Lost status race on booking %s: expected %s, found %s",
            booking.id,
            current.value,
            booking.status.value,
        )
        raise InvalidTransition(booking.status.value, target.value)

    logger.info("Booking %s: %s -> %s", booking.id, current.value, target.value)
    return booking
