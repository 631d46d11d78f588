"""Availability checks: overlap detection against active bookings."""

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.models.booking import Booking
from booking_engine.models.property import Property
from booking_engine.state_machine import ACTIVE_STATUSES


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Half-open ``[start, end)`` overlap; touching ranges do not overlap."""
    return a_start < b_end and b_start < a_end


async def find_conflicts(
    db: AsyncSession,
    property_id: uuid.UUID,
    check_in: date,
    check_out: date,
    exclude_booking_id: uuid.UUID | None = None,
) -> list[Booking]:
    """Return active bookings on the property that overlap ``[check_in, check_out)``."""
    query = select(Booking).where(
        Booking.property_id == property_id,
        Booking.status.in_(list(ACTIVE_STATUSES)),
        Booking.check_in_date < check_out,
        Booking.check_out_date > check_in,
    )
    if exclude_booking_id is not None:
        query = query.where(Booking.id != exclude_booking_id)

    result = await db.execute(query.order_by(Booking.check_in_date))
    return list(result.scalars().all())


async def is_available(
    db: AsyncSession,
    property_id: uuid.UUID,
    check_in: date,
    check_out: date,
) -> bool:
    """True when no active booking overlaps the requested range.

    On its own this is only advisory. Booking creation calls it after
    ``lock_property`` inside the same transaction.
    """
    return not await find_conflicts(db, property_id, check_in, check_out)


async def lock_property(db: AsyncSession, property_id: uuid.UUID) -> Property | None:
    """Load the property with a row lock held until the transaction ends.

    Concurrent creations for the same property queue on this lock, making
    check-then-insert a single atomic unit. Returns ``None`` when the
    property does not exist.
    """
    result = await db.execute(
        select(Property).where(Property.id == property_id).with_for_update()
    )
    return result.scalar_one_or_none()
