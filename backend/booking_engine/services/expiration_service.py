"""Time-driven sweeps: expire unpaid bookings, complete finished stays.

Both sweeps go through ``apply_transition`` like every other status change,
so a booking that an admin confirms concurrently is simply skipped.
Re-running a sweep with the same clock is a no-op.
"""

import logging
import uuid
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.errors import InvalidTransition
from booking_engine.models.booking import Booking, BookingStatus
from booking_engine.state_machine import apply_transition

logger = logging.getLogger(__name__)


async def run_expiration_sweep(db: AsyncSession, now: datetime) -> list[uuid.UUID]:
    """Expire every ``awaiting_payment`` booking whose deadline is at or before ``now``.

    Returns the ids this run actually transitioned.
    """
    result = await db.execute(
        select(Booking)
        .where(
            Booking.status == BookingStatus.AWAITING_PAYMENT,
            Booking.payment_expires_at.is_not(None),
            Booking.payment_expires_at <= now,
        )
        .order_by(Booking.payment_expires_at)
    )
    candidates = list(result.scalars().all())

    expired: list[uuid.UUID] = []
    for booking in candidates:
        try:
            await apply_transition(
                db,
                booking,
                BookingStatus.EXPIRED,
                where=(Booking.payment_expires_at <= now,),
                cancelled_at=now,
            )
        except InvalidTransition:
            # Someone else moved it first (payment submitted, cancelled).
            continue
        expired.append(booking.id)

    logger.info("Expiration sweep at %s: %d of %d candidate(s) expired", now, len(expired), len(candidates))
    return expired


async def run_completion_sweep(db: AsyncSession, today: date) -> list[uuid.UUID]:
    """Complete every ``confirmed`` booking whose check-out date is on or before ``today``."""
    result = await db.execute(
        select(Booking)
        .where(
            Booking.status == BookingStatus.CONFIRMED,
            Booking.check_out_date <= today,
        )
        .order_by(Booking.check_out_date)
    )
    candidates = list(result.scalars().all())

    completed: list[uuid.UUID] = []
    for booking in candidates:
        try:
            await apply_transition(
                db,
                booking,
                BookingStatus.COMPLETED,
                where=(Booking.check_out_date <= today,),
            )
        except InvalidTransition:
            continue
        completed.append(booking.id)

    logger.info("Completion sweep for %s: %d stay(s) completed", today, len(completed))
    return completed
