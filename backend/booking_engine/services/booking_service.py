"""Booking service: creation and the host/admin/support driven transitions."""

import logging
import uuid
from datetime import date, datetime, timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.config import settings
from booking_engine.database import utcnow
from booking_engine.errors import (
    AvailabilityConflict,
    BookingNotFound,
    InvalidState,
    InvalidTransition,
    ValidationError,
)
from booking_engine.models.booking import Booking, BookingStatus
from booking_engine.models.guest import Guest
from booking_engine.models.property import Property
from booking_engine.pricing import PriceBreakdown, compute_pricing, platform_commission
from booking_engine.services.availability_service import find_conflicts, lock_property
from booking_engine.state_machine import apply_transition, initial_status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def get_booking(db: AsyncSession, booking_id: uuid.UUID) -> Booking:
    """Fetch a booking or raise ``BookingNotFound``."""
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise BookingNotFound(booking_id)
    return booking


def payment_window_values(total_amount: int, now: datetime) -> dict[str, Any]:
    """Column values written whenever a booking enters ``awaiting_payment``."""
    commission = platform_commission(total_amount)
    return {
        "payment_expires_at": now + timedelta(hours=settings.payment_deadline_hours),
        "platform_commission": commission,
        "host_payout_amount": total_amount - commission,
    }


def validate_stay(prop: Property, check_in: date, check_out: date, guests_count: int) -> int:
    """Check dates and party size against the property's rules. Returns nights."""
    if check_out <= check_in:
        raise ValidationError("check_out_date must be after check_in_date")
    nights = (check_out - check_in).days
    if nights < prop.min_nights:
        raise ValidationError(f"Minimum stay is {prop.min_nights} nights, requested {nights}")
    if prop.max_nights is not None and nights > prop.max_nights:
        raise ValidationError(f"Maximum stay is {prop.max_nights} nights, requested {nights}")
    if guests_count < 1:
        raise ValidationError("guests_count must be at least 1")
    if guests_count > prop.max_guests:
        raise ValidationError(f"Property allows at most {prop.max_guests} guests, requested {guests_count}")
    return nights


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


async def create_booking(
    db: AsyncSession,
    *,
    property_id: uuid.UUID,
    guest_id: uuid.UUID,
    check_in: date,
    check_out: date,
    guests_count: int,
    pricing: PriceBreakdown | None = None,
    special_requests: str | None = None,
    now: datetime | None = None,
) -> Booking:
    """Create a booking in its initial status.

    The property row is locked before the availability check, so the check
    and the insert form one atomic unit within the caller's transaction.
    When ``pricing`` is given it must equal the price recomputed from the
    property's current rates, otherwise the quote is stale.

    Raises:
        ValidationError: bad dates, party size, unknown property/guest, stale quote.
        AvailabilityConflict: an active booking overlaps the requested range.
    """
    if check_out <= check_in:
        raise ValidationError("check_out_date must be after check_in_date")

    prop = await lock_property(db, property_id)
    if prop is None or not prop.is_active:
        raise ValidationError(f"Property {property_id} not found or not bookable")

    nights = validate_stay(prop, check_in, check_out, guests_count)

    if await db.get(Guest, guest_id) is None:
        raise ValidationError(f"Guest {guest_id} not found")

    breakdown = compute_pricing(prop.price_per_night, nights, prop.cleaning_fee, prop.security_deposit)
    if pricing is not None and pricing != breakdown:
        raise ValidationError("Quoted price no longer matches the property's rates; please re-quote")

    conflicts = await find_conflicts(db, property_id, check_in, check_out)
    if conflicts:
        logger.info(
            "Availability conflict for property %s %s..%s with %d booking(s)",
            property_id,
            check_in,
            check_out,
            len(conflicts),
        )
        raise AvailabilityConflict(property_id, check_in, check_out, [b.id for b in conflicts])

    now = now or utcnow()
    status = initial_status(prop.requires_approval)
    booking = Booking(
        property_id=property_id,
        guest_id=guest_id,
        check_in_date=check_in,
        check_out_date=check_out,
        guests_count=guests_count,
        base_price=breakdown.base_price,
        cleaning_fee=breakdown.cleaning_fee,
        security_deposit=breakdown.security_deposit,
        taxes=breakdown.stored_taxes,
        total_amount=breakdown.total_amount,
        currency=breakdown.currency,
        status=status,
        special_requests=special_requests,
        created_at=now,
        updated_at=now,
    )
    if status is BookingStatus.AWAITING_PAYMENT:
        for field, value in payment_window_values(breakdown.total_amount, now).items():
            setattr(booking, field, value)

    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    logger.info(
        "Created booking %s for property %s (%s..%s) in status %s, total %d %s",
        booking.id,
        property_id,
        check_in,
        check_out,
        status.value,
        breakdown.total_amount,
        breakdown.currency,
    )
    return booking


async def approve_booking(db: AsyncSession, booking_id: uuid.UUID, now: datetime | None = None) -> Booking:
    """Host/admin approval: ``pending -> awaiting_payment``, starting the payment clock."""
    booking = await get_booking(db, booking_id)
    # payment_failed -> awaiting_payment is also legal, but only via reopen_payment.
    if booking.status is not BookingStatus.PENDING:
        raise InvalidTransition(booking.status.value, BookingStatus.AWAITING_PAYMENT.value)

    now = now or utcnow()
    return await apply_transition(
        db,
        booking,
        BookingStatus.AWAITING_PAYMENT,
        **payment_window_values(booking.total_amount, now),
    )


async def cancel_booking(
    db: AsyncSession,
    booking_id: uuid.UUID,
    reason: str | None = None,
    now: datetime | None = None,
) -> Booking:
    """Cancel a pending, awaiting-payment, or confirmed booking."""
    booking = await get_booking(db, booking_id)
    return await apply_transition(
        db,
        booking,
        BookingStatus.CANCELLED,
        cancellation_reason=reason,
        cancelled_at=now or utcnow(),
    )


async def complete_booking(db: AsyncSession, booking_id: uuid.UUID, today: date | None = None) -> Booking:
    """Mark a confirmed stay completed once its check-out date has arrived."""
    booking = await get_booking(db, booking_id)
    today = today or utcnow().date()
    if booking.status is BookingStatus.CONFIRMED and booking.check_out_date > today:
        raise ValidationError(f"Check-out date {booking.check_out_date.isoformat()} has not passed yet")
    return await apply_transition(
        db,
        booking,
        BookingStatus.COMPLETED,
        where=(Booking.check_out_date <= today,),
    )


async def reopen_payment(db: AsyncSession, booking_id: uuid.UUID, now: datetime | None = None) -> Booking:
    """Support escape hatch: give a ``payment_failed`` booking a fresh payment window."""
    booking = await get_booking(db, booking_id)
    if booking.status is not BookingStatus.PAYMENT_FAILED:
        raise InvalidState(
            booking.status.value,
            BookingStatus.PAYMENT_FAILED.value,
            "re-open payment",
            target=BookingStatus.AWAITING_PAYMENT.value,
        )

    now = now or utcnow()
    return await apply_transition(
        db,
        booking,
        BookingStatus.AWAITING_PAYMENT,
        payment_confirmed_at=None,
        payment_confirmed_by=None,
        **payment_window_values(booking.total_amount, now),
    )
