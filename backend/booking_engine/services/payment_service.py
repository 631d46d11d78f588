"""Payment confirmation workflow.

Guests pay out-of-band (mobile money or bank transfer) and submit the
transaction reference plus an optional proof URL; an admin then verifies the
payment by hand. The decision is a single status transition.
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.database import utcnow
from booking_engine.errors import DeadlinePassed, InvalidState, ValidationError
from booking_engine.models.booking import Booking, BookingStatus, PaymentMethod
from booking_engine.models.payment_config import PaymentMethodConfig
from booking_engine.services.booking_service import get_booking
from booking_engine.state_machine import apply_transition

logger = logging.getLogger(__name__)


async def list_payment_methods(db: AsyncSession) -> list[PaymentMethodConfig]:
    """Active payment method configs in display order."""
    result = await db.execute(
        select(PaymentMethodConfig)
        .where(PaymentMethodConfig.is_active)
        .order_by(PaymentMethodConfig.display_order, PaymentMethodConfig.payment_method)
    )
    return list(result.scalars().all())


async def _ensure_method_accepted(db: AsyncSession, method: PaymentMethod) -> None:
    """Reject methods an admin has configured and then switched off."""
    result = await db.execute(
        select(PaymentMethodConfig.is_active).where(PaymentMethodConfig.payment_method == method)
    )
    is_active = result.scalar_one_or_none()
    if is_active is False:
        raise ValidationError(f"Payment method '{method.value}' is not currently accepted")


async def submit_payment(
    db: AsyncSession,
    booking_id: uuid.UUID,
    method: PaymentMethod | str,
    reference: str,
    proof_url: str | None = None,
    now: datetime | None = None,
) -> Booking:
    """Record the guest's payment and hand the booking to an admin for review.

    Raises:
        InvalidState: booking is not ``awaiting_payment``.
        DeadlinePassed: the payment window closed (the sweep may not have run yet).
        ValidationError: empty method/reference or a disabled method.
    """
    booking = await get_booking(db, booking_id)
    if booking.status is not BookingStatus.AWAITING_PAYMENT:
        logger.warning("submit_payment on booking %s in status %s", booking.id, booking.status.value)
        raise InvalidState(
            booking.status.value,
            BookingStatus.AWAITING_PAYMENT.value,
            "submit payment",
            target=BookingStatus.AWAITING_CONFIRMATION.value,
        )

    now = now or utcnow()
    if booking.payment_expires_at is None or now >= booking.payment_expires_at:
        logger.warning("Late payment for booking %s (deadline %s)", booking.id, booking.payment_expires_at)
        raise DeadlinePassed(booking.id, booking.payment_expires_at)

    if not method:
        raise ValidationError("payment method is required")
    try:
        method = PaymentMethod(method)
    except ValueError:
        raise ValidationError(f"Unknown payment method '{method}'") from None
    reference = (reference or "").strip()
    if not reference:
        raise ValidationError("payment reference is required")
    await _ensure_method_accepted(db, method)

    booking = await apply_transition(
        db,
        booking,
        BookingStatus.AWAITING_CONFIRMATION,
        where=(Booking.payment_expires_at > now,),
        payment_method=method,
        payment_reference=reference,
        payment_proof_url=proof_url,
        payment_submitted_at=now,
    )
    logger.info("Payment submitted for booking %s via %s (ref %s)", booking.id, method.value, reference)
    return booking


async def verify_payment(
    db: AsyncSession,
    booking_id: uuid.UUID,
    accepted: bool,
    confirmed_by: str = "admin",
    now: datetime | None = None,
) -> Booking:
    """Admin decision on a submitted payment: ``confirmed`` or ``payment_failed``.

    Raises:
        InvalidState: booking is not ``awaiting_confirmation``.
    """
    booking = await get_booking(db, booking_id)
    if booking.status is not BookingStatus.AWAITING_CONFIRMATION:
        logger.warning("verify_payment on booking %s in status %s", booking.id, booking.status.value)
        target = BookingStatus.CONFIRMED if accepted else BookingStatus.PAYMENT_FAILED
        raise InvalidState(
            booking.status.value,
            BookingStatus.AWAITING_CONFIRMATION.value,
            "verify payment",
            target=target.value,
        )

    if accepted:
        booking = await apply_transition(
            db,
            booking,
            BookingStatus.CONFIRMED,
            payment_confirmed_at=now or utcnow(),
            payment_confirmed_by=confirmed_by,
        )
    else:
        booking = await apply_transition(db, booking, BookingStatus.PAYMENT_FAILED)

    logger.info("Payment for booking %s %s by %s", booking.id, "accepted" if accepted else "rejected", confirmed_by)
    return booking
