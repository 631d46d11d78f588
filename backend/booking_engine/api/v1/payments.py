"""Payment workflow API: payment methods, submission, admin verification."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.api.deps import get_db, require_admin
from booking_engine.models.booking import Booking
from booking_engine.models.payment_config import PaymentMethodConfig
from booking_engine.schemas.booking import BookingResponse
from booking_engine.schemas.payment import PaymentMethodResponse, PaymentSubmit, PaymentVerify
from booking_engine.services import booking_service, payment_service

router = APIRouter(prefix="/api/v1", tags=["payments"])


@router.get(
    "/payment-methods",
    response_model=list[PaymentMethodResponse],
    summary="List accepted payment methods",
)
async def list_payment_methods(db: AsyncSession = Depends(get_db)) -> list[PaymentMethodConfig]:
    return await payment_service.list_payment_methods(db)


@router.post(
    "/bookings/{booking_id}/payment",
    response_model=BookingResponse,
    summary="Submit proof of payment",
)
async def submit_payment(
    booking_id: uuid.UUID,
    body: PaymentSubmit,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """Move an ``awaiting_payment`` booking to ``awaiting_confirmation``.

    409 with code ``deadline_passed`` when the payment window has closed,
    ``invalid_state`` when the booking is not awaiting payment.
    """
    return await payment_service.submit_payment(
        db,
        booking_id,
        method=body.method,
        reference=body.reference,
        proof_url=body.proof_url,
    )


@router.post(
    "/bookings/{booking_id}/payment/verify",
    response_model=BookingResponse,
    summary="Accept or reject a submitted payment",
)
async def verify_payment(
    booking_id: uuid.UUID,
    body: PaymentVerify,
    db: AsyncSession = Depends(get_db),
    _admin: str = Depends(require_admin),
) -> Booking:
    return await payment_service.verify_payment(db, booking_id, body.accepted, confirmed_by=body.confirmed_by)


@router.post(
    "/bookings/{booking_id}/payment/reopen",
    response_model=BookingResponse,
    summary="Re-open payment on a failed booking",
)
async def reopen_payment(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: str = Depends(require_admin),
) -> Booking:
    """Support action: ``payment_failed -> awaiting_payment`` with a fresh deadline."""
    return await booking_service.reopen_payment(db, booking_id)
