"""Bookings API router — creation and lifecycle transitions.

Domain failures are raised as ``BookingError`` subclasses and rendered by
the handler in ``booking_engine.api.errors``.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.api.deps import get_db, require_admin
from booking_engine.models.booking import Booking
from booking_engine.schemas.booking import BookingCancel, BookingCreate, BookingResponse
from booking_engine.services import booking_service

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """Create a booking in ``pending`` or ``awaiting_payment``.

    Returns 409 when the dates overlap an active booking and 422 when the
    stay breaks the property's rules or the quote is stale.
    """
    return await booking_service.create_booking(
        db,
        property_id=body.property_id,
        guest_id=body.guest_id,
        check_in=body.check_in_date,
        check_out=body.check_out_date,
        guests_count=body.guests_count,
        pricing=body.pricing.to_breakdown() if body.pricing else None,
        special_requests=body.special_requests,
    )


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking",
)
async def get_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    return await booking_service.get_booking(db, booking_id)


@router.post(
    "/{booking_id}/approve",
    response_model=BookingResponse,
    summary="Approve a pending booking",
)
async def approve_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: str = Depends(require_admin),
) -> Booking:
    """Move a ``pending`` booking to ``awaiting_payment`` and start the payment deadline."""
    return await booking_service.approve_booking(db, booking_id)


@router.post(
    "/{booking_id}/cancel",
    response_model=BookingResponse,
    summary="Cancel a booking",
)
async def cancel_booking(
    booking_id: uuid.UUID,
    body: BookingCancel | None = None,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    return await booking_service.cancel_booking(db, booking_id, body.reason if body else None)


@router.post(
    "/{booking_id}/complete",
    response_model=BookingResponse,
    summary="Mark a confirmed stay completed",
)
async def complete_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: str = Depends(require_admin),
) -> Booking:
    return await booking_service.complete_booking(db, booking_id)
