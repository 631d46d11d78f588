"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from booking_engine.models.booking import BookingStatus, PaymentMethod
from booking_engine.schemas.pricing import PriceBreakdownSchema

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a new booking.

    ``pricing`` is the quote the guest saw; when present it must still match
    the property's rates at creation time.
    """

    property_id: uuid.UUID
    guest_id: uuid.UUID
    check_in_date: date
    check_out_date: date
    guests_count: int = Field(1, ge=1)
    pricing: PriceBreakdownSchema | None = None
    special_requests: str | None = Field(None, max_length=2000)

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that check_out_date is strictly after check_in_date."""
        if self.check_out_date <= self.check_in_date:
            raise ValueError("check_out_date must be after check_in_date")
        return self


class BookingCancel(BaseModel):
    reason: str | None = Field(None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Booking as returned from every booking and payment endpoint.

    ``taxes`` is the persisted combined service fee and tax.
    """

    id: uuid.UUID
    property_id: uuid.UUID
    guest_id: uuid.UUID
    check_in_date: date
    check_out_date: date
    guests_count: int
    nights: int
    status: BookingStatus
    base_price: int
    cleaning_fee: int
    security_deposit: int
    taxes: int
    total_amount: int
    currency: str
    payment_method: PaymentMethod | None = None
    payment_reference: str | None = None
    payment_proof_url: str | None = None
    payment_expires_at: datetime | None = None
    payment_submitted_at: datetime | None = None
    payment_confirmed_at: datetime | None = None
    payment_confirmed_by: str | None = None
    platform_commission: int | None = None
    host_payout_amount: int | None = None
    special_requests: str | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
