"""Pydantic v2 schemas for the payment confirmation workflow."""

import uuid

from pydantic import BaseModel, ConfigDict, Field

from booking_engine.models.booking import PaymentMethod


class PaymentSubmit(BaseModel):
    """Guest's proof of an out-of-band payment."""

    method: PaymentMethod
    reference: str = Field(..., min_length=1, max_length=255)
    proof_url: str | None = Field(None, max_length=2048)


class PaymentVerify(BaseModel):
    """Admin decision on a submitted payment."""

    accepted: bool
    confirmed_by: str = Field("admin", min_length=1, max_length=50)


class PaymentMethodResponse(BaseModel):
    """Where and how to pay with one method."""

    id: uuid.UUID
    payment_method: PaymentMethod
    account_name: str
    account_number: str
    bank_name: str | None = None
    instructions: str | None = None
    display_order: int

    model_config = ConfigDict(from_attributes=True)
