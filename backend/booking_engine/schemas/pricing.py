"""Pydantic v2 request/response schemas for price quotes."""

from pydantic import BaseModel, ConfigDict, Field

from booking_engine.pricing import PriceBreakdown


class PriceQuoteRequest(BaseModel):
    """Rate inputs for a quote. Amounts are integer minor currency units."""

    price_per_night: int = Field(..., ge=0)
    nights: int = Field(..., ge=1)
    cleaning_fee: int = Field(0, ge=0)
    security_deposit: int = Field(0, ge=0)


class PriceBreakdownSchema(BaseModel):
    """Itemized price. ``security_deposit`` is not part of ``total_amount``."""

    base_price: int = Field(..., ge=0)
    cleaning_fee: int = Field(..., ge=0)
    security_deposit: int = Field(0, ge=0)
    service_fee: int = Field(..., ge=0)
    taxes: int = Field(..., ge=0)
    total_amount: int = Field(..., ge=0)
    currency: str

    model_config = ConfigDict(from_attributes=True)

    def to_breakdown(self) -> PriceBreakdown:
        return PriceBreakdown(**self.model_dump())
