"""Price quote API router."""

from fastapi import APIRouter

from booking_engine.pricing import PriceBreakdown, compute_pricing
from booking_engine.schemas.pricing import PriceBreakdownSchema, PriceQuoteRequest

router = APIRouter(prefix="/api/v1/pricing", tags=["pricing"])


@router.post(
    "/quote",
    response_model=PriceBreakdownSchema,
    summary="Quote the price of a stay",
)
async def quote_price(body: PriceQuoteRequest) -> PriceBreakdown:
    """Itemized quote; service fee and tax are reported separately."""
    return compute_pricing(
        body.price_per_night,
        body.nights,
        body.cleaning_fee,
        body.security_deposit,
    )
