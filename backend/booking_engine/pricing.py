"""Price calculation for stays.

All amounts are integers in the currency's minor unit. Each stage is rounded
half-up to a whole unit before it feeds the next one, so the same inputs
always produce the same breakdown.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from booking_engine.config import settings
from booking_engine.errors import ValidationError


@dataclass(frozen=True)
class PriceBreakdown:
    """Itemized price of a stay."""

    base_price: int
    cleaning_fee: int
    security_deposit: int  # informational, settled separately
    service_fee: int
    taxes: int
    total_amount: int
    currency: str

    @property
    def stored_taxes(self) -> int:
        """Service fee and tax combined, as persisted in ``Booking.taxes``."""
        return self.service_fee + self.taxes


def round_half_up(value: Decimal) -> int:
    """Round a Decimal to the nearest integer, ties away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_pricing(
    price_per_night: int,
    nights: int,
    cleaning_fee: int,
    security_deposit: int = 0,
    *,
    service_fee_rate: float | None = None,
    tax_rate: float | None = None,
    currency: str | None = None,
) -> PriceBreakdown:
    """Compute the itemized price of a stay.

    Rates and currency default to the configured values. Raises
    ``ValidationError`` for non-positive nights or negative amounts.
    """
    if nights <= 0:
        raise ValidationError("nights must be a positive integer")
    for name, amount in (
        ("price_per_night", price_per_night),
        ("cleaning_fee", cleaning_fee),
        ("security_deposit", security_deposit),
    ):
        if amount < 0:
            raise ValidationError(f"{name} must not be negative")

    fee_rate = Decimal(str(settings.service_fee_rate if service_fee_rate is None else service_fee_rate))
    vat_rate = Decimal(str(settings.tax_rate if tax_rate is None else tax_rate))

    base_price = price_per_night * nights
    service_fee = round_half_up(base_price * fee_rate)
    subtotal = base_price + cleaning_fee + service_fee
    taxes = round_half_up(subtotal * vat_rate)

    return PriceBreakdown(
        base_price=base_price,
        cleaning_fee=cleaning_fee,
        security_deposit=security_deposit,
        service_fee=service_fee,
        taxes=taxes,
        total_amount=base_price + cleaning_fee + service_fee + taxes,
        currency=currency or settings.currency,
    )


def platform_commission(total_amount: int, rate: float | None = None) -> int:
    """Platform share of a booking total; the host receives the remainder."""
    commission_rate = Decimal(str(settings.platform_commission_rate if rate is None else rate))
    return round_half_up(total_amount * commission_rate)
