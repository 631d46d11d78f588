"""SQLAlchemy models for the booking engine.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from booking_engine.models.booking import Booking, BookingStatus, PaymentMethod
from booking_engine.models.guest import Guest
from booking_engine.models.payment_config import PaymentMethodConfig
from booking_engine.models.property import Property

__all__ = [
    "Booking",
    "BookingStatus",
    "Guest",
    "PaymentMethod",
    "PaymentMethodConfig",
    "Property",
]
