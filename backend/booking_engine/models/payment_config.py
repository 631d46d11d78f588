"""Payment method configuration: where guests send money, per method."""

from sqlalchemy import Boolean, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from booking_engine.database import Base, TimestampMixin, UUIDPrimaryKeyMixin
from booking_engine.models.booking import PaymentMethod, _enum_values


class PaymentMethodConfig(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Account details shown to guests for one payment method.

    Kept server-side so the account numbers cannot be altered by a client.
    """

    __tablename__ = "payment_configs"

    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(
            PaymentMethod,
            name="payment_method",
            native_enum=False,
            length=32,
            values_callable=_enum_values,
            validate_strings=True,
        ),
        unique=True,
        nullable=False,
    )
    account_name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_number: Mapped[str] = mapped_column(String(255), nullable=False)
    bank_name: Mapped[str | None] = mapped_column(String(255), nullable=True)  # bank transfers only
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<PaymentMethodConfig(method={self.payment_method.value}, active={self.is_active})>"
