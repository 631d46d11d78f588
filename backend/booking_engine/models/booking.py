"""Booking model — a priced reservation and its lifecycle state."""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import BigInteger, CheckConstraint, Date, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from booking_engine.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    AWAITING_PAYMENT = "awaiting_payment"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CONFIRMED = "confirmed"
    PAYMENT_FAILED = "payment_failed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    EXPIRED = "expired"


class PaymentMethod(str, enum.Enum):
    MTN_MOMO = "mtn_momo"
    MOOV_MOMO = "moov_momo"
    BANK_TRANSFER = "bank_transfer"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


PRICING_FIELDS = ("base_price", "cleaning_fee", "security_deposit", "taxes", "total_amount")


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A reservation linking a guest to a property for specific dates.

    The pricing snapshot is written once at creation. ``taxes`` holds the
    service fee and the tax combined; ``security_deposit`` is never part of
    ``total_amount``.
    """

    __tablename__ = "bookings"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    guest_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("guests.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)
    guests_count: Mapped[int] = mapped_column(Integer, nullable=False)

    # Pricing snapshot (minor currency units)
    base_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    cleaning_fee: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    security_deposit: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    taxes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)  # service fee + tax
    total_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(
            BookingStatus,
            name="booking_status",
            native_enum=False,
            create_constraint=True,
            length=32,
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
        index=True,
    )

    # Payment
    payment_method: Mapped[PaymentMethod | None] = mapped_column(
        Enum(
            PaymentMethod,
            name="payment_method",
            native_enum=False,
            length=32,
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=True,
    )
    payment_reference: Mapped[str | None] = mapped_column(String(255), nullable=True)
    payment_proof_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    payment_expires_at: Mapped[datetime | None] = mapped_column(nullable=True)
    payment_submitted_at: Mapped[datetime | None] = mapped_column(nullable=True)
    payment_confirmed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    payment_confirmed_by: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Settlement, fixed when the booking enters awaiting_payment
    platform_commission: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    host_payout_amount: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)
    cancellation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    rental_property: Mapped["Property"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    guest: Mapped["Guest"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        CheckConstraint("check_out_date > check_in_date", name="ck_bookings_valid_dates"),
        CheckConstraint("guests_count > 0", name="ck_bookings_guests_count"),
        CheckConstraint("total_amount = base_price + cleaning_fee + taxes", name="ck_bookings_valid_amount"),
        Index("ix_bookings_property_dates", "property_id", "check_in_date", "check_out_date"),
        Index("ix_bookings_payment_expires_at", "payment_expires_at"),
    )

    @validates(*PRICING_FIELDS)
    def _freeze_pricing(self, key: str, value: int) -> int:
        current = self.__dict__.get(key)
        if current is not None and current != value:
            raise ValueError(f"Booking.{key} is part of the pricing snapshot and cannot change")
        return value

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, property_id={self.property_id}, guest_id={self.guest_id}, "
            f"status={self.status.value if self.status else None})>"
        )
