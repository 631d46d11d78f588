"""Property model: the rate snapshot the booking engine reads."""

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from booking_engine.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Property(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A rentable listing. Managed by the listings service; read-only here."""

    __tablename__ = "properties"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price_per_night: Mapped[int] = mapped_column(BigInteger, nullable=False)
    cleaning_fee: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    security_deposit: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    min_nights: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    max_nights: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    requires_approval: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship(back_populates="rental_property", lazy="raise")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        CheckConstraint("price_per_night >= 0", name="ck_properties_price"),
        CheckConstraint("cleaning_fee >= 0", name="ck_properties_cleaning_fee"),
        CheckConstraint("security_deposit >= 0", name="ck_properties_security_deposit"),
        CheckConstraint("min_nights >= 1", name="ck_properties_min_nights"),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.name!r})>"
