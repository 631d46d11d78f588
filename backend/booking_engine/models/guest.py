"""Guest domain model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from booking_engine.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Guest(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Guest model, owned by the profiles service, referenced by bookings."""

    __tablename__ = "guests"

    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship(back_populates="guest", lazy="raise")  # type: ignore[name-defined]  # noqa: F821

    def __repr__(self) -> str:
        return f"<Guest(id={self.id}, email={self.email!r})>"
