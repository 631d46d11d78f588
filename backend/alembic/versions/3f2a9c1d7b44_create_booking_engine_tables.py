"""create_booking_engine_tables

Revision ID: 3f2a9c1d7b44
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b44'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

BOOKING_STATUSES = (
    "pending",
    "awaiting_payment",
    "awaiting_confirmation",
    "confirmed",
    "payment_failed",
    "cancelled",
    "completed",
    "expired",
)
PAYMENT_METHODS = ("mtn_momo", "moov_momo", "bank_transfer")


def _in_list(column: str, values: tuple[str, ...]) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


def upgrade() -> None:
    op.create_table(
        "properties",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("price_per_night", sa.BigInteger(), nullable=False),
        sa.Column("cleaning_fee", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("security_deposit", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("min_nights", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("max_nights", sa.Integer(), nullable=True),
        sa.Column("max_guests", sa.Integer(), nullable=False),
        sa.Column("requires_approval", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("price_per_night >= 0", name="ck_properties_price"),
        sa.CheckConstraint("cleaning_fee >= 0", name="ck_properties_cleaning_fee"),
        sa.CheckConstraint("security_deposit >= 0", name="ck_properties_security_deposit"),
        sa.CheckConstraint("min_nights >= 1", name="ck_properties_min_nights"),
    )

    op.create_table(
        "guests",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_guests_email", "guests", ["email"], unique=True)

    op.create_table(
        "bookings",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("property_id", sa.UUID(), sa.ForeignKey("properties.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("guest_id", sa.UUID(), sa.ForeignKey("guests.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column("guests_count", sa.Integer(), nullable=False),
        sa.Column("base_price", sa.BigInteger(), nullable=False),
        sa.Column("cleaning_fee", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("security_deposit", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("taxes", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("total_amount", sa.BigInteger(), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("payment_method", sa.String(32), nullable=True),
        sa.Column("payment_reference", sa.String(255), nullable=True),
        sa.Column("payment_proof_url", sa.Text(), nullable=True),
        sa.Column("payment_expires_at", sa.DateTime(), nullable=True),
        sa.Column("payment_submitted_at", sa.DateTime(), nullable=True),
        sa.Column("payment_confirmed_at", sa.DateTime(), nullable=True),
        sa.Column("payment_confirmed_by", sa.String(50), nullable=True),
        sa.Column("platform_commission", sa.BigInteger(), nullable=True),
        sa.Column("host_payout_amount", sa.BigInteger(), nullable=True),
        sa.Column("special_requests", sa.Text(), nullable=True),
        sa.Column("cancellation_reason", sa.Text(), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(_in_list("status", BOOKING_STATUSES), name="booking_status"),
        sa.CheckConstraint("check_out_date > check_in_date", name="ck_bookings_valid_dates"),
        sa.CheckConstraint("guests_count > 0", name="ck_bookings_guests_count"),
        sa.CheckConstraint("total_amount = base_price + cleaning_fee + taxes", name="ck_bookings_valid_amount"),
    )
    op.create_index("ix_bookings_property_id", "bookings", ["property_id"])
    op.create_index("ix_bookings_guest_id", "bookings", ["guest_id"])
    op.create_index("ix_bookings_status", "bookings", ["status"])
    op.create_index("ix_bookings_property_dates", "bookings", ["property_id", "check_in_date", "check_out_date"])
    op.create_index("ix_bookings_payment_expires_at", "bookings", ["payment_expires_at"])

    op.create_table(
        "payment_configs",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("payment_method", sa.String(32), nullable=False, unique=True),
        sa.Column("account_name", sa.String(255), nullable=False),
        sa.Column("account_number", sa.String(255), nullable=False),
        sa.Column("bank_name", sa.String(255), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(_in_list("payment_method", PAYMENT_METHODS), name="ck_payment_configs_method"),
    )


def downgrade() -> None:
    op.drop_table("payment_configs")
    op.drop_index("ix_bookings_payment_expires_at", table_name="bookings")
    op.drop_index("ix_bookings_property_dates", table_name="bookings")
    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_index("ix_bookings_guest_id", table_name="bookings")
    op.drop_index("ix_bookings_property_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_guests_email", table_name="guests")
    op.drop_table("guests")
    op.drop_table("properties")
