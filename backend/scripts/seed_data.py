"""Seed the database with sample properties, guests, and payment methods.

Creates the tables if they are missing, then inserts:
- three properties (one requiring host approval),
- two guests,
- the mobile-money and bank-transfer payment method configs.

Run from ``backend/``:
    python -m scripts.seed_data
"""

import asyncio
import sys
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select

from booking_engine.database import Base, async_session_factory, engine
from booking_engine.models import Guest, PaymentMethod, PaymentMethodConfig, Property

# Amounts are in XOF (no minor unit in practice, stored as integers).
PROPERTIES = [
    {
        "name": "Villa Lagune, Assinie",
        "price_per_night": 85000,
        "cleaning_fee": 15000,
        "security_deposit": 100000,
        "min_nights": 2,
        "max_nights": 28,
        "max_guests": 8,
        "requires_approval": True,
    },
    {
        "name": "Studio Plateau, Abidjan",
        "price_per_night": 25000,
        "cleaning_fee": 5000,
        "security_deposit": 0,
        "min_nights": 1,
        "max_nights": None,
        "max_guests": 2,
        "requires_approval": False,
    },
    {
        "name": "Appartement Cocody Riviera",
        "price_per_night": 40000,
        "cleaning_fee": 10000,
        "security_deposit": 50000,
        "min_nights": 3,
        "max_nights": 60,
        "max_guests": 4,
        "requires_approval": False,
    },
]

GUESTS = [
    {"name": "Awa Kone", "email": "awa.kone@example.com"},
    {"name": "Marc Dubois", "email": "marc.dubois@example.com"},
]

PAYMENT_METHODS = [
    {
        "payment_method": PaymentMethod.MTN_MOMO,
        "account_name": "Maxed Homes",
        "account_number": "+225 07 00 00 00 00",
        "instructions": "Send money to this MTN MoMo number. Include your booking reference in the note.",
        "display_order": 1,
    },
    {
        "payment_method": PaymentMethod.MOOV_MOMO,
        "account_name": "Maxed Homes",
        "account_number": "+225 01 00 00 00 00",
        "instructions": "Send money to this Moov MoMo number. Include your booking reference in the note.",
        "display_order": 2,
    },
    {
        "payment_method": PaymentMethod.BANK_TRANSFER,
        "account_name": "Maxed Homes",
        "account_number": "CI000 00000 000000000000 00",
        "bank_name": "Banque Atlantique",
        "instructions": "Include your booking reference in the transfer description.",
        "display_order": 3,
    },
]


async def seed() -> None:
    """Create tables and insert sample rows (skips rows that already exist)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        for data in PROPERTIES:
            exists = await session.execute(select(Property).where(Property.name == data["name"]))
            if exists.scalar_one_or_none() is None:
                session.add(Property(**data))
                print(f"   🏠 {data['name']} ({data['price_per_night']}/night)")

        for data in GUESTS:
            exists = await session.execute(select(Guest).where(Guest.email == data["email"]))
            if exists.scalar_one_or_none() is None:
                session.add(Guest(**data))
                print(f"   👤 {data['name']}")

        for data in PAYMENT_METHODS:
            exists = await session.execute(
                select(PaymentMethodConfig).where(PaymentMethodConfig.payment_method == data["payment_method"])
            )
            if exists.scalar_one_or_none() is None:
                session.add(PaymentMethodConfig(**data))
                print(f"   💳 {data['payment_method'].value}")

        await session.commit()

    print("✅ Seed complete")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
