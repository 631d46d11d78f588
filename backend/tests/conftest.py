"""Shared test configuration and fixtures.

Uses a transactional rollback strategy per test for full isolation:
- Each test gets its own transaction that rolls back after the test.
- Tests run against in-memory SQLite (aiosqlite) unless ``TEST_DATABASE_URL``
  points at another database, e.g. a PostgreSQL ``bookings_test`` DB.
"""

import os

os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")

import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import date, datetime, timedelta

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from booking_engine.config import settings
from booking_engine.database import Base, get_db
from booking_engine.main import app
from booking_engine.models import Booking, Guest, PaymentMethod, PaymentMethodConfig, Property
from booking_engine.services.booking_service import create_booking

_test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# Fixed clock used by service-level tests.
NOW = datetime(2026, 1, 5, 12, 0, 0)


def _make_engine():
    if _test_db_url.startswith("sqlite"):
        return create_async_engine(_test_db_url, poolclass=StaticPool)
    return create_async_engine(_test_db_url, pool_pre_ping=True)


# ---------------------------------------------------------------------------
# Per-test: fresh schema + transactional rollback for isolation
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_headers() -> dict[str, str]:
    """Return Authorization headers carrying the admin key."""
    return {"Authorization": f"Bearer {settings.admin_api_key}"}


# ---------------------------------------------------------------------------
# Convenience fixtures: property, guest, booking helpers
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def make_property(db_session: AsyncSession) -> Callable[..., Awaitable[Property]]:
    """Factory inserting a property; defaults to 10000/night, 5000 cleaning, no approval."""

    async def _make(**overrides) -> Property:
        data = {
            "name": f"Villa {uuid.uuid4().hex[:6]}",
            "price_per_night": 10000,
            "cleaning_fee": 5000,
            "security_deposit": 20000,
            "min_nights": 1,
            "max_nights": 30,
            "max_guests": 4,
            "requires_approval": False,
        }
        data.update(overrides)
        prop = Property(**data)
        db_session.add(prop)
        await db_session.flush()
        return prop

    return _make


@pytest_asyncio.fixture
async def test_property(make_property) -> Property:
    return await make_property()


@pytest_asyncio.fixture
async def approval_property(make_property) -> Property:
    return await make_property(requires_approval=True)


@pytest_asyncio.fixture
async def test_guest(db_session: AsyncSession) -> Guest:
    """Create and return a test guest directly in the DB."""
    unique = uuid.uuid4().hex[:8]
    guest = Guest(name="Test Guest", email=f"guest-{unique}@test.com")
    db_session.add(guest)
    await db_session.flush()
    return guest


@pytest_asyncio.fixture
async def payment_configs(db_session: AsyncSession) -> list[PaymentMethodConfig]:
    configs = [
        PaymentMethodConfig(
            payment_method=PaymentMethod.MTN_MOMO,
            account_name="Maxed Homes",
            account_number="+225 07 00 00 00 00",
            display_order=1,
        ),
        PaymentMethodConfig(
            payment_method=PaymentMethod.BANK_TRANSFER,
            account_name="Maxed Homes",
            account_number="CI000 0000",
            bank_name="Test Bank",
            display_order=2,
        ),
        PaymentMethodConfig(
            payment_method=PaymentMethod.MOOV_MOMO,
            account_name="Maxed Homes",
            account_number="+225 01 00 00 00 00",
            display_order=3,
            is_active=False,
        ),
    ]
    db_session.add_all(configs)
    await db_session.flush()
    return configs


@pytest_asyncio.fixture
async def make_booking(
    db_session: AsyncSession, test_property: Property, test_guest: Guest
) -> Callable[..., Awaitable[Booking]]:
    """Factory creating a booking through the service on ``test_property``.

    ``offset``/``nights`` are days from 2026-01-10.
    """

    async def _make(
        offset: int = 0,
        nights: int = 3,
        prop: Property | None = None,
        now: datetime = NOW,
        **kwargs,
    ) -> Booking:
        check_in = date(2026, 1, 10) + timedelta(days=offset)
        return await create_booking(
            db_session,
            property_id=(prop or test_property).id,
            guest_id=test_guest.id,
            check_in=check_in,
            check_out=check_in + timedelta(days=nights),
            guests_count=kwargs.pop("guests_count", 2),
            now=now,
            **kwargs,
        )

    return _make
