"""Tests for booking lifecycle endpoints."""

import uuid
from datetime import date, timedelta

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _future_dates(offset_start: int = 30, nights: int = 5) -> tuple[str, str]:
    """Return a (check_in, check_out) pair safely in the future as ISO strings."""
    check_in = date.today() + timedelta(days=offset_start)
    check_out = check_in + timedelta(days=nights)
    return check_in.isoformat(), check_out.isoformat()


def _payload(prop, guest, offset_start: int = 30, nights: int = 3, **extra) -> dict:
    ci, co = _future_dates(offset_start, nights)
    return {
        "property_id": str(prop.id),
        "guest_id": str(guest.id),
        "check_in_date": ci,
        "check_out_date": co,
        "guests_count": 2,
        **extra,
    }


# ---------------------------------------------------------------------------
# POST /api/v1/bookings
# ---------------------------------------------------------------------------


class TestCreateBooking:
    """Tests for creating bookings."""

    async def test_create_success(self, client: AsyncClient, test_property, test_guest) -> None:
        payload = _payload(test_property, test_guest, special_requests="Late check-in around 10pm")
        response = await client.post("/api/v1/bookings", json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["property_id"] == str(test_property.id)
        assert data["guest_id"] == str(test_guest.id)
        assert data["check_in_date"] == payload["check_in_date"]
        assert data["nights"] == 3
        assert data["status"] == "awaiting_payment"
        assert data["base_price"] == 30000
        assert data["taxes"] == 6688
        assert data["total_amount"] == 41688
        assert data["security_deposit"] == 20000
        assert data["currency"] == "XOF"
        assert data["payment_expires_at"] is not None
        assert data["special_requests"] == "Late check-in around 10pm"

    async def test_create_on_approval_property_is_pending(
        self, client: AsyncClient, approval_property, test_guest
    ) -> None:
        response = await client.post("/api/v1/bookings", json=_payload(approval_property, test_guest))
        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        assert response.json()["payment_expires_at"] is None

    async def test_create_with_matching_quote(self, client: AsyncClient, test_property, test_guest) -> None:
        quote = await client.post(
            "/api/v1/pricing/quote",
            json={"price_per_night": 10000, "nights": 3, "cleaning_fee": 5000, "security_deposit": 20000},
        )
        response = await client.post(
            "/api/v1/bookings",
            json=_payload(test_property, test_guest, pricing=quote.json()),
        )
        assert response.status_code == 201

    async def test_create_with_stale_quote(self, client: AsyncClient, test_property, test_guest) -> None:
        stale = {
            "base_price": 27000,
            "cleaning_fee": 5000,
            "security_deposit": 20000,
            "service_fee": 3240,
            "taxes": 2819,
            "total_amount": 38059,
            "currency": "XOF",
        }
        response = await client.post("/api/v1/bookings", json=_payload(test_property, test_guest, pricing=stale))
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    async def test_create_date_conflict(self, client: AsyncClient, test_property, test_guest) -> None:
        """Overlapping active bookings on the same property are rejected."""
        first = await client.post("/api/v1/bookings", json=_payload(test_property, test_guest, 50, 5))
        assert first.status_code == 201

        # Starts two days before the first stay ends
        response = await client.post("/api/v1/bookings", json=_payload(test_property, test_guest, 53, 5))
        assert response.status_code == 409
        data = response.json()
        assert data["code"] == "availability_conflict"
        assert data["conflicting_booking_ids"] == [first.json()["id"]]

    async def test_back_to_back_is_not_a_conflict(self, client: AsyncClient, test_property, test_guest) -> None:
        assert (await client.post("/api/v1/bookings", json=_payload(test_property, test_guest, 60, 5))).status_code == 201
        assert (await client.post("/api/v1/bookings", json=_payload(test_property, test_guest, 65, 5))).status_code == 201

    async def test_create_invalid_dates(self, client: AsyncClient, test_property, test_guest) -> None:
        """check_out_date must be after check_in_date."""
        payload = _payload(test_property, test_guest)
        payload["check_out_date"] = payload["check_in_date"]
        response = await client.post("/api/v1/bookings", json=payload)
        assert response.status_code == 422

    async def test_create_too_many_guests(self, client: AsyncClient, test_property, test_guest) -> None:
        payload = _payload(test_property, test_guest)
        payload["guests_count"] = 9
        response = await client.post("/api/v1/bookings", json=payload)
        assert response.status_code == 422
        assert "at most 4 guests" in response.json()["detail"]

    async def test_create_unknown_property(self, client: AsyncClient, test_property, test_guest) -> None:
        payload = _payload(test_property, test_guest)
        payload["property_id"] = str(uuid.uuid4())
        response = await client.post("/api/v1/bookings", json=payload)
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"


# ---------------------------------------------------------------------------
# GET /api/v1/bookings/{id}
# ---------------------------------------------------------------------------


class TestGetBooking:
    async def test_get_booking(self, client: AsyncClient, make_booking) -> None:
        booking = await make_booking()
        response = await client.get(f"/api/v1/bookings/{booking.id}")
        assert response.status_code == 200
        assert response.json()["id"] == str(booking.id)
        assert response.json()["total_amount"] == booking.total_amount

    async def test_get_missing_booking(self, client: AsyncClient) -> None:
        response = await client.get(f"/api/v1/bookings/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["code"] == "booking_not_found"


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


class TestApproveBooking:
    async def test_approve_requires_token(self, client: AsyncClient, make_booking, approval_property) -> None:
        booking = await make_booking(prop=approval_property)
        response = await client.post(f"/api/v1/bookings/{booking.id}/approve")
        assert response.status_code in (401, 403)

    async def test_approve_rejects_wrong_token(self, client: AsyncClient, make_booking, approval_property) -> None:
        booking = await make_booking(prop=approval_property)
        response = await client.post(
            f"/api/v1/bookings/{booking.id}/approve",
            headers={"Authorization": "Bearer not-the-key"},
        )
        assert response.status_code == 401

    async def test_approve(self, client: AsyncClient, admin_headers, make_booking, approval_property) -> None:
        booking = await make_booking(prop=approval_property)
        response = await client.post(f"/api/v1/bookings/{booking.id}/approve", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "awaiting_payment"
        assert data["payment_expires_at"] is not None
        assert data["platform_commission"] == 4169

    async def test_approve_twice_conflicts(
        self, client: AsyncClient, admin_headers, make_booking, approval_property
    ) -> None:
        booking = await make_booking(prop=approval_property)
        await client.post(f"/api/v1/bookings/{booking.id}/approve", headers=admin_headers)
        response = await client.post(f"/api/v1/bookings/{booking.id}/approve", headers=admin_headers)
        assert response.status_code == 409
        data = response.json()
        assert data["code"] == "invalid_transition"
        assert data["current_status"] == "awaiting_payment"
        assert data["attempted_status"] == "awaiting_payment"
        assert "required_status" not in data


class TestCancelBooking:
    async def test_cancel_with_reason(self, client: AsyncClient, make_booking) -> None:
        booking = await make_booking()
        response = await client.post(f"/api/v1/bookings/{booking.id}/cancel", json={"reason": "Plans changed"})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "cancelled"
        assert data["cancellation_reason"] == "Plans changed"
        assert data["cancelled_at"] is not None

    async def test_cancel_without_body(self, client: AsyncClient, make_booking) -> None:
        booking = await make_booking()
        response = await client.post(f"/api/v1/bookings/{booking.id}/cancel")
        assert response.status_code == 200
        assert response.json()["cancellation_reason"] is None

    async def test_cancel_twice_conflicts(self, client: AsyncClient, make_booking) -> None:
        booking = await make_booking()
        await client.post(f"/api/v1/bookings/{booking.id}/cancel")
        response = await client.post(f"/api/v1/bookings/{booking.id}/cancel")
        assert response.status_code == 409
        assert response.json()["current_status"] == "cancelled"
        assert response.json()["attempted_status"] == "cancelled"

    async def test_cancelled_dates_can_be_rebooked(
        self, client: AsyncClient, test_property, test_guest
    ) -> None:
        payload = _payload(test_property, test_guest, 90, 4)
        first = await client.post("/api/v1/bookings", json=payload)
        await client.post(f"/api/v1/bookings/{first.json()['id']}/cancel")

        response = await client.post("/api/v1/bookings", json=payload)
        assert response.status_code == 201


class TestCompleteBooking:
    async def test_complete_requires_admin(self, client: AsyncClient, make_booking) -> None:
        booking = await make_booking()
        response = await client.post(
            f"/api/v1/bookings/{booking.id}/complete",
            headers={"Authorization": "Bearer not-the-key"},
        )
        assert response.status_code == 401

    async def test_complete_unconfirmed_conflicts(self, client: AsyncClient, admin_headers, make_booking) -> None:
        booking = await make_booking()
        response = await client.post(f"/api/v1/bookings/{booking.id}/complete", headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["code"] == "invalid_transition"
