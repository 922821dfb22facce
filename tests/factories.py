"""Builders for booking requests, stored bookings and bearer tokens."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from jose import jwt

from reservations.config import settings
from reservations.domain.booking_state import BookingStatus
from reservations.schemas.booking import (
    Booking,
    BookingCreate,
    BookingPricing,
    GuestCount,
    GuestDetails,
    ListingType,
)


def tomorrow() -> date:
    return datetime.now(UTC).date() + timedelta(days=1)


def day(offset: int) -> str:
    """ISO date ``offset`` days after tomorrow."""
    return (tomorrow() + timedelta(days=offset)).isoformat()


def at(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=UTC)


def booking_payload(
    listing_id: str = "L1",
    check_in: str | None = None,
    check_out: str | None = None,
    **overrides,
) -> dict:
    payload = {
        "listing_type": "homestay",
        "listing_id": listing_id,
        "check_in": check_in or day(0),
        "check_out": check_out or day(2),
        "guests": {"adults": 2},
        "guest_details": {"name": "Asel Nurlanova", "email": "asel@example.com", "phone": "+77010000000"},
        "pricing": {"base_price": "180.00", "cleaning_fee": "20.00", "total": "200.00"},
    }
    payload.update(overrides)
    return payload


def booking_request(
    listing_id: str = "L1",
    check_in: str | None = None,
    check_out: str | None = None,
    **overrides,
) -> BookingCreate:
    return BookingCreate.model_validate(booking_payload(listing_id, check_in, check_out, **overrides))


def make_booking(
    listing_id: str = "L1",
    check_in: str = "2030-01-10",
    check_out: str = "2030-01-12",
    status: BookingStatus = BookingStatus.PENDING,
    sequence: int = 1001,
    owner_id: str | None = "customer-1",
) -> Booking:
    created = datetime(2029, 12, 1, tzinfo=UTC) + timedelta(minutes=sequence)
    return Booking(
        id=uuid.uuid4(),
        booking_number=f"JY-2029-{sequence:06d}",
        listing_type=ListingType.HOMESTAY,
        listing_id=listing_id,
        owner_id=owner_id,
        check_in=at(check_in),
        check_out=at(check_out),
        guests=GuestCount(adults=2),
        guest_details=GuestDetails(name="Guest", email="guest@example.com"),
        pricing=BookingPricing(base_price=Decimal("100"), total=Decimal("100")),
        status=status,
        created_at=created,
        updated_at=created,
    )


def token_for(subject_id: str, role: str, **claims) -> str:
    payload = {
        "sub": subject_id,
        "role": role,
        "type": "access",
        "exp": datetime.now(UTC) + timedelta(minutes=15),
        **claims,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def auth(subject_id: str, role: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(subject_id, role)}"}
