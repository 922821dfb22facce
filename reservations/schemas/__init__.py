"""Pydantic schemas for bookings and API validation."""

from reservations.schemas.booking import (
    Booking,
    BookingCancelRequest,
    BookingCreate,
    BookingListResponse,
    BookingPricing,
    CancellationResponse,
    GuestCount,
    GuestCountInput,
    GuestDetails,
    GuestDetailsInput,
    ListingType,
)

__all__ = [
    "Booking",
    "BookingCancelRequest",
    "BookingCreate",
    "BookingListResponse",
    "BookingPricing",
    "CancellationResponse",
    "GuestCount",
    "GuestCountInput",
    "GuestDetails",
    "GuestDetailsInput",
    "ListingType",
]
