"""Booking-related Pydantic schemas."""

import math
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field

from reservations.domain.booking_state import BookingStatus, PaymentStatus


class ListingType(str, Enum):
    """Kinds of bookable listings."""

    HOMESTAY = "homestay"
    GUIDE = "guide"


class GuestCount(BaseModel):
    """Guest count breakdown. ``total`` is always derived."""

    model_config = ConfigDict(frozen=True)

    adults: int = Field(ge=1)
    children: int = Field(default=0, ge=0)

    @computed_field
    @property
    def total(self) -> int:
        return self.adults + self.children


class GuestDetails(BaseModel):
    """Guest contact details."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    phone: str | None = None


class BookingPricing(BaseModel):
    """Pricing breakdown supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    base_price: Decimal = Field(ge=0)
    cleaning_fee: Decimal | None = Field(default=None, ge=0)
    service_fee: Decimal | None = Field(default=None, ge=0)
    taxes: Decimal | None = Field(default=None, ge=0)
    total: Decimal = Field(ge=0)


class Booking(BaseModel):
    """Booking record.

    Instances are immutable; lifecycle changes produce a new instance with
    ``model_copy(update=...)`` which the store swaps in whole.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    booking_number: str
    listing_type: ListingType
    listing_id: str
    listing_title: str | None = None
    owner_id: str | None = None

    # Stay window
    check_in: datetime
    check_out: datetime

    # Parties
    guests: GuestCount
    guest_details: GuestDetails
    special_requests: str | None = None

    # Commercial
    pricing: BookingPricing

    # Status
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING

    # Cancellation
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None

    # Timestamps
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def nights(self) -> int:
        """Number of nights, rounded up to whole days."""
        return math.ceil((self.check_out - self.check_in) / timedelta(days=1))


class GuestCountInput(BaseModel):
    """Guest counts as submitted. A submitted ``total`` is ignored."""

    adults: int | None = None
    children: int = Field(default=0, ge=0)
    total: int | None = None


class GuestDetailsInput(BaseModel):
    """Guest details as submitted."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None


class BookingCreate(BaseModel):
    """Schema for creating a booking.

    Most fields are optional here so that the booking service can report
    every missing or invalid field in one response.
    """

    listing_type: str | None = None
    listing_id: str | None = None
    check_in: str | date | None = None
    check_out: str | date | None = None
    guests: GuestCountInput | None = None
    guest_details: GuestDetailsInput | None = None
    special_requests: str | None = Field(None, max_length=1000)
    pricing: BookingPricing


class BookingCancelRequest(BaseModel):
    """Schema for cancelling a booking."""

    reason: str | None = Field(None, max_length=1000)


class CancellationResponse(BaseModel):
    """Schema for a cancellation result with the refund intent."""

    id: UUID
    status: BookingStatus
    cancellation_reason: str | None
    cancelled_at: datetime | None
    refund_amount: Decimal
    refund_status: str


class BookingListResponse(BaseModel):
    """Schema for paginated booking list."""

    bookings: list[Booking]
    total: int
    page: int
    page_size: int
