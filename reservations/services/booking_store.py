"""Booking storage interface and the in-memory implementation."""

from typing import Protocol
from uuid import UUID

from reservations.core.exceptions import NotFoundError
from reservations.schemas.booking import Booking
from reservations.utils.booking_number import BookingNumberGenerator


class BookingStore(Protocol):
    """Minimal storage contract used by the booking service.

    Append-only create, point lookup, in-place update and scan. There is no
    delete: cancellation is a status, not a removal.
    """

    async def create(self, booking: Booking) -> Booking: ...

    async def get(self, booking_id: UUID) -> Booking | None: ...

    async def update(self, booking: Booking) -> Booking: ...

    async def scan(self, listing_id: str | None = None) -> list[Booking]:
        """Return bookings in ascending creation order."""
        ...

    async def last_sequence(self) -> int | None:
        """Highest booking-number sequence persisted so far."""
        ...


class InMemoryBookingStore:
    """Process-local booking store.

    Records are immutable and replaced whole, so a reader sees either the
    previous or the new version of a booking, never a partial one.
    """

    def __init__(self) -> None:
        self._bookings: dict[UUID, Booking] = {}

    async def create(self, booking: Booking) -> Booking:
        if booking.id in self._bookings:
            raise ValueError(f"Booking {booking.id} already exists")
        self._bookings[booking.id] = booking
        return booking

    async def get(self, booking_id: UUID) -> Booking | None:
        return self._bookings.get(booking_id)

    async def update(self, booking: Booking) -> Booking:
        if booking.id not in self._bookings:
            raise NotFoundError("Booking", str(booking.id))
        self._bookings[booking.id] = booking
        return booking

    async def scan(self, listing_id: str | None = None) -> list[Booking]:
        # dicts keep insertion order, which is creation order here
        bookings = list(self._bookings.values())
        if listing_id is not None:
            bookings = [b for b in bookings if b.listing_id == listing_id]
        return bookings

    async def last_sequence(self) -> int | None:
        sequences = [
            seq
            for seq in (BookingNumberGenerator.parse_sequence(b.booking_number) for b in self._bookings.values())
            if seq is not None
        ]
        return max(sequences, default=None)

    def __len__(self) -> int:
        return len(self._bookings)
