"""Availability index: overlap detection between stay windows."""

from datetime import datetime
from uuid import UUID

from reservations.domain.booking_state import BookingStatus
from reservations.schemas.booking import Booking
from reservations.services.booking_store import BookingStore


def windows_overlap(
    check_in: datetime,
    check_out: datetime,
    other_check_in: datetime,
    other_check_out: datetime,
) -> bool:
    """Check whether two half-open ``[check_in, check_out)`` windows overlap.

    A window starting exactly when the other ends does not overlap it, so
    same-day turnover is allowed.
    """
    return check_in < other_check_out and check_out > other_check_in


class AvailabilityIndex:
    """Finds bookings that block a requested stay window on a listing.

    Scans the listing's bookings linearly in ascending creation order and
    returns the first blocking one. Cancelled bookings never block.
    """

    def __init__(self, store: BookingStore) -> None:
        self.store = store

    async def find_conflict(
        self,
        listing_id: str,
        check_in: datetime,
        check_out: datetime,
        exclude_booking_id: UUID | None = None,
    ) -> Booking | None:
        """Return the first booking overlapping the window, if any.

        Args:
            listing_id: Listing to check
            check_in: Requested check-in instant
            check_out: Requested check-out instant
            exclude_booking_id: Booking to ignore, e.g. when re-checking
                a booking's own window

        Returns:
            Booking | None: The earliest-created conflicting booking
        """
        for booking in await self.store.scan(listing_id=listing_id):
            if booking.id == exclude_booking_id:
                continue
            if booking.status == BookingStatus.CANCELLED:
                continue
            if windows_overlap(check_in, check_out, booking.check_in, booking.check_out):
                return booking
        return None
