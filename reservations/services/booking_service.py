"""Booking lifecycle service.

Owns creation and cancellation of bookings:

- create: batch-validate input, check the stay dates, check availability,
  then persist a ``pending`` booking with a fresh booking number
- cancel: only ``pending`` and ``confirmed`` bookings can be cancelled;
  cancelling twice or cancelling a completed booking is rejected

Confirmation and completion happen outside this service.

Creation and cancellation are serialized per listing, so two overlapping
requests for the same listing can never both pass the availability check.
Requests for different listings run concurrently.
"""

import asyncio
import logging
import uuid
from collections import Counter
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID

from reservations.core.exceptions import ExternalServiceError
from reservations.domain.availability import AvailabilityIndex
from reservations.domain.booking_state import BookingStatus, PaymentStatus, can_transition
from reservations.domain.outcomes import (
    BookingCancelled,
    BookingCreated,
    CancelOutcome,
    CreateOutcome,
    FieldError,
    InvalidStateTransition,
    NotFound,
    RefundIntent,
    TransitionRejection,
    Unavailable,
    ValidationFailed,
)
from reservations.schemas.booking import (
    Booking,
    BookingCreate,
    GuestCount,
    GuestDetails,
    ListingType,
)
from reservations.services.booking_store import BookingStore
from reservations.services.listing_titles import ListingTitleResolver, NullTitleResolver
from reservations.utils.booking_number import BookingNumberGenerator
from reservations.utils.validators import is_blank, parse_stay_date, validate_email

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BookingService:
    """Service for the booking lifecycle."""

    def __init__(
        self,
        store: BookingStore,
        title_resolver: ListingTitleResolver | None = None,
        numbers: BookingNumberGenerator | None = None,
        clock: Callable[[], datetime] = _utcnow,
        title_lookup_timeout: float | None = None,
    ) -> None:
        self.store = store
        self.availability = AvailabilityIndex(store)
        self.titles = title_resolver or NullTitleResolver()
        self.numbers = numbers or BookingNumberGenerator()
        self.clock = clock
        self.title_lookup_timeout = title_lookup_timeout
        self._listing_locks: dict[str, asyncio.Lock] = {}
        self._lock_users: Counter[str] = Counter()
        self._numbers_synced = False

    @asynccontextmanager
    async def _lock_for(self, listing_id: str) -> AsyncIterator[None]:
        """Hold the listing lock. The lock is dropped once no task holds or awaits it."""
        lock = self._listing_locks.setdefault(listing_id, asyncio.Lock())
        self._lock_users[listing_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[listing_id] -= 1
            if not self._lock_users[listing_id]:
                del self._lock_users[listing_id]
                del self._listing_locks[listing_id]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_booking(self, booking_id: UUID) -> Booking | None:
        return await self.store.get(booking_id)

    async def get_owner(self, booking_id: str | UUID) -> str | None:
        """Owner resolver for ownership checks on a booking."""
        try:
            key = booking_id if isinstance(booking_id, UUID) else UUID(str(booking_id))
        except ValueError:
            return None
        booking = await self.store.get(key)
        return booking.owner_id if booking else None

    async def list_bookings(
        self,
        status: BookingStatus | str | None = None,
        listing_id: str | None = None,
    ) -> list[Booking]:
        """List bookings, newest first."""
        bookings = await self.store.scan(listing_id=listing_id)
        if status:
            bookings = [b for b in bookings if b.status == BookingStatus(status)]
        # scan() yields creation order
        return list(reversed(bookings))

    async def check_availability(
        self,
        listing_id: str,
        check_in: datetime,
        check_out: datetime,
        exclude_booking_id: UUID | None = None,
    ) -> Booking | None:
        """Return the booking blocking the window, or None if it is free."""
        return await self.availability.find_conflict(
            listing_id, check_in, check_out, exclude_booking_id=exclude_booking_id
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def _validate_fields(self, data: BookingCreate) -> list[FieldError]:
        errors: list[FieldError] = []

        if data.listing_type not in {t.value for t in ListingType}:
            errors.append(FieldError("listing_type", 'Listing type must be "homestay" or "guide"'))
        if is_blank(data.listing_id):
            errors.append(FieldError("listing_id", "Listing ID is required"))
        if data.check_in is None or (isinstance(data.check_in, str) and is_blank(data.check_in)):
            errors.append(FieldError("check_in", "Check-in date is required"))
        if data.check_out is None or (isinstance(data.check_out, str) and is_blank(data.check_out)):
            errors.append(FieldError("check_out", "Check-out date is required"))

        adults = data.guests.adults if data.guests else None
        if adults is None or adults < 1:
            errors.append(FieldError("guests.adults", "At least 1 adult guest is required"))

        details = data.guest_details
        if details is None or is_blank(details.name):
            errors.append(FieldError("guest_details.name", "Guest name is required"))
        if details is None or is_blank(details.email):
            errors.append(FieldError("guest_details.email", "Guest email is required"))
        elif not validate_email(details.email):
            errors.append(FieldError("guest_details.email", "Please enter a valid email"))

        return errors

    async def _resolve_title(self, listing_type: ListingType, listing_id: str) -> str | None:
        try:
            return await asyncio.wait_for(
                self.titles.resolve_title(listing_type, listing_id),
                timeout=self.title_lookup_timeout,
            )
        except Exception as e:
            logger.error(f"Listing title lookup failed for {listing_type.value}/{listing_id}: {e}")
            raise ExternalServiceError("listing-titles", str(e)) from e

    async def _ensure_numbers_synced(self) -> None:
        if not self._numbers_synced:
            self.numbers.sync(await self.store.last_sequence())
            self._numbers_synced = True

    async def create_booking(self, data: BookingCreate, owner_id: str | None = None) -> CreateOutcome:
        """Create a new booking in ``pending`` status.

        Args:
            data: Booking request
            owner_id: Subject id of the caller creating the booking

        Returns:
            CreateOutcome: ``BookingCreated``, or ``ValidationFailed`` /
            ``Unavailable`` when the request is rejected. Rejections leave
            no trace in the store or the booking-number sequence.
        """
        errors = self._validate_fields(data)
        if errors:
            return ValidationFailed(tuple(errors))

        now = self.clock()
        check_in = parse_stay_date(data.check_in)
        check_out = parse_stay_date(data.check_out)

        if check_in is None:
            return ValidationFailed((FieldError("check_in", "Check-in date is not a valid date"),))
        if check_out is None:
            return ValidationFailed((FieldError("check_out", "Check-out date is not a valid date"),))
        if check_in <= now:
            return ValidationFailed((FieldError("check_in", "Check-in date must be in the future"),))
        if check_out <= check_in:
            return ValidationFailed(
                (FieldError("check_out", "Check-out date must be after check-in date"),)
            )

        listing_type = ListingType(data.listing_type)
        listing_id = data.listing_id.strip()

        async with self._lock_for(listing_id):
            conflict = await self.availability.find_conflict(listing_id, check_in, check_out)
            if conflict:
                logger.info(
                    f"Booking request for listing {listing_id} rejected: "
                    f"overlaps booking {conflict.booking_number}"
                )
                return Unavailable(
                    requested_check_in=check_in,
                    requested_check_out=check_out,
                    conflicting_booking=conflict,
                )

            listing_title = await self._resolve_title(listing_type, listing_id)
            await self._ensure_numbers_synced()

            async with self.numbers.reserve(now.year) as booking_number:
                booking = Booking(
                    id=uuid.uuid4(),
                    booking_number=booking_number,
                    listing_type=listing_type,
                    listing_id=listing_id,
                    listing_title=listing_title,
                    owner_id=owner_id,
                    check_in=check_in,
                    check_out=check_out,
                    guests=GuestCount(adults=data.guests.adults, children=data.guests.children),
                    guest_details=GuestDetails(
                        name=data.guest_details.name.strip(),
                        email=data.guest_details.email.strip(),
                        phone=data.guest_details.phone,
                    ),
                    special_requests=data.special_requests,
                    pricing=data.pricing,
                    status=BookingStatus.PENDING,
                    payment_status=PaymentStatus.PENDING,
                    created_at=now,
                    updated_at=now,
                )
                await self.store.create(booking)

        logger.info(
            f"Booking {booking.booking_number} created for {listing_type.value} {listing_id} "
            f"({booking.nights} nights)"
        )
        return BookingCreated(booking)

    # ------------------------------------------------------------------
    # Cancel
    # ------------------------------------------------------------------

    async def cancel_booking(self, booking_id: UUID, reason: str | None = None) -> CancelOutcome:
        """Cancel a pending or confirmed booking.

        Args:
            booking_id: Booking to cancel
            reason: Optional free-text cancellation reason

        Returns:
            CancelOutcome: ``BookingCancelled`` with the refund intent, or
            ``NotFound`` / ``InvalidStateTransition``. A rejected attempt
            leaves the stored booking untouched.
        """
        existing = await self.store.get(booking_id)
        if existing is None:
            return NotFound("Booking", str(booking_id))

        async with self._lock_for(existing.listing_id):
            # Re-read under the listing lock; status may have changed meanwhile
            booking = await self.store.get(booking_id)
            if booking is None:
                return NotFound("Booking", str(booking_id))

            if booking.status == BookingStatus.CANCELLED:
                return InvalidStateTransition(
                    current_status=booking.status.value,
                    attempted_action="cancel",
                    reason=TransitionRejection.ALREADY_CANCELLED,
                    message="This booking is already cancelled",
                )
            if booking.status == BookingStatus.COMPLETED:
                return InvalidStateTransition(
                    current_status=booking.status.value,
                    attempted_action="cancel",
                    reason=TransitionRejection.CANNOT_CANCEL_COMPLETED,
                    message="Cannot cancel a completed booking",
                )
            if not can_transition(booking.status, BookingStatus.CANCELLED):
                return InvalidStateTransition(
                    current_status=booking.status.value,
                    attempted_action="cancel",
                    reason=TransitionRejection.NOT_ALLOWED,
                    message=f"Invalid booking transition: {booking.status.value} → cancelled",
                )

            now = self.clock()
            cancelled = booking.model_copy(
                update={
                    "status": BookingStatus.CANCELLED,
                    "cancellation_reason": reason,
                    "cancelled_at": now,
                    "updated_at": now,
                }
            )
            await self.store.update(cancelled)

        logger.info(f"Booking {cancelled.booking_number} cancelled")
        return BookingCancelled(
            booking=cancelled,
            refund=RefundIntent(amount=cancelled.pricing.total),
        )
