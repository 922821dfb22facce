"""SQLAlchemy-backed booking store."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reservations.core.exceptions import ExternalServiceError, NotFoundError
from reservations.models.booking import BookingRecord
from reservations.schemas.booking import (
    Booking,
    BookingPricing,
    GuestCount,
    GuestDetails,
)
from reservations.utils.booking_number import BookingNumberGenerator

logger = logging.getLogger(__name__)


def _aware(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _apply(record: BookingRecord, booking: Booking) -> BookingRecord:
    """Copy every mutable booking field onto a row."""
    record.booking_number = booking.booking_number
    record.sequence = BookingNumberGenerator.parse_sequence(booking.booking_number) or 0
    record.listing_type = booking.listing_type.value
    record.listing_id = booking.listing_id
    record.listing_title = booking.listing_title
    record.owner_id = booking.owner_id
    record.check_in = booking.check_in
    record.check_out = booking.check_out
    record.adults = booking.guests.adults
    record.children = booking.guests.children
    record.guest_name = booking.guest_details.name
    record.guest_email = booking.guest_details.email
    record.guest_phone = booking.guest_details.phone
    record.special_requests = booking.special_requests
    record.base_price = booking.pricing.base_price
    record.cleaning_fee = booking.pricing.cleaning_fee
    record.service_fee = booking.pricing.service_fee
    record.taxes = booking.pricing.taxes
    record.total_price = booking.pricing.total
    record.status = booking.status.value
    record.payment_status = booking.payment_status.value
    record.cancellation_reason = booking.cancellation_reason
    record.cancelled_at = booking.cancelled_at
    record.created_at = booking.created_at
    record.updated_at = booking.updated_at
    return record


def _to_booking(record: BookingRecord) -> Booking:
    return Booking(
        id=record.id,
        booking_number=record.booking_number,
        listing_type=record.listing_type,
        listing_id=record.listing_id,
        listing_title=record.listing_title,
        owner_id=record.owner_id,
        check_in=_aware(record.check_in),
        check_out=_aware(record.check_out),
        guests=GuestCount(adults=record.adults, children=record.children),
        guest_details=GuestDetails(
            name=record.guest_name,
            email=record.guest_email,
            phone=record.guest_phone,
        ),
        special_requests=record.special_requests,
        pricing=BookingPricing(
            base_price=record.base_price,
            cleaning_fee=record.cleaning_fee,
            service_fee=record.service_fee,
            taxes=record.taxes,
            total=record.total_price,
        ),
        status=record.status,
        payment_status=record.payment_status,
        cancellation_reason=record.cancellation_reason,
        cancelled_at=_aware(record.cancelled_at),
        created_at=_aware(record.created_at),
        updated_at=_aware(record.updated_at),
    )


class SqlBookingStore:
    """Booking store on an async SQLAlchemy session factory.

    Each call runs in its own transaction. Database errors surface as
    ``ExternalServiceError`` and are not retried.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    def _unavailable(self, operation: str, error: SQLAlchemyError) -> ExternalServiceError:
        logger.error(f"Booking store {operation} failed: {error}")
        return ExternalServiceError("booking-store", str(error))

    async def create(self, booking: Booking) -> Booking:
        try:
            async with self.session_factory() as session, session.begin():
                session.add(_apply(BookingRecord(id=booking.id), booking))
        except SQLAlchemyError as e:
            raise self._unavailable("create", e) from e
        return booking

    async def get(self, booking_id: UUID) -> Booking | None:
        try:
            async with self.session_factory() as session:
                record = await session.get(BookingRecord, booking_id)
                return _to_booking(record) if record else None
        except SQLAlchemyError as e:
            raise self._unavailable("get", e) from e

    async def update(self, booking: Booking) -> Booking:
        try:
            async with self.session_factory() as session, session.begin():
                record = await session.get(BookingRecord, booking.id)
                if record is None:
                    raise NotFoundError("Booking", str(booking.id))
                _apply(record, booking)
        except SQLAlchemyError as e:
            raise self._unavailable("update", e) from e
        return booking

    async def scan(self, listing_id: str | None = None) -> list[Booking]:
        query = select(BookingRecord).order_by(BookingRecord.sequence)
        if listing_id is not None:
            query = query.where(BookingRecord.listing_id == listing_id)
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return [_to_booking(record) for record in result.scalars().all()]
        except SQLAlchemyError as e:
            raise self._unavailable("scan", e) from e

    async def last_sequence(self) -> int | None:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(func.max(BookingRecord.sequence)))
                return result.scalar()
        except SQLAlchemyError as e:
            raise self._unavailable("last_sequence", e) from e
