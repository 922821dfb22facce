"""Booking endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from reservations.api.deps import (
    get_booking_service,
    require_booking_cancel,
    require_booking_create,
    require_booking_read,
)
from reservations.core.authorization import Identity
from reservations.core.exceptions import (
    DatesNotAvailable,
    InvalidBookingStatus,
    NotFoundError,
    ValidationError,
)
from reservations.domain.booking_state import BookingStatus
from reservations.domain.outcomes import (
    InvalidStateTransition,
    NotFound,
    Unavailable,
    ValidationFailed,
)
from reservations.schemas.booking import (
    Booking,
    BookingCancelRequest,
    BookingCreate,
    BookingListResponse,
    CancellationResponse,
)
from reservations.services.booking_service import BookingService

router = APIRouter()


def _unavailable_details(outcome: Unavailable) -> dict:
    conflict = outcome.conflicting_booking
    return {
        "requested_check_in": outcome.requested_check_in.date().isoformat(),
        "requested_check_out": outcome.requested_check_out.date().isoformat(),
        "conflicting_booking": {
            "id": str(conflict.id),
            "check_in": conflict.check_in.date().isoformat(),
            "check_out": conflict.check_out.date().isoformat(),
        },
    }


@router.get("/", response_model=BookingListResponse)
async def get_bookings(
    identity: Annotated[Identity, Depends(require_booking_read)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    status_filter: BookingStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100),
) -> BookingListResponse:
    """List bookings, newest first."""
    bookings = await service.list_bookings(status=status_filter)

    # Pagination
    offset = (page - 1) * page_size
    return BookingListResponse(
        bookings=bookings[offset : offset + page_size],
        total=len(bookings),
        page=page,
        page_size=page_size,
    )


@router.get("/{booking_id}", response_model=Booking)
async def get_booking(
    booking_id: UUID,
    identity: Annotated[Identity, Depends(require_booking_read)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> Booking:
    """Get a booking by ID."""
    booking = await service.get_booking(booking_id)
    if not booking:
        raise NotFoundError("Booking", str(booking_id))
    return booking


@router.post("/", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    identity: Annotated[Identity, Depends(require_booking_create)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> Booking:
    """Create a new booking."""
    outcome = await service.create_booking(booking_data, owner_id=identity.subject_id)

    if isinstance(outcome, ValidationFailed):
        raise ValidationError(errors=[error.as_dict() for error in outcome.errors])
    if isinstance(outcome, Unavailable):
        raise DatesNotAvailable(details=_unavailable_details(outcome))
    return outcome.booking


@router.put("/{booking_id}/cancel", response_model=CancellationResponse)
async def cancel_booking(
    booking_id: UUID,
    identity: Annotated[Identity, Depends(require_booking_cancel)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    request: BookingCancelRequest | None = None,
) -> CancellationResponse:
    """Cancel a booking (owner or admin)."""
    outcome = await service.cancel_booking(booking_id, reason=request.reason if request else None)

    if isinstance(outcome, NotFound):
        raise NotFoundError(outcome.resource, outcome.identifier)
    if isinstance(outcome, InvalidStateTransition):
        raise InvalidBookingStatus(outcome.message)

    booking = outcome.booking
    return CancellationResponse(
        id=booking.id,
        status=booking.status,
        cancellation_reason=booking.cancellation_reason,
        cancelled_at=booking.cancelled_at,
        refund_amount=outcome.refund.amount,
        refund_status=outcome.refund.status.value,
    )
