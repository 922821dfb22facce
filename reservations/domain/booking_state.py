"""Booking state machine."""

from enum import Enum


class BookingStatus(str, Enum):
    """Booking lifecycle states."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    """Payment states (tracked only, driven by external payment events)."""

    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"
    FAILED = "failed"


BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def can_transition(current: str | BookingStatus, target: str | BookingStatus) -> bool:
    allowed = BOOKING_TRANSITIONS.get(BookingStatus(current), frozenset())
    return BookingStatus(target) in allowed


def is_terminal(status: str | BookingStatus) -> bool:
    return not BOOKING_TRANSITIONS.get(BookingStatus(status))
