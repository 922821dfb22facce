"""Tagged results returned by booking lifecycle operations.

Business-rule violations are values, not exceptions. Callers branch on the
result type (or ``kind``) and map each to an external status.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Union

from reservations.schemas.booking import Booking


class OutcomeKind(str, Enum):
    CREATED = "created"
    CANCELLED = "cancelled"
    VALIDATION_FAILED = "validation_failed"
    UNAVAILABLE = "unavailable"
    NOT_FOUND = "not_found"
    INVALID_STATE_TRANSITION = "invalid_state_transition"


class RefundStatus(str, Enum):
    PENDING = "pending"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class RefundIntent:
    """Signals that a refund should happen; execution is external."""

    amount: Decimal
    status: RefundStatus = RefundStatus.PENDING


@dataclass(frozen=True)
class BookingCreated:
    booking: Booking
    kind: OutcomeKind = field(default=OutcomeKind.CREATED, init=False)
    ok = True


@dataclass(frozen=True)
class BookingCancelled:
    booking: Booking
    refund: RefundIntent
    kind: OutcomeKind = field(default=OutcomeKind.CANCELLED, init=False)
    ok = True


@dataclass(frozen=True)
class ValidationFailed:
    errors: tuple[FieldError, ...]
    kind: OutcomeKind = field(default=OutcomeKind.VALIDATION_FAILED, init=False)
    ok = False

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]


@dataclass(frozen=True)
class Unavailable:
    """The requested window overlaps ``conflicting_booking``."""

    requested_check_in: datetime
    requested_check_out: datetime
    conflicting_booking: Booking
    kind: OutcomeKind = field(default=OutcomeKind.UNAVAILABLE, init=False)
    ok = False


@dataclass(frozen=True)
class NotFound:
    resource: str
    identifier: str
    kind: OutcomeKind = field(default=OutcomeKind.NOT_FOUND, init=False)
    ok = False


class TransitionRejection(str, Enum):
    ALREADY_CANCELLED = "already_cancelled"
    CANNOT_CANCEL_COMPLETED = "cannot_cancel_completed"
    NOT_ALLOWED = "not_allowed"


@dataclass(frozen=True)
class InvalidStateTransition:
    current_status: str
    attempted_action: str
    reason: TransitionRejection
    message: str
    kind: OutcomeKind = field(default=OutcomeKind.INVALID_STATE_TRANSITION, init=False)
    ok = False


CreateOutcome = Union[BookingCreated, ValidationFailed, Unavailable]
CancelOutcome = Union[BookingCancelled, NotFound, InvalidStateTransition]
