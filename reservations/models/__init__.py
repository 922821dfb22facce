"""Database models."""

from reservations.models.booking import BookingRecord

__all__ = [
    "BookingRecord",
]
