"""Booking number generation."""

import asyncio
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

_BOOKING_NUMBER_RE = re.compile(r"^[A-Z0-9]+-\d{4}-(\d{6,})$")


class BookingNumberGenerator:
    """Process-wide monotonically increasing booking numbers.

    Numbers look like ``JY-2026-001001``: prefix, calendar year, and a
    zero-padded sequence. The sequence only advances when the block using a
    reserved number completes without raising, so rejected or failed
    creations never consume a number.
    """

    def __init__(self, prefix: str = "JY", seed: int = 1000) -> None:
        self.prefix = prefix
        self._last = seed
        self._lock = asyncio.Lock()

    @property
    def last_sequence(self) -> int:
        return self._last

    def format(self, sequence: int, year: int) -> str:
        """Format a booking number.

        Args:
            sequence: Sequence component
            year: Calendar year

        Returns:
            str: Booking number like 'JY-2026-001001'
        """
        return f"{self.prefix}-{year}-{sequence:06d}"

    @staticmethod
    def parse_sequence(booking_number: str) -> int | None:
        """Extract the sequence component of a booking number."""
        match = _BOOKING_NUMBER_RE.match(booking_number)
        if not match:
            return None
        return int(match.group(1))

    def sync(self, persisted_last: int | None) -> None:
        """Move the counter past a sequence restored from storage."""
        if persisted_last is not None and persisted_last > self._last:
            self._last = persisted_last

    @asynccontextmanager
    async def reserve(self, year: int) -> AsyncIterator[str]:
        """Reserve the next booking number for the duration of the block.

        Usage:
            async with generator.reserve(2026) as number:
                await store.create(...)
        """
        async with self._lock:
            sequence = self._last + 1
            yield self.format(sequence, year)
            self._last = sequence
