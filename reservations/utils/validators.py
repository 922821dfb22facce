"""Custom validation utilities."""

import re
from datetime import UTC, date, datetime

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")


def validate_email(email: str) -> bool:
    """Validate email address shape.

    Only checks for ``local@domain.tld`` without whitespace; deliverability
    is not checked.

    Args:
        email: Email address to validate

    Returns:
        bool: True if the address has a valid shape
    """
    return bool(_EMAIL_RE.match(email.strip()))


def is_blank(value: str | None) -> bool:
    """Check for a missing or whitespace-only string."""
    return value is None or not value.strip()


def parse_stay_date(value: str | date | datetime | None) -> datetime | None:
    """Parse a check-in/check-out value into a UTC instant.

    Accepted formats:
    - 2026-06-01 (date only, midnight UTC)
    - 2026-06-01T14:00:00+05:00 (converted to UTC)
    - 2026-06-01T14:00:00 (no offset, treated as UTC)

    Args:
        value: Date string, date or datetime

    Returns:
        datetime | None: Aware UTC datetime, or None if unparseable
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except (OverflowError, ValueError):
        # offset pushes the instant outside the representable range
        return None
