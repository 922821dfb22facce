"""Tests for the booking state machine."""

import pytest

from reservations.domain.booking_state import (
    BOOKING_TRANSITIONS,
    BookingStatus,
    can_transition,
    is_terminal,
)


@pytest.mark.parametrize(
    "current,target",
    [
        ("pending", "confirmed"),
        ("pending", "cancelled"),
        ("confirmed", "cancelled"),
        ("confirmed", "completed"),
    ],
)
def test_allowed_transitions(current, target):
    assert can_transition(current, target) is True


@pytest.mark.parametrize(
    "current,target",
    [
        ("pending", "completed"),
        ("cancelled", "cancelled"),
        ("cancelled", "pending"),
        ("completed", "cancelled"),
        ("completed", "completed"),
        ("confirmed", "pending"),
    ],
)
def test_rejected_transitions(current, target):
    assert can_transition(current, target) is False


def test_terminal_states():
    assert is_terminal(BookingStatus.CANCELLED)
    assert is_terminal(BookingStatus.COMPLETED)
    assert not is_terminal(BookingStatus.PENDING)
    assert not is_terminal(BookingStatus.CONFIRMED)


def test_every_status_has_an_entry():
    assert set(BOOKING_TRANSITIONS) == set(BookingStatus)
