"""Tests for booking number generation."""

import pytest

from reservations.utils.booking_number import BookingNumberGenerator


async def test_first_number_follows_seed():
    generator = BookingNumberGenerator("JY", 1000)
    async with generator.reserve(2026) as number:
        assert number == "JY-2026-001001"
    assert generator.last_sequence == 1001


async def test_sequence_is_not_reset_by_year():
    generator = BookingNumberGenerator()
    async with generator.reserve(2026):
        pass
    async with generator.reserve(2027) as number:
        assert number == "JY-2027-001002"


async def test_failed_block_does_not_consume():
    generator = BookingNumberGenerator()
    with pytest.raises(RuntimeError):
        async with generator.reserve(2026):
            raise RuntimeError("store failed")

    async with generator.reserve(2026) as number:
        assert number == "JY-2026-001001"


def test_format_pads_to_six_digits():
    generator = BookingNumberGenerator("AB", 0)
    assert generator.format(7, 2030) == "AB-2030-000007"
    assert generator.format(1234567, 2030) == "AB-2030-1234567"


@pytest.mark.parametrize(
    "number,expected",
    [
        ("JY-2026-001001", 1001),
        ("JY-2026-1234567", 1234567),
        ("JY-2026-12", None),
        ("jy-2026-001001", None),
        ("garbage", None),
    ],
)
def test_parse_sequence(number, expected):
    assert BookingNumberGenerator.parse_sequence(number) == expected


def test_sync_only_moves_forward():
    generator = BookingNumberGenerator(seed=1000)
    generator.sync(None)
    assert generator.last_sequence == 1000
    generator.sync(990)
    assert generator.last_sequence == 1000
    generator.sync(1200)
    assert generator.last_sequence == 1200
