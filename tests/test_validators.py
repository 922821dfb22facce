"""Tests for input validators."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from reservations.utils.validators import is_blank, parse_stay_date, validate_email


@pytest.mark.parametrize("email", ["asel@example.com", "a.b+c@mail.kg", " guest@host.io "])
def test_valid_emails(email):
    assert validate_email(email) is True


@pytest.mark.parametrize("email", ["", "plain", "no@tld", "two words@x.kg", "@x.kg"])
def test_invalid_emails(email):
    assert validate_email(email) is False


@pytest.mark.parametrize("value,expected", [(None, True), ("", True), ("   ", True), (" x ", False)])
def test_is_blank(value, expected):
    assert is_blank(value) is expected


class TestParseStayDate:
    def test_date_only_is_utc_midnight(self):
        assert parse_stay_date("2030-06-01") == datetime(2030, 6, 1, tzinfo=UTC)

    def test_date_object(self):
        assert parse_stay_date(date(2030, 6, 1)) == datetime(2030, 6, 1, tzinfo=UTC)

    def test_offset_is_converted(self):
        parsed = parse_stay_date("2030-06-01T14:00:00+05:00")
        assert parsed == datetime(2030, 6, 1, 9, tzinfo=UTC)
        assert parsed.tzinfo == UTC

    def test_naive_datetime_is_utc(self):
        assert parse_stay_date("2030-06-01T14:00:00") == datetime(2030, 6, 1, 14, tzinfo=UTC)

    def test_aware_datetime(self):
        value = datetime(2030, 6, 1, 2, tzinfo=timezone(timedelta(hours=6)))
        assert parse_stay_date(value) == datetime(2030, 5, 31, 20, tzinfo=UTC)

    @pytest.mark.parametrize("value", [None, "", "  ", "tomorrow", "2030-13-01"])
    def test_unparseable(self, value):
        assert parse_stay_date(value) is None

    @pytest.mark.parametrize("value", ["9999-12-31T20:00:00-05:00", "0001-01-01T01:00:00+05:00"])
    def test_offset_outside_representable_range(self, value):
        assert parse_stay_date(value) is None
