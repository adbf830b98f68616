"""
Tests for calendar-day key normalization.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from utils.date_keys import normalize_date_key, format_date_key, iter_days, days_between


class TestNormalizeDateKey:
    """Tests for normalize_date_key()."""

    @pytest.mark.parametrize('value', [
        '2024-05-01',
        '2024-05-01T00:00:00',
        '2024-05-01T00:00:00.000Z',
        '2024-05-01T23:59:59+08:00',
        '2024-05-01 10:30:00',
        date(2024, 5, 1),
        datetime(2024, 5, 1, 18, 45),
    ])
    def test_same_calendar_day(self, value):
        """All representations of 1 May 2024 map to the same key."""
        assert normalize_date_key(value) == date(2024, 5, 1)

    @pytest.mark.parametrize('value', [
        '2024-05-01',
        '2024-05-01T12:00:00Z',
        datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        date(2024, 5, 1),
    ])
    def test_idempotent(self, value):
        """Normalizing a key again returns the same key."""
        key = normalize_date_key(value)
        assert normalize_date_key(key) == key

    def test_datetime_is_reduced_to_date(self):
        """A datetime key comes back as a plain date."""
        key = normalize_date_key(datetime(2024, 5, 1, 8, 0))
        assert type(key) is date

    def test_timezone_conversion(self):
        """Aware values are converted into the given zone first."""
        value = '2024-04-30T20:00:00+00:00'
        assert normalize_date_key(value) == date(2024, 4, 30)
        assert normalize_date_key(value, tz=ZoneInfo('Asia/Kuala_Lumpur')) == date(2024, 5, 1)

    @pytest.mark.parametrize('value', [None, '', '   ', 'not-a-date', '2024-13-45', 12345, []])
    def test_unparseable_returns_none(self, value):
        """Bad input never raises."""
        assert normalize_date_key(value) is None

    def test_unparseable_is_logged(self, caplog):
        """Normalization failures leave a warning."""
        with caplog.at_level(logging.WARNING, logger='utils.date_keys'):
            normalize_date_key('garbage')
        assert 'garbage' in caplog.text


class TestIterDays:
    """Tests for iter_days()."""

    def test_inclusive_range(self):
        days = list(iter_days('2024-05-01', '2024-05-03'))
        assert days == [date(2024, 5, 1), date(2024, 5, 2), date(2024, 5, 3)]

    def test_single_day(self):
        assert list(iter_days('2024-05-01', '2024-05-01')) == [date(2024, 5, 1)]

    def test_reversed_range_is_empty(self):
        assert list(iter_days('2024-05-03', '2024-05-01')) == []

    def test_invalid_bound_is_empty(self):
        assert list(iter_days('nope', '2024-05-01')) == []

    def test_across_dst_change(self):
        """Day stepping ignores DST (Europe switched on 2024-03-31)."""
        days = list(iter_days('2024-03-30', '2024-04-01'))
        assert len(days) == 3
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))

    def test_last_representable_day(self):
        days = list(iter_days('9999-12-30', '9999-12-31'))
        assert days == [date(9999, 12, 30), date.max]


def test_format_date_key():
    assert format_date_key(datetime(2024, 5, 1, 9, 30)) == '2024-05-01'
    assert format_date_key('bad') is None


def test_days_between():
    assert days_between('2024-02-28', '2024-03-01') == 2
    assert days_between('bad', '2024-03-01') is None
