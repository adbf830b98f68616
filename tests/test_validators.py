"""
Tests for request validation helpers.
"""

from datetime import date

import pytest

from utils.validators import (
    parse_int, parse_year_month, validate_date_range, validate_date_format,
    validate_gender, sanitize_input
)


class TestParseInt:
    """Tests for parse_int()."""

    @pytest.mark.parametrize('value,expected', [
        ('5', 5), (7, 7), ('', None), (None, None), ('abc', None), (True, None)
    ])
    def test_values(self, value, expected):
        assert parse_int(value) == expected

    def test_default(self):
        assert parse_int('x', default=3) == 3


class TestParseYearMonth:
    """Tests for parse_year_month()."""

    def test_valid(self):
        assert parse_year_month('2024', '2', date(2026, 10, 19)) == (2024, 2)

    @pytest.mark.parametrize('year,month', [(None, None), ('1999', '13'), ('abc', '0')])
    def test_falls_back_to_today(self, year, month):
        assert parse_year_month(year, month, date(2026, 10, 19)) == (2026, 10)


class TestDateValidation:
    """Tests for date range and format validation."""

    def test_date_range(self):
        assert validate_date_range('2024-05-01', '2024-05-01')
        assert validate_date_range('2024-05-01', '2024-05-02T00:00:00Z')
        assert not validate_date_range('2024-05-02', '2024-05-01')
        assert not validate_date_range(None, '2024-05-01')

    def test_date_format(self):
        assert validate_date_format('2024-05-01')
        assert not validate_date_format('01/05/2024')


class TestMisc:
    """Tests for gender and text helpers."""

    def test_gender(self):
        assert validate_gender('Female')
        assert not validate_gender('female')

    def test_sanitize_input(self):
        assert sanitize_input('  Maintenance  ') == 'Maintenance'
        assert sanitize_input('abcdef', max_length=3) == 'abc'
        assert sanitize_input(None) == ''
