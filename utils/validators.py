"""
Input validation helper functions.
Provides validation for request parameters and booking payloads.
"""

from datetime import date
from typing import Optional

from utils.date_keys import normalize_date_key

VALID_GENDERS = ('Male', 'Female')


def validate_date_range(start_date, end_date) -> bool:
    """
    Validate that both dates parse and end date is not before start date.

    Args:
        start_date: Start date (date-like)
        end_date: End date (date-like)

    Returns:
        True if valid date range
    """
    start = normalize_date_key(start_date)
    end = normalize_date_key(end_date)
    if start is None or end is None:
        return False
    return end >= start


def validate_date_format(date_str) -> bool:
    """
    Validate date is a parseable ISO date or timestamp.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    return normalize_date_key(date_str) is not None


def parse_int(value, default: Optional[int] = None) -> Optional[int]:
    """
    Parse an integer query/body parameter.

    Args:
        value: Raw value (str, int or None)
        default: Value returned when missing or not an integer

    Returns:
        int or default
    """
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_year_month(year, month, today: date) -> tuple:
    """
    Parse year/month parameters, falling back to today's year/month.

    Years outside 2000-2100 and months outside 1-12 fall back as well.

    Returns:
        Tuple of (year, month)
    """
    year_value = parse_int(year)
    month_value = parse_int(month)

    if year_value is None or year_value < 2000 or year_value > 2100:
        year_value = today.year

    if month_value is None or month_value < 1 or month_value > 12:
        month_value = today.month

    return year_value, month_value


def validate_gender(gender) -> bool:
    """Validate a recorded guest gender."""
    return gender in VALID_GENDERS


def sanitize_input(text, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    # Strip whitespace
    sanitized = str(text).strip()

    # Limit length if specified
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
