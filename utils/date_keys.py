"""
Calendar-day keys for booking dates.

Bookings arrive with dates in several shapes (plain ISO dates from SQLite,
ISO timestamps from JSON payloads, date/datetime objects). Everything is
reduced to a datetime.date so day comparisons and day arithmetic never depend
on time of day, offsets or DST.
"""

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'


def normalize_date_key(value, tz: Optional[tzinfo] = None) -> Optional[date]:
    """
    Convert a date-like value to its calendar day.

    Args:
        value: ISO string (with or without time/offset), date or datetime
        tz: Optional zone to convert offset-aware values into first

    Returns:
        date or None if the value cannot be parsed
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            logger.warning("Empty booking date ignored")
            return None

        # Plain dates are the common case (SQLite DATE columns)
        if len(text) == 10:
            try:
                return datetime.strptime(text, DATE_FORMAT).date()
            except ValueError:
                pass

        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'

        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning("Unparseable booking date ignored: %r", value)
            return None

        return normalize_date_key(parsed, tz)

    logger.warning("Unsupported booking date type ignored: %r", value)
    return None


def format_date_key(value) -> Optional[str]:
    """Format a date-like value as YYYY-MM-DD, or None if unparseable."""
    day = normalize_date_key(value)
    return day.strftime(DATE_FORMAT) if day else None


def iter_days(start, end) -> Iterator[date]:
    """
    Yield every calendar day from start to end, both inclusive.

    Steps by one calendar day on date values, so the sequence is unaffected
    by DST changes. Yields nothing when a bound is invalid or start > end.
    """
    current = normalize_date_key(start)
    last = normalize_date_key(end)
    if current is None or last is None:
        return

    while current <= last:
        yield current
        if current == last:
            break
        current += timedelta(days=1)


def days_between(start, end) -> Optional[int]:
    """Number of calendar days from start to end (end - start)."""
    first = normalize_date_key(start)
    last = normalize_date_key(end)
    if first is None or last is None:
        return None
    return (last - first).days
