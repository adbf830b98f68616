"""
Room availability checks for accommodation bookings.
Occupancy conflicts and gender co-location conflicts over booking snapshots.

These functions take bookings already fetched by the caller and never touch
the database, so the same checks run as a client pre-flight and again
server-side before writing. They are advisory: a booking written between the
check and the commit is not detected here.
"""

from datetime import date
from typing import Iterable, Optional

from utils.date_keys import normalize_date_key
from .booking_calendar import resolve_cell_booking


CANCELLED_STATUS = 'Cancelled'
BLOCKED_STATUS = 'Blocked'


# =============================================================================
# HELPERS
# =============================================================================

def _active_bookings_by_day(room_id, bookings, exclude_ids: Iterable = ()) -> dict:
    """Index non-cancelled bookings of one room by calendar day."""
    room_key = str(room_id)
    excluded = {str(booking_id) for booking_id in exclude_ids or ()}
    by_day = {}

    if not isinstance(bookings, (list, tuple)):
        return by_day

    for booking in bookings:
        if not isinstance(booking, dict):
            continue
        if str(booking.get('room_id')) != room_key:
            continue
        if booking.get('status') == CANCELLED_STATUS:
            continue
        if excluded and str(booking.get('id')) in excluded:
            continue

        day = normalize_date_key(booking.get('date'))
        if day is None:
            continue
        by_day.setdefault(day, []).append(booking)

    return by_day


def _days_in_range(by_day: dict, range_start, range_end) -> list:
    """Indexed days within an inclusive range, ascending."""
    start = normalize_date_key(range_start)
    end = normalize_date_key(range_end)
    if start is None or end is None:
        return []
    return sorted(day for day in by_day if start <= day <= end)


def _has_other_gender(occupants: list, candidate: str) -> bool:
    for booking in occupants:
        if booking.get('status') == BLOCKED_STATUS:
            continue
        existing = _normalize_gender(booking.get('gender'))
        if existing is not None and existing != candidate:
            return True
    return False


def _normalize_gender(gender) -> Optional[str]:
    if gender is None:
        return None
    value = str(gender).strip().lower()
    return value or None


# =============================================================================
# OCCUPANCY CONFLICTS
# =============================================================================

def find_conflicts(room_id, range_start, range_end, bookings: list, exclude_ids: Iterable = ()) -> list:
    """
    Find the days of a candidate range on which a room is already occupied.

    Args:
        room_id: Room being assigned or blocked
        range_start: First day of the range (inclusive)
        range_end: Last day of the range (inclusive)
        bookings: Booking snapshot
        exclude_ids: Booking IDs to ignore (bookings being replaced)

    Returns:
        list: [{'date', 'status', 'guest_name', 'booking'}] in ascending date order
    """
    by_day = _active_bookings_by_day(room_id, bookings, exclude_ids)
    if not by_day:
        return []

    conflicts = []
    for day in _days_in_range(by_day, range_start, range_end):
        booking = resolve_cell_booking(by_day[day])
        conflicts.append({
            'date': day,
            'status': booking.get('status'),
            'guest_name': booking.get('guest_name'),
            'booking': booking
        })

    return conflicts


# =============================================================================
# GENDER CONFLICTS
# =============================================================================

def has_gender_conflict(room_id, candidate_gender, day, bookings: list) -> bool:
    """
    Check whether placing a guest would share a room with another gender.

    Only non-cancelled guest bookings (not blocks) on that day count, and
    bookings without a recorded gender never conflict.

    Args:
        room_id: Room ID
        candidate_gender: Gender of the guest being assigned
        day: Calendar day
        bookings: Booking snapshot

    Returns:
        bool: True if an occupant with a different gender exists
    """
    candidate = _normalize_gender(candidate_gender)
    target = normalize_date_key(day)
    if candidate is None or target is None:
        return False

    occupants = _active_bookings_by_day(room_id, bookings).get(target, [])
    return _has_other_gender(occupants, candidate)


def find_gender_conflicts(room_id, candidate_gender, range_start, range_end, bookings: list) -> list:
    """
    List the days of an inclusive range that have a gender conflict.

    Returns:
        list: Conflicting days as date objects, ascending
    """
    candidate = _normalize_gender(candidate_gender)
    if candidate is None:
        return []

    by_day = _active_bookings_by_day(room_id, bookings)
    return [
        day for day in _days_in_range(by_day, range_start, range_end)
        if _has_other_gender(by_day[day], candidate)
    ]


def is_room_free(room_id, range_start, range_end, bookings: list) -> bool:
    """True when no day of the range is occupied."""
    return not find_conflicts(room_id, range_start, range_end, bookings)


def conflict_dates(conflicts: list) -> list:
    """Extract the conflicting days from a conflict list."""
    return [c['date'] for c in conflicts if isinstance(c.get('date'), date)]
