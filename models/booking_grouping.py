"""
Grouping of per-day bookings into consecutive date ranges.

Bookings are stored one row per room-night; the admin console shows and
unblocks them as ranges. Gaps are measured in calendar days on normalized
date keys.
"""

import logging

from utils.date_keys import normalize_date_key

logger = logging.getLogger(__name__)


def _new_group(room_id, day, booking) -> dict:
    return {
        'room_id': room_id,
        'start_date': day,
        'end_date': day,
        'booking_ids': [booking.get('id')],
        'representative_booking': booking,
        'is_range': False
    }


def group_consecutive_bookings(bookings: list) -> list:
    """
    Merge bookings on consecutive days of the same room into groups.

    Args:
        bookings: Booking dicts (any rooms, any order)

    Returns:
        list: [{'room_id', 'start_date', 'end_date', 'booking_ids',
                'representative_booking', 'is_range'}]
              chronological within each room
    """
    partitions = {}
    for booking in bookings or []:
        if not isinstance(booking, dict):
            continue
        day = normalize_date_key(booking.get('date'))
        if day is None:
            logger.warning("Booking %s skipped from grouping: invalid date %r",
                           booking.get('id'), booking.get('date'))
            continue
        partitions.setdefault(str(booking.get('room_id')), []).append((day, booking))

    groups = []
    for entries in partitions.values():
        # sorted() is stable, so same-day duplicates keep input order
        entries = sorted(entries, key=lambda entry: entry[0])

        current = None
        for day, booking in entries:
            if current is not None and (day - current['end_date']).days == 1:
                current['end_date'] = day
                current['booking_ids'].append(booking.get('id'))
                current['is_range'] = True
                continue

            current = _new_group(booking.get('room_id'), day, booking)
            groups.append(current)

    return groups


def group_blocked_ranges(bookings: list, room_id=None) -> list:
    """
    Group the Blocked bookings of a snapshot into unblockable ranges.

    Args:
        bookings: Booking snapshot
        room_id: Optional room filter

    Returns:
        list: Booking groups, see group_consecutive_bookings()
    """
    blocked = [
        b for b in bookings or []
        if isinstance(b, dict)
        and b.get('status') == 'Blocked'
        and (room_id is None or str(b.get('room_id')) == str(room_id))
    ]
    return group_consecutive_bookings(blocked)
