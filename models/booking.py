"""
Accommodation booking model.
Ingestion/serialization of booking records and CRUD operations.

Bookings are stored one row per room-night. Every booking leaving this module
is normalized once (normalize_booking) so downstream helpers can rely on
snake_case keys and a date key in 'date'.
"""

import logging
from typing import Optional

from database import get_db
from utils.date_keys import normalize_date_key, format_date_key
from .booking_state import BOOKING_STATUSES

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

FORCE_BLOCK_NOTE = '[CANCELLED BY ADMIN FOR ROOM BLOCKING]'
BATCH_CANCEL_NOTE = '[CANCELLED BY ADMIN - BATCH CANCELLATION]'

# API/legacy key -> canonical key
_FIELD_ALIASES = {
    'roomId': 'room_id',
    'staffHouseId': 'staff_house_id',
    'bookingDate': 'date',
    'booking_date': 'date',
    'guestName': 'guest_name',
    'trfId': 'trf_id',
    'staffId': 'staff_id',
    'guestId': 'staff_id',
    'roomName': 'room_name',
    'staffHouseName': 'staff_house_name',
}

_BOOKING_SELECT = '''
    SELECT b.id, b.staff_house_id, b.room_id, b.staff_id, b.trf_id,
           b.date, b.status, b.notes, b.created_by,
           r.name as room_name,
           sh.name as staff_house_name,
           g.name as guest_name,
           COALESCE(g.gender, b.gender) as gender
    FROM accommodation_bookings b
    LEFT JOIN accommodation_rooms r ON b.room_id = r.id
    LEFT JOIN accommodation_staff_houses sh ON b.staff_house_id = sh.id
    LEFT JOIN staff_guests g ON b.staff_id = g.id
'''


# =============================================================================
# NORMALIZATION
# =============================================================================

def normalize_booking(raw) -> dict:
    """
    Convert a DB row or API payload into the canonical booking dict.

    Args:
        raw: sqlite3.Row or dict with snake_case or camelCase keys

    Returns:
        dict: Booking with snake_case keys and 'date' as a date (or None)
    """
    data = dict(raw)
    booking = {}
    for key, value in data.items():
        booking[_FIELD_ALIASES.get(key, key)] = value

    booking['date'] = normalize_date_key(booking.get('date'))
    for key in ('room_id', 'staff_house_id', 'status', 'guest_name', 'gender', 'notes', 'trf_id', 'staff_id'):
        booking.setdefault(key, None)
    return booking


def serialize_booking(booking: dict) -> dict:
    """
    Convert a canonical booking into the camelCase JSON shape.

    Args:
        booking: Canonical booking dict

    Returns:
        dict: JSON-safe booking
    """
    return {
        'id': booking.get('id'),
        'staffHouseId': booking.get('staff_house_id'),
        'roomId': booking.get('room_id'),
        'staffId': booking.get('staff_id'),
        'bookingDate': format_date_key(booking.get('date')),
        'status': booking.get('status'),
        'notes': booking.get('notes'),
        'trfId': booking.get('trf_id'),
        'roomName': booking.get('room_name'),
        'staffHouseName': booking.get('staff_house_name'),
        'guestName': booking.get('guest_name'),
        'gender': booking.get('gender')
    }


def serialize_conflict(conflict: dict) -> dict:
    """Convert a conflict record into its JSON shape."""
    booking = conflict.get('booking') or {}
    return {
        'date': format_date_key(conflict.get('date')),
        'status': conflict.get('status'),
        'guestName': conflict.get('guest_name'),
        'trfId': booking.get('trf_id'),
        'bookingId': booking.get('id')
    }


def serialize_group(group: dict) -> dict:
    """Convert a booking group into its JSON shape."""
    representative = group.get('representative_booking') or {}
    return {
        'roomId': group.get('room_id'),
        'roomName': representative.get('room_name'),
        'startDate': format_date_key(group.get('start_date')),
        'endDate': format_date_key(group.get('end_date')),
        'bookingIds': list(group.get('booking_ids', [])),
        'dayCount': len(group.get('booking_ids', [])),
        'isRange': group.get('is_range', False),
        'status': representative.get('status'),
        'notes': representative.get('notes')
    }


# =============================================================================
# QUERIES
# =============================================================================

def get_bookings(
    year: int,
    month: int,
    staff_house_id: int = None,
    room_id: int = None,
    staff_id: int = None
) -> list:
    """
    Get bookings of one month with optional filters.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        staff_house_id: Optional staff house filter
        room_id: Optional room filter
        staff_id: Optional guest filter

    Returns:
        list: Canonical bookings ordered by date
    """
    db = get_db()
    cursor = db.cursor()

    query = _BOOKING_SELECT + " WHERE strftime('%Y-%m', b.date) = ?"
    params = [f'{year:04d}-{month:02d}']

    if staff_house_id:
        query += ' AND b.staff_house_id = ?'
        params.append(staff_house_id)

    if room_id:
        query += ' AND b.room_id = ?'
        params.append(room_id)

    if staff_id:
        query += ' AND b.staff_id = ?'
        params.append(staff_id)

    query += ' ORDER BY b.date, b.id'

    cursor.execute(query, params)
    return [normalize_booking(row) for row in cursor.fetchall()]


def get_bookings_in_range(room_id: int, start_date, end_date) -> list:
    """
    Get all bookings (any status) of a room within an inclusive date range.

    Returns:
        list: Canonical bookings ordered by date
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute(_BOOKING_SELECT + '''
        WHERE b.room_id = ? AND b.date BETWEEN ? AND ?
        ORDER BY b.date, b.id
    ''', (room_id, format_date_key(start_date), format_date_key(end_date)))
    return [normalize_booking(row) for row in cursor.fetchall()]


def get_booking_by_id(booking_id: int) -> Optional[dict]:
    """
    Get a booking by ID.

    Returns:
        dict or None: Canonical booking
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute(_BOOKING_SELECT + ' WHERE b.id = ?', (booking_id,))
    row = cursor.fetchone()
    return normalize_booking(row) if row else None


def get_bookings_by_ids(booking_ids: list) -> list:
    """Get bookings for a list of IDs, ordered by date."""
    if not booking_ids:
        return []

    db = get_db()
    cursor = db.cursor()
    placeholders = ','.join('?' * len(booking_ids))
    cursor.execute(_BOOKING_SELECT + f'''
        WHERE b.id IN ({placeholders})
        ORDER BY b.date, b.id
    ''', list(booking_ids))
    return [normalize_booking(row) for row in cursor.fetchall()]


def get_bookings_by_trf(trf_id: str) -> list:
    """Get all bookings linked to a travel request."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute(_BOOKING_SELECT + ' WHERE b.trf_id = ? ORDER BY b.date, b.id', (trf_id,))
    return [normalize_booking(row) for row in cursor.fetchall()]


def find_active_bookings(
    booking_ids: list = None,
    staff_id: int = None,
    trf_id: str = None,
    start_date=None,
    end_date=None
) -> list:
    """
    Find non-cancelled bookings by the bulk-cancellation criteria.

    The first criterion given wins, in order: booking_ids, staff_id with a
    date range, staff_id, trf_id.

    Returns:
        list: Canonical bookings
    """
    db = get_db()
    cursor = db.cursor()

    if booking_ids:
        placeholders = ','.join('?' * len(booking_ids))
        where = f'b.id IN ({placeholders})'
        params = list(booking_ids)
    elif staff_id and start_date and end_date:
        where = 'b.staff_id = ? AND b.date BETWEEN ? AND ?'
        params = [staff_id, format_date_key(start_date), format_date_key(end_date)]
    elif staff_id:
        where = 'b.staff_id = ?'
        params = [staff_id]
    elif trf_id:
        where = 'b.trf_id = ?'
        params = [trf_id]
    else:
        return []

    cursor.execute(_BOOKING_SELECT + f'''
        WHERE {where} AND b.status != 'Cancelled'
        ORDER BY b.date, b.id
    ''', params)
    return [normalize_booking(row) for row in cursor.fetchall()]


def count_active_bookings_for_trf(trf_id: str) -> int:
    """Count non-cancelled bookings still linked to a travel request."""
    db = get_db()
    row = db.execute('''
        SELECT COUNT(*) FROM accommodation_bookings
        WHERE trf_id = ? AND status != 'Cancelled'
    ''', (trf_id,)).fetchone()
    return row[0]


# =============================================================================
# CRUD OPERATIONS
# =============================================================================

def create_bookings(
    room_id: int,
    staff_house_id: int,
    dates: list,
    status: str,
    staff_id: int = None,
    trf_id: str = None,
    notes: str = None,
    created_by: str = None,
    gender: str = None,
    cancel_ids: list = None,
    delete_ids: list = None
) -> list:
    """
    Create one booking row per date in a single transaction.

    Args:
        room_id: Room ID
        staff_house_id: Staff house of the room
        dates: Days to book (date-like values)
        status: Booking status
        staff_id: Optional guest ID
        trf_id: Optional travel request ID
        notes: Notes or block reason
        created_by: Username creating the bookings
        gender: Guest gender when the booking has no staff guest
        cancel_ids: Existing bookings to cancel first (force block)
        delete_ids: Existing bookings to delete first (re-assignment)

    Returns:
        list: New booking IDs

    Raises:
        ValueError: If validation fails
    """
    if status not in BOOKING_STATUSES or status == 'Cancelled':
        raise ValueError(f"Invalid booking status: {status}")

    days = [format_date_key(d) for d in dates]
    if not days or None in days:
        raise ValueError("At least one valid date is required")

    db = get_db()
    created_ids = []
    try:
        if delete_ids:
            placeholders = ','.join('?' * len(delete_ids))
            db.execute(f'DELETE FROM accommodation_bookings WHERE id IN ({placeholders})', list(delete_ids))

        if cancel_ids:
            _cancel_rows(db, cancel_ids, FORCE_BLOCK_NOTE)
            logger.info("Force-cancelled %d booking(s) in room %s for blocking", len(cancel_ids), room_id)

        for day in days:
            cursor = db.execute('''
                INSERT INTO accommodation_bookings
                (staff_house_id, room_id, staff_id, trf_id, gender, date, status, notes, created_by)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''', (staff_house_id, room_id, staff_id, trf_id, gender, day, status, notes, created_by))
            created_ids.append(cursor.lastrowid)

        db.commit()
    except Exception:
        db.rollback()
        raise

    return created_ids


def update_booking(
    booking_id: int,
    room_id: int = None,
    staff_house_id: int = None,
    booking_date=None,
    status: str = None,
    staff_id: int = None,
    trf_id: str = None,
    notes: str = None
) -> bool:
    """
    Update a booking.

    Returns:
        bool: True if updated

    Raises:
        ValueError: If validation fails
    """
    updates = []
    params = []

    if room_id is not None:
        updates.append('room_id = ?')
        params.append(room_id)

    if staff_house_id is not None:
        updates.append('staff_house_id = ?')
        params.append(staff_house_id)

    if booking_date is not None:
        day = format_date_key(booking_date)
        if day is None:
            raise ValueError(f"Invalid date: {booking_date}")
        updates.append('date = ?')
        params.append(day)

    if status is not None:
        if status not in BOOKING_STATUSES:
            raise ValueError(f"Invalid booking status: {status}")
        updates.append('status = ?')
        params.append(status)

    if staff_id is not None:
        updates.append('staff_id = ?')
        params.append(staff_id)

    if trf_id is not None:
        updates.append('trf_id = ?')
        params.append(trf_id)

    if notes is not None:
        updates.append('notes = ?')
        params.append(notes)

    if not updates:
        return False

    updates.append('updated_at = CURRENT_TIMESTAMP')
    params.append(booking_id)

    with get_db() as conn:
        cursor = conn.execute(f'''
            UPDATE accommodation_bookings
            SET {', '.join(updates)}
            WHERE id = ?
        ''', params)
        return cursor.rowcount > 0


def set_booking_status(booking_id: int, status: str, note: str = None) -> bool:
    """
    Set a booking status, appending an optional note.

    Returns:
        bool: True if updated
    """
    with get_db() as conn:
        cursor = conn.execute('''
            UPDATE accommodation_bookings
            SET status = ?,
                notes = CASE WHEN ? IS NULL THEN notes
                             ELSE COALESCE(notes || ' ', '') || ? END,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (status, note, note, booking_id))
        return cursor.rowcount > 0


def _cancel_rows(conn, booking_ids: list, note: str) -> int:
    placeholders = ','.join('?' * len(booking_ids))
    cursor = conn.execute(f'''
        UPDATE accommodation_bookings
        SET status = 'Cancelled',
            notes = COALESCE(notes || ' ', '') || ?,
            updated_at = CURRENT_TIMESTAMP
        WHERE id IN ({placeholders})
    ''', [note] + list(booking_ids))
    return cursor.rowcount


def cancel_bookings(booking_ids: list, note: str = BATCH_CANCEL_NOTE) -> int:
    """
    Cancel bookings in one transaction.

    Returns:
        int: Number of bookings cancelled
    """
    if not booking_ids:
        return 0

    with get_db() as conn:
        return _cancel_rows(conn, booking_ids, note)


def delete_booking(booking_id: int) -> bool:
    """
    Delete a booking.

    Returns:
        bool: True if deleted
    """
    with get_db() as conn:
        cursor = conn.execute('DELETE FROM accommodation_bookings WHERE id = ?', (booking_id,))
        return cursor.rowcount > 0


def delete_bookings(booking_ids: list) -> int:
    """
    Delete several bookings in one transaction.

    Returns:
        int: Number of bookings deleted
    """
    if not booking_ids:
        return 0

    placeholders = ','.join('?' * len(booking_ids))
    with get_db() as conn:
        cursor = conn.execute(
            f'DELETE FROM accommodation_bookings WHERE id IN ({placeholders})',
            list(booking_ids)
        )
        return cursor.rowcount
