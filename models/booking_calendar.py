"""
Calendar cell resolution for the accommodation overview.
Picks the booking to paint when several land on the same room/day cell.
"""

import calendar
from typing import Optional

from utils.date_keys import normalize_date_key, format_date_key


# =============================================================================
# CONSTANTS
# =============================================================================

# Lower index wins. Statuses not listed sort after all of these.
BOOKING_STATUS_DISPLAY_PRIORITY = ['Blocked', 'Confirmed', 'Checked-in', 'Checked-out']


def _status_rank(status) -> int:
    try:
        return BOOKING_STATUS_DISPLAY_PRIORITY.index(status)
    except ValueError:
        return len(BOOKING_STATUS_DISPLAY_PRIORITY)


# =============================================================================
# PRIORITY RESOLUTION
# =============================================================================

def resolve_cell_booking(bookings: list) -> Optional[dict]:
    """
    Pick the single most important booking for a calendar cell.

    Precedence is Blocked > Confirmed > Checked-in > Checked-out, unknown
    statuses last. Ties go to the first booking in input order.

    Args:
        bookings: Bookings sharing one room/day cell

    Returns:
        dict or None: Winning booking, None for an empty cell
    """
    best = None
    best_rank = None

    for booking in bookings or []:
        if not isinstance(booking, dict):
            continue
        rank = _status_rank(booking.get('status'))
        if best is None or rank < best_rank:
            best = booking
            best_rank = rank

    return best


def get_cell_info(day, room_id, bookings: list) -> dict:
    """
    Build paint data for one room/day cell.

    Args:
        day: Calendar day (any date-like value)
        room_id: Room ID
        bookings: Booking snapshot (any rooms/days)

    Returns:
        dict: {is_occupied, status, guest_name, booking, total_bookings}
    """
    target = normalize_date_key(day)
    room_key = str(room_id)

    cell_bookings = [
        b for b in bookings or []
        if isinstance(b, dict)
        and str(b.get('room_id')) == room_key
        and target is not None
        and normalize_date_key(b.get('date')) == target
    ]

    if not cell_bookings:
        return {
            'is_occupied': False,
            'status': None,
            'guest_name': None,
            'booking': None,
            'total_bookings': 0
        }

    winner = resolve_cell_booking(cell_bookings)
    guest_name = winner.get('guest_name')
    if len(cell_bookings) > 1:
        guest_name = f"{guest_name or 'Blocked'} (+{len(cell_bookings) - 1} more)"

    return {
        'is_occupied': True,
        'status': winner.get('status'),
        'guest_name': guest_name,
        'booking': winner,
        'total_bookings': len(cell_bookings)
    }


def build_month_grid(year: int, month: int, rooms: list, bookings: list) -> dict:
    """
    Build the monthly overview grid: one resolved cell per room per day.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        rooms: Room dicts with at least 'id'
        bookings: Booking snapshot for the month

    Returns:
        dict: {year, month, days: [YYYY-MM-DD], rooms: [{room, cells}]}
    """
    _, days_in_month = calendar.monthrange(year, month)
    days = [format_date_key(f'{year:04d}-{month:02d}-{d:02d}') for d in range(1, days_in_month + 1)]

    # Index once per (room, day) instead of scanning the snapshot per cell
    index = {}
    for booking in bookings or []:
        if not isinstance(booking, dict):
            continue
        day = format_date_key(booking.get('date'))
        if day is None:
            continue
        index.setdefault((str(booking.get('room_id')), day), []).append(booking)

    grid_rooms = []
    for room in rooms or []:
        cells = {}
        for day in days:
            cell_bookings = index.get((str(room['id']), day), [])
            cells[day] = get_cell_info(day, room['id'], cell_bookings)
        grid_rooms.append({'room': room, 'cells': cells})

    return {
        'year': year,
        'month': month,
        'days': days,
        'rooms': grid_rooms
    }
