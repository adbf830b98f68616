"""
Accommodation calendar API routes.
Monthly occupancy grid with one resolved booking per room/day cell.
"""

from flask import request

from utils.api_response import api_success
from utils.datetime_helpers import get_today
from utils.validators import parse_int, parse_year_month
from models.booking import get_bookings, serialize_booking
from models.booking_calendar import build_month_grid
from models.room import get_rooms


def _serialize_cell(cell: dict) -> dict:
    booking = cell['booking']
    return {
        'isOccupied': cell['is_occupied'],
        'status': cell['status'],
        'guestName': cell['guest_name'],
        'totalBookings': cell['total_bookings'],
        'booking': serialize_booking(booking) if booking else None
    }


def register_routes(bp):
    """Register calendar routes on the blueprint."""

    @bp.route('/admin/calendar', methods=['GET'])
    def month_calendar():
        """
        Monthly occupancy grid.

        Query params:
            year, month: Month to show (default: current month)
            staffHouseId: Optional staff house filter
            includeCancelled: 1 to paint cancelled bookings too

        Returns:
            JSON with days and per-room cells
        """
        year, month = parse_year_month(
            request.args.get('year'), request.args.get('month'), get_today()
        )
        staff_house_id = parse_int(request.args.get('staffHouseId'))
        include_cancelled = request.args.get('includeCancelled') in ('1', 'true')

        rooms = get_rooms(staff_house_id)
        bookings = get_bookings(year, month, staff_house_id=staff_house_id)
        if not include_cancelled:
            bookings = [b for b in bookings if b['status'] != 'Cancelled']

        grid = build_month_grid(year, month, rooms, bookings)

        return api_success(
            year=grid['year'],
            month=grid['month'],
            days=grid['days'],
            rooms=[
                {
                    'id': row['room']['id'],
                    'name': row['room']['name'],
                    'staffHouseId': row['room']['staff_house_id'],
                    'staffHouseName': row['room']['staff_house_name'],
                    'cells': {day: _serialize_cell(cell) for day, cell in row['cells'].items()}
                }
                for row in grid['rooms']
            ]
        )
