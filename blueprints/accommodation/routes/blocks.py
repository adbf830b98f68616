"""
Room block API routes.
Lists current blocks grouped into consecutive ranges and removes a whole
range at once.
"""

from flask import request, current_app

from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_today
from utils.validators import parse_int, parse_year_month
from models.booking import get_bookings, get_bookings_by_ids, delete_bookings, serialize_group
from models.booking_grouping import group_blocked_ranges


def register_routes(bp):
    """Register block routes on the blueprint."""

    @bp.route('/admin/blocks', methods=['GET'])
    def list_blocks():
        """
        List current blocks of one month grouped into ranges.

        Query params:
            year, month: Month to list (default: current month)
            staffHouseId, roomId: Optional filters

        Returns:
            JSON with block groups
        """
        year, month = parse_year_month(
            request.args.get('year'), request.args.get('month'), get_today()
        )
        room_id = parse_int(request.args.get('roomId'))

        bookings = get_bookings(
            year,
            month,
            staff_house_id=parse_int(request.args.get('staffHouseId')),
            room_id=room_id
        )
        groups = group_blocked_ranges(bookings, room_id=room_id)

        return api_success(
            year=year,
            month=month,
            blocks=[serialize_group(g) for g in groups]
        )

    @bp.route('/admin/blocks/unblock', methods=['POST'])
    def unblock_range():
        """
        Remove every block of a range.

        Request body:
            bookingIds: Booking IDs of the range

        Returns:
            JSON with removed and skipped IDs
        """
        data = request.get_json(silent=True) or {}
        requested = [i for i in (parse_int(v) for v in data.get('bookingIds') or []) if i is not None]

        if not requested:
            return api_error('bookingIds is required')

        found = get_bookings_by_ids(requested)
        if not found:
            return api_error('No bookings found', status=404)

        block_ids = [b['id'] for b in found if b['status'] == 'Blocked']
        skipped = [i for i in requested if i not in block_ids]

        removed = delete_bookings(block_ids)
        current_app.logger.info('Unblocked %d day(s): %s', removed, block_ids)

        return api_success(
            message=f'Removed {removed} block(s)',
            unblockedBookingIds=block_ids,
            skippedBookingIds=skipped
        )
