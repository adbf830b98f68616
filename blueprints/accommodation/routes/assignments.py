"""
Room assignment API routes.
Assigns a room to a travel request for a date range.
"""

from flask import request, current_app

from utils.api_response import api_success, api_error, api_conflict
from utils.date_keys import iter_days, format_date_key
from utils.validators import parse_int, validate_date_range, validate_gender
from models.booking import get_bookings_by_trf, get_bookings_in_range, create_bookings, serialize_conflict
from models.booking_availability import find_conflicts, find_gender_conflicts, conflict_dates
from models.room import get_room_by_id
from models.staff_guest import get_staff_guest


def register_routes(bp):
    """Register assignment routes on the blueprint."""

    @bp.route('/admin/assign/<trf_id>', methods=['POST'])
    def assign_room(trf_id):
        """
        Assign a room to a travel request, replacing any previous assignment.

        Request body:
            roomId: Room ID (required)
            startDate, endDate: Inclusive stay range (required)
            staffHouseId: Staff house (defaults to the room's)
            staffId: Guest ID (optional)
            gender: Guest gender when no staffId is given (optional)

        Returns:
            JSON with created booking IDs (201), 409 on conflicts
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error('Request body required')

        room_id = parse_int(data.get('roomId'))
        start_date = data.get('startDate')
        end_date = data.get('endDate')

        if room_id is None:
            return api_error('roomId is required')

        if not validate_date_range(start_date, end_date):
            return api_error('Valid startDate and endDate are required')

        days = list(iter_days(start_date, end_date))
        max_days = current_app.config.get('MAX_BOOKING_RANGE_DAYS', 366)
        if len(days) > max_days:
            return api_error(f'Date range cannot exceed {max_days} days')

        room = get_room_by_id(room_id)
        if not room:
            return api_error(f'Room with ID {room_id} not found')

        staff_id = parse_int(data.get('staffId'))
        gender = data.get('gender')
        if staff_id:
            guest = get_staff_guest(staff_id)
            if not guest:
                return api_error(f'Staff ID {staff_id} does not exist')
            gender = guest.get('gender')
        elif gender and not validate_gender(gender):
            return api_error(f'Invalid gender: {gender}')

        # The request's own bookings are replaced, so they never conflict
        previous_ids = [b['id'] for b in get_bookings_by_trf(trf_id)]
        existing = [
            b for b in get_bookings_in_range(room_id, days[0], days[-1])
            if b['id'] not in previous_ids
        ]

        gender_days = find_gender_conflicts(room_id, gender, days[0], days[-1], existing)
        if gender_days:
            return api_conflict(
                f'Gender conflict detected: cannot assign {gender} guest to room {room["name"]}',
                genderConflictDates=[format_date_key(d) for d in gender_days]
            )

        conflicts = find_conflicts(room_id, days[0], days[-1], existing)
        if conflicts:
            return api_conflict(
                f'Room is already booked for {len(conflicts)} day(s) in the selected range',
                conflicting_dates=[format_date_key(d) for d in conflict_dates(conflicts)],
                conflicts=[serialize_conflict(c) for c in conflicts]
            )

        assigned_info = (
            f'{room["staff_house_name"]} - {room["name"]} '
            f'({format_date_key(days[0])} - {format_date_key(days[-1])})'
        )

        try:
            booking_ids = create_bookings(
                room_id=room_id,
                staff_house_id=parse_int(data.get('staffHouseId')) or room['staff_house_id'],
                dates=days,
                status='Confirmed',
                staff_id=staff_id,
                trf_id=trf_id,
                notes=f'TRF Assignment: {assigned_info}',
                created_by=data.get('createdBy'),
                gender=gender,
                delete_ids=previous_ids
            )
        except ValueError as e:
            return api_error(str(e))
        except Exception:
            current_app.logger.exception('Error assigning room %s to %s', room_id, trf_id)
            return api_error('Failed to assign accommodation', status=500)

        current_app.logger.info('Assigned %s to travel request %s', assigned_info, trf_id)

        return api_success(
            message='Accommodation assigned successfully',
            status=201,
            trfId=trf_id,
            assignedRoomInfo=assigned_info,
            bookingIds=booking_ids,
            replacedBookingIds=previous_ids
        )
