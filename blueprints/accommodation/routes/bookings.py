"""
Accommodation booking API routes.
Booking CRUD, block creation with conflict checks, bulk cancellation and
check-in/check-out actions.
"""

from flask import request, current_app

from utils.api_response import api_success, api_error, api_conflict
from utils.date_keys import iter_days, format_date_key, days_between
from utils.datetime_helpers import get_today
from utils.validators import parse_int, parse_year_month, validate_date_range, validate_gender, sanitize_input
from models.booking import (
    get_bookings, get_bookings_in_range, get_booking_by_id, find_active_bookings,
    count_active_bookings_for_trf, create_bookings, update_booking, delete_booking,
    cancel_bookings, set_booking_status, serialize_booking, serialize_conflict,
    BATCH_CANCEL_NOTE
)
from models.booking_availability import find_conflicts, find_gender_conflicts, conflict_dates
from models.booking_state import BOOKING_STATUSES, validate_transition, status_for_action
from models.room import get_room_by_id
from models.staff_guest import get_staff_guest


def _requested_days(data: dict) -> tuple:
    """
    Expand the requested date or date range into days.

    Returns:
        Tuple of (days, error_message)
    """
    check_in = data.get('checkInDate')
    check_out = data.get('checkOutDate')

    if check_in and check_out:
        if not validate_date_range(check_in, check_out):
            return [], 'Invalid date range'
        days = list(iter_days(check_in, check_out))
    elif data.get('date'):
        days = list(iter_days(data['date'], data['date']))
        if not days:
            return [], 'Invalid date'
    else:
        return [], 'Either date or checkInDate/checkOutDate must be provided'

    max_days = current_app.config.get('MAX_BOOKING_RANGE_DAYS', 366)
    if len(days) > max_days:
        return [], f'Date range cannot exceed {max_days} days'

    return days, None


def _resolve_guest_gender(data: dict) -> tuple:
    """
    Resolve the guest and gender for a booking request.

    Returns:
        Tuple of (staff_id, gender, error_message)
    """
    staff_id = parse_int(data.get('staffId'))
    if data.get('staffId') and staff_id is None:
        return None, None, 'Invalid staffId'

    if staff_id:
        guest = get_staff_guest(staff_id)
        if not guest:
            return None, None, f'Staff ID {staff_id} does not exist'
        return staff_id, guest.get('gender'), None

    gender = data.get('gender')
    if gender and not validate_gender(gender):
        return None, None, f'Invalid gender: {gender}'
    return None, gender, None


def _describe_conflict(conflict: dict) -> str:
    """Short label for a conflicting day: date, status and who holds it."""
    booking = conflict['booking']
    holder = conflict.get('guest_name') or booking.get('trf_id')
    label = f'{conflict["status"]}, {holder}' if holder else conflict['status']
    return f'{format_date_key(conflict["date"])} ({label})'


def register_routes(bp):
    """Register booking routes on the blueprint."""

    @bp.route('/admin/bookings', methods=['GET'])
    def list_bookings():
        """
        List bookings of one month.

        Query params:
            year, month: Month to list (default: current month)
            staffHouseId, roomId, staffId: Optional filters

        Returns:
            JSON with bookings list
        """
        year, month = parse_year_month(
            request.args.get('year'), request.args.get('month'), get_today()
        )

        bookings = get_bookings(
            year,
            month,
            staff_house_id=parse_int(request.args.get('staffHouseId')),
            room_id=parse_int(request.args.get('roomId')),
            staff_id=parse_int(request.args.get('staffId'))
        )

        return api_success(
            year=year,
            month=month,
            bookings=[serialize_booking(b) for b in bookings]
        )

    @bp.route('/admin/bookings', methods=['POST'])
    def create_booking():
        """
        Create a booking or block for a date or date range.

        Request body:
            roomId: Room ID (required)
            staffHouseId: Staff house (defaults to the room's)
            staffId: Guest ID (optional)
            date | checkInDate + checkOutDate: Day or inclusive range
            status: Blocked, Confirmed, Checked-in or Checked-out
            notes / blockReason: Notes or block reason
            trfId: Travel request ID (optional)
            gender: Guest gender when no staffId is given (optional)
            forceBlock: Cancel conflicting bookings when blocking

        Returns:
            JSON with created booking IDs (201), 409 on conflicts
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error('Request body required')

        room_id = parse_int(data.get('roomId'))
        if room_id is None:
            return api_error('roomId is required')

        status = data.get('status')
        if status not in BOOKING_STATUSES or status == 'Cancelled':
            return api_error(f'Invalid booking status: {status}')

        days, error = _requested_days(data)
        if error:
            return api_error(error)

        room = get_room_by_id(room_id)
        if not room:
            return api_error(f'Room with ID {room_id} not found')

        staff_id, gender, error = _resolve_guest_gender(data)
        if error:
            return api_error(error)

        existing = get_bookings_in_range(room_id, days[0], days[-1])

        if gender and status != 'Blocked':
            gender_days = find_gender_conflicts(room_id, gender, days[0], days[-1], existing)
            if gender_days:
                return api_conflict(
                    f'Gender conflict detected: cannot book {gender} guest in room '
                    f'{room["name"]} on {format_date_key(gender_days[0])}',
                    genderConflictDates=[format_date_key(d) for d in gender_days]
                )

        conflicts = find_conflicts(room_id, days[0], days[-1], existing)
        force_block = bool(data.get('forceBlock')) and status == 'Blocked'
        cancel_ids = []

        if conflicts and not force_block:
            conflicting = [format_date_key(d) for d in conflict_dates(conflicts)]
            blocked = [c for c in conflicts if c['status'] == 'Blocked']
            if blocked:
                return api_conflict(
                    f'Room is already blocked on {format_date_key(blocked[0]["date"])}',
                    canForceBlock=status == 'Blocked',
                    conflicting_dates=conflicting
                )
            summary = ', '.join(_describe_conflict(c) for c in conflicts)
            return api_conflict(
                f'There are already active bookings on: {summary}',
                canForceBlock=status == 'Blocked',
                conflicting_dates=conflicting,
                conflicts=[serialize_conflict(c) for c in conflicts]
            )

        if conflicts:
            days_to_clear = set(conflict_dates(conflicts))
            cancel_ids = [
                b['id'] for b in existing
                if b['status'] != 'Cancelled' and b['date'] in days_to_clear
            ]

        try:
            booking_ids = create_bookings(
                room_id=room_id,
                staff_house_id=parse_int(data.get('staffHouseId')) or room['staff_house_id'],
                dates=days,
                status=status,
                staff_id=staff_id,
                trf_id=data.get('trfId') or None,
                notes=sanitize_input(data.get('notes') or data.get('blockReason'), 500) or None,
                created_by=data.get('createdBy'),
                gender=gender if status != 'Blocked' else None,
                cancel_ids=cancel_ids
            )
        except ValueError as e:
            return api_error(str(e))
        except Exception:
            current_app.logger.exception('Error creating booking for room %s', room_id)
            return api_error('Failed to create booking', status=500)

        return api_success(
            message=f'Booking{"s" if len(days) > 1 else ""} created successfully',
            status=201,
            bookingIds=booking_ids,
            datesBooked=len(days),
            cancelledBookingIds=cancel_ids
        )

    @bp.route('/admin/bookings', methods=['PUT'])
    def edit_booking():
        """
        Update a single booking.

        Request body:
            id: Booking ID (required)
            roomId, staffHouseId, staffId, date, status, notes, trfId: New values

        Returns:
            JSON with success status, 409 if the room is taken on the new date
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error('Request body required')

        booking_id = parse_int(data.get('id'))
        if booking_id is None:
            return api_error('Booking ID is required for updates')

        booking = get_booking_by_id(booking_id)
        if not booking:
            return api_error('Booking not found', status=404)

        room_id = parse_int(data.get('roomId'), booking['room_id'])
        booking_date = data.get('date') or data.get('checkInDate') or booking['date']
        status = data.get('status') or booking['status']

        days = list(iter_days(booking_date, booking_date))
        if not days:
            return api_error('Invalid date')

        if room_id != booking['room_id'] and not get_room_by_id(room_id):
            return api_error(f'Room with ID {room_id} not found')

        if status != booking['status']:
            try:
                validate_transition(booking['status'], status)
            except ValueError as e:
                return api_error(str(e))

        staff_id = parse_int(data.get('staffId'))
        gender = booking['gender']
        if staff_id:
            guest = get_staff_guest(staff_id)
            if not guest:
                return api_error(f'Staff ID {staff_id} does not exist')
            gender = guest.get('gender')

        if status not in ('Cancelled', 'Blocked'):
            existing = get_bookings_in_range(room_id, days[0], days[0])
            others = [b for b in existing if b['id'] != booking_id]
            if find_gender_conflicts(room_id, gender, days[0], days[0], others):
                return api_conflict(
                    f'Gender conflict detected: cannot move {gender} guest to this room '
                    f'on {format_date_key(days[0])}',
                    genderConflictDates=[format_date_key(days[0])]
                )

        if status != 'Cancelled':
            existing = get_bookings_in_range(room_id, days[0], days[0])
            conflicts = find_conflicts(room_id, days[0], days[0], existing, exclude_ids=[booking_id])
            if conflicts:
                return api_conflict(
                    f'There is already another active booking ({conflicts[0]["status"]}) '
                    f'for this room on the selected date',
                    conflicts=[serialize_conflict(c) for c in conflicts]
                )

        try:
            update_booking(
                booking_id,
                room_id=room_id,
                staff_house_id=parse_int(data.get('staffHouseId')),
                booking_date=days[0],
                status=status,
                staff_id=staff_id,
                trf_id=data.get('trfId'),
                notes=data.get('notes') if data.get('notes') is not None else data.get('blockReason')
            )
        except ValueError as e:
            return api_error(str(e))

        return api_success(message='Booking updated successfully')

    @bp.route('/admin/bookings', methods=['DELETE'])
    def remove_booking():
        """
        Delete a single booking.

        Query params:
            id: Booking ID

        Returns:
            JSON with success status
        """
        booking_id = request.args.get('id', type=int)
        if not booking_id:
            return api_error('Booking ID is required')

        if not delete_booking(booking_id):
            return api_error('Booking not found', status=404)

        return api_success(message='Booking deleted successfully')

    @bp.route('/admin/bookings/cancel', methods=['POST'])
    def bulk_cancel_bookings():
        """
        Cancel all active bookings matching one criterion.

        Request body (one of):
            bookingIds: Specific booking IDs
            dateRange: {startDate, endDate, staffId}
            staffId: All bookings of a guest
            trfId: All bookings of a travel request

        Returns:
            JSON with cancelled IDs and travel requests left without bookings
        """
        data = request.get_json(silent=True) or {}

        booking_ids = [i for i in (parse_int(v) for v in data.get('bookingIds') or []) if i is not None]
        date_range = data.get('dateRange') or {}
        staff_id = parse_int(data.get('staffId'))
        trf_id = data.get('trfId')

        if date_range:
            if not (date_range.get('staffId') and validate_date_range(
                    date_range.get('startDate'), date_range.get('endDate'))):
                return api_error('dateRange requires startDate, endDate and staffId')

        if not (booking_ids or date_range or staff_id or trf_id):
            return api_error(
                'At least one cancellation criterion must be provided '
                '(staffId, trfId, bookingIds, or dateRange)'
            )

        if booking_ids:
            to_cancel = find_active_bookings(booking_ids=booking_ids)
        elif date_range:
            to_cancel = find_active_bookings(
                staff_id=parse_int(date_range.get('staffId')),
                start_date=date_range.get('startDate'),
                end_date=date_range.get('endDate')
            )
        else:
            to_cancel = find_active_bookings(staff_id=staff_id, trf_id=trf_id)

        if not to_cancel:
            return api_success(
                message='No active bookings found matching the criteria',
                cancelledCount=0,
                cancelledBookingIds=[],
                releasedTrfIds=[]
            )

        cancelled_ids = [b['id'] for b in to_cancel]
        try:
            cancelled_count = cancel_bookings(cancelled_ids, BATCH_CANCEL_NOTE)
        except Exception:
            current_app.logger.exception('Error cancelling bookings %s', cancelled_ids)
            return api_error('Failed to cancel bookings', status=500)

        trf_ids = sorted({b['trf_id'] for b in to_cancel if b.get('trf_id')})
        released = [t for t in trf_ids if count_active_bookings_for_trf(t) == 0]

        current_app.logger.info('Cancelled %d booking(s); released travel requests: %s',
                                cancelled_count, released)

        return api_success(
            message=f'Successfully cancelled {cancelled_count} booking(s)',
            cancelledCount=cancelled_count,
            cancelledBookingIds=cancelled_ids,
            releasedTrfIds=released
        )

    @bp.route('/admin/bookings/<int:booking_id>/status', methods=['POST'])
    def change_booking_status(booking_id):
        """
        Check a guest in or out, or cancel a booking.

        Request body:
            action: checkin, checkout or cancel
            notes: Optional note appended to the booking

        Returns:
            JSON with the new status
        """
        data = request.get_json(silent=True) or {}

        booking = get_booking_by_id(booking_id)
        if not booking:
            return api_error('Booking not found', status=404)

        try:
            new_status = status_for_action(data.get('action'))
            validate_transition(booking['status'], new_status)
        except ValueError as e:
            return api_error(str(e))

        note = sanitize_input(data.get('notes'), 500) or None
        set_booking_status(booking_id, new_status, note)

        return api_success(
            message=f'Booking {booking_id} is now {new_status}',
            bookingId=booking_id,
            previousStatus=booking['status'],
            newStatus=new_status
        )

    @bp.route('/admin/bookings/check', methods=['POST'])
    def check_booking_conflicts():
        """
        Pre-flight conflict check for an assignment or block.

        Request body:
            roomId: Room ID
            startDate, endDate: Inclusive range
            gender: Candidate guest gender (optional)

        Returns:
            JSON with occupied days and gender-conflict days
        """
        data = request.get_json(silent=True) or {}

        room_id = parse_int(data.get('roomId'))
        start_date = data.get('startDate')
        end_date = data.get('endDate') or start_date

        if room_id is None:
            return api_error('roomId is required')

        if not validate_date_range(start_date, end_date):
            return api_error('Invalid date range')

        max_days = current_app.config.get('MAX_BOOKING_RANGE_DAYS', 366)
        if days_between(start_date, end_date) + 1 > max_days:
            return api_error(f'Date range cannot exceed {max_days} days')

        existing = get_bookings_in_range(room_id, start_date, end_date)
        conflicts = find_conflicts(room_id, start_date, end_date, existing)
        gender_days = find_gender_conflicts(room_id, data.get('gender'), start_date, end_date, existing)

        return api_success(
            hasConflicts=bool(conflicts),
            conflicts=[serialize_conflict(c) for c in conflicts],
            genderConflictDates=[format_date_key(d) for d in gender_days]
        )
