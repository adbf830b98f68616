"""
Tests for occupancy and gender conflict checks.
"""

from datetime import date

import pytest

from models.booking_availability import (
    find_conflicts, has_gender_conflict, find_gender_conflicts, is_room_free, conflict_dates
)


def _booking(booking_id, day, status='Confirmed', room_id='R1', gender=None, guest_name='Guest'):
    return {
        'id': booking_id,
        'room_id': room_id,
        'date': day,
        'status': status,
        'gender': gender,
        'guest_name': guest_name
    }


@pytest.fixture
def may_bookings():
    """R1 booked 1-3 May and 5 May."""
    return [
        _booking(1, '2024-05-01'),
        _booking(2, '2024-05-02'),
        _booking(3, '2024-05-03'),
        _booking(4, '2024-05-05'),
    ]


class TestFindConflicts:
    """Tests for find_conflicts()."""

    def test_partial_overlap(self, may_bookings):
        """Range 2-4 May conflicts on 2 and 3 May only."""
        conflicts = find_conflicts('R1', '2024-05-02', '2024-05-04', may_bookings)
        assert [c['date'] for c in conflicts] == [date(2024, 5, 2), date(2024, 5, 3)]
        assert [c['booking']['id'] for c in conflicts] == [2, 3]
        assert conflicts[0]['status'] == 'Confirmed'
        assert conflicts[0]['guest_name'] == 'Guest'

    def test_endpoints_inclusive(self, may_bookings):
        conflicts = find_conflicts('R1', '2024-05-03', '2024-05-05', may_bookings)
        assert conflict_dates(conflicts) == [date(2024, 5, 3), date(2024, 5, 5)]

    def test_ascending_order_regardless_of_input(self, may_bookings):
        conflicts = find_conflicts('R1', '2024-05-01', '2024-05-05', list(reversed(may_bookings)))
        dates = [c['date'] for c in conflicts]
        assert dates == sorted(dates)

    def test_cancelled_never_conflicts(self):
        bookings = [_booking(i, f'2024-05-0{i}', status='Cancelled') for i in range(1, 6)]
        assert find_conflicts('R1', '2024-05-01', '2024-05-05', bookings) == []

    def test_other_room_ignored(self, may_bookings):
        assert find_conflicts('R2', '2024-05-01', '2024-05-05', may_bookings) == []

    def test_room_id_type_insensitive(self):
        bookings = [_booking(1, '2024-05-01', room_id=7)]
        assert len(find_conflicts('7', '2024-05-01', '2024-05-01', bookings)) == 1

    def test_timestamp_dates_match(self):
        bookings = [_booking(1, '2024-05-02T00:00:00.000Z')]
        assert len(find_conflicts('R1', date(2024, 5, 1), date(2024, 5, 3), bookings)) == 1

    def test_blocked_day_wins_over_guest(self):
        bookings = [
            _booking(1, '2024-05-01', status='Confirmed'),
            _booking(2, '2024-05-01', status='Blocked'),
        ]
        conflicts = find_conflicts('R1', '2024-05-01', '2024-05-01', bookings)
        assert len(conflicts) == 1
        assert conflicts[0]['status'] == 'Blocked'

    def test_exclude_ids(self, may_bookings):
        conflicts = find_conflicts('R1', '2024-05-01', '2024-05-03', may_bookings, exclude_ids=[2])
        assert conflict_dates(conflicts) == [date(2024, 5, 1), date(2024, 5, 3)]

    @pytest.mark.parametrize('bookings', [[], None, 'garbage', [None, 42, {'room_id': 'R1'}]])
    def test_empty_or_malformed_is_fail_open(self, bookings):
        assert find_conflicts('R1', '2024-05-01', '2024-05-05', bookings) == []

    def test_unparseable_booking_date_is_free(self):
        bookings = [_booking(1, 'not-a-date')]
        assert find_conflicts('R1', '2024-05-01', '2024-05-05', bookings) == []

    def test_empty_range(self, may_bookings):
        assert find_conflicts('R1', '2024-05-05', '2024-05-01', may_bookings) == []

    def test_input_not_mutated(self, may_bookings):
        snapshot = [dict(b) for b in may_bookings]
        find_conflicts('R1', '2024-05-01', '2024-05-05', may_bookings)
        assert may_bookings == snapshot

    def test_range_ending_on_last_calendar_day(self):
        bookings = [_booking(1, '9999-12-31')]
        conflicts = find_conflicts('R1', '9999-12-30', '9999-12-31', bookings)
        assert conflict_dates(conflicts) == [date(9999, 12, 31)]

    def test_is_room_free(self, may_bookings):
        assert is_room_free('R1', '2024-05-04', '2024-05-04', may_bookings)
        assert not is_room_free('R1', '2024-05-04', '2024-05-05', may_bookings)


class TestGenderConflict:
    """Tests for has_gender_conflict() and find_gender_conflicts()."""

    def test_different_gender_conflicts(self):
        bookings = [_booking(1, '2024-05-01', gender='Female')]
        assert has_gender_conflict('R1', 'Male', '2024-05-01', bookings) is True

    def test_same_gender_is_fine(self):
        bookings = [_booking(1, '2024-05-01', gender='Male')]
        assert has_gender_conflict('R1', 'Male', '2024-05-01', bookings) is False

    def test_unknown_gender_never_conflicts(self):
        bookings = [_booking(1, '2024-05-01', gender=None)]
        assert has_gender_conflict('R1', 'Male', '2024-05-01', bookings) is False

    def test_cancelled_excluded(self):
        bookings = [_booking(1, '2024-05-01', gender='Male', status='Cancelled')]
        assert has_gender_conflict('R1', 'Female', '2024-05-01', bookings) is False

    def test_blocked_excluded(self):
        bookings = [_booking(1, '2024-05-01', gender='Male', status='Blocked')]
        assert has_gender_conflict('R1', 'Female', '2024-05-01', bookings) is False

    def test_other_day_or_room_ignored(self):
        bookings = [
            _booking(1, '2024-05-02', gender='Male'),
            _booking(2, '2024-05-01', gender='Male', room_id='R2'),
        ]
        assert has_gender_conflict('R1', 'Female', '2024-05-01', bookings) is False

    def test_case_insensitive(self):
        bookings = [_booking(1, '2024-05-01', gender='male ')]
        assert has_gender_conflict('R1', 'Male', '2024-05-01', bookings) is False
        assert has_gender_conflict('R1', 'FEMALE', '2024-05-01', bookings) is True

    def test_no_candidate_gender(self):
        bookings = [_booking(1, '2024-05-01', gender='Male')]
        assert has_gender_conflict('R1', None, '2024-05-01', bookings) is False

    def test_empty_bookings(self):
        assert has_gender_conflict('R1', 'Male', '2024-05-01', []) is False

    def test_long_range_only_checks_booked_days(self):
        bookings = [_booking(1, '2024-05-01', gender='Male')]
        days = find_gender_conflicts('R1', 'Female', '2000-01-01', '9999-12-31', bookings)
        assert days == [date(2024, 5, 1)]

    def test_find_gender_conflicts_over_range(self):
        bookings = [
            _booking(1, '2024-05-01', gender='Male'),
            _booking(2, '2024-05-03', gender='Male'),
            _booking(3, '2024-05-02', gender='Female'),
        ]
        days = find_gender_conflicts('R1', 'Female', '2024-05-01', '2024-05-03', bookings)
        assert days == [date(2024, 5, 1), date(2024, 5, 3)]
