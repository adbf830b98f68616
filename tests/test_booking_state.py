"""
Tests for booking status transitions.
"""

import pytest

from models.booking_state import can_transition, validate_transition, status_for_action


class TestTransitions:
    """Tests for the booking lifecycle."""

    @pytest.mark.parametrize('current,target', [
        ('Confirmed', 'Checked-in'),
        ('Checked-in', 'Checked-out'),
        ('Confirmed', 'Cancelled'),
        ('Blocked', 'Cancelled'),
    ])
    def test_allowed(self, current, target):
        assert can_transition(current, target)
        validate_transition(current, target)

    @pytest.mark.parametrize('current,target', [
        ('Blocked', 'Checked-in'),
        ('Checked-out', 'Checked-in'),
        ('Cancelled', 'Confirmed'),
        ('Checked-in', 'Cancelled'),
        ('Confirmed', 'Checked-out'),
    ])
    def test_rejected(self, current, target):
        assert not can_transition(current, target)
        with pytest.raises(ValueError):
            validate_transition(current, target)

    def test_unknown_target(self):
        with pytest.raises(ValueError, match='Unknown booking status'):
            validate_transition('Confirmed', 'Teleported')


class TestStatusForAction:
    """Tests for status_for_action()."""

    def test_actions(self):
        assert status_for_action('checkin') == 'Checked-in'
        assert status_for_action('checkout') == 'Checked-out'
        assert status_for_action('cancel') == 'Cancelled'

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            status_for_action('teleport')
