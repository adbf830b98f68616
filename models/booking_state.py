"""
Accommodation booking status lifecycle.
Transition rules for check-in, check-out and cancellation.
"""

BOOKING_STATUSES = ['Blocked', 'Confirmed', 'Checked-in', 'Checked-out', 'Cancelled']

BOOKING_TRANSITIONS = {
    'Confirmed': {'Checked-in', 'Cancelled'},
    'Checked-in': {'Checked-out'},
    'Checked-out': set(),
    'Blocked': {'Cancelled'},
    'Cancelled': set(),
}

# Admin actions exposed by the API and the status each one sets
STATUS_ACTIONS = {
    'checkin': 'Checked-in',
    'checkout': 'Checked-out',
    'cancel': 'Cancelled',
}


def can_transition(current: str, target: str) -> bool:
    """Check whether a booking may move from current to target status."""
    return target in BOOKING_TRANSITIONS.get(current, set())


def validate_transition(current: str, target: str) -> None:
    """
    Validate a status transition.

    Raises:
        ValueError: If the transition is not allowed
    """
    if target not in BOOKING_STATUSES:
        raise ValueError(f"Unknown booking status: {target}")
    if not can_transition(current, target):
        raise ValueError(f"Invalid booking transition: {current} -> {target}")


def status_for_action(action: str) -> str:
    """
    Map an admin action to its target status.

    Raises:
        ValueError: If the action is unknown
    """
    try:
        return STATUS_ACTIONS[action]
    except KeyError:
        raise ValueError(f"Unknown booking action: {action}") from None
