"""
JSON envelope for the accommodation admin API.

    Success:   {"success": true, "message": "...", <payload fields>}
    Error:     {"success": false, "error": "...", <context fields>}
    Conflict:  error envelope with HTTP 409 and the conflicting days

Payload fields are camelCase and sit at the top level of the envelope
(bookings, bookingIds, conflictingDates, canForceBlock, ...).
"""

from flask import jsonify
from typing import Any


def api_success(message: str | None = None, status: int = 200, **fields: Any) -> tuple:
    """
    Build a success response.

    Args:
        message: Optional human-readable message.
        status: HTTP status code (200, or 201 for created bookings).
        **fields: Payload fields merged into the envelope.

    Returns:
        Tuple of (Response, status_code)
    """
    body = {'success': True}
    if message:
        body['message'] = message
    body.update(fields)
    return jsonify(body), status


def api_error(error: str, status: int = 400, **fields: Any) -> tuple:
    """
    Build an error response.

    Args:
        error: Message shown to the admin.
        status: HTTP status code (default 400).
        **fields: Extra context (e.g. genderConflictDates).

    Returns:
        Tuple of (Response, status_code)
    """
    body = {'success': False, 'error': error}
    body.update(fields)
    return jsonify(body), status


def api_conflict(error: str, conflicting_dates: list | None = None, **fields: Any) -> tuple:
    """Build a 409 response for occupied or gender-conflicting days."""
    if conflicting_dates is not None:
        fields['conflictingDates'] = conflicting_dates
    return api_error(error, status=409, **fields)
