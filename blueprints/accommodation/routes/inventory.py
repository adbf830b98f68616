"""
Accommodation inventory API routes.
Staff houses (locations) and rooms.
"""

from flask import request

from utils.api_response import api_success
from utils.validators import parse_int
from models.room import get_staff_houses, get_rooms


def register_routes(bp):
    """Register inventory routes on the blueprint."""

    @bp.route('/admin/locations', methods=['GET'])
    def list_locations():
        """List active staff houses."""
        return api_success(staffHouses=get_staff_houses())

    @bp.route('/admin/rooms', methods=['GET'])
    def list_rooms():
        """
        List active rooms.

        Query params:
            staffHouseId: Optional staff house filter
        """
        rooms = get_rooms(parse_int(request.args.get('staffHouseId')))
        return api_success(rooms=rooms)
