"""
Accommodation blueprint initialization.
Registers the accommodation admin REST endpoints.

Route logic is split by entity:
- routes/bookings.py - Booking CRUD, bulk cancel, status actions, pre-flight checks
- routes/blocks.py - Current blocks grouped into ranges, unblock-as-a-range
- routes/assignments.py - Room assignment for travel requests
- routes/calendar.py - Monthly occupancy grid
- routes/inventory.py - Staff houses and rooms
"""

from flask import Blueprint

accommodation_bp = Blueprint('accommodation', __name__)

# Import and register routes from submodules
from blueprints.accommodation.routes import bookings
from blueprints.accommodation.routes import blocks
from blueprints.accommodation.routes import assignments
from blueprints.accommodation.routes import calendar
from blueprints.accommodation.routes import inventory

bookings.register_routes(accommodation_bp)
blocks.register_routes(accommodation_bp)
assignments.register_routes(accommodation_bp)
calendar.register_routes(accommodation_bp)
inventory.register_routes(accommodation_bp)
