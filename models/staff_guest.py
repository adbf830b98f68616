"""
Staff guest lookups.
Guests are the people accommodation bookings are made for.
"""

from database import get_db
from typing import Optional


def get_staff_guest(staff_id: int) -> Optional[dict]:
    """
    Get a staff guest by ID.

    Args:
        staff_id: Guest ID

    Returns:
        dict or None: Guest data (id, name, email, staff_number, gender)
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM staff_guests WHERE id = ?', (staff_id,))
    row = cursor.fetchone()
    if row:
        return dict(row)
    return None
