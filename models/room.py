"""
Accommodation inventory model.
Staff houses (locations) and their rooms.
"""

from database import get_db
from typing import Optional


def get_staff_houses(active_only: bool = True) -> list:
    """
    Get all staff houses with their room counts.

    Args:
        active_only: Only return active staff houses

    Returns:
        list: Staff house dicts ordered by name
    """
    db = get_db()
    cursor = db.cursor()

    query = '''
        SELECT sh.*, COUNT(r.id) as room_count
        FROM accommodation_staff_houses sh
        LEFT JOIN accommodation_rooms r ON r.staff_house_id = sh.id AND r.active = 1
    '''
    if active_only:
        query += ' WHERE sh.active = 1'
    query += ' GROUP BY sh.id ORDER BY sh.name'

    cursor.execute(query)
    return [dict(row) for row in cursor.fetchall()]


def get_rooms(staff_house_id: int = None, active_only: bool = True) -> list:
    """
    Get rooms, optionally for one staff house.

    Args:
        staff_house_id: Optional staff house filter
        active_only: Only return active rooms

    Returns:
        list: Room dicts ordered by staff house and name
    """
    db = get_db()
    cursor = db.cursor()

    query = '''
        SELECT r.*, sh.name as staff_house_name
        FROM accommodation_rooms r
        JOIN accommodation_staff_houses sh ON r.staff_house_id = sh.id
        WHERE 1=1
    '''
    params = []

    if staff_house_id:
        query += ' AND r.staff_house_id = ?'
        params.append(staff_house_id)

    if active_only:
        query += ' AND r.active = 1'

    query += ' ORDER BY sh.name, r.name'

    cursor.execute(query, params)
    return [dict(row) for row in cursor.fetchall()]


def get_room_by_id(room_id: int) -> Optional[dict]:
    """
    Get a room by ID.

    Returns:
        dict or None: Room data including staff_house_name
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT r.*, sh.name as staff_house_name
        FROM accommodation_rooms r
        JOIN accommodation_staff_houses sh ON r.staff_house_id = sh.id
        WHERE r.id = ?
    ''', (room_id,))

    row = cursor.fetchone()
    if row:
        return dict(row)
    return None


def create_room(staff_house_id: int, name: str, room_type: str = 'Standard', capacity: int = 1) -> int:
    """
    Create a room in a staff house.

    Returns:
        int: Room ID

    Raises:
        ValueError: If the staff house does not exist or the name is taken
    """
    if not name or not name.strip():
        raise ValueError("Room name is required")

    with get_db() as conn:
        house = conn.execute(
            'SELECT id FROM accommodation_staff_houses WHERE id = ?', (staff_house_id,)
        ).fetchone()
        if not house:
            raise ValueError(f"Staff house {staff_house_id} not found")

        existing = conn.execute('''
            SELECT id FROM accommodation_rooms WHERE staff_house_id = ? AND name = ?
        ''', (staff_house_id, name.strip())).fetchone()
        if existing:
            raise ValueError(f"Room {name} already exists in this staff house")

        cursor = conn.execute('''
            INSERT INTO accommodation_rooms (staff_house_id, name, room_type, capacity)
            VALUES (?, ?, ?, ?)
        ''', (staff_house_id, name.strip(), room_type, capacity))
        return cursor.lastrowid
