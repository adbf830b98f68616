"""
Database seed data.
Initial data population for fresh database installations.
"""


def seed_database(db):
    """Insert initial seed data."""

    # 1. Staff Houses
    staff_houses_data = [
        ('Staff House A', 'Kuala Lumpur', 'Jalan Ampang 12'),
        ('Staff House B', 'Kerteh', 'Lot 5, Kerteh Camp')
    ]

    for name, location, address in staff_houses_data:
        db.execute('''
            INSERT INTO accommodation_staff_houses (name, location, address)
            VALUES (?, ?, ?)
        ''', (name, location, address))

    house_a_id = db.execute("SELECT id FROM accommodation_staff_houses WHERE name = 'Staff House A'").fetchone()[0]
    house_b_id = db.execute("SELECT id FROM accommodation_staff_houses WHERE name = 'Staff House B'").fetchone()[0]

    # 2. Rooms
    rooms_data = [
        (house_a_id, 'A-101', 'Standard', 2),
        (house_a_id, 'A-102', 'Standard', 2),
        (house_a_id, 'A-201', 'Suite', 1),
        (house_b_id, 'B-01', 'Standard', 2),
        (house_b_id, 'B-02', 'Standard', 2)
    ]

    for staff_house_id, name, room_type, capacity in rooms_data:
        db.execute('''
            INSERT INTO accommodation_rooms (staff_house_id, name, room_type, capacity)
            VALUES (?, ?, ?, ?)
        ''', (staff_house_id, name, room_type, capacity))

    # 3. Staff Guests
    guests_data = [
        ('Aisha Rahman', 'aisha.rahman@example.com', 'S1001', 'Female'),
        ('Daniel Tan', 'daniel.tan@example.com', 'S1002', 'Male'),
        ('Farid Ismail', 'farid.ismail@example.com', 'S1003', 'Male')
    ]

    for name, email, staff_number, gender in guests_data:
        db.execute('''
            INSERT INTO staff_guests (name, email, staff_number, gender)
            VALUES (?, ?, ?, ?)
        ''', (name, email, staff_number, gender))
