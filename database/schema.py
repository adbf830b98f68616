"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'accommodation_bookings',
        'staff_guests',
        'accommodation_rooms',
        'accommodation_staff_houses'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Accommodation Inventory
    db.execute('''
        CREATE TABLE accommodation_staff_houses (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            location TEXT,
            address TEXT,
            active INTEGER DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE accommodation_rooms (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            staff_house_id INTEGER NOT NULL REFERENCES accommodation_staff_houses(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            room_type TEXT DEFAULT 'Standard',
            capacity INTEGER DEFAULT 1,
            active INTEGER DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(staff_house_id, name)
        )
    ''')

    # 2. Guests
    db.execute('''
        CREATE TABLE staff_guests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT,
            staff_number TEXT,
            gender TEXT CHECK(gender IN ('Male', 'Female')),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 3. Bookings (one row per room-night)
    db.execute('''
        CREATE TABLE accommodation_bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            staff_house_id INTEGER NOT NULL REFERENCES accommodation_staff_houses(id),
            room_id INTEGER NOT NULL REFERENCES accommodation_rooms(id) ON DELETE CASCADE,
            staff_id INTEGER REFERENCES staff_guests(id) ON DELETE SET NULL,
            trf_id TEXT,
            gender TEXT CHECK(gender IN ('Male', 'Female')),
            date DATE NOT NULL,
            status TEXT NOT NULL CHECK(status IN ('Blocked', 'Confirmed', 'Checked-in', 'Checked-out', 'Cancelled')),
            notes TEXT,
            created_by TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create performance indexes."""

    # Room indexes
    db.execute('CREATE INDEX idx_rooms_staff_house ON accommodation_rooms(staff_house_id)')

    # Booking indexes
    db.execute('CREATE INDEX idx_bookings_room_date ON accommodation_bookings(room_id, date)')
    db.execute('CREATE INDEX idx_bookings_date ON accommodation_bookings(date)')
    db.execute('CREATE INDEX idx_bookings_trf ON accommodation_bookings(trf_id)')
    db.execute('CREATE INDEX idx_bookings_staff ON accommodation_bookings(staff_id)')
    db.execute('CREATE INDEX idx_bookings_status ON accommodation_bookings(status)')
