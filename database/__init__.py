"""
SQLite storage for staff houses, rooms, guests and per-night bookings.

- connection: request-scoped connection (get_db, close_db) and init_db
- schema: tables and indexes
- seed: demo staff houses, rooms and guests
"""

from database.connection import get_db, close_db, init_db
from database.schema import drop_tables, create_tables, create_indexes
from database.seed import seed_database

__all__ = [
    'get_db',
    'close_db',
    'init_db',
    'drop_tables',
    'create_tables',
    'create_indexes',
    'seed_database',
]
