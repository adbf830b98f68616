"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import pytest
import tempfile

# Set test database path BEFORE importing app
# This ensures all tests use an isolated database
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'accommodation_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['DATABASE_PATH'] = TEST_DB_PATH
    os.environ['FLASK_ENV'] = 'test'

    yield

    # Cleanup: remove test database files after all tests
    for suffix in ('', '-wal', '-shm'):
        path = TEST_DB_PATH + suffix
        if os.path.exists(path):
            try:
                os.remove(path)
            except PermissionError:
                pass  # Windows may have file locked


@pytest.fixture
def app():
    """Create test application with isolated database."""
    from app import create_app
    from database import init_db

    os.environ['DATABASE_PATH'] = TEST_DB_PATH

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['DATABASE_PATH'] = TEST_DB_PATH

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def room_ids(app):
    """IDs of the first two seeded rooms of Staff House A."""
    from database import get_db

    db = get_db()
    rows = db.execute('''
        SELECT r.id FROM accommodation_rooms r
        JOIN accommodation_staff_houses sh ON r.staff_house_id = sh.id
        WHERE sh.name = 'Staff House A'
        ORDER BY r.name
        LIMIT 2
    ''').fetchall()
    return [row['id'] for row in rows]


@pytest.fixture
def guests(app):
    """Seeded staff guests keyed by gender."""
    from database import get_db

    db = get_db()
    female = db.execute("SELECT * FROM staff_guests WHERE gender = 'Female' LIMIT 1").fetchone()
    male = db.execute("SELECT * FROM staff_guests WHERE gender = 'Male' ORDER BY id LIMIT 1").fetchone()
    return {'Female': dict(female), 'Male': dict(male)}
