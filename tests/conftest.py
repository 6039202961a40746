# tests/conftest.py
"""
Shared fixtures for the pytest test suite.
Fixtures defined here are automatically available to all tests.

The app fixture runs against in-memory SQLite; clean_db empties every table
so route tests can count created users and memberships exactly.
"""
import os
import pytest
from app import create_app
from extensions import db
from studio_database import User, Membership

STUDIO_ID = 'studio-abc'


@pytest.fixture(scope='module')
def app():
    """
    A fixture that creates a new Flask application instance for a test module.
    This ensures that tests within a module run against a clean, consistent
    application and database state.
    """
    # Ensure testing environment is set before config validation runs
    os.environ['FLASK_ENV'] = 'testing'

    app = create_app(config_name='testing', test_config={
        'SERVER_NAME': 'localhost.localdomain'
    })

    with app.app_context():
        db.create_all()

        yield app

        # --- Teardown ---
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='module')
def client(app):
    """
    A fixture that provides a test client for the Flask application.
    It depends on the 'app' fixture.
    """
    return app.test_client()


@pytest.fixture(scope='function')
def clean_db(app):
    """
    Empty every table before the test and hand back the session.

    Registry singletons are reset too, so services pick up nothing cached
    from a previous test.
    """
    for table in reversed(db.metadata.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()
    app.services.reset()

    yield db.session

    db.session.rollback()


@pytest.fixture
def existing_member(clean_db):
    """A user who already belongs to STUDIO_ID"""
    user = User(email='existing@example.com', name='Existing Member', phone='+15550000000')
    clean_db.add(user)
    clean_db.flush()
    clean_db.add(Membership(user_id=user.id, studio_id=STUDIO_ID, role='member', status='active'))
    clean_db.commit()
    return user
