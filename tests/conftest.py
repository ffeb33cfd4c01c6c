import os
import tempfile

# Configure the app before it is imported: in-memory database, throwaway audit dir.
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['AUDIT_LOG_DIR'] = tempfile.mkdtemp(prefix='myvote-audit-')
os.environ['JWT_SECRET_KEY'] = 'test_secret'

import pytest
from myvote import app as flask_app, db


@pytest.fixture
def app():
    flask_app.config['TESTING'] = True
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
