# tests/conftest.py
import os
import tempfile

# Set environment variables for testing, before the app module is imported
_db_dir = tempfile.mkdtemp(prefix="torneos-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SECRET_KEY"] = "testing_secret_key_for_development_only"

import pytest
from fastapi.testclient import TestClient

from main import app
from torneos.services.auth_service import create_access_token
from factories import seed_fixture_data


async def _reset(db):
    await db.drop_schema()
    await db.create_schema()
    await seed_fixture_data(db)


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client):
    """Fresh schema and fixture data for every test, seeded on the app's loop."""
    database = app.state.db
    client.portal.call(_reset, database)
    return database


@pytest.fixture
def auth_headers():
    def _headers(user_id):
        token = create_access_token({"sub": str(user_id)})
        return {"Authorization": f"Bearer {token}"}
    return _headers
