"""
Shared fixtures: a fresh in-memory database per test and API helpers.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from tripplanner.db.base import Base
from tripplanner.db.session import engine, init_db
from tripplanner.main import app


@pytest.fixture(autouse=True)
def reset_database():
    """Create every table before a test and drop them after."""
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def register(client):
    """Register a user and return (auth headers, user json)."""
    def _register(email="alice@example.com", password="secret123", name=None):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name}
        )
        assert response.status_code == 201
        data = response.json()
        return {"Authorization": f"Bearer {data['token']}"}, data["user"]
    return _register


@pytest.fixture
def auth_headers(register):
    headers, _ = register()
    return headers


@pytest.fixture
def trip(client, auth_headers):
    """A three day trip owned by the default user."""
    response = client.post(
        "/api/trips",
        json={"name": "Lisbon", "startDate": "2025-06-01", "endDate": "2025-06-03"},
        headers=auth_headers
    )
    assert response.status_code == 201
    return response.json()
