"""
Shared fixtures: an in-memory SQLite database reset for every test and a
TestClient running the application lifespan (table creation, catalog seed).
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"

from collections import namedtuple

import pytest
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import app

UserSession = namedtuple("UserSession", ["id", "email", "token", "headers"])

DEFAULT_PASSWORD = "Passw0rd"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(client):
    """Register a user and return its id, token and bearer headers. Leaves no cookie behind."""
    def _make_user(email, name="Test User", password=DEFAULT_PASSWORD):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "name": name, "password": password}
        )
        assert response.status_code == 201, response.text
        body = response.json()
        client.cookies.clear()
        return UserSession(
            id=body["user"]["id"],
            email=email,
            token=body["token"],
            headers={"Authorization": f"Bearer {body['token']}"},
        )
    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user("alice@example.com", name="Alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob@example.com", name="Bob")


@pytest.fixture
def make_trip(client):
    def _make_trip(user, **fields):
        payload = {"title": "Europe"}
        payload.update(fields)
        response = client.post("/api/trips", json=payload, headers=user.headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _make_trip


@pytest.fixture
def make_stop(client):
    def _make_stop(user, trip_id, **fields):
        payload = {
            "city": "Paris",
            "country": "France",
            "arrivalDate": "2024-06-01T00:00:00Z",
            "departureDate": "2024-06-05T00:00:00Z",
        }
        payload.update(fields)
        response = client.post(f"/api/trips/{trip_id}/stops", json=payload, headers=user.headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _make_stop
