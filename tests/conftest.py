"""Shared fixtures: an app wired to a fresh in-memory SQLite database per test."""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-do-not-use-in-production")

import pytest
from fastapi.testclient import TestClient

from bustrips.config import Settings
from bustrips.database import Database
from bustrips.main import create_app


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "SECRET_KEY": "test-secret-key-do-not-use-in-production",
        "JSON_LOGS": False,
        "LOG_LEVEL": "WARNING",
        "MANIFEST_COMPRESS": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client):
    """A session on the same database the client talks to."""
    session = client.app.state.database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def database():
    """Standalone database handle for repository-level tests."""
    handle = Database("sqlite://")
    handle.create_all()
    try:
        yield handle
    finally:
        handle.dispose()


@pytest.fixture
def trip_payload():
    return {
        "destination": "Rio",
        "departureDate": "2025-04-10",
        "departureTime": "08:30",
        "price": 150.0,
        "busType": "medium",
    }


@pytest.fixture
def create_trip(client, trip_payload):
    def _create(**overrides):
        payload = dict(trip_payload, **overrides)
        response = client.post("/trips", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def add_passenger(client):
    counter = {"n": 0}

    def _add(trip_id, **overrides):
        counter["n"] += 1
        payload = {
            "name": f"Passenger {counter['n']}",
            "cpf": f"000.000.000-{counter['n']:02d}",
            "seatNumber": str(counter["n"]),
            "hasPaid": False,
        }
        payload.update(overrides)
        response = client.post(f"/trips/{trip_id}/passengers", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _add
