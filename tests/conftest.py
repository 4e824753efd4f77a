# File: tests/conftest.py

"""
Shared fixtures: a fresh application per test, backed by a throwaway
SQLite file, plus a logged-in client.
"""

import pytest
from fastapi.testclient import TestClient

from employee_records.core.config import Settings
from employee_records.main import create_application

TEST_USER = {"username": "alice", "email": "alice@acme.io", "password": "secret123"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret",
        environment="test",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_application(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def token(client) -> str:
    client.post("/api/auth/register", json=TEST_USER)
    resp = client.post(
        "/api/auth/login",
        json={"email": TEST_USER["email"], "password": TEST_USER["password"]},
    )
    return resp.json()["token"]


@pytest.fixture
def auth_headers(token) -> dict:
    return {"Authorization": f"Bearer {token}"}


def make_employee(**overrides) -> dict:
    employee = {
        "name": "John Doe",
        "mobile": "9876543210",
        "email": "john.doe@acme.io",
        "position": "Engineer",
        "salary": 50000,
    }
    employee.update(overrides)
    return employee
