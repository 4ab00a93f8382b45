from __future__ import annotations

import os

# must be set before taskapi modules read their configuration
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-jwt-secret-0123456789abcdef0123456789"
os.environ["ENABLE_RATE_LIMIT"] = "false"

from collections.abc import Iterator  # noqa: E402

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from taskapi.app import create_app  # noqa: E402
from taskapi.infrastructure.container import Container  # noqa: E402
from taskapi.infrastructure.db import drop_db, init_db  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    drop_db()
    init_db()
    yield
    drop_db()


@pytest.fixture()
def app() -> Flask:
    return create_app(Container())


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as client:
        yield client


@pytest.fixture()
def auth_headers(client: FlaskClient) -> dict[str, str]:
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.get_json()['token']}"}
