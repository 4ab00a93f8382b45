from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from taskapi.application.services.token_service import IssuedToken, JwtTokenService, TokenClaims
from taskapi.application.use_cases.users import LoginUserUseCase, RegisterUserUseCase
from taskapi.domain.users import User
from taskapi.interfaces.http.auth import Authenticator
from taskapi.interfaces.http.controllers.auth_controller import AuthController
from taskapi.shared.errors import register_error_handler
from taskapi.shared.middleware.rate_limit import InMemoryRateLimitStore, RateLimiter

NOW = datetime(2030, 1, 1, tzinfo=UTC)


def _user(username: str = "alice") -> User:
    return User(
        id="65a1b2c3d4e5f60718293a4b",
        username=username,
        email=f"{username}@example.com",
        password_hash="hash",
        created_at=NOW,
        updated_at=NOW,
    )


def _issued(user: User) -> IssuedToken:
    claims = TokenClaims(user.id, user.username, NOW, NOW + timedelta(days=7))
    return IssuedToken(token="token123", claims=claims)


def _controller(**overrides) -> AuthController:
    store = InMemoryRateLimitStore()
    options = {
        "authenticator": Authenticator(
            JwtTokenService("controller-secret-0123456789abcdef0123", lifetime=timedelta(hours=1))
        ),
        "rate_limiter": RateLimiter(store, limit=100, window_seconds=60),
        "public_rate_limiter": RateLimiter(store, limit=100, window_seconds=60, scope="client"),
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "profile_use_case": MagicMock(),
    }
    options.update(overrides)
    return AuthController(**options)


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    register_error_handler(app)
    return app


def test_register_endpoint_returns_user_and_token(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str, str]] = {}

    class StubRegister:
        def execute(self, username: str, email: str, password: str) -> tuple[User, IssuedToken]:
            register_called["args"] = (username, email, password)
            user = _user(username)
            return user, _issued(user)

    controller = _controller(register_use_case=cast(RegisterUserUseCase, StubRegister()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "ALICE@example.com", "password": "secret123"},
        )

    assert response.status_code == 201
    assert register_called["args"] == ("alice", "alice@example.com", "secret123")
    payload = response.get_json()
    assert payload["token"] == "token123"
    assert payload["user"] == {
        "id": "65a1b2c3d4e5f60718293a4b",
        "username": "alice",
        "email": "alice@example.com",
        "createdAt": "2030-01-01T00:00:00Z",
        "updatedAt": "2030-01-01T00:00:00Z",
    }
    assert "passwordHash" not in payload["user"]


def test_login_invalid_payload_returns_400(flask_app: Flask) -> None:
    login = MagicMock()
    controller = _controller(login_use_case=cast(LoginUserUseCase, login))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"username": "alice"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert [item["field"] for item in payload["details"]] == ["password"]
    login.execute.assert_not_called()


def test_public_endpoints_are_throttled_per_client(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = (_user(), _issued(_user()))
    controller = _controller(
        login_use_case=cast(LoginUserUseCase, login),
        public_rate_limiter=RateLimiter(
            InMemoryRateLimitStore(), limit=2, window_seconds=60, scope="client"
        ),
    )
    flask_app.register_blueprint(controller.as_blueprint())
    body = {"username": "alice", "password": "secret123"}

    with flask_app.test_client() as client:
        statuses = [client.post("/api/auth/login", json=body).status_code for _ in range(3)]

    assert statuses == [200, 200, 429]
    assert login.execute.call_count == 2


def test_profile_requires_a_token(flask_app: Flask) -> None:
    profile = MagicMock()
    controller = _controller(profile_use_case=profile)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/auth/profile")

    assert response.status_code == 401
    profile.execute.assert_not_called()
