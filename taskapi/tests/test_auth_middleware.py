from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from flask import Flask, jsonify

from taskapi.application.services.token_service import JwtTokenService
from taskapi.interfaces.http.auth import Authenticator, current_context, current_identity
from taskapi.shared.errors import register_error_handler

SECRET = "middleware-secret-0123456789abcdef012345"


@pytest.fixture()
def tokens() -> JwtTokenService:
    return JwtTokenService(SECRET, lifetime=timedelta(hours=1))


@pytest.fixture()
def calls() -> list[str]:
    return []


@pytest.fixture()
def flask_app(tokens: JwtTokenService, calls: list[str]) -> Flask:
    app = Flask(__name__)
    register_error_handler(app)
    authenticator = Authenticator(tokens)

    @app.get("/private")
    @authenticator.required
    def private():
        calls.append("private")
        return jsonify({"userId": current_identity().user_id})

    @app.get("/public")
    @authenticator.optional
    def public():
        calls.append("public")
        return jsonify({"authenticated": current_context().authenticated})

    return app


def test_missing_header_never_reaches_the_handler(flask_app: Flask, calls: list[str]) -> None:
    response = flask_app.test_client().get("/private")

    assert response.status_code == 401
    assert response.get_json()["error"] == "auth_required"
    assert calls == []


def test_non_bearer_scheme_counts_as_missing(flask_app: Flask, calls: list[str]) -> None:
    response = flask_app.test_client().get(
        "/private", headers={"Authorization": "Basic YWxpY2U6c2VjcmV0"}
    )

    assert response.status_code == 401
    assert response.get_json()["error"] == "auth_required"
    assert calls == []


def test_valid_token_attaches_identity(flask_app: Flask, tokens: JwtTokenService) -> None:
    token = tokens.issue("65a1b2c3d4e5f60718293a4b", "alice").token

    response = flask_app.test_client().get(
        "/private", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
    assert response.get_json() == {"userId": "65a1b2c3d4e5f60718293a4b"}


def test_expired_token_has_its_own_message(flask_app: Flask, calls: list[str]) -> None:
    stale = JwtTokenService(
        SECRET,
        lifetime=timedelta(hours=1),
        clock=lambda: datetime.now(UTC) - timedelta(hours=3),
    ).issue("u1", "alice")

    response = flask_app.test_client().get(
        "/private", headers={"Authorization": f"Bearer {stale.token}"}
    )

    assert response.status_code == 401
    payload = response.get_json()
    assert payload["error"] == "auth_invalid"
    assert payload["message"] == "Token has expired"
    assert calls == []


def test_garbage_token_is_invalid(flask_app: Flask) -> None:
    response = flask_app.test_client().get(
        "/private", headers={"Authorization": "Bearer abc.def.ghi"}
    )

    assert response.status_code == 401
    assert response.get_json() == {"error": "auth_invalid", "message": "Invalid token"}


def test_optional_variant_continues_without_identity(
    flask_app: Flask, tokens: JwtTokenService
) -> None:
    client = flask_app.test_client()

    assert client.get("/public").get_json() == {"authenticated": False}
    assert client.get(
        "/public", headers={"Authorization": "Bearer nonsense"}
    ).get_json() == {"authenticated": False}

    token = tokens.issue("u1", "alice").token
    assert client.get(
        "/public", headers={"Authorization": f"Bearer {token}"}
    ).get_json() == {"authenticated": True}
