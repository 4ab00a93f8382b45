from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt

from taskapi.application.services.token_service import (
    JwtTokenService,
    TokenClaims,
    TokenErrorKind,
    TokenFailure,
)

SECRET = "unit-test-secret-0123456789abcdef01234567"


def _service(**kwargs) -> JwtTokenService:
    return JwtTokenService(SECRET, lifetime=timedelta(hours=1), **kwargs)


def test_issue_then_verify_returns_claims() -> None:
    service = _service()

    issued = service.issue("65a1b2c3d4e5f60718293a4b", "alice")
    result = service.verify(issued.token)

    assert isinstance(result, TokenClaims)
    assert result == issued.claims
    assert result.expires_at - result.issued_at == timedelta(hours=1)
    assert result.as_dict()["userId"] == "65a1b2c3d4e5f60718293a4b"


def test_expired_token_is_classified_as_expired() -> None:
    issuer = _service(clock=lambda: datetime.now(UTC) - timedelta(hours=2))

    result = _service().verify(issuer.issue("u1", "alice").token)

    assert result == TokenFailure(TokenErrorKind.EXPIRED)


def test_token_from_the_future_is_not_yet_valid() -> None:
    issuer = _service(clock=lambda: datetime.now(UTC) + timedelta(minutes=30))

    result = _service().verify(issuer.issue("u1", "alice").token)

    assert isinstance(result, TokenFailure)
    assert result.kind is TokenErrorKind.NOT_YET_VALID


def test_foreign_signature_is_rejected() -> None:
    other = JwtTokenService("another-secret-0123456789abcdef0123456", lifetime=timedelta(hours=1))

    result = _service().verify(other.issue("u1", "alice").token)

    assert isinstance(result, TokenFailure)
    assert result.kind is TokenErrorKind.SIGNATURE_INVALID


def test_garbage_is_malformed() -> None:
    result = _service().verify("not.a.token")

    assert isinstance(result, TokenFailure)
    assert result.kind is TokenErrorKind.MALFORMED


def test_missing_identity_claims_is_malformed() -> None:
    now = int(datetime.now(UTC).timestamp())
    token = jwt.encode({"iat": now, "exp": now + 60}, SECRET, algorithm="HS256")

    result = _service().verify(token)

    assert isinstance(result, TokenFailure)
    assert result.kind is TokenErrorKind.MALFORMED


def test_missing_exp_is_malformed() -> None:
    token = jwt.encode({"userId": "u1", "username": "alice"}, SECRET, algorithm="HS256")

    result = _service().verify(token)

    assert isinstance(result, TokenFailure)
    assert result.kind is TokenErrorKind.MALFORMED
