from __future__ import annotations

from taskapi.application.services.password_hashing import WerkzeugPasswordHasher


def test_hash_and_verify() -> None:
    hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")

    hashed = hasher.hash("secret123")

    assert hashed != "secret123"
    assert hasher.verify("secret123", hashed)
    assert not hasher.verify("secret124", hashed)


def test_same_password_hashes_differently() -> None:
    hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")

    assert hasher.hash("secret123") != hasher.hash("secret123")


def test_malformed_hash_never_verifies() -> None:
    hasher = WerkzeugPasswordHasher()

    assert hasher.verify("secret123", "not-a-hash") is False
    assert hasher.verify("secret123", "unknown$salt$value") is False
