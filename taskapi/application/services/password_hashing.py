"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from taskapi.domain.users.repositories import PasswordHasher
from taskapi.shared.logging import logger


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted, adaptive hashes via werkzeug (scrypt by default)."""

    def __init__(self, method: str | None = None) -> None:
        self._method = method

    def hash(self, password: str) -> str:
        if self._method:
            return str(generate_password_hash(password, method=self._method))
        return str(generate_password_hash(password))

    def verify(self, password: str, hashed: str) -> bool:
        # never raise: a broken hash must look like a wrong password
        try:
            return bool(check_password_hash(hashed, password))
        except Exception as exc:
            logger.warning(f"password.verify: failed ({type(exc).__name__})")
            return False
