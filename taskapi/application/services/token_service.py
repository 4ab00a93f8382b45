# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless signed access tokens.

A token moves through ``issued -> valid -> expired`` purely as a function of
the clock; nothing is stored and there is no revocation list.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any

import jwt

from taskapi.shared.logging import logger


class TokenErrorKind(StrEnum):
    MALFORMED = "malformed"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    SIGNATURE_INVALID = "signature_invalid"


@dataclass(slots=True, frozen=True)
class TokenClaims:
    user_id: str
    username: str
    issued_at: datetime
    expires_at: datetime

    def as_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "username": self.username,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
        }


@dataclass(slots=True, frozen=True)
class TokenFailure:
    kind: TokenErrorKind
    detail: str = ""


TokenResult = TokenClaims | TokenFailure


@dataclass(slots=True, frozen=True)
class IssuedToken:
    token: str
    claims: TokenClaims


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService:
    def __init__(
        self,
        secret: str,
        *,
        lifetime: timedelta,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._lifetime = lifetime
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: str, username: str) -> IssuedToken:
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._lifetime
        payload = {
            "userId": user_id,
            "username": username,
            "iat": int(issued_at.timestamp()),
            "nbf": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        logger.debug(f"token.issue: user_id={user_id} exp={expires_at.isoformat()}")
        return IssuedToken(
            token=token,
            claims=TokenClaims(
                user_id=user_id,
                username=username,
                issued_at=issued_at,
                expires_at=expires_at,
            ),
        )

    def verify(self, token: str) -> TokenResult:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            return TokenFailure(TokenErrorKind.EXPIRED)
        except jwt.ImmatureSignatureError:
            return TokenFailure(TokenErrorKind.NOT_YET_VALID)
        # InvalidSignatureError is a DecodeError, so it must be matched first
        except jwt.InvalidSignatureError:
            return TokenFailure(TokenErrorKind.SIGNATURE_INVALID)
        except jwt.InvalidTokenError as exc:
            return TokenFailure(TokenErrorKind.MALFORMED, str(exc))

        user_id = payload.get("userId")
        username = payload.get("username")
        if not isinstance(user_id, str) or not isinstance(username, str):
            return TokenFailure(TokenErrorKind.MALFORMED, "missing identity claims")

        return TokenClaims(
            user_id=user_id,
            username=username,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


__all__ = [
    "IssuedToken",
    "JwtTokenService",
    "TokenClaims",
    "TokenErrorKind",
    "TokenFailure",
    "TokenResult",
]
