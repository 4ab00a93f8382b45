# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token authentication for Flask views.

``Authenticator.required`` rejects a request before the view runs when the
token is missing or fails verification. ``Authenticator.optional`` lets the
request through unauthenticated instead. Either way the view reads the
outcome from :func:`current_context`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any, TypeVar, cast

from flask import Request, g, request

from taskapi.application.services.token_service import (
    JwtTokenService,
    TokenClaims,
    TokenErrorKind,
    TokenFailure,
)
from taskapi.shared.errors import AuthInvalidError, AuthRequiredError
from taskapi.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])

_FAILURE_MESSAGES = {
    TokenErrorKind.EXPIRED: "Token has expired",
    TokenErrorKind.NOT_YET_VALID: "Token is not valid yet",
    TokenErrorKind.SIGNATURE_INVALID: "Token signature is invalid",
    TokenErrorKind.MALFORMED: "Invalid token",
}


@dataclass(slots=True, frozen=True)
class RequestContext:
    identity: TokenClaims | None = None

    @property
    def authenticated(self) -> bool:
        return self.identity is not None


_ANONYMOUS = RequestContext()


def bearer_token(req: Request | None = None) -> str | None:
    header = (req or request).headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class Authenticator:
    def __init__(self, tokens: JwtTokenService) -> None:
        self._tokens = tokens

    def authenticate(self, req: Request | None = None) -> RequestContext:
        token = bearer_token(req)
        if token is None:
            raise AuthRequiredError()

        result = self._tokens.verify(token)
        if isinstance(result, TokenFailure):
            logger.warning(
                f"auth: token rejected kind={result.kind} "
                f"on {request.method} {request.path}"
            )
            raise AuthInvalidError(_FAILURE_MESSAGES[result.kind])

        return RequestContext(identity=result)

    def required(self, view: F) -> F:
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.request_context = self.authenticate()
            return view(*args, **kwargs)

        return cast(F, wrapper)

    def optional(self, view: F) -> F:
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.request_context = self.authenticate()
            except (AuthRequiredError, AuthInvalidError):
                g.request_context = _ANONYMOUS
            return view(*args, **kwargs)

        return cast(F, wrapper)


def current_context() -> RequestContext:
    return cast(RequestContext, getattr(g, "request_context", _ANONYMOUS))


def current_identity() -> TokenClaims:
    identity = current_context().identity
    if identity is None:
        raise AuthRequiredError()
    return identity


def identity_key() -> str | None:
    identity = current_context().identity
    return identity.user_id if identity else None


__all__ = [
    "Authenticator",
    "RequestContext",
    "bearer_token",
    "current_context",
    "current_identity",
    "identity_key",
]
