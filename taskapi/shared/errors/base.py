# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, TypeVar

_T = TypeVar("_T")


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str = ""
    details: Sequence[Mapping[str, str]] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": self.code,
            "message": self.message or self.status.phrase,
        }
        if self.details:
            payload["details"] = [dict(item) for item in self.details]
        return payload


def _class_default(error: AppError, name: str, kind: type[_T], fallback: _T) -> _T:
    # slot descriptors on AppError are not class-level defaults
    value = getattr(type(error), name, fallback)
    return value if isinstance(value, kind) else fallback


class DomainError(AppError):
    """Base for errors whose defaults are declared as class attributes."""

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        details: Sequence[Mapping[str, str]] | None = None,
    ) -> None:
        resolved_code = code or _class_default(self, "code", str, "domain_error")
        resolved_status = status or _class_default(
            self, "status", HTTPStatus, HTTPStatus.BAD_REQUEST
        )
        resolved_message = message or _class_default(self, "message", str, "")
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            details=details,
        )


class ValidationError(DomainError):
    code = "validation_error"
    status = HTTPStatus.BAD_REQUEST
    message = "The submitted data is not valid"


class MalformedIdError(DomainError):
    code = "malformed_id"
    status = HTTPStatus.BAD_REQUEST
    message = "The provided id is not a valid identifier"

    def __init__(self, value: object = None) -> None:
        details = None
        if value is not None:
            details = [{"field": "id", "message": f"'{value}' is not a 24-character hex id"}]
        super().__init__(details=details)


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND
    message = "The requested resource does not exist"


class AuthRequiredError(DomainError):
    code = "auth_required"
    status = HTTPStatus.UNAUTHORIZED
    message = "A valid access token is required to access this resource"


class AuthInvalidError(DomainError):
    code = "auth_invalid"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid token"


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT
    message = "The resource already exists"


class RateLimitedError(DomainError):
    code = "rate_limited"
    status = HTTPStatus.TOO_MANY_REQUESTS
    message = "Too many requests, try again later"


class InternalError(DomainError):
    code = "internal_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Something went wrong on the server"


__all__ = [
    "AppError",
    "AuthInvalidError",
    "AuthRequiredError",
    "ConflictError",
    "DomainError",
    "InternalError",
    "MalformedIdError",
    "NotFoundError",
    "RateLimitedError",
    "ValidationError",
]
