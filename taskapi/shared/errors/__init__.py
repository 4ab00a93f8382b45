# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    AppError,
    AuthInvalidError,
    AuthRequiredError,
    ConflictError,
    DomainError,
    InternalError,
    MalformedIdError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

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
    "handle_app_error",
    "register_error_handler",
]
