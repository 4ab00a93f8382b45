# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.shared.errors.base import AuthInvalidError, ConflictError, NotFoundError


class UsernameTakenError(ConflictError):
    message = "The username is already registered"


class EmailTakenError(ConflictError):
    message = "The email is already associated with another account"


class InvalidCredentialsError(AuthInvalidError):
    message = "Incorrect username or password"


class UserNotFoundError(NotFoundError):
    message = "The user does not exist"
