# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import NewUser, User
from .exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    UsernameTakenError,
    UserNotFoundError,
)
from .repositories import PasswordHasher, UserRepository

__all__ = [
    "EmailTakenError",
    "InvalidCredentialsError",
    "NewUser",
    "PasswordHasher",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UsernameTakenError",
]
