# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.application.services.token_service import IssuedToken, JwtTokenService
from taskapi.domain.users.entities import User
from taskapi.domain.users.exceptions import InvalidCredentialsError
from taskapi.domain.users.repositories import PasswordHasher, UserRepository
from taskapi.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: JwtTokenService,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens

    def execute(self, identifier: str, password: str) -> tuple[User, IssuedToken]:
        """``identifier`` is either the username or the email address."""

        user = self._users.find_by_identifier(identifier)
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash
        )

        if not password_valid or user is None:
            logger.info("user.login: rejected")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.id, user.username)
        logger.info(f"user.login: user_id={user.id}")
        return user, token
