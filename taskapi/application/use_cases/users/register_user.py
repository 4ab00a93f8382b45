# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.application.services.token_service import IssuedToken, JwtTokenService
from taskapi.domain.users.entities import NewUser, User
from taskapi.domain.users.exceptions import EmailTakenError, UsernameTakenError
from taskapi.domain.users.repositories import PasswordHasher, UserRepository
from taskapi.shared.logging import logger


class RegisterUserUseCase:
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

    def execute(self, username: str, email: str, password: str) -> tuple[User, IssuedToken]:
        # best-effort; the unique indexes have the final word
        if self._users.username_taken(username):
            raise UsernameTakenError()
        if self._users.email_taken(email):
            raise EmailTakenError()

        hashed = self._password_hasher.hash(password)
        user = self._users.add(NewUser(username=username, email=email, password_hash=hashed))
        token = self._tokens.issue(user.id, user.username)
        logger.info(f"user.register: user_id={user.id}")
        return user, token
