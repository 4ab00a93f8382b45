# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import NewUser, User


class UserRepository(Protocol):
    def find_by_id(self, user_id: str) -> User | None: ...
    def find_by_identifier(self, identifier: str) -> User | None: ...
    def username_taken(self, username: str) -> bool: ...
    def email_taken(self, email: str) -> bool: ...
    def add(self, user: NewUser) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
