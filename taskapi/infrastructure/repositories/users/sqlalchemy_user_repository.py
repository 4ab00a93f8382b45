# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import exists, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskapi.domain.users.entities import NewUser
from taskapi.domain.users.entities import User as DomainUser
from taskapi.domain.users.exceptions import EmailTakenError, UsernameTakenError
from taskapi.domain.users.repositories import UserRepository
from taskapi.infrastructure.db.models import User, as_utc
from taskapi.infrastructure.unit_of_work import unit_of_work_scope
from taskapi.shared.errors import ConflictError
from taskapi.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=as_utc(row.updated_at),  # type: ignore[arg-type]
    )


def _conflict_from(exc: IntegrityError) -> ConflictError:
    detail = str(exc.orig).lower()
    if "username" in detail:
        return UsernameTakenError()
    if "email" in detail:
        return EmailTakenError()
    return ConflictError()


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def find_by_id(self, user_id: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def find_by_identifier(self, identifier: str) -> DomainUser | None:
        """Look a user up by username or (case-insensitively) by email."""

        statement = select(User).where(
            or_(User.username == identifier, User.email == identifier.lower())
        )
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(statement.limit(1)).first()
            return _to_domain(row) if row else None

    def username_taken(self, username: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return bool(session.scalar(select(exists().where(User.username == username))))

    def email_taken(self, email: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return bool(
                session.scalar(select(exists().where(func.lower(User.email) == email.lower())))
            )

    def add(self, user: NewUser) -> DomainUser:
        now = datetime.now(UTC)
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=user.username,
                    email=user.email.lower(),
                    password_hash=user.password_hash,
                    created_at=now,
                    updated_at=now,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            # lost a race against a concurrent registration
            logger.warning("user.add: unique constraint violated")
            raise _conflict_from(exc) from exc


__all__ = ["SqlAlchemyUserRepository"]
