from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from taskapi.application.services.token_service import JwtTokenService, TokenClaims
from taskapi.application.use_cases.users import (
    GetProfileUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
)
from taskapi.domain.identifiers import new_id
from taskapi.domain.users import (
    EmailTakenError,
    InvalidCredentialsError,
    NewUser,
    PasswordHasher,
    User,
    UsernameTakenError,
    UserNotFoundError,
    UserRepository,
)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def find_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def find_by_identifier(self, identifier: str) -> User | None:
        for user in self._users.values():
            if identifier in (user.username, user.email) or identifier.lower() == user.email:
                return user
        return None

    def username_taken(self, username: str) -> bool:
        return any(user.username == username for user in self._users.values())

    def email_taken(self, email: str) -> bool:
        return any(user.email == email.lower() for user in self._users.values())

    def add(self, user: NewUser) -> User:
        now = datetime.now(UTC)
        stored = User(
            id=new_id(),
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            created_at=now,
            updated_at=now,
        )
        self._users[stored.id] = stored
        return stored


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tokens() -> JwtTokenService:
    return JwtTokenService("use-case-secret-0123456789abcdef0123456", lifetime=timedelta(days=7))


@pytest.fixture()
def register(users: InMemoryUserRepository, tokens: JwtTokenService) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=DeterministicHasher(), tokens=tokens)


@pytest.fixture()
def login(users: InMemoryUserRepository, tokens: JwtTokenService) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, password_hasher=DeterministicHasher(), tokens=tokens)


def test_register_user_success(
    register: RegisterUserUseCase, users: InMemoryUserRepository, tokens: JwtTokenService
) -> None:
    user, issued = register.execute("alice", "alice@example.com", "secret123")

    assert user.username == "alice"
    assert user.password_hash == "hashed:secret123"
    claims = tokens.verify(issued.token)
    assert isinstance(claims, TokenClaims)
    assert claims.user_id == user.id
    assert claims.expires_at - claims.issued_at == timedelta(days=7)
    assert users.find_by_id(user.id) == user


def test_register_duplicate_username_raises(
    register: RegisterUserUseCase, users: InMemoryUserRepository
) -> None:
    register.execute("alice", "alice@example.com", "secret123")

    with pytest.raises(UsernameTakenError) as exc_info:
        register.execute("alice", "other@example.com", "secret123")

    assert exc_info.value.status == 409
    assert len(users._users) == 1


def test_register_duplicate_email_raises(register: RegisterUserUseCase) -> None:
    register.execute("alice", "alice@example.com", "secret123")

    with pytest.raises(EmailTakenError):
        register.execute("alicia", "alice@example.com", "secret123")


def test_login_by_username_or_email(
    register: RegisterUserUseCase, login: LoginUserUseCase
) -> None:
    user, _ = register.execute("alice", "alice@example.com", "secret123")

    by_name, _ = login.execute("alice", "secret123")
    by_email, _ = login.execute("Alice@Example.com", "secret123")

    assert by_name.id == by_email.id == user.id


def test_login_failures_are_indistinguishable(
    register: RegisterUserUseCase, login: LoginUserUseCase
) -> None:
    register.execute("alice", "alice@example.com", "secret123")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute("alice", "wrong-password")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        login.execute("mallory", "secret123")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
    assert wrong_password.value.status == 401


def test_profile_for_deleted_user(users: InMemoryUserRepository) -> None:
    with pytest.raises(UserNotFoundError):
        GetProfileUseCase(users=users).execute(new_id())
