# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from taskapi.application.services.password_hashing import WerkzeugPasswordHasher
from taskapi.application.services.token_service import JwtTokenService
from taskapi.application.use_cases.tasks import (
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskStatsUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    SetTaskCompletionUseCase,
    UpdateTaskUseCase,
)
from taskapi.application.use_cases.users import (
    GetProfileUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
)
from taskapi.infrastructure.db import SessionLocal
from taskapi.infrastructure.repositories.tasks import SqlAlchemyTaskRepository
from taskapi.infrastructure.repositories.users import SqlAlchemyUserRepository
from taskapi.interfaces.http.auth import Authenticator
from taskapi.interfaces.http.controllers.auth_controller import AuthController
from taskapi.interfaces.http.controllers.misc_controller import MiscController
from taskapi.interfaces.http.controllers.task_controller import TaskController
from taskapi.shared.config import AppConfig, load_config
from taskapi.shared.middleware.rate_limit import InMemoryRateLimitStore, RateLimiter


class Container:
    """Wires services, repositories and controllers from one ``AppConfig``.

    The database engine and ``SessionLocal`` are process-global and built from
    the environment at import time, so ``config.database`` is not consulted here.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        auth = self.config.auth
        return JwtTokenService(
            auth.jwt_secret,
            lifetime=timedelta(seconds=auth.jwt_expires_in),
            algorithm=auth.jwt_algorithm,
        )

    @cached_property
    def authenticator(self) -> Authenticator:
        return Authenticator(self.token_service)

    @cached_property
    def rate_limit_store(self) -> InMemoryRateLimitStore:
        return InMemoryRateLimitStore()

    @cached_property
    def rate_limiter(self) -> RateLimiter:
        security = self.config.security
        return RateLimiter(
            self.rate_limit_store,
            limit=security.rate_limit_requests,
            window_seconds=security.rate_limit_window,
            enabled=security.enable_rate_limit,
            scope="user",
        )

    @cached_property
    def public_rate_limiter(self) -> RateLimiter:
        security = self.config.security
        return RateLimiter(
            self.rate_limit_store,
            limit=security.auth_rate_limit_requests,
            window_seconds=security.auth_rate_limit_window,
            enabled=security.enable_rate_limit,
            scope="client",
        )

    # Repositories

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(SessionLocal)

    @cached_property
    def task_repository(self) -> SqlAlchemyTaskRepository:
        return SqlAlchemyTaskRepository(SessionLocal)

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_service,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_service,
        )

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            authenticator=self.authenticator,
            rate_limiter=self.rate_limiter,
            public_rate_limiter=self.public_rate_limiter,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            profile_use_case=self.get_profile_use_case,
        )

    @cached_property
    def task_controller(self) -> TaskController:
        tasks = self.task_repository
        return TaskController(
            authenticator=self.authenticator,
            rate_limiter=self.rate_limiter,
            list_tasks=ListTasksUseCase(tasks),
            get_task=GetTaskUseCase(tasks),
            create_task=CreateTaskUseCase(tasks),
            update_task=UpdateTaskUseCase(tasks),
            set_completion=SetTaskCompletionUseCase(tasks),
            delete_task=DeleteTaskUseCase(tasks),
            get_stats=GetTaskStatsUseCase(tasks),
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(authenticator=self.authenticator)
