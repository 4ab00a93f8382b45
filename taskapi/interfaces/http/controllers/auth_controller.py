# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from taskapi.application.services.token_service import IssuedToken
from taskapi.application.use_cases.users import (
    GetProfileUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
)
from taskapi.domain.users import User
from taskapi.interfaces.http.auth import Authenticator, current_identity, identity_key
from taskapi.interfaces.http.dto import LoginRequestDTO, RegisterRequestDTO, UserDTO
from taskapi.interfaces.http.validation import validated
from taskapi.shared.logging import logger
from taskapi.shared.middleware.rate_limit import RateLimiter, client_key


def _auth_payload(user: User, issued: IssuedToken) -> dict[str, object]:
    return {"user": UserDTO.serialize(user), "token": issued.token}


class AuthController:
    def __init__(
        self,
        *,
        authenticator: Authenticator,
        rate_limiter: RateLimiter,
        public_rate_limiter: RateLimiter,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        profile_use_case: GetProfileUseCase,
    ) -> None:
        self._authenticator = authenticator
        self._rate_limiter = rate_limiter
        self._public_rate_limiter = public_rate_limiter
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._profile_use_case = profile_use_case

    def register(self) -> tuple[Response, int]:
        dto = validated("user_register", request.get_json(silent=True), RegisterRequestDTO)
        user, issued = self._register_use_case.execute(dto.username, dto.email, dto.password)
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(_auth_payload(user, issued)), 201

    def login(self) -> Response:
        dto = validated("user_login", request.get_json(silent=True), LoginRequestDTO)
        user, issued = self._login_use_case.execute(dto.username, dto.password)
        logger.info(f"auth.login: ok user_id={user.id}")
        return jsonify(_auth_payload(user, issued))

    def profile(self) -> Response:
        user = self._profile_use_case.execute(current_identity().user_id)
        return jsonify({"user": UserDTO.serialize(user)})

    def verify(self) -> Response:
        return jsonify({"claims": current_identity().as_dict()})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        public = self._public_rate_limiter.limit_by(client_key)
        protected = self._rate_limiter.limit_by(identity_key)
        required = self._authenticator.required

        bp.add_url_rule("/register", view_func=public(self.register), methods=["POST"])
        bp.add_url_rule("/login", view_func=public(self.login), methods=["POST"])
        bp.add_url_rule("/profile", view_func=required(protected(self.profile)), methods=["GET"])
        bp.add_url_rule("/verify", view_func=required(protected(self.verify)), methods=["GET"])
        return bp
