# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from sqlalchemy.exc import SQLAlchemyError

from taskapi.infrastructure.health import check_database
from taskapi.interfaces.http.auth import Authenticator, current_context
from taskapi.shared.logging import logger


class MiscController:
    def __init__(self, *, authenticator: Authenticator) -> None:
        self._authenticator = authenticator

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule(
            "/api/health",
            view_func=self._authenticator.optional(self.health),
            methods=["GET"],
        )
        return bp

    def health(self) -> tuple[Response, int]:
        status: dict[str, object] = {"ok": True}
        try:
            latency_ms = check_database()
            status["database"] = "ok"
            status["latencyMs"] = round(latency_ms, 2)
        except SQLAlchemyError as exc:
            logger.error(f"health: database check failed ({type(exc).__name__})")
            status["ok"] = False
            status["database"] = "unavailable"
        status["authenticated"] = current_context().authenticated
        return jsonify(status), 200 if status["ok"] else 503
