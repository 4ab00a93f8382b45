# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response
from flask_cors import CORS

from taskapi.infrastructure.container import Container
from taskapi.infrastructure.db import init_db
from taskapi.shared.errors import register_error_handler
from taskapi.shared.logging import logger, setup_logging
from taskapi.shared.middleware.request_logger import configure_request_logging


def _configure_security_headers(app: Flask, *, enable_hsts: bool) -> None:
    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cache-Control", "no-store")

        if enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp


def create_app(container: Container | None = None) -> Flask:
    container = container or Container()
    config = container.config

    setup_logging(debug=config.debug_logging)
    init_db()

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.json.sort_keys = False  # type: ignore[attr-defined]

    register_error_handler(app, config)
    configure_request_logging(app)
    _configure_security_headers(app, enable_hsts=config.security.enable_hsts)

    CORS(app, resources={r"/api/*": {"origins": config.security.allowed_origins}})

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.task_controller.as_blueprint())
    app.extensions["taskapi.container"] = container

    logger.info(f"Flask app initialized env={config.app_env}")
    return app
