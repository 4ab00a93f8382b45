# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from taskapi.shared.config import AppConfig, load_config
from taskapi.shared.logging import logger

from .base import AppError, InternalError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    return response, error.status


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def register_error_handler(app: Flask, config: AppConfig | None = None) -> None:
    config = config or load_config()

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.code} on {request.method} {request.path}: {exc}")
        else:
            logger.info(f"Handled application error {exc.code} on {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        if exc.code is not None and exc.code < 400:
            return exc
        status = HTTPStatus(exc.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route {request.method} {request.path} does not exist on this server"
        else:
            message = exc.description or status.phrase
        payload = {"error": status.phrase.lower().replace(" ", "_"), "message": message}
        return jsonify(payload), status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception(
            f"Unhandled exception: {type(exc).__name__} on {request.method} {request.path} "
            f"from {_client_ip()}, query={dict(request.args)}, body_size={len(request.data)}"
        )

        error = InternalError()
        if not config.is_production():
            error.message = str(exc) or type(exc).__name__
        return handle_app_error(error)
