# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request access log lines tagged with a correlation id.

The id comes from an inbound ``X-Request-ID`` header when the caller sends
one and is echoed back on the response either way.
"""

from __future__ import annotations

import secrets
import time

from flask import Flask, Response, g, request

from taskapi.shared.config import load_config
from taskapi.shared.logging import clear_correlation_id, logger, set_correlation_id

from .rate_limit import client_key

REQUEST_ID_HEADER = "X-Request-ID"
_REDACTED_ARGS = ("password", "token", "secret")


def _current_user_id() -> str | None:
    context = getattr(g, "request_context", None)
    identity = getattr(context, "identity", None)
    return getattr(identity, "user_id", None)


def _query_summary() -> dict[str, str]:
    return {
        key: "<redacted>" if any(word in key.lower() for word in _REDACTED_ARGS) else value
        for key, value in request.args.items()
    }


def configure_request_logging(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.before_request
    def _start_request() -> None:
        request_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8)
        g.request_id = request_id
        g.request_started = time.perf_counter()
        set_correlation_id(request_id)

        if verbose:
            logger.debug(
                f"--> {request.method} {request.path} client={client_key()} "
                f"query={_query_summary()} body_size={request.content_length or 0}"
            )

    @app.after_request
    def _finish_request(response: Response) -> Response:
        elapsed = time.perf_counter() - getattr(g, "request_started", time.perf_counter())
        logger.info(
            f"<-- {request.method} {request.path} status={response.status_code} "
            f"duration={elapsed * 1000:.1f}ms user={_current_user_id() or '-'}"
        )

        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request failed: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
