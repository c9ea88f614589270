# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
import secrets
import time

from flask import Flask, Response, g, request

from newsquiz.shared.config import load_config
from newsquiz.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
SLOW_REQUEST_SECONDS = 5.0

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._\-]{1,64}$")
_SENSITIVE_ARGS = ("password", "secret", "token", "key", "ticket")


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _incoming_request_id() -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_RE.match(supplied):
        return supplied
    return secrets.token_hex(6)


def _safe_args() -> dict[str, str]:
    return {
        key: "<redacted>" if any(s in key.lower() for s in _SENSITIVE_ARGS) else value
        for key, value in request.args.items()
    }


def configure_request_logging(app: Flask) -> None:
    debug_mode = load_config().log.debug

    @app.before_request
    def _start() -> None:
        g.request_id = _incoming_request_id()
        g.request_started = time.perf_counter()
        set_correlation_id(g.request_id)
        if debug_mode:
            logger.debug(
                f"-> {request.method} {request.path} from {_client_ip()} "
                f"args={_safe_args()} body={request.content_length or 0}B"
            )

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed = time.perf_counter() - g.get("request_started", time.perf_counter())
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("request_id", "-"))
        message = (
            f"{request.method} {request.path} -> {response.status_code} "
            f"in {elapsed * 1000:.1f}ms player={g.get('player_id')}"
        )
        if elapsed >= SLOW_REQUEST_SECONDS:
            logger.warning(f"slow request: {message}")
        else:
            logger.info(message)
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
