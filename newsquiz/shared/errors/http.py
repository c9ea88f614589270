# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from newsquiz.shared.config import load_config
from newsquiz.shared.logging import logger

from .base import AppError


def render_error(error: AppError) -> tuple[Response, int]:
    return jsonify(error.to_dict()), int(error.status)


def _http_error_code(exc: HTTPException) -> str:
    return (exc.name or "http_error").lower().replace(" ", "_")


def register_error_handler(app: Flask) -> None:
    """Every failure leaves the API as JSON; stack traces stay in the log."""

    debug_mode = load_config().log.debug

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        where = f"{request.method} {request.path}"
        if exc.is_server_fault:
            logger.error(f"{exc.code} on {where}")
        else:
            logger.info(f"rejected {exc.code} on {where}")
        return render_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return jsonify({"error": _http_error_code(exc)}), exc.code

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        summary = (
            f"unhandled {type(exc).__name__} on {request.method} {request.path} "
            f"player={g.get('player_id')}"
        )
        if debug_mode:
            logger.opt(exception=exc).error(summary)
        else:
            logger.error(summary)
        return jsonify({"error": "internal_error"}), 500


__all__ = ["register_error_handler", "render_error"]
