# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from sqlalchemy.exc import SQLAlchemyError

from newsquiz.infrastructure.health import check_database
from newsquiz.infrastructure.observability import metrics_enabled, render_metrics
from newsquiz.shared.logging import logger


class MiscController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__, url_prefix="/api")
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True, "database": "ok"}
        try:
            check_database()
        except SQLAlchemyError as exc:
            logger.opt(exception=exc).error("health: database check failed")
            status.update(ok=False, database="error")
        return jsonify(status), (200 if status["ok"] else 503)

    def metrics(self):
        if not metrics_enabled():
            return jsonify({"error": "not_found"}), 404
        body, content_type = render_metrics()
        return Response(body, content_type=content_type)
