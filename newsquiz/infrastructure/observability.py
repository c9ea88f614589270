# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from flask import Flask, Response, g, request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from newsquiz.shared.config import load_config

REQUEST_LATENCY = Histogram(
    "newsquiz_request_latency_seconds",
    "Request latency",
    labelnames=("endpoint",),
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
)
REQUEST_COUNTER = Counter(
    "newsquiz_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "status"),
)
PHASES_ISSUED = Counter(
    "newsquiz_phases_total",
    "Phase generation attempts by outcome",
    labelnames=("outcome",),
)
POINTS_AWARDED = Counter(
    "newsquiz_points_awarded_total",
    "Points credited to players by source",
    labelnames=("source",),
)


def metrics_enabled() -> bool:
    return load_config().metrics_enabled


def observe_request(endpoint: str, status: int, seconds: float) -> None:
    if not metrics_enabled():
        return
    REQUEST_LATENCY.labels(endpoint=endpoint).observe(seconds)
    REQUEST_COUNTER.labels(endpoint=endpoint, status=str(status)).inc()


def record_phase(outcome: str) -> None:
    if metrics_enabled():
        PHASES_ISSUED.labels(outcome=outcome).inc()


def record_points(source: str, points: int) -> None:
    if metrics_enabled() and points > 0:
        POINTS_AWARDED.labels(source=source).inc(points)


def install_request_metrics(app: Flask) -> None:
    @app.before_request
    def _start_timer() -> None:
        g.metrics_started = time.perf_counter()

    @app.after_request
    def _observe(response: Response) -> Response:
        started = g.get("metrics_started")
        if started is not None:
            endpoint = request.url_rule.rule if request.url_rule else "unmatched"
            observe_request(endpoint, response.status_code, time.perf_counter() - started)
        return response


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "install_request_metrics",
    "metrics_enabled",
    "observe_request",
    "record_phase",
    "record_points",
    "render_metrics",
]
