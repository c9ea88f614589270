# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from flask import Flask, Response
from flask_cors import CORS
from pydantic import ValidationError

from newsquiz.shared.config import AppConfig, load_config
from newsquiz.shared.logging import logger, setup_logging
from newsquiz.shared.middleware.error_handler import configure_error_handling
from newsquiz.shared.middleware.request_logger import REQUEST_ID_HEADER, configure_request_logging

if TYPE_CHECKING:
    from newsquiz.infrastructure.container import Container

_SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Cache-Control": "no-store",
}
_HSTS = "max-age=31536000; includeSubDomains"


def _install_security_headers(app: Flask, config: AppConfig) -> None:
    @app.after_request
    def _security_headers(resp: Response) -> Response:
        for header, value in _SECURITY_HEADERS.items():
            resp.headers.setdefault(header, value)
        if config.security.enable_hsts:
            resp.headers.setdefault("Strict-Transport-Security", _HSTS)
        return resp


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.log)

    # Imported late: the engine and the default container read configuration on import.
    from newsquiz.infrastructure.container import Container
    from newsquiz.infrastructure.container import container as default_container
    from newsquiz.infrastructure.db import init_db
    from newsquiz.infrastructure.observability import install_request_metrics
    from newsquiz.interfaces.http.controllers.misc_controller import MiscController

    init_db()
    if container is None:
        container = default_container if config is default_container.config else Container(config)

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)
    install_request_metrics(app)
    CORS(
        app,
        resources={r"/api/*": {"origins": config.security.allowed_origins}},
        expose_headers=[REQUEST_ID_HEADER],
    )
    _install_security_headers(app, config)

    app.register_blueprint(MiscController().as_blueprint())
    for controller in (
        container.auth_controller,
        container.ledger_controller,
        container.phase_controller,
    ):
        app.register_blueprint(controller.as_blueprint())

    routes = len(list(app.url_map.iter_rules()))
    logger.info(f"newsquiz ready env={config.app_env} routes={routes}")
    return app


def main() -> None:
    try:
        config = load_config()
    except ValidationError as exc:
        names = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        print(f"newsquiz: invalid configuration ({', '.join(names)})", file=sys.stderr)
        sys.exit(1)

    app = create_app(config)
    app.run(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        debug=False,
        threaded=True,
    )


if __name__ == "__main__":
    main()
