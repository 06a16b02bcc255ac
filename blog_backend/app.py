# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from blog_backend.infrastructure.container import Container
from blog_backend.infrastructure.db import init_db
from blog_backend.shared.config import AppConfig, load_config
from blog_backend.shared.logging import logger, setup_logging
from blog_backend.shared.middleware.error_handler import configure_error_handling
from blog_backend.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)

    setup_logging(config.log_level, log_file=config.log_file, debug_mode=config.debug_logging)
    init_db(container.engine)

    app = Flask(__name__)
    app.extensions["container"] = container
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")

        if config.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    app.run(host=config.host, port=config.port, debug=config.debug_logging)


if __name__ == "__main__":
    main()
