# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import signal
import sys

from flask import Flask
from flask_cors import CORS

from identity_service.infrastructure.container import Container
from identity_service.infrastructure.db import init_db
from identity_service.shared.config import AppConfig, load_config_or_exit
from identity_service.shared.logging import logger, setup_logging
from identity_service.shared.middleware.error_handler import configure_error_handling
from identity_service.shared.middleware.request_logger import configure_request_logging

CONTAINER_EXTENSION = "identity_service.container"


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    config = config or load_config_or_exit()
    setup_logging(debug_mode=config.debug_logging)

    container = container or Container(config)
    init_db(container.engine)

    app = Flask(__name__)
    app.extensions[CONTAINER_EXTENSION] = container
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    CORS(
        app,
        origins=config.security.allowed_origins,
        methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.accounts_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp

    logger.info("Flask app initialized")
    return app


def install_shutdown_handlers(container: Container) -> None:
    def _shutdown(signum, _frame) -> None:
        logger.info(f"🛑 Received {signal.Signals(signum).name}, shutting down")
        container.close()
        sys.exit(0)

    signal.signal(signal.SIGTERM, _shutdown)
    signal.signal(signal.SIGINT, _shutdown)
    atexit.register(container.close)


def main() -> None:
    config = load_config_or_exit()
    container = Container(config)
    app = create_app(config, container=container)
    install_shutdown_handlers(container)

    logger.info(
        f"🚀 Server ready on {config.host}:{config.port} env={config.app_env} "
        f"cors={', '.join(config.security.allowed_origins)}"
    )
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == "__main__":
    main()
