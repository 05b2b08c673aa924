# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from flask import Blueprint, Response, jsonify
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from identity_service.infrastructure.health import check_database
from identity_service.shared.logging import logger


class MiscController:
    def __init__(self, *, engine: Engine) -> None:
        self._engine = engine

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/healthz", view_func=self.health, methods=["GET"])
        return bp

    def health(self) -> tuple[Response, int]:
        try:
            check_database(self._engine)
        except SQLAlchemyError as exc:
            logger.error(f"health: database check failed ({type(exc).__name__})")
            return jsonify({"status": "error", "error": "database_unavailable"}), 503
        return (
            jsonify(
                {
                    "status": "ok",
                    "database": "connected",
                    "timestamp": datetime.now(UTC).isoformat(),
                }
            ),
            200,
        )
