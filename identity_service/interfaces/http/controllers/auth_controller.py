# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from identity_service.application.use_cases.accounts.login_account import LoginAccountUseCase
from identity_service.application.use_cases.accounts.register_account import (
    RegisterAccountUseCase,
)
from identity_service.domain.accounts.exceptions import InvalidCredentialsError
from identity_service.interfaces.http.dto.auth import (
    AccountDTO,
    LoginRequestDTO,
    LoginResponseDTO,
    RegisteredDTO,
    RegisterRequestDTO,
)
from identity_service.shared.errors import MissingCredentialsError
from identity_service.shared.errors.validation import raise_validation_error
from identity_service.shared.logging import logger


def _json_body() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterAccountUseCase,
        login_use_case: LoginAccountUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    def register(self) -> tuple[Response, int]:
        payload = _json_body()
        if not payload.get("username") or not payload.get("password"):
            logger.info("auth.register: missing credentials")
            raise MissingCredentialsError()

        try:
            dto = RegisterRequestDTO.model_validate(payload)
        except ValidationError as exc:
            raise_validation_error(exc)

        account = self._register_use_case.execute(dto.username, dto.password)

        logger.info(f"auth.register: ok account_id={account.id} username={account.username}")
        return jsonify(RegisteredDTO().model_dump()), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            logger.info("auth.login: rejected malformed payload")
            raise InvalidCredentialsError() from exc

        try:
            result = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            logger.info(f"auth.login: invalid credentials username={dto.username}")
            raise

        payload = LoginResponseDTO(
            token=result.token,
            account=AccountDTO.from_domain(result.account),
        ).model_dump(mode="json")

        logger.info(f"auth.login: ok account_id={result.account.id}")
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
