# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for the protected account listing."""

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify

from identity_service.application.use_cases.accounts.list_accounts import ListAccountsUseCase
from identity_service.interfaces.http.auth import BearerAuthGuard
from identity_service.interfaces.http.dto.accounts import AccountListingDTO
from identity_service.shared.logging import logger


class AccountsController:
    def __init__(
        self,
        *,
        list_use_case: ListAccountsUseCase,
        guard: BearerAuthGuard,
    ) -> None:
        self._list_use_case = list_use_case
        self._guard = guard

    def list_accounts(self) -> tuple[Response, int]:
        listings = self._list_use_case.execute()
        payload = [
            AccountListingDTO.model_validate(item).model_dump(mode="json") for item in listings
        ]
        logger.info(f"accounts.list: {len(payload)} accounts for account={g.get('account_id')}")
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("accounts", __name__, url_prefix="/api")
        bp.add_url_rule(
            "/users",
            view_func=self._guard.protect(self.list_accounts),
            methods=["GET"],
            endpoint="accounts_list",
        )
        return bp
