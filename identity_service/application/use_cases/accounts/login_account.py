# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from identity_service.domain.accounts.entities import LoginResult
from identity_service.domain.accounts.exceptions import InvalidCredentialsError
from identity_service.domain.accounts.repositories import (
    AccountRepository,
    PasswordHasher,
    TokenService,
)


class LoginAccountUseCase:
    def __init__(
        self,
        *,
        accounts: AccountRepository,
        password_hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher
        self._tokens = tokens
        # stands in for the verifier of unknown accounts
        self._decoy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def execute(self, username: str | None, password: str | None) -> LoginResult:
        account = self._accounts.find_by_username(username) if username else None
        candidate = password if isinstance(password, str) else ""

        if account is None:
            self._password_hasher.verify(candidate, self._decoy_hash)
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(candidate, account.password_hash):
            raise InvalidCredentialsError()

        token = self._tokens.issue(account.id)
        return LoginResult(token=token, account=account)
