# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from identity_service.domain.accounts.entities import Account
from identity_service.domain.accounts.exceptions import DuplicateUsernameError
from identity_service.domain.accounts.repositories import AccountRepository, PasswordHasher
from identity_service.domain.accounts.rules import validate_registration


class RegisterAccountUseCase:
    def __init__(
        self,
        *,
        accounts: AccountRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher

    def execute(self, username: str | None, password: str | None) -> Account:
        username, password = validate_registration(username, password)

        # Fast path only; the store's unique constraint settles races.
        if self._accounts.find_by_username(username) is not None:
            raise DuplicateUsernameError()

        hashed = self._password_hasher.hash(password)
        return self._accounts.create(username, hashed)
