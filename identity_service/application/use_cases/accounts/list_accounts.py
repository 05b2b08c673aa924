# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from identity_service.domain.accounts.entities import AccountListing
from identity_service.domain.accounts.repositories import AccountRepository


class ListAccountsUseCase:
    def __init__(self, *, accounts: AccountRepository) -> None:
        self._accounts = accounts

    def execute(self) -> list[AccountListing]:
        return list(self._accounts.list_all())


__all__ = ["ListAccountsUseCase"]
