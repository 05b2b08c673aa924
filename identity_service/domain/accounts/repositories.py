# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Account, AccountListing


class AccountRepository(Protocol):
    def create(self, username: str, password_hash: str) -> Account: ...
    def find_by_username(self, username: str) -> Account | None: ...
    def find_by_id(self, account_id: int) -> Account | None: ...
    def list_all(self) -> Sequence[AccountListing]: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, account_id: int) -> str: ...
    def validate(self, token: str | None) -> int: ...
