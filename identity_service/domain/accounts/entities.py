# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Account:

    id: int
    username: str
    password_hash: str = field(repr=False)
    created_at: datetime

    def listing(self) -> AccountListing:
        return AccountListing(username=self.username, created_at=self.created_at)


@dataclass(slots=True, frozen=True)
class AccountListing:
    """Public projection of an account; carries no credential material."""

    username: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class LoginResult:

    token: str
    account: Account
