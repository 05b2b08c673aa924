# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from identity_service.domain.accounts.entities import Account
from identity_service.domain.accounts.rules import (
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    USERNAME_PATTERN,
)


class RegisterRequestDTO(BaseModel):
    username: str = Field(
        min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH, pattern=USERNAME_PATTERN
    )
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)


class LoginRequestDTO(BaseModel):
    username: str = ""
    password: str = ""


class RegisteredDTO(BaseModel):
    message: str = "account_created"


class AccountDTO(BaseModel):
    id: int
    username: str
    created_at: datetime

    @classmethod
    def from_domain(cls, account: Account) -> AccountDTO:
        return cls(id=account.id, username=account.username, created_at=account.created_at)


class LoginResponseDTO(BaseModel):
    token: str
    account: AccountDTO
