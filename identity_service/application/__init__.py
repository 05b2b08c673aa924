# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import WerkzeugPasswordHasher
from .services.tokens import JwtTokenService
from .use_cases.accounts.list_accounts import ListAccountsUseCase
from .use_cases.accounts.login_account import LoginAccountUseCase
from .use_cases.accounts.register_account import RegisterAccountUseCase

__all__ = [
    "JwtTokenService",
    "ListAccountsUseCase",
    "LoginAccountUseCase",
    "RegisterAccountUseCase",
    "WerkzeugPasswordHasher",
]
