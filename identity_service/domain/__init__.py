# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .accounts.entities import Account, AccountListing, LoginResult
from .accounts.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
)

__all__ = [
    "Account",
    "AccountListing",
    "LoginResult",
    "DuplicateUsernameError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "UnauthorizedError",
]
