# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Literal

from identity_service.shared.errors.base import DomainError

InvalidTokenReason = Literal["missing", "bad_signature", "expired", "malformed"]


class DuplicateUsernameError(DomainError):
    code = "duplicate_username"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class UnauthorizedError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class InvalidTokenError(DomainError):
    """Token rejected by the token service.

    ``reason`` is for diagnostics only and is never rendered to callers.
    """

    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED

    def __init__(self, reason: InvalidTokenReason) -> None:
        super().__init__()
        self.reason = reason
