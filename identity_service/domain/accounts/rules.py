# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential shape rules shared by the HTTP layer, use cases and the store."""

from __future__ import annotations

import re

from identity_service.shared.errors.base import MissingCredentialsError, ValidationError
from identity_service.shared.errors.validation_types import ValidationErrorType

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"
PASSWORD_MIN_LENGTH = 6

_USERNAME_RE = re.compile(USERNAME_PATTERN)


def _reject(field: str, error_type: ValidationErrorType, **ctx: object) -> ValidationError:
    return ValidationError(
        context={"fields": [field], "errors": [{"field": field, "type": str(error_type), **ctx}]}
    )


def validate_username(username: object) -> str:
    if not isinstance(username, str):
        raise _reject("username", ValidationErrorType.NOT_A_STRING)
    if len(username) < USERNAME_MIN_LENGTH:
        raise _reject("username", ValidationErrorType.USERNAME_TOO_SHORT, min_length=USERNAME_MIN_LENGTH)
    if len(username) > USERNAME_MAX_LENGTH:
        raise _reject("username", ValidationErrorType.USERNAME_TOO_LONG, max_length=USERNAME_MAX_LENGTH)
    if not _USERNAME_RE.fullmatch(username):
        raise _reject("username", ValidationErrorType.USERNAME_INVALID_CHARS, pattern=USERNAME_PATTERN)
    return username


def validate_password(password: object) -> str:
    if not isinstance(password, str):
        raise _reject("password", ValidationErrorType.NOT_A_STRING)
    if len(password) < PASSWORD_MIN_LENGTH:
        raise _reject("password", ValidationErrorType.PASSWORD_TOO_SHORT, min_length=PASSWORD_MIN_LENGTH)
    return password


def validate_registration(username: str | None, password: str | None) -> tuple[str, str]:
    if not username or not password:
        raise MissingCredentialsError()
    return validate_username(username), validate_password(password)


__all__ = [
    "PASSWORD_MIN_LENGTH",
    "USERNAME_MAX_LENGTH",
    "USERNAME_MIN_LENGTH",
    "USERNAME_PATTERN",
    "validate_password",
    "validate_registration",
    "validate_username",
]
