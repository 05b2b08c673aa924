# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    MISSING = "missing"
    NOT_A_STRING = "not_a_string"
    USERNAME_TOO_SHORT = "username_too_short"
    USERNAME_TOO_LONG = "username_too_long"
    USERNAME_INVALID_CHARS = "username_invalid_chars"
    PASSWORD_TOO_SHORT = "password_too_short"


__all__ = ["ValidationErrorType"]
