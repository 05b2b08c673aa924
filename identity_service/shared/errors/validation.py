# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Translate pydantic DTO failures into ``validation_failed`` bodies.

Entries use the same ``{"field", "type", <limit>}`` shape the account rules
produce, so a client sees one vocabulary whichever layer rejected the input.
"""

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError
from .validation_types import ValidationErrorType

_FIELD_TYPES = {
    ("username", "string_too_short"): ValidationErrorType.USERNAME_TOO_SHORT,
    ("username", "string_too_long"): ValidationErrorType.USERNAME_TOO_LONG,
    ("username", "string_pattern_mismatch"): ValidationErrorType.USERNAME_INVALID_CHARS,
    ("password", "string_too_short"): ValidationErrorType.PASSWORD_TOO_SHORT,
}
_GENERIC_TYPES = {
    "missing": ValidationErrorType.MISSING,
    "string_type": ValidationErrorType.NOT_A_STRING,
}
_LIMIT_KEYS = ("min_length", "max_length", "pattern")


def _entry(error: Any) -> dict[str, Any]:
    field = ".".join(str(part) for part in error.get("loc", ())) or "body"
    kind = error.get("type", "value_error")
    error_type = _FIELD_TYPES.get((field, kind)) or _GENERIC_TYPES.get(kind, kind)

    entry: dict[str, Any] = {"field": field, "type": str(error_type)}
    ctx = error.get("ctx") or {}
    entry.update({key: ctx[key] for key in _LIMIT_KEYS if key in ctx})
    return entry


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors = [_entry(error) for error in exc.errors()]
    return {
        "fields": sorted({entry["field"] for entry in errors}),
        "errors": errors,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = [
    "format_pydantic_errors",
    "raise_validation_error",
]
