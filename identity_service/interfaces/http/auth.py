# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token guard for protected routes.

Per request: extract the token, validate it, then either delegate to the
wrapped view or reject with ``UnauthorizedError``. Every rejection looks the
same to the caller; the reason is only logged.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from flask import g, request

from identity_service.domain.accounts.exceptions import InvalidTokenError, UnauthorizedError
from identity_service.domain.accounts.repositories import TokenService
from identity_service.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise UnauthorizedError()

    scheme, _, credentials = authorization.strip().partition(" ")
    credentials = credentials.strip()
    if scheme.lower() != "bearer" or not credentials or " " in credentials:
        raise UnauthorizedError()
    return credentials


class BearerAuthGuard:
    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def authorize(self, authorization: str | None) -> int:
        try:
            token = extract_bearer_token(authorization)
        except UnauthorizedError:
            logger.warning(
                f"auth.guard: missing or malformed Authorization header on "
                f"{request.method} {request.path}"
            )
            raise

        try:
            account_id = self._tokens.validate(token)
        except InvalidTokenError as exc:
            logger.warning(
                f"auth.guard: token rejected reason={exc.reason} on {request.method} {request.path}"
            )
            raise UnauthorizedError() from exc

        logger.debug(f"auth.guard: ok account={account_id} {request.method} {request.path}")
        return account_id

    def protect(self, view: F) -> F:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            # Deleted accounts are not re-checked; a live token keeps working until it expires.
            g.account_id = self.authorize(request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return inner  # type: ignore[return-value]


__all__ = ["BearerAuthGuard", "extract_bearer_token"]
