"""Stateless signed bearer tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from identity_service.domain.accounts.exceptions import InvalidTokenError
from identity_service.domain.accounts.repositories import TokenService
from identity_service.shared.logging import logger

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    """HMAC-signed JWTs carrying ``sub``, ``iat`` and ``exp``.

    Expiry is checked against the injected clock rather than PyJWT's own so
    the lifetime boundary is exact and testable.
    """

    def __init__(
        self,
        *,
        secret: str,
        lifetime: timedelta,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret or not secret.strip():
            raise ValueError("token signing secret must not be empty")
        if lifetime <= timedelta(0):
            raise ValueError("token lifetime must be positive")
        self._secret = secret
        self._lifetime = lifetime
        self._algorithm = algorithm
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, account_id: int) -> str:
        issued_at = int(self._clock().timestamp())
        payload = {
            "sub": str(account_id),
            "iat": issued_at,
            "exp": issued_at + int(self._lifetime.total_seconds()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, token: str | None) -> int:
        if not token:
            raise InvalidTokenError("missing")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
            logger.debug(f"token.validate: signature rejected ({type(exc).__name__})")
            raise InvalidTokenError("bad_signature") from exc
        except jwt.InvalidTokenError as exc:
            logger.debug(f"token.validate: malformed ({type(exc).__name__})")
            raise InvalidTokenError("malformed") from exc

        expires_at = claims.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise InvalidTokenError("malformed")
        if self._clock().timestamp() >= expires_at:
            raise InvalidTokenError("expired")

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject.isdigit():
            raise InvalidTokenError("malformed")
        return int(subject)
