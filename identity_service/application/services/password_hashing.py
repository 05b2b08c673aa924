# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from identity_service.domain.accounts.repositories import PasswordHasher

DEFAULT_ITERATIONS = 600_000


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted PBKDF2-SHA256 verifiers in werkzeug's ``method$salt$hash`` format.

    The salt is random per call and embedded in the verifier, so hashing the
    same password twice yields two different verifiers that both verify.
    """

    def __init__(self, *, iterations: int = DEFAULT_ITERATIONS) -> None:
        self._method = f"pbkdf2:sha256:{iterations}"

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed or not isinstance(password, str):
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError):
            # unknown method or corrupt parameters in the stored verifier
            return False
