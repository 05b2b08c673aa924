# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from identity_service.domain.accounts.entities import Account, AccountListing
from identity_service.domain.accounts.exceptions import DuplicateUsernameError
from identity_service.domain.accounts.repositories import AccountRepository
from identity_service.domain.accounts.rules import validate_username
from identity_service.infrastructure.db.models import AccountRecord
from identity_service.infrastructure.db.session import SessionFactory, transaction
from identity_service.shared.errors import ValidationError
from identity_service.shared.logging import logger


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: AccountRecord) -> Account:
    return Account(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=_aware(row.created_at),
    )


class SqlAlchemyAccountRepository(AccountRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def create(self, username: str, password_hash: str) -> Account:
        validate_username(username)
        if not password_hash:
            raise ValidationError(context={"fields": ["password_hash"]})

        try:
            with transaction(self._session_factory) as session:
                row = AccountRecord(
                    username=username,
                    password_hash=password_hash,
                    created_at=datetime.now(UTC),
                )
                session.add(row)
                session.flush()
                account = _to_domain(row)
        except IntegrityError as exc:
            logger.info(f"accounts.create: username taken username={username}")
            raise DuplicateUsernameError() from exc

        logger.info(f"accounts.create: ok account_id={account.id} username={account.username}")
        return account

    def find_by_username(self, username: str) -> Account | None:
        with transaction(self._session_factory) as session:
            row = session.scalars(
                select(AccountRecord).where(AccountRecord.username == username)
            ).first()
            return _to_domain(row) if row else None

    def find_by_id(self, account_id: int) -> Account | None:
        with transaction(self._session_factory) as session:
            row = session.get(AccountRecord, account_id)
            return _to_domain(row) if row else None

    def list_all(self) -> Sequence[AccountListing]:
        with transaction(self._session_factory) as session:
            rows = session.execute(
                select(AccountRecord.username, AccountRecord.created_at).order_by(
                    AccountRecord.id.asc()
                )
            ).all()
        return [
            AccountListing(username=username, created_at=_aware(created_at))
            for username, created_at in rows
        ]
