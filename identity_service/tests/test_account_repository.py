from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from threading import Barrier

import pytest
from sqlalchemy import func, select

from identity_service.domain.accounts.exceptions import DuplicateUsernameError
from identity_service.infrastructure.container import Container
from identity_service.infrastructure.db import AccountRecord, build_engine, build_session_factory, init_db
from identity_service.infrastructure.repositories.accounts.sqlalchemy_account_repository import (
    SqlAlchemyAccountRepository,
)
from identity_service.shared.config import DatabaseConfig
from identity_service.shared.errors import StorageUnavailableError, ValidationError

VERIFIER = "pbkdf2:sha256:1000$salt$00ff"


@pytest.fixture()
def repository(container: Container) -> SqlAlchemyAccountRepository:
    init_db(container.engine)
    return container.account_repository


def _row_count(container: Container, username: str) -> int:
    with container.session_factory() as session:
        return session.scalar(
            select(func.count()).select_from(AccountRecord).where(AccountRecord.username == username)
        )


def test_create_and_find(repository: SqlAlchemyAccountRepository) -> None:
    created = repository.create("alice", VERIFIER)

    by_name = repository.find_by_username("alice")
    by_id = repository.find_by_id(created.id)

    assert by_name == created
    assert by_id == created
    assert created.created_at.tzinfo is not None


def test_find_is_exact_and_case_sensitive(repository: SqlAlchemyAccountRepository) -> None:
    repository.create("alice", VERIFIER)

    assert repository.find_by_username("Alice") is None
    assert repository.find_by_username("alic") is None
    assert repository.find_by_id(9999) is None


def test_duplicate_username_rejected(
    repository: SqlAlchemyAccountRepository, container: Container
) -> None:
    repository.create("alice", VERIFIER)

    with pytest.raises(DuplicateUsernameError):
        repository.create("alice", VERIFIER)

    assert _row_count(container, "alice") == 1


def test_concurrent_creates_yield_single_account(
    repository: SqlAlchemyAccountRepository, container: Container
) -> None:
    workers = 8
    barrier = Barrier(workers)

    def attempt(_: int) -> str:
        barrier.wait()
        try:
            repository.create("racer", VERIFIER)
        except DuplicateUsernameError:
            return "duplicate"
        return "created"

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(attempt, range(workers)))

    assert outcomes.count("created") == 1
    assert outcomes.count("duplicate") == workers - 1
    assert _row_count(container, "racer") == 1


def test_create_validates_username_before_storage(
    repository: SqlAlchemyAccountRepository, container: Container
) -> None:
    with pytest.raises(ValidationError):
        repository.create("no spaces allowed", VERIFIER)
    with pytest.raises(ValidationError):
        repository.create("alice", "")

    assert repository.list_all() == []


def test_list_all_in_insertion_order_without_verifier(
    repository: SqlAlchemyAccountRepository,
) -> None:
    for name in ("carol", "alice", "bob"):
        repository.create(name, VERIFIER)

    listings = repository.list_all()

    assert [item.username for item in listings] == ["carol", "alice", "bob"]
    assert all(item.created_at.tzinfo is not None for item in listings)
    assert all(not hasattr(item, "password_hash") for item in listings)


def test_unreachable_storage_raises_storage_unavailable(tmp_path: Path) -> None:
    missing_dir = tmp_path / "does-not-exist"
    engine = build_engine(DatabaseConfig(DATABASE_URL=f"sqlite:///{missing_dir / 'identity.db'}"))
    repository = SqlAlchemyAccountRepository(build_session_factory(engine))

    try:
        with pytest.raises(StorageUnavailableError) as excinfo:
            repository.find_by_username("alice")
    finally:
        engine.dispose()

    assert excinfo.value.status == 503
    assert excinfo.value.to_dict() == {"error": "storage_unavailable"}
