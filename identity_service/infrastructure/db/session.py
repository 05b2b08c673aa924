# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from identity_service.shared.config import DatabaseConfig
from identity_service.shared.errors import StorageUnavailableError
from identity_service.shared.logging import logger

SessionFactory = Callable[[], Session]


class Base(DeclarativeBase):
    pass


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_sqlite_memory(url: str) -> bool:
    return _is_sqlite(url) and (url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url)


def build_engine(config: DatabaseConfig) -> Engine:
    url = config.url
    kwargs: dict[str, object] = {"echo": False, "pool_pre_ping": True}

    if _is_sqlite(url):
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }
    if _is_sqlite_memory(url):
        # one shared connection, otherwise every checkout sees an empty database
        kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )

    engine = create_engine(url, **kwargs)

    if _is_sqlite(url):
        busy_timeout_ms = int(config.pool_timeout * 1000)

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_conn, _):
            cur = dbapi_conn.cursor()
            try:
                cur.execute(f"PRAGMA busy_timeout={busy_timeout_ms};")
                cur.execute("PRAGMA foreign_keys=ON;")
            finally:
                cur.close()

    logger.info(f"db.engine: created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@contextmanager
def transaction(session_factory: SessionFactory) -> Iterator[Session]:
    """Commit on success, roll back on error.

    Connectivity failures surface as ``StorageUnavailableError``; integrity
    errors propagate so repositories can map them to domain errors.
    """
    session = session_factory()
    logger.debug("db.session: opened")
    try:
        yield session
        session.commit()
        logger.debug("db.session: committed")
    except IntegrityError:
        session.rollback()
        logger.debug("db.session: rolled back after integrity error")
        raise
    except (OperationalError, InterfaceError) as exc:
        session.rollback()
        logger.error(f"db.session: storage error {type(exc.orig).__name__}, rolled back")
        raise StorageUnavailableError() from exc
    except BaseException:
        session.rollback()
        raise
    finally:
        session.close()
        logger.debug("db.session: closed")


def init_db(engine: Engine) -> None:
    try:
        Base.metadata.create_all(bind=engine)
    except (OperationalError, InterfaceError) as exc:
        raise StorageUnavailableError() from exc
    logger.info("Database schema ensured")
