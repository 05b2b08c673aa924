# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session import Base, SessionFactory, build_engine, build_session_factory, init_db, transaction
from .models import AccountRecord

__all__ = [
    "AccountRecord",
    "Base",
    "SessionFactory",
    "build_engine",
    "build_session_factory",
    "init_db",
    "transaction",
]
