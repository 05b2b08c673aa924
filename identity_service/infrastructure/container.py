# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from identity_service.application.services.password_hashing import WerkzeugPasswordHasher
from identity_service.application.services.tokens import JwtTokenService
from identity_service.application.use_cases.accounts.list_accounts import ListAccountsUseCase
from identity_service.application.use_cases.accounts.login_account import LoginAccountUseCase
from identity_service.application.use_cases.accounts.register_account import (
    RegisterAccountUseCase,
)
from identity_service.infrastructure.db import build_engine, build_session_factory
from identity_service.infrastructure.repositories.accounts.sqlalchemy_account_repository import (
    SqlAlchemyAccountRepository,
)
from identity_service.interfaces.http.auth import BearerAuthGuard
from identity_service.interfaces.http.controllers.accounts_controller import AccountsController
from identity_service.interfaces.http.controllers.auth_controller import AuthController
from identity_service.interfaces.http.controllers.misc_controller import MiscController
from identity_service.shared.config import AppConfig
from identity_service.shared.logging import logger


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self._closed = False

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(iterations=self.config.hashing.iterations)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            secret=self.config.token.secret,
            lifetime=timedelta(seconds=self.config.token.lifetime_seconds),
            algorithm=self.config.token.algorithm,
        )

    @cached_property
    def account_repository(self) -> SqlAlchemyAccountRepository:
        return SqlAlchemyAccountRepository(self.session_factory)

    @cached_property
    def register_account_use_case(self) -> RegisterAccountUseCase:
        return RegisterAccountUseCase(
            accounts=self.account_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_account_use_case(self) -> LoginAccountUseCase:
        return LoginAccountUseCase(
            accounts=self.account_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_service,
        )

    @cached_property
    def list_accounts_use_case(self) -> ListAccountsUseCase:
        return ListAccountsUseCase(accounts=self.account_repository)

    @cached_property
    def auth_guard(self) -> BearerAuthGuard:
        return BearerAuthGuard(tokens=self.token_service)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_account_use_case,
            login_use_case=self.login_account_use_case,
        )

    @cached_property
    def accounts_controller(self) -> AccountsController:
        return AccountsController(
            list_use_case=self.list_accounts_use_case,
            guard=self.auth_guard,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if "engine" in self.__dict__:
            self.engine.dispose()
            logger.info("Database connections closed")
