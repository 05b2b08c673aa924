from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from identity_service.app import create_app
from identity_service.infrastructure.container import Container
from identity_service.shared.config import (
    AppConfig,
    DatabaseConfig,
    HashingConfig,
    SecurityConfig,
    TokenConfig,
)

TEST_SECRET = "test-signing-secret-0123456789-abcdefghijklmnop"


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        APP_ENV="test",
        DEBUG_LOGGING=False,
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'identity.db'}"),
        token=TokenConfig(JWT_SECRET=TEST_SECRET, JWT_EXPIRES_IN="1h"),
        hashing=HashingConfig(PASSWORD_HASH_ITERATIONS=1000),
        security=SecurityConfig(CORS_ORIGIN="http://localhost:3000"),
    )


@pytest.fixture()
def container(app_config: AppConfig) -> Iterator[Container]:
    container = Container(app_config)
    yield container
    container.close()


@pytest.fixture()
def app(app_config: AppConfig, container: Container) -> Flask:
    return create_app(app_config, container=container)


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as client:
        yield client
