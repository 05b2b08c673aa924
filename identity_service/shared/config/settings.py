# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import re
import sys
from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    EnvSettingsSource,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}

_WEAK_SECRETS = frozenset({"secret", "changeme", "change-me", "dev", "development", "test"})


def parse_duration(value: Any) -> int:
    """Convert ``3600``, ``"3600"``, ``"30m"`` or ``"1h"`` into seconds."""
    if isinstance(value, bool):
        raise ValueError("duration must be a number of seconds or a string like '1h'")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = _DURATION_RE.match(value)
        if match:
            amount, unit = match.groups()
            return int(amount) * _DURATION_UNITS[unit.lower()]
    raise ValueError("duration must be a number of seconds or a string like '1h'")


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///identity.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SETTINGS_CONFIG


class TokenConfig(BaseSettings):
    secret: str = Field(alias="JWT_SECRET")
    lifetime_seconds: int = Field(3600, ge=1, alias="JWT_EXPIRES_IN")
    algorithm: str = Field("HS256", alias="JWT_ALGORITHM")

    model_config = _SETTINGS_CONFIG

    @field_validator("secret", mode="after")
    @classmethod
    def _require_secret(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("JWT_SECRET must not be empty")
        return value

    @field_validator("lifetime_seconds", mode="before")
    @classmethod
    def _parse_lifetime(cls, value: Any) -> int:
        return parse_duration(value)

    @field_validator("algorithm", mode="after")
    @classmethod
    def _symmetric_only(cls, value: str) -> str:
        value = value.upper()
        if value not in ("HS256", "HS384", "HS512"):
            raise ValueError("JWT_ALGORITHM must be one of HS256, HS384, HS512")
        return value


class HashingConfig(BaseSettings):
    # PBKDF2-SHA256 work factor
    iterations: int = Field(600_000, ge=1000, alias="PASSWORD_HASH_ITERATIONS")

    model_config = _SETTINGS_CONFIG


class SecurityConfig(BaseSettings):
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        ["http://localhost:3000"], alias="CORS_ORIGIN"
    )

    model_config = _SETTINGS_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _token_config_factory() -> TokenConfig:
    return TokenConfig()  # type: ignore[call-arg]


def _hashing_config_factory() -> HashingConfig:
    return HashingConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


_GROUP_FIELDS = frozenset({"database", "token", "hashing", "security"})


class _SkipGroupsMixin:
    # groups read their own variables; a stray TOKEN or DATABASE must not land here
    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        if field_name in _GROUP_FIELDS:
            return None, field_name, False
        return super().get_field_value(field, field_name)  # type: ignore[misc]


class _AppEnvSource(_SkipGroupsMixin, EnvSettingsSource):
    pass


class _AppDotEnvSource(_SkipGroupsMixin, DotEnvSettingsSource):
    pass


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    token: TokenConfig = Field(default_factory=_token_config_factory)
    hashing: HashingConfig = Field(default_factory=_hashing_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            _AppEnvSource(settings_cls),
            _AppDotEnvSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        secret = self.token.secret
        if secret.lower() in _WEAK_SECRETS or len(secret) < 32:
            raise ValueError(
                "JWT_SECRET must be a random value of at least 32 characters in production"
            )
        if "*" in self.security.allowed_origins:
            print("⚠️  CORS allows wildcard (*) origins in production", file=sys.stderr)
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


def load_config_or_exit() -> AppConfig:
    """Load configuration, terminating the process when it is unusable.

    Only the names of offending settings are reported, never their values.
    """
    try:
        return load_config()
    except ValidationError as exc:
        fields = sorted(
            {".".join(str(part) for part in err.get("loc", ())) or "config" for err in exc.errors()}
        )
        print(
            "\n❌ FATAL: invalid or missing configuration: " + ", ".join(fields) + "\n"
            "   Set the required environment variables (JWT_SECRET at minimum) and restart.\n",
            file=sys.stderr,
        )
        sys.exit(1)
    except SettingsError as exc:
        print(f"\n❌ FATAL: unreadable configuration source: {exc}\n", file=sys.stderr)
        sys.exit(1)


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "HashingConfig",
    "SecurityConfig",
    "TokenConfig",
    "load_config",
    "load_config_or_exit",
    "parse_duration",
]
