from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from pydantic import ValidationError
from pydantic_settings import SettingsError

from identity_service.shared.config import (
    AppConfig,
    SecurityConfig,
    TokenConfig,
    load_config,
    load_config_or_exit,
    parse_duration,
)

STRONG_SECRET = "b7f1c9e04a2d48d6a0e3f5c1d9b8a7e6"
_ENV_VARS = (
    "APP_ENV",
    "DEBUG_LOGGING",
    "HOST",
    "PORT",
    "DATABASE_URL",
    "JWT_SECRET",
    "JWT_EXPIRES_IN",
    "JWT_ALGORITHM",
    "PASSWORD_HASH_ITERATIONS",
    "CORS_ORIGIN",
    "TOKEN",
    "DATABASE",
    "HASHING",
    "SECURITY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.mark.parametrize(
    ("value", "expected"),
    [(90, 90), ("90", 90), ("90s", 90), ("30m", 1800), ("1h", 3600), ("7d", 604800), (" 2H ", 7200)],
)
def test_parse_duration(value, expected: int) -> None:
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "1w", "1.5h", "-5", True, 1.5, None])
def test_parse_duration_rejects_garbage(value) -> None:
    with pytest.raises(ValueError):
        parse_duration(value)


def test_defaults_with_only_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", STRONG_SECRET)

    config = AppConfig()

    assert config.port == 3000
    assert config.database.url == "sqlite:///identity.db"
    assert config.token.secret == STRONG_SECRET
    assert config.token.lifetime_seconds == 3600
    assert config.token.algorithm == "HS256"
    assert config.hashing.iterations == 600_000
    assert config.security.allowed_origins == ["http://localhost:3000"]
    assert config.debug_logging is False
    assert not config.is_production()


def test_missing_secret_is_rejected() -> None:
    with pytest.raises(ValidationError):
        TokenConfig()


@pytest.mark.parametrize("secret", ["", "   "])
def test_blank_secret_is_rejected(monkeypatch: pytest.MonkeyPatch, secret: str) -> None:
    monkeypatch.setenv("JWT_SECRET", secret)

    with pytest.raises(ValidationError):
        TokenConfig()


def test_token_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", STRONG_SECRET)
    monkeypatch.setenv("JWT_EXPIRES_IN", "30m")
    monkeypatch.setenv("JWT_ALGORITHM", "hs512")

    config = TokenConfig()

    assert config.lifetime_seconds == 1800
    assert config.algorithm == "HS512"


@pytest.mark.parametrize("lifetime", ["0", "soon"])
def test_bad_lifetime_is_rejected(monkeypatch: pytest.MonkeyPatch, lifetime: str) -> None:
    monkeypatch.setenv("JWT_SECRET", STRONG_SECRET)
    monkeypatch.setenv("JWT_EXPIRES_IN", lifetime)

    with pytest.raises(ValidationError):
        TokenConfig()


def test_asymmetric_algorithm_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", STRONG_SECRET)
    monkeypatch.setenv("JWT_ALGORITHM", "RS256")

    with pytest.raises(ValidationError):
        TokenConfig()


def test_cors_origins_are_comma_separated(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ORIGIN", "http://a.example, http://b.example,,")

    assert SecurityConfig().allowed_origins == ["http://a.example", "http://b.example"]


def test_debug_logging_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", STRONG_SECRET)
    monkeypatch.setenv("DEBUG_LOGGING", "yes")

    assert AppConfig().debug_logging is True


@pytest.mark.parametrize("secret", ["secret", "changeme", "short-but-not-weak"])
def test_production_rejects_weak_secret(secret: str) -> None:
    with pytest.raises(ValidationError):
        AppConfig(APP_ENV="production", token=TokenConfig(JWT_SECRET=secret))


def test_production_accepts_strong_secret() -> None:
    config = AppConfig(APP_ENV="production", token=TokenConfig(JWT_SECRET=STRONG_SECRET))

    assert config.is_production()


def test_load_config_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", STRONG_SECRET)

    assert load_config() is load_config()


def test_load_config_or_exit_terminates_without_secret(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        load_config_or_exit()

    assert excinfo.value.code == 1
    assert "JWT_SECRET" in capsys.readouterr().err


def test_load_config_or_exit_never_prints_values(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("JWT_SECRET", STRONG_SECRET)
    monkeypatch.setenv("PORT", "not-a-port")

    with pytest.raises(SystemExit):
        load_config_or_exit()

    err = capsys.readouterr().err
    assert "PORT" in err
    assert STRONG_SECRET not in err
    assert "not-a-port" not in err


@pytest.mark.parametrize("name", ["TOKEN", "DATABASE", "HASHING", "SECURITY"])
def test_unrelated_group_named_env_vars_are_ignored(
    monkeypatch: pytest.MonkeyPatch, name: str
) -> None:
    monkeypatch.setenv("JWT_SECRET", STRONG_SECRET)
    monkeypatch.setenv(name, "ghp_unrelated_ci_token")

    config = load_config_or_exit()

    assert config.token.secret == STRONG_SECRET
    assert config.database.url == "sqlite:///identity.db"


def test_unrelated_group_named_dotenv_entries_are_ignored(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        f"JWT_SECRET={STRONG_SECRET}\nTOKEN=ghp_unrelated_ci_token\nPORT=4000\n", encoding="utf-8"
    )

    config = AppConfig()

    assert config.port == 4000
    assert config.token.secret == STRONG_SECRET


def test_load_config_or_exit_terminates_on_unreadable_source(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _broken() -> AppConfig:
        raise SettingsError('error parsing value for field "token" from source "EnvSettingsSource"')

    monkeypatch.setattr("identity_service.shared.config.settings.load_config", _broken)

    with pytest.raises(SystemExit) as excinfo:
        load_config_or_exit()

    assert excinfo.value.code == 1
    assert "token" in capsys.readouterr().err
