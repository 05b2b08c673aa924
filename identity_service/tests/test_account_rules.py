from __future__ import annotations

import pytest

from identity_service.domain.accounts.rules import (
    validate_password,
    validate_registration,
    validate_username,
)
from identity_service.shared.errors import MissingCredentialsError, ValidationError


@pytest.mark.parametrize("username", ["abc", "alice", "Bob_99", "a" * 30, "___"])
def test_valid_usernames(username: str) -> None:
    assert validate_username(username) == username


@pytest.mark.parametrize(
    ("username", "error_type"),
    [
        ("ab", "username_too_short"),
        ("a" * 31, "username_too_long"),
        ("alice!", "username_invalid_chars"),
        ("al ice", "username_invalid_chars"),
        ("alice\n", "username_invalid_chars"),
        ("ålice", "username_invalid_chars"),
        (123, "not_a_string"),
    ],
)
def test_invalid_usernames(username: object, error_type: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_username(username)

    assert excinfo.value.code == "validation_failed"
    assert excinfo.value.context["errors"][0]["type"] == error_type


def test_password_minimum_length() -> None:
    assert validate_password("secret") == "secret"
    with pytest.raises(ValidationError):
        validate_password("short")


@pytest.mark.parametrize(
    ("username", "password"),
    [(None, "secret1"), ("alice", None), ("", "secret1"), ("alice", "")],
)
def test_missing_credentials(username: str | None, password: str | None) -> None:
    with pytest.raises(MissingCredentialsError) as excinfo:
        validate_registration(username, password)

    assert excinfo.value.code == "missing_credentials"
    assert excinfo.value.status == 400


def test_missing_credentials_is_a_validation_error() -> None:
    with pytest.raises(ValidationError):
        validate_registration(None, None)
