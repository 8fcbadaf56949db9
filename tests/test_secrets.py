from __future__ import annotations

import os
from pathlib import Path

import pytest

from central_release.secrets import (
    CREDENTIALS,
    PASSWORD_ENV,
    USER_TOKEN_ENV,
    USERNAME_ENV,
    CredentialResolver,
)


def test_lookup_reports_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(USER_TOKEN_ENV, "value")

    lookup = CredentialResolver().lookup(USER_TOKEN_ENV)

    assert lookup.value == "value"
    assert lookup.source == "env"
    assert lookup.attempts == [{"source": "env", "success": True}]


def test_environment_wins_over_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(f"{USER_TOKEN_ENV}=from-file\n", encoding="utf-8")

    resolver = CredentialResolver(env_file, environ={USER_TOKEN_ENV: "from-env"})

    assert resolver.resolve(USER_TOKEN_ENV) == "from-env"


def test_env_file_does_not_leak_into_environment(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(f'export {USER_TOKEN_ENV}="abc123"  # inline comment\n', encoding="utf-8")

    lookup = CredentialResolver(env_file).lookup(USER_TOKEN_ENV)

    assert lookup.value == "abc123"
    assert lookup.source == "dotenv"
    assert [attempt["source"] for attempt in lookup.attempts] == ["env", "dotenv"]
    assert lookup.attempts[0]["success"] is False
    assert USER_TOKEN_ENV not in os.environ


def test_describe_missing_credential_reports_attempts(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("MALFORMED_LINE\n", encoding="utf-8")
    password = next(credential for credential in CREDENTIALS if credential.name == PASSWORD_ENV)

    payload = CredentialResolver(env_file).describe(password)

    assert payload["present"] is False
    assert payload["config_field"] == "password"
    attempts = payload["attempts"]
    assert [attempt["source"] for attempt in attempts] == ["env", "dotenv"]
    assert attempts[1]["path"] == str(env_file)
    assert attempts[1]["warnings"]


def test_missing_env_file_is_reported_not_raised(tmp_path: Path) -> None:
    lookup = CredentialResolver(tmp_path / "absent.env").lookup(USERNAME_ENV)

    assert lookup.value is None
    assert lookup.attempts[1]["exists"] is False


def test_describe_all_covers_every_credential() -> None:
    names = [entry["name"] for entry in CredentialResolver(environ={}).describe_all()]
    assert names == [USER_TOKEN_ENV, USERNAME_ENV, PASSWORD_ENV]
