# ruff: noqa: INP001
"""Settings validation tests for logging and database lifecycle configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from planner.core.config import Settings


def test_log_format_is_normalized() -> None:
    settings = Settings(_env_file=None, log_format="  JSON ")

    assert settings.log_format == "json"


def test_unknown_log_format_is_rejected() -> None:
    with pytest.raises(ValidationError, match="LOG_FORMAT must be one of: json, text."):
        Settings(_env_file=None, log_format="xml")


def test_negative_slow_request_threshold_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, request_log_slow_ms=-1)


def test_dev_environment_enables_auto_migrate_by_default(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("DB_AUTO_MIGRATE", raising=False)

    settings = Settings(_env_file=None, environment="dev")

    assert settings.db_auto_migrate is True


def test_explicit_auto_migrate_wins_in_dev() -> None:
    settings = Settings(_env_file=None, environment="dev", db_auto_migrate=False)

    assert settings.db_auto_migrate is False


def test_non_dev_environment_keeps_auto_migrate_off(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DB_AUTO_MIGRATE", raising=False)

    settings = Settings(_env_file=None, environment="production")

    assert settings.db_auto_migrate is False


def test_planner_behavior_flags_read_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DERIVE_STATUS_ON_READ", "true")
    monkeypatch.setenv("STRICT_PARENT_LINKAGE", "1")

    settings = Settings(_env_file=None)

    assert settings.derive_status_on_read is True
    assert settings.strict_parent_linkage is True
