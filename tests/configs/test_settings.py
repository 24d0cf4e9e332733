"""
Test suite for configuration settings.

System role: Verification of environment-driven configuration
"""

import pytest
from pydantic import ValidationError

from backend.configs import Settings
from backend.configs.database import DatabaseSettings
from backend.configs.dispatcher import DispatcherSettings


class TestDatabaseSettings:
    """Test suite for DatabaseSettings."""

    def test_defaults_build_local_postgres_url(self, monkeypatch) -> None:
        for name in ("DATABASE_URL", "PASSWORD", "USER", "HOST", "PORT", "DB"):
            monkeypatch.delenv(f"POSTGRES_{name}", raising=False)

        settings = DatabaseSettings()

        assert settings.async_database_url == "postgresql+asyncpg://austen@localhost:5432/recipe_api"
        assert not settings.is_sqlite

    def test_password_included_when_set(self, monkeypatch) -> None:
        for name in ("DATABASE_URL", "USER", "PORT", "DB"):
            monkeypatch.delenv(f"POSTGRES_{name}", raising=False)
        monkeypatch.setenv("POSTGRES_PASSWORD", "secret")
        monkeypatch.setenv("POSTGRES_HOST", "db")

        settings = DatabaseSettings()

        assert settings.async_database_url == "postgresql+asyncpg://austen:secret@db:5432/recipe_api"

    def test_database_url_overrides_parts(self) -> None:
        settings = DatabaseSettings(database_url="sqlite+aiosqlite:///:memory:")

        assert settings.async_database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.is_sqlite


class TestDispatcherSettings:
    """Test suite for DispatcherSettings."""

    def test_defaults(self) -> None:
        settings = DispatcherSettings()

        assert settings.worker_count == 4
        assert settings.queue_size == 100
        assert settings.job_timeout_seconds is None
        assert settings.record_failures is False

    def test_reads_prefixed_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("DISPATCHER_WORKER_COUNT", "8")
        monkeypatch.setenv("DISPATCHER_JOB_TIMEOUT_SECONDS", "2.5")

        settings = DispatcherSettings()

        assert settings.worker_count == 8
        assert settings.job_timeout_seconds == 2.5

    @pytest.mark.parametrize("field", ["worker_count", "queue_size", "max_body_bytes"])
    def test_rejects_non_positive_limits(self, field) -> None:
        with pytest.raises(ValidationError):
            DispatcherSettings(**{field: 0})


def test_settings_aggregates_sections() -> None:
    settings = Settings(dispatcher=DispatcherSettings(worker_count=2))

    assert settings.dispatcher.worker_count == 2
    assert settings.database.db == "recipe_api"
    assert settings.port == 8000


def test_debug_flag_reaches_application(test_settings) -> None:
    from backend.api.main import create_app

    assert create_app(test_settings).debug is False
    assert create_app(test_settings.model_copy(update={"debug": True})).debug is True
