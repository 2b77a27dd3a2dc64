"""Tests for settings and backend selection."""

import pytest

from lift_diary.config import Settings, get_settings
from lift_diary.logging_config import configure_logging
from lift_diary.store import create_backend
from lift_diary.store.backends import JsonFileBackend, KeyValueBackend, SqliteBackend


class TestSettings:
    """Tests for environment-driven settings."""

    def test_environment_overrides(self, monkeypatch, temp_dir):
        monkeypatch.setenv("LIFT_DIARY_DATA_DIR", str(temp_dir))
        monkeypatch.setenv("LIFT_DIARY_STORAGE_BACKEND", "json")
        get_settings.cache_clear()
        try:
            settings = get_settings()
        finally:
            get_settings.cache_clear()

        assert settings.DATA_DIR == temp_dir
        assert settings.STORAGE_BACKEND == "json"
        assert settings.json_path == temp_dir / "exercise_log.json"
        assert settings.custom_catalog_path == temp_dir / "custom_exercises.json"

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("LIFT_DIARY_STORAGE_BACKEND", "postgres")
        with pytest.raises(ValueError):
            Settings()


class TestCreateBackend:
    """Tests for picking the storage engine."""

    @pytest.mark.parametrize(
        "name,backend_type",
        [("sqlite", SqliteBackend), ("json", JsonFileBackend), ("kv", KeyValueBackend)],
    )
    def test_backend_types(self, temp_dir, name, backend_type):
        backend = create_backend(Settings(DATA_DIR=temp_dir, STORAGE_BACKEND=name))

        assert isinstance(backend, backend_type)
        assert not backend.is_open

    def test_sqlite_path(self, temp_dir):
        backend = create_backend(Settings(DATA_DIR=temp_dir, STORAGE_BACKEND="sqlite"))
        assert backend.db_path == temp_dir / "lift_diary.db"


class TestLogging:
    """Tests for logging setup."""

    @pytest.mark.parametrize("app_env", ["local", "production"])
    def test_configure_logging(self, temp_dir, app_env):
        configure_logging(Settings(DATA_DIR=temp_dir, LOG_LEVEL="debug", APP_ENV=app_env))
        configure_logging(Settings(DATA_DIR=temp_dir))
