"""Application settings, read from the environment and a .env file."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory
DEFAULT_DATA_DIR = Path.home() / ".lift-diary"


class Settings(BaseSettings):
    DATA_DIR: Path = DEFAULT_DATA_DIR
    STORAGE_BACKEND: Literal["sqlite", "json", "kv"] = "sqlite"

    LOG_LEVEL: str = "WARNING"
    APP_ENV: str = "local"

    model_config = SettingsConfigDict(
        env_prefix="LIFT_DIARY_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def db_path(self) -> Path:
        return self.DATA_DIR / "lift_diary.db"

    @property
    def json_path(self) -> Path:
        return self.DATA_DIR / "exercise_log.json"

    @property
    def kv_dir(self) -> Path:
        return self.DATA_DIR / "storage"

    @property
    def custom_catalog_path(self) -> Path:
        return self.DATA_DIR / "custom_exercises.json"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
