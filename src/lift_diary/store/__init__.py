"""Exercise log storage for lift-diary."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from ..config import Settings, get_settings
from .backends import (
    DirectoryKeyValueStorage,
    JsonFileBackend,
    KeyValueBackend,
    SqliteBackend,
    StorageBackend,
)
from .log_store import ExerciseLogStore, as_day, dedupe_by_name


def create_backend(settings: Settings | None = None) -> StorageBackend:
    """Build the configured storage backend (not yet opened)."""
    settings = settings or get_settings()
    if settings.STORAGE_BACKEND == "sqlite":
        return SqliteBackend(settings.db_path)
    if settings.STORAGE_BACKEND == "json":
        return JsonFileBackend(settings.json_path)
    if settings.STORAGE_BACKEND == "kv":
        return KeyValueBackend(DirectoryKeyValueStorage(settings.kv_dir))
    raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")


@asynccontextmanager
async def open_store(settings: Settings | None = None) -> AsyncIterator[ExerciseLogStore]:
    """Open the configured backend and yield a store; closes on exit."""
    async with create_backend(settings) as backend:
        yield ExerciseLogStore(backend)


__all__ = [
    "as_day",
    "create_backend",
    "dedupe_by_name",
    "ExerciseLogStore",
    "open_store",
]
