"""Key-value storage, one entry per record."""

import asyncio
import json
import os
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from urllib.parse import quote, unquote

import structlog

from ...errors import StorageUnavailable, StorageWriteFailed, ValidationError
from ...models.records import DeleteResult, ExerciseRecord
from .base import StorageBackend, TimestampKeyGenerator

logger = structlog.get_logger(__name__)


class KeyValueStorage(ABC):
    """Minimal async string key-value API.

    Implementations raise ``OSError`` when the medium fails.
    """

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        pass

    @abstractmethod
    async def get_all_keys(self) -> list[str]:
        pass


class MemoryKeyValueStorage(KeyValueStorage):
    """Process-local storage, mostly for tests."""

    def __init__(self):
        self.items: dict[str, str] = {}

    async def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    async def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    async def get_all_keys(self) -> list[str]:
        return list(self.items)


class DirectoryKeyValueStorage(KeyValueStorage):
    """One file per key inside a directory."""

    SUFFIX = ".json"

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / (quote(key, safe="") + self.SUFFIX)

    async def get_item(self, key: str) -> str | None:
        path = self._path(key)

        def read() -> str | None:
            if not path.exists():
                return None
            return path.read_text(encoding="utf-8")

        return await asyncio.to_thread(read)

    async def set_item(self, key: str, value: str) -> None:
        path = self._path(key)

        def write() -> None:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_name(path.name + ".tmp")
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)

        await asyncio.to_thread(write)

    async def remove_item(self, key: str) -> None:
        path = self._path(key)
        await asyncio.to_thread(path.unlink, missing_ok=True)

    async def get_all_keys(self) -> list[str]:
        def scan() -> list[str]:
            if not self.directory.exists():
                return []
            return [
                unquote(p.name[: -len(self.SUFFIX)])
                for p in self.directory.iterdir()
                if p.name.endswith(self.SUFFIX)
            ]

        return await asyncio.to_thread(scan)


class KeyValueBackend(StorageBackend):
    """Stores each record under its own ``exercise_<epoch-ms>`` key.

    Keys that do not carry the exercise prefix belong to someone else and
    are left alone. Deletes go key by key, so a failure part way through
    leaves some records removed; the error says which.
    """

    name = "kv"

    def __init__(self, storage: KeyValueStorage):
        super().__init__()
        self.storage = storage
        self._keys = TimestampKeyGenerator()

    async def open(self) -> None:
        for key in await self._exercise_keys():
            self._keys.observe(key)
        await super().open()

    async def insert(self, record: ExerciseRecord) -> str:
        self._ensure_open()
        key = self._keys.next_key()
        try:
            await self.storage.set_item(key, json.dumps(record.to_dict()))
        except OSError as e:
            raise StorageWriteFailed(f"Could not save {record.name!r}: {e}") from e
        return key

    async def fetch_day(self, day: date) -> list[ExerciseRecord]:
        return [r for r in await self.fetch_all() if r.day == day]

    async def fetch_all(self) -> list[ExerciseRecord]:
        self._ensure_open()
        records = []
        for key in await self._exercise_keys():
            try:
                value = await self.storage.get_item(key)
            except OSError as e:
                raise StorageUnavailable(f"Cannot read {key}: {e}") from e
            if value is None:
                continue
            try:
                records.append(ExerciseRecord.from_dict(json.loads(value), key=key))
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                raise StorageUnavailable(f"Malformed record {key}: {e}") from e
        return records

    async def remove(self, keys: list[str]) -> DeleteResult:
        self._ensure_open()
        try:
            stored = set(self._keys.sort_keys(await self.storage.get_all_keys()))
        except OSError as e:
            raise StorageWriteFailed(f"Cannot list stored keys: {e}", not_removed=list(keys)) from e

        present = [k for k in keys if k in stored]
        missing = [k for k in keys if k not in stored]
        removed = []
        for key in present:
            try:
                await self.storage.remove_item(key)
            except OSError as e:
                not_removed = [k for k in present if k not in removed]
                logger.warning(
                    "kv_partial_delete", removed=removed, not_removed=not_removed, error=str(e)
                )
                raise StorageWriteFailed(
                    f"Could not delete {key}: {e}", removed=removed, not_removed=not_removed
                ) from e
            removed.append(key)
        return DeleteResult(removed=removed, missing=missing)

    async def _exercise_keys(self) -> list[str]:
        try:
            keys = await self.storage.get_all_keys()
        except OSError as e:
            raise StorageUnavailable(f"Cannot list stored keys: {e}") from e
        return self._keys.sort_keys(keys)
