"""Flat JSON file storage."""

import asyncio
import json
import os
import tempfile
from datetime import date
from pathlib import Path

import structlog

from ...errors import StorageUnavailable, StorageWriteFailed, ValidationError
from ...models.records import DeleteResult, ExerciseRecord
from .base import StorageBackend, TimestampKeyGenerator

logger = structlog.get_logger(__name__)

FORMAT_VERSION = 1


class JsonFileBackend(StorageBackend):
    """Keeps the whole log in a single JSON document.

    Every write reads the document, changes it and writes it back in full,
    replacing the file atomically. The file looks like::

        {"version": 1, "records": {"exercise_1704103200000": {...}, ...}}
    """

    name = "json"

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self._keys = TimestampKeyGenerator()

    async def open(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Cannot create {self.path.parent}: {e}") from e
        records = await self._read()
        for key in records:
            self._keys.observe(key)
        await super().open()

    async def insert(self, record: ExerciseRecord) -> str:
        self._ensure_open()
        records = await self._read_for_write()
        key = self._keys.next_key()
        records[key] = record.to_dict()
        await self._write(records)
        return key

    async def fetch_day(self, day: date) -> list[ExerciseRecord]:
        return [r for r in await self.fetch_all() if r.day == day]

    async def fetch_all(self) -> list[ExerciseRecord]:
        self._ensure_open()
        records = await self._read()
        try:
            return [ExerciseRecord.from_dict(data, key=key) for key, data in records.items()]
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise StorageUnavailable(f"Malformed record in {self.path}: {e}") from e

    async def remove(self, keys: list[str]) -> DeleteResult:
        self._ensure_open()
        records = await self._read_for_write()
        removed = [k for k in keys if k in records]
        missing = [k for k in keys if k not in records]
        if not removed:
            return DeleteResult(removed=[], missing=missing)
        for key in removed:
            del records[key]
        try:
            await self._write(records)
        except StorageWriteFailed as e:
            e.not_removed = removed
            raise
        return DeleteResult(removed=removed, missing=missing)

    async def _read(self) -> dict:
        return await asyncio.to_thread(self._read_sync)

    async def _read_for_write(self) -> dict:
        try:
            return await self._read()
        except StorageUnavailable as e:
            raise StorageWriteFailed(str(e)) from e

    def _read_sync(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageUnavailable(f"Cannot read {self.path}: {e}") from e
        if not isinstance(document, dict) or not isinstance(document.get("records"), dict):
            raise StorageUnavailable(f"{self.path} is not an exercise log")
        return document["records"]

    async def _write(self, records: dict) -> None:
        try:
            await asyncio.to_thread(self._write_sync, records)
        except OSError as e:
            raise StorageWriteFailed(f"Cannot write {self.path}: {e}") from e
        logger.debug("json_log_written", path=str(self.path), records=len(records))

    def _write_sync(self, records: dict) -> None:
        document = {"version": FORMAT_VERSION, "records": records}
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
