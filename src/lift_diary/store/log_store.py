"""Date-keyed exercise log."""

import asyncio
from datetime import date, datetime
from typing import Awaitable, Iterable

import structlog

from ..errors import ValidationError
from ..models.records import DeleteResult, ExerciseRecord
from .backends.base import StorageBackend

logger = structlog.get_logger(__name__)


def dedupe_by_name(records: Iterable[ExerciseRecord]) -> list[ExerciseRecord]:
    """Keep the first record for each exercise name, preserving order."""
    seen = set()
    unique = []
    for record in records:
        if record.name in seen:
            continue
        seen.add(record.name)
        unique.append(record)
    return unique


def as_day(value: date | datetime) -> date:
    """Calendar day of a date or datetime; the time of day is dropped."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"Expected a date, got {value!r}")


class ExerciseLogStore:
    """Saves, lists and deletes diary records on top of a storage backend.

    Records are grouped by calendar day. Saving never merges records:
    two "Squat" entries on one day are both stored, and only the first is
    shown when the day is listed.

    Writes go through a single lock so read-modify-write backends never see
    interleaved updates. Reads are not locked.
    """

    def __init__(self, backend: StorageBackend):
        self.backend = backend
        self._write_lock = asyncio.Lock()

    async def list_for_date(self, day: date | datetime) -> list[ExerciseRecord]:
        """List the records saved on a calendar day, one per exercise name.

        Args:
            day: The day to list; a datetime's time of day is ignored

        Returns:
            Records in the order they were saved. Empty if there are none.

        Raises:
            StorageUnavailable: If the backend cannot be read
        """
        day = as_day(day)
        records = await self.backend.fetch_day(day)
        return dedupe_by_name(records)

    def save(self, record: ExerciseRecord) -> Awaitable[ExerciseRecord]:
        """Append a record to the log.

        The record is validated on the call itself; the returned awaitable
        does the write.

        Returns:
            An awaitable for a copy of the record carrying its storage key

        Raises:
            ValidationError: If the record is malformed (nothing is written)
            StorageWriteFailed: When awaited, if the backend write fails
        """
        record.validate()
        return self._insert(record)

    async def _insert(self, record: ExerciseRecord) -> ExerciseRecord:
        async with self._write_lock:
            key = await self.backend.insert(record)
        logger.info(
            "exercise_record_saved",
            key=key,
            name=record.name,
            day=record.day.isoformat(),
            sets=len(record.sets),
        )
        return record.with_key(key)

    async def delete(self, records: Iterable[ExerciseRecord | str]) -> DeleteResult:
        """Remove records, given as records or their storage keys.

        Keys that are not stored are skipped and listed in ``missing``.

        Raises:
            ValidationError: If a record has never been saved
            StorageWriteFailed: If the backend fails; the error lists the keys
                that were and were not removed
        """
        keys = []
        for item in records:
            key = item if isinstance(item, str) else item.key
            if not key:
                raise ValidationError(f"Record {getattr(item, 'name', item)!r} has no storage key")
            if key not in keys:
                keys.append(key)
        if not keys:
            return DeleteResult()

        async with self._write_lock:
            result = await self.backend.remove(keys)
        logger.info("exercise_records_deleted", removed=result.removed, missing=result.missing)
        return result

    async def list_names(self) -> list[str]:
        """Names of every logged exercise, most recently logged first."""
        records = await self.backend.fetch_all()
        return [r.name for r in dedupe_by_name(reversed(records))]
