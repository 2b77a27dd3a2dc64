"""SQLite storage via aiosqlite."""

import json
from datetime import date
from pathlib import Path

import aiosqlite
import structlog

from ...errors import StorageUnavailable, StorageWriteFailed, ValidationError
from ...models.records import DeleteResult, ExerciseRecord
from .base import StorageBackend

logger = structlog.get_logger(__name__)


class SqliteBackend(StorageBackend):
    """Keeps the log in one SQLite table.

    The row id is the storage key. The ``day`` column holds the record's
    calendar date so a day's records come back with a single indexed query.
    """

    name = "sqlite"

    def __init__(self, db_path: Path):
        super().__init__()
        self.db_path = Path(db_path)
        self._db: aiosqlite.Connection | None = None

    async def open(self) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._db = await aiosqlite.connect(self.db_path)
            self._db.row_factory = aiosqlite.Row
            await self._init_schema()
        except (aiosqlite.Error, OSError) as e:
            if self._db is not None:
                await self._db.close()
                self._db = None
            raise StorageUnavailable(f"Cannot open database {self.db_path}: {e}") from e
        await super().open()
        logger.debug("sqlite_opened", db_path=str(self.db_path))

    async def close(self) -> None:
        if self._db is not None:
            await self._db.close()
            self._db = None
        await super().close()

    async def _init_schema(self) -> None:
        await self._db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                day TEXT NOT NULL,
                date TEXT NOT NULL,
                payload TEXT NOT NULL
            )
        """)
        await self._db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_log_day
            ON exercise_log(day)
        """)
        await self._db.commit()

    async def insert(self, record: ExerciseRecord) -> str:
        self._ensure_open()
        try:
            cursor = await self._db.execute(
                """
                INSERT INTO exercise_log (name, day, date, payload)
                VALUES (?, ?, ?, ?)
                """,
                (
                    record.name,
                    record.day.isoformat(),
                    record.date.isoformat(),
                    json.dumps(record.to_dict()),
                ),
            )
            await self._db.commit()
        except aiosqlite.Error as e:
            await self._rollback()
            raise StorageWriteFailed(f"Could not save {record.name!r}: {e}") from e
        return str(cursor.lastrowid)

    async def fetch_day(self, day: date) -> list[ExerciseRecord]:
        return await self._select(
            "SELECT id, payload FROM exercise_log WHERE day = ? ORDER BY id",
            (day.isoformat(),),
        )

    async def fetch_all(self) -> list[ExerciseRecord]:
        return await self._select("SELECT id, payload FROM exercise_log ORDER BY id")

    async def remove(self, keys: list[str]) -> DeleteResult:
        self._ensure_open()
        row_ids = {}
        missing = []
        for key in keys:
            if key.isascii() and key.isdigit() and str(int(key)) == key:
                row_ids[int(key)] = key
            else:
                missing.append(key)
        if not row_ids:
            return DeleteResult(removed=[], missing=missing)

        placeholders = ",".join("?" for _ in row_ids)
        try:
            cursor = await self._db.execute(
                f"SELECT id FROM exercise_log WHERE id IN ({placeholders})",
                tuple(row_ids),
            )
            present = {row["id"] for row in await cursor.fetchall()}
            if present:
                present_placeholders = ",".join("?" for _ in present)
                await self._db.execute(
                    f"DELETE FROM exercise_log WHERE id IN ({present_placeholders})",
                    tuple(present),
                )
            await self._db.commit()
        except aiosqlite.Error as e:
            await self._rollback()
            # the delete ran in one transaction, so nothing was removed
            raise StorageWriteFailed(
                f"Could not delete records: {e}",
                removed=[],
                not_removed=list(row_ids.values()),
            ) from e

        removed = [k for i, k in row_ids.items() if i in present]
        missing.extend(k for i, k in row_ids.items() if i not in present)
        return DeleteResult(removed=removed, missing=missing)

    async def _select(self, query: str, params: tuple = ()) -> list[ExerciseRecord]:
        self._ensure_open()
        try:
            cursor = await self._db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]
        except (aiosqlite.Error, ValueError, KeyError, ValidationError) as e:
            raise StorageUnavailable(f"Cannot read {self.db_path}: {e}") from e

    async def _rollback(self) -> None:
        try:
            await self._db.rollback()
        except aiosqlite.Error:
            logger.warning("sqlite_rollback_failed", db_path=str(self.db_path))

    def _row_to_record(self, row: aiosqlite.Row) -> ExerciseRecord:
        """Convert a database row to an ExerciseRecord."""
        return ExerciseRecord.from_dict(json.loads(row["payload"]), key=str(row["id"]))
