"""Storage backend interface."""

import time
from abc import ABC, abstractmethod
from datetime import date

from ...errors import StorageUnavailable
from ...models.records import DeleteResult, ExerciseRecord

KEY_PREFIX = "exercise_"


class StorageBackend(ABC):
    """A durable place to keep exercise records.

    Backends are opened once, handed to an ``ExerciseLogStore`` and closed at
    shutdown. They translate their own I/O errors into ``StorageUnavailable``
    (reads) and ``StorageWriteFailed`` (writes). Callers serialize writes, so
    backends do not lock.
    """

    name: str = "base"

    def __init__(self):
        self._opened = False

    @property
    def is_open(self) -> bool:
        return self._opened

    async def open(self) -> None:
        self._opened = True

    async def close(self) -> None:
        self._opened = False

    async def __aenter__(self) -> "StorageBackend":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _ensure_open(self) -> None:
        if not self._opened:
            raise StorageUnavailable(f"{self.name} storage is not open")

    @abstractmethod
    async def insert(self, record: ExerciseRecord) -> str:
        """Append a record and return its new storage key."""

    @abstractmethod
    async def fetch_day(self, day: date) -> list[ExerciseRecord]:
        """Records saved on ``day``, in insertion order."""

    @abstractmethod
    async def fetch_all(self) -> list[ExerciseRecord]:
        """Every record, in insertion order."""

    @abstractmethod
    async def remove(self, keys: list[str]) -> DeleteResult:
        """Remove the given keys; keys that are not stored are reported as missing."""


class TimestampKeyGenerator:
    """Issues ``exercise_<epoch-ms>`` keys that never repeat and sort by age.

    Two saves in the same millisecond get consecutive values.
    """

    def __init__(self, prefix: str = KEY_PREFIX):
        self.prefix = prefix
        self._last = 0

    def observe(self, key: str) -> None:
        """Account for a key that already exists in storage."""
        value = self.parse(key)
        if value is not None:
            self._last = max(self._last, value)

    def next_key(self) -> str:
        self._last = max(int(time.time() * 1000), self._last + 1)
        return f"{self.prefix}{self._last}"

    def parse(self, key: str) -> int | None:
        if not key.startswith(self.prefix):
            return None
        try:
            return int(key[len(self.prefix):])
        except ValueError:
            return None

    def sort_keys(self, keys) -> list[str]:
        """Keys we issued, oldest first; anything else is ignored."""
        ours = [(self.parse(k), k) for k in keys]
        return [k for value, k in sorted(p for p in ours if p[0] is not None)]
