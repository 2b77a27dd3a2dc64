"""Pytest configuration and fixtures."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest
import pytest_asyncio

from lift_diary.models.catalog import CatalogExercise
from lift_diary.models.records import DropSet, ExerciseRecord, SetRecord
from lift_diary.store import ExerciseLogStore
from lift_diary.store.backends import (
    DirectoryKeyValueStorage,
    JsonFileBackend,
    KeyValueBackend,
    MemoryKeyValueStorage,
    SqliteBackend,
)


class FlakyKeyValueStorage(MemoryKeyValueStorage):
    """In-memory storage that can be told to fail."""

    def __init__(self):
        super().__init__()
        self.fail_reads = False
        self.fail_writes = False
        self.removes_before_failure: int | None = None

    async def get_item(self, key):
        if self.fail_reads:
            raise OSError("storage offline")
        return await super().get_item(key)

    async def get_all_keys(self):
        if self.fail_reads:
            raise OSError("storage offline")
        return await super().get_all_keys()

    async def set_item(self, key, value):
        if self.fail_writes:
            raise OSError("disk full")
        await super().set_item(key, value)

    async def remove_item(self, key):
        if self.removes_before_failure is not None:
            if self.removes_before_failure == 0:
                raise OSError("disk full")
            self.removes_before_failure -= 1
        await super().remove_item(key)


@pytest.fixture
def temp_dir():
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def make_backend(kind: str, data_dir: Path):
    if kind == "sqlite":
        return SqliteBackend(data_dir / "test.db")
    if kind == "json":
        return JsonFileBackend(data_dir / "log.json")
    if kind == "kv":
        return KeyValueBackend(DirectoryKeyValueStorage(data_dir / "kv"))
    if kind == "memory":
        return KeyValueBackend(MemoryKeyValueStorage())
    raise ValueError(kind)


@pytest_asyncio.fixture(params=["sqlite", "json", "kv", "memory"])
async def backend(request, temp_dir):
    """Each storage backend, opened on a fresh data directory."""
    async with make_backend(request.param, temp_dir) as opened:
        yield opened


@pytest_asyncio.fixture
async def store(backend):
    return ExerciseLogStore(backend)


@pytest_asyncio.fixture
async def flaky_storage():
    return FlakyKeyValueStorage()


@pytest_asyncio.fixture
async def flaky_store(flaky_storage):
    async with KeyValueBackend(flaky_storage) as opened:
        yield ExerciseLogStore(opened)


@pytest.fixture
def bench_press():
    """Catalog entry for the bench press."""
    return CatalogExercise(
        id="Barbell_Bench_Press",
        name="Bench Press",
        force="push",
        primary_muscles=["chest"],
        secondary_muscles=["shoulders", "triceps"],
    )


@pytest.fixture
def make_record():
    """Factory for diary records."""

    def _make(name="Bench Press", when=datetime(2024, 1, 1, 10, 0), sets=None, **kwargs):
        if sets is None:
            sets = [SetRecord(reps=10, weight=135)]
        return ExerciseRecord(name=name, date=when, sets=sets, **kwargs)

    return _make


@pytest.fixture
def sample_record():
    """A bench press session with a drop set."""
    return ExerciseRecord(
        name="Bench Press",
        date=datetime(2024, 1, 1, 10, 0),
        sets=[
            SetRecord(reps=10, weight=135),
            SetRecord(reps=8, weight=155, drop_sets=[DropSet(reps=6, weight=115)]),
        ],
        rest_time_seconds=90,
        force="push",
        primary_muscle="chest",
        secondary_muscle="shoulders, triceps",
    )
