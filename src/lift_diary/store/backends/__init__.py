"""Storage engines for the exercise log."""

from .base import StorageBackend, TimestampKeyGenerator
from .json_file import JsonFileBackend
from .key_value import (
    DirectoryKeyValueStorage,
    KeyValueBackend,
    KeyValueStorage,
    MemoryKeyValueStorage,
)
from .sqlite import SqliteBackend

__all__ = [
    "DirectoryKeyValueStorage",
    "JsonFileBackend",
    "KeyValueBackend",
    "KeyValueStorage",
    "MemoryKeyValueStorage",
    "SqliteBackend",
    "StorageBackend",
    "TimestampKeyGenerator",
]
