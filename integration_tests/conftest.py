"""Pytest configuration for integration tests."""

import tempfile
from pathlib import Path

import pytest

from lift_diary.config import Settings


def pytest_collection_modifyitems(items):
    """Mark everything here as an integration test."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(params=["sqlite", "json", "kv"])
def settings(request):
    """Settings pointing at a throwaway data directory, for each backend."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Settings(DATA_DIR=Path(tmpdir) / "diary", STORAGE_BACKEND=request.param)
