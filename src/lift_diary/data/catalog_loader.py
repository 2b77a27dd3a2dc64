"""Exercise catalog loader from JSON."""

import json
import re
from pathlib import Path

import structlog

from ..errors import StorageUnavailable, StorageWriteFailed, ValidationError
from ..models.catalog import CatalogExercise

logger = structlog.get_logger(__name__)


def get_catalog_json_path() -> Path:
    """Get the path to the bundled exercise catalog."""
    return Path(__file__).parent / "exercises.json"


def _parse_entries(entries: list, is_custom: bool) -> list[CatalogExercise]:
    exercises = []
    for entry in entries:
        try:
            exercises.append(CatalogExercise.from_dict(entry, is_custom=is_custom))
        except (KeyError, TypeError) as e:
            # Skip invalid entries but log the error
            logger.warning("catalog_entry_skipped", entry=entry, error=str(e))
    return exercises


def load_catalog(json_path: Path | None = None) -> list[CatalogExercise]:
    """Load the built-in exercise catalog.

    Args:
        json_path: Catalog file; the bundled one when not given

    Returns:
        Catalog entries in file order
    """
    json_path = json_path or get_catalog_json_path()
    with open(json_path, encoding="utf-8") as f:
        data = json.load(f)
    return _parse_entries(data, is_custom=False)


def load_custom_exercises(path: Path) -> list[CatalogExercise]:
    """Load user-defined exercises. A missing file means there are none."""
    if not path.exists():
        return []
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StorageUnavailable(f"Cannot read {path}: {e}") from e
    if not isinstance(data, list):
        raise StorageUnavailable(f"{path} is not a list of exercises")
    return _parse_entries(data, is_custom=True)


def _slug(name: str) -> str:
    return "custom_" + re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


def save_custom_exercise(
    path: Path,
    name: str,
    force: str | None = None,
    primary_muscles: list[str] | None = None,
    secondary_muscles: list[str] | None = None,
) -> CatalogExercise:
    """Add a user-defined exercise to the custom catalog file.

    Raises:
        ValidationError: If the name is blank or already taken
        StorageWriteFailed: If the file cannot be written
    """
    name = name.strip()
    if not name:
        raise ValidationError("Exercise name is required")

    try:
        existing = load_custom_exercises(path)
    except StorageUnavailable as e:
        raise StorageWriteFailed(str(e)) from e
    taken = {e.name.lower() for e in existing} | {e.name.lower() for e in load_catalog()}
    if name.lower() in taken:
        raise ValidationError(f"An exercise named {name!r} already exists")

    exercise = CatalogExercise(
        id=_slug(name),
        name=name,
        force=force,
        primary_muscles=list(primary_muscles or []),
        secondary_muscles=list(secondary_muscles or []),
        is_custom=True,
    )
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump([e.to_dict() for e in existing + [exercise]], f, indent=2)
    except OSError as e:
        raise StorageWriteFailed(f"Cannot write {path}: {e}") from e

    logger.info("custom_exercise_added", name=name, id=exercise.id)
    return exercise
