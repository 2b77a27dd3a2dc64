"""Data loading utilities."""

from .catalog_loader import (
    get_catalog_json_path,
    load_catalog,
    load_custom_exercises,
    save_custom_exercise,
)

__all__ = [
    "get_catalog_json_path",
    "load_catalog",
    "load_custom_exercises",
    "save_custom_exercise",
]
