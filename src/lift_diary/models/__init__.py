"""Data models for lift-diary."""

from .catalog import CatalogExercise, CatalogTab
from .draft import ExerciseDraft
from .records import DeleteResult, DropSet, ExerciseRecord, SetRecord

__all__ = [
    "CatalogExercise",
    "CatalogTab",
    "DeleteResult",
    "DropSet",
    "ExerciseDraft",
    "ExerciseRecord",
    "SetRecord",
]
