"""Exercise catalog models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .records import ExerciseRecord, SetRecord


class CatalogTab(str, Enum):
    """Views of the catalog browser."""

    ALL = "all"
    PREVIOUS = "previous"
    CUSTOM = "custom"


@dataclass
class CatalogExercise:
    """An exercise definition from the catalog."""

    id: str
    name: str
    force: str | None = None
    primary_muscles: list[str] = field(default_factory=list)
    secondary_muscles: list[str] = field(default_factory=list)
    is_custom: bool = False

    def new_record(
        self,
        date: datetime,
        sets: list[SetRecord] | None = None,
        rest_time_seconds: int = 0,
    ) -> ExerciseRecord:
        """Start a diary record with this exercise's metadata copied in."""
        return ExerciseRecord(
            name=self.name,
            date=date,
            sets=[s.copy() for s in sets or []],
            rest_time_seconds=rest_time_seconds,
            force=self.force,
            primary_muscle=", ".join(self.primary_muscles) or None,
            secondary_muscle=", ".join(self.secondary_muscles) or None,
        )

    def to_dict(self) -> dict:
        """Convert to the catalog JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "force": self.force,
            "primaryMuscles": list(self.primary_muscles),
            "secondaryMuscles": list(self.secondary_muscles),
        }

    @classmethod
    def from_dict(cls, data: dict, is_custom: bool = False) -> "CatalogExercise":
        """Create from a catalog JSON entry."""
        return cls(
            id=str(data.get("id") or data["name"]),
            name=data["name"],
            force=data.get("force"),
            primary_muscles=_as_list(data.get("primaryMuscles")),
            secondary_muscles=_as_list(data.get("secondaryMuscles")),
            is_custom=is_custom,
        )


def _as_list(value) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)
