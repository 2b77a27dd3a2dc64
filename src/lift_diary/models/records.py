"""Exercise log record models."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime

from ..errors import ValidationError


def parse_number(value, kind: type):
    """Convert stored or user-entered numbers ("10", 135.0) to ``kind``."""
    if isinstance(value, bool):
        raise ValidationError(f"Expected a number, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValidationError("Expected a number, got an empty value")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Expected a number, got {value!r}") from e
    if kind is int:
        if not number.is_integer():
            raise ValidationError(f"Expected a whole number, got {value!r}")
        return int(number)
    return number


@dataclass
class DropSet:
    """A reduced-weight set performed right after its parent set."""

    reps: int
    weight: float

    def validate(self) -> None:
        _validate_reps_weight(self.reps, self.weight, "Drop set")

    def to_dict(self) -> dict:
        return {"reps": self.reps, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "DropSet":
        return cls(
            reps=parse_number(data["reps"], int),
            weight=parse_number(data["weight"], float),
        )


@dataclass
class SetRecord:
    """One working set, with any drop sets performed after it."""

    reps: int
    weight: float
    drop_sets: list[DropSet] = field(default_factory=list)

    def validate(self) -> None:
        _validate_reps_weight(self.reps, self.weight, "Set")
        for drop_set in self.drop_sets:
            drop_set.validate()

    def copy(self) -> "SetRecord":
        return SetRecord(
            reps=self.reps,
            weight=self.weight,
            drop_sets=[DropSet(reps=d.reps, weight=d.weight) for d in self.drop_sets],
        )

    def to_dict(self) -> dict:
        return {
            "reps": self.reps,
            "weight": self.weight,
            "drop_sets": [d.to_dict() for d in self.drop_sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SetRecord":
        drop_sets = data.get("drop_sets", data.get("dropSets")) or []
        return cls(
            reps=parse_number(data["reps"], int),
            weight=parse_number(data["weight"], float),
            drop_sets=[DropSet.from_dict(d) for d in drop_sets],
        )


def _validate_reps_weight(reps, weight, label: str) -> None:
    if isinstance(reps, bool) or not isinstance(reps, int) or reps <= 0:
        raise ValidationError(f"{label} reps must be a positive whole number, got {reps!r}")
    if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight < 0:
        raise ValidationError(f"{label} weight must be zero or more, got {weight!r}")


@dataclass
class ExerciseRecord:
    """One completed exercise session in the diary.

    Catalog metadata (force and muscles) is copied in when the record is
    created, so later catalog edits never change saved history. ``key`` is
    assigned by the storage backend on save.
    """

    name: str
    date: datetime
    sets: list[SetRecord] = field(default_factory=list)
    rest_time_seconds: int = 0
    force: str | None = None
    primary_muscle: str | None = None
    secondary_muscle: str | None = None
    key: str | None = None

    @property
    def day(self) -> date:
        """Calendar day this record is grouped under."""
        return self.date.date()

    def validate(self) -> None:
        """Check the record is well formed.

        Raises:
            ValidationError: On a blank name, bad rest time or a malformed set
        """
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Exercise name is required")
        if not isinstance(self.date, datetime):
            raise ValidationError(f"Record date must be a datetime, got {self.date!r}")
        rest = self.rest_time_seconds
        if isinstance(rest, bool) or not isinstance(rest, int) or rest < 0:
            raise ValidationError(f"Rest time must be zero or more seconds, got {rest!r}")
        for s in self.sets:
            s.validate()

    def with_key(self, key: str) -> "ExerciseRecord":
        """Return a copy carrying a storage key."""
        return replace(self, key=key, sets=[s.copy() for s in self.sets])

    def to_dict(self) -> dict:
        """Convert to dictionary for storage (the key is stored separately)."""
        return {
            "name": self.name,
            "force": self.force,
            "primary_muscle": self.primary_muscle,
            "secondary_muscle": self.secondary_muscle,
            "rest_time_seconds": self.rest_time_seconds,
            "sets": [s.to_dict() for s in self.sets],
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict, key: str | None = None) -> "ExerciseRecord":
        """Create from dictionary.

        Also reads the mobile app's payload shape (``primaryMuscle``,
        ``restTime`` and string numbers).
        """
        rest = data.get("rest_time_seconds", data.get("restTime"))
        return cls(
            key=key,
            name=data["name"],
            force=data.get("force"),
            primary_muscle=_muscle_text(data.get("primary_muscle", data.get("primaryMuscle"))),
            secondary_muscle=_muscle_text(
                data.get("secondary_muscle", data.get("secondaryMuscle"))
            ),
            rest_time_seconds=parse_number(rest, int) if rest not in (None, "") else 0,
            sets=[SetRecord.from_dict(s) for s in data.get("sets", [])],
            date=_parse_timestamp(data["date"]),
        )


def _muscle_text(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return ", ".join(value) if value else None
    return value


def _parse_timestamp(value: str) -> datetime:
    # JavaScript's toISOString() ends in "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class DeleteResult:
    """Outcome of a delete: which keys went away and which were never there."""

    removed: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"removed": list(self.removed), "missing": list(self.missing)}
