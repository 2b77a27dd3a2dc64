"""In-progress exercise entry, as built up in the detail editor."""

from dataclasses import dataclass, field
from datetime import datetime

from ..errors import ValidationError
from .catalog import CatalogExercise
from .records import DropSet, ExerciseRecord, SetRecord, parse_number


@dataclass
class ExerciseDraft:
    """Collects sets and rest time for one exercise before it is saved.

    Sets can only be appended. Drop sets attach to the most recent set.
    """

    exercise: CatalogExercise
    rest_time_seconds: int = 0
    sets: list[SetRecord] = field(default_factory=list)

    def set_rest_time(self, seconds) -> None:
        """Set the rest interval from user input such as ``"90"``."""
        value = parse_number(seconds, int)
        if value < 0:
            raise ValidationError("Please enter rest time in seconds.")
        self.rest_time_seconds = value

    def add_set(self, reps, weight) -> SetRecord:
        """Append a working set."""
        new_set = SetRecord(**_reps_and_weight(reps, weight, "set"))
        new_set.validate()
        self.sets.append(new_set)
        return new_set

    def add_drop_set(self, reps, weight) -> DropSet:
        """Attach a drop set to the last working set.

        Raises:
            ValidationError: If no set has been added yet
        """
        if not self.sets:
            raise ValidationError("Add a set before adding a drop set.")
        drop_set = DropSet(**_reps_and_weight(reps, weight, "drop set"))
        drop_set.validate()
        self.sets[-1].drop_sets.append(drop_set)
        return drop_set

    def to_record(self, now: datetime | None = None) -> ExerciseRecord:
        """Finish the draft as a diary record dated ``now``."""
        return self.exercise.new_record(
            date=now or datetime.now(),
            sets=self.sets,
            rest_time_seconds=self.rest_time_seconds,
        )


def _reps_and_weight(reps, weight, label: str) -> dict:
    if reps in (None, "") or weight in (None, ""):
        raise ValidationError(f"Please enter reps and weight for the {label}.")
    return {
        "reps": parse_number(reps, int),
        "weight": parse_number(weight, float),
    }
