"""Tests for data models."""

from datetime import date, datetime, timezone

import pytest

from lift_diary.errors import ValidationError
from lift_diary.models.catalog import CatalogExercise
from lift_diary.models.draft import ExerciseDraft
from lift_diary.models.records import DropSet, ExerciseRecord, SetRecord


class TestExerciseRecord:
    """Tests for ExerciseRecord model."""

    def test_record_to_dict(self, sample_record):
        """Test record serialization."""
        data = sample_record.to_dict()

        assert data["name"] == "Bench Press"
        assert data["rest_time_seconds"] == 90
        assert data["date"] == "2024-01-01T10:00:00"
        assert data["sets"][1]["drop_sets"] == [{"reps": 6, "weight": 115}]
        assert "key" not in data

    def test_record_from_dict(self, sample_record):
        """Test record deserialization keeps every field."""
        restored = ExerciseRecord.from_dict(sample_record.to_dict(), key="7")

        assert restored.key == "7"
        assert restored.name == sample_record.name
        assert restored.sets == sample_record.sets
        assert restored.date == sample_record.date
        assert restored.primary_muscle == "chest"

    def test_from_mobile_payload(self):
        """Test reading the mobile app's storage payload."""
        data = {
            "name": "Squat",
            "force": "push",
            "primaryMuscle": ["quadriceps"],
            "secondaryMuscle": None,
            "weight": "",
            "restTime": "120",
            "sets": [{"reps": "5", "weight": "225", "dropSets": [{"reps": "5", "weight": "185"}]}],
            "date": "2024-01-02T18:30:00.000Z",
        }
        record = ExerciseRecord.from_dict(data, key="exercise_1704220200000")

        assert record.rest_time_seconds == 120
        assert record.primary_muscle == "quadriceps"
        assert record.secondary_muscle is None
        assert record.sets[0].reps == 5
        assert record.sets[0].weight == 225.0
        assert record.sets[0].drop_sets == [DropSet(reps=5, weight=185.0)]
        assert record.date == datetime(2024, 1, 2, 18, 30, tzinfo=timezone.utc)

    def test_missing_rest_time_defaults_to_zero(self):
        record = ExerciseRecord.from_dict({"name": "Plank", "date": "2024-01-01T09:00:00"})
        assert record.rest_time_seconds == 0
        assert record.sets == []

    def test_day_ignores_time(self, make_record):
        record = make_record(when=datetime(2024, 1, 1, 23, 59))
        assert record.day == date(2024, 1, 1)

    def test_with_key_copies(self, sample_record):
        """Test keyed copies do not share sets with the original."""
        keyed = sample_record.with_key("1")

        assert keyed.key == "1"
        assert sample_record.key is None
        keyed.sets[1].drop_sets.append(DropSet(reps=4, weight=95))
        assert len(sample_record.sets[1].drop_sets) == 1

    def test_valid_record_passes(self, sample_record):
        sample_record.validate()

    def test_empty_sets_allowed(self, make_record):
        make_record(sets=[]).validate()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": ""},
            {"name": "   "},
            {"sets": [SetRecord(reps=0, weight=100)]},
            {"sets": [SetRecord(reps=-3, weight=100)]},
            {"sets": [SetRecord(reps=5, weight=-1)]},
            {"sets": [SetRecord(reps=True, weight=100)]},
            {"sets": [SetRecord(reps=5, weight=100, drop_sets=[DropSet(reps=0, weight=50)])]},
            {"rest_time_seconds": -10},
        ],
    )
    def test_invalid_records_rejected(self, make_record, kwargs):
        """Test malformed records raise ValidationError."""
        with pytest.raises(ValidationError):
            make_record(**kwargs).validate()

    def test_zero_weight_allowed(self, make_record):
        """Bodyweight sets have no added weight."""
        make_record(sets=[SetRecord(reps=12, weight=0)]).validate()


class TestCatalogExercise:
    """Tests for CatalogExercise model."""

    def test_from_catalog_json(self):
        exercise = CatalogExercise.from_dict(
            {
                "id": "Pullups",
                "name": "Pull-Up",
                "force": "pull",
                "primaryMuscles": ["lats"],
                "secondaryMuscles": ["biceps", "middle back"],
            }
        )

        assert exercise.id == "Pullups"
        assert exercise.secondary_muscles == ["biceps", "middle back"]
        assert exercise.is_custom is False

    def test_new_record_copies_metadata(self, bench_press):
        """Test catalog metadata is denormalized into the record."""
        record = bench_press.new_record(datetime(2024, 1, 1, 10, 0))

        assert record.name == "Bench Press"
        assert record.force == "push"
        assert record.primary_muscle == "chest"
        assert record.secondary_muscle == "shoulders, triceps"

        bench_press.primary_muscles.append("triceps")
        assert record.primary_muscle == "chest"

    def test_new_record_without_muscles(self):
        record = CatalogExercise(id="x", name="Mystery").new_record(datetime(2024, 1, 1))
        assert record.primary_muscle is None
        assert record.secondary_muscle is None


class TestExerciseDraft:
    """Tests for the exercise editor draft."""

    def test_add_sets_and_drop_sets(self, bench_press):
        draft = ExerciseDraft(bench_press)
        draft.add_set("10", "135")
        draft.add_set("8", "155")
        draft.add_drop_set("6", "115")
        draft.add_drop_set("4", "95")

        assert [s.reps for s in draft.sets] == [10, 8]
        assert draft.sets[0].drop_sets == []
        assert draft.sets[1].drop_sets == [DropSet(6, 115.0), DropSet(4, 95.0)]

    def test_to_record_keeps_its_sets(self, bench_press):
        """Sets added after a record is made do not change that record."""
        draft = ExerciseDraft(bench_press)
        draft.add_set(10, 135)
        record = draft.to_record(datetime(2024, 1, 1, 10, 0))

        draft.add_drop_set(6, 115)
        draft.add_set(8, 135)

        assert record.sets == [SetRecord(reps=10, weight=135.0)]
        assert draft.sets[0].drop_sets == [DropSet(6, 115.0)]

    def test_drop_set_needs_parent_set(self, bench_press):
        draft = ExerciseDraft(bench_press)
        with pytest.raises(ValidationError, match="Add a set"):
            draft.add_drop_set(6, 115)

    @pytest.mark.parametrize("reps,weight", [("", "135"), ("10", ""), (None, 135)])
    def test_blank_input_rejected(self, bench_press, reps, weight):
        draft = ExerciseDraft(bench_press)
        with pytest.raises(ValidationError, match="Please enter reps and weight"):
            draft.add_set(reps, weight)
        assert draft.sets == []

    def test_non_numeric_input_rejected(self, bench_press):
        draft = ExerciseDraft(bench_press)
        with pytest.raises(ValidationError):
            draft.add_set("ten", "135")
        with pytest.raises(ValidationError):
            draft.add_set("7.5", "135")

    def test_rest_time(self, bench_press):
        draft = ExerciseDraft(bench_press)
        draft.set_rest_time("90")
        assert draft.rest_time_seconds == 90

        with pytest.raises(ValidationError):
            draft.set_rest_time("-5")
        assert draft.rest_time_seconds == 90

    def test_to_record(self, bench_press):
        draft = ExerciseDraft(bench_press)
        draft.set_rest_time(60)
        draft.add_set(10, 135)
        record = draft.to_record(datetime(2024, 1, 1, 10, 0))

        assert record.name == "Bench Press"
        assert record.rest_time_seconds == 60
        assert record.sets == [SetRecord(reps=10, weight=135.0)]
        assert record.date == datetime(2024, 1, 1, 10, 0)
        record.validate()
