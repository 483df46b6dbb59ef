"""
Unit tests for domain models.

These tests verify:
- SetDraft validity, volume and display text
- Weight formatting
- Last-performance summary aggregation
- WorkoutCategory labels and lookup
- WorkoutRecord duration
"""

from datetime import datetime, timedelta, timezone

import pytest


@pytest.mark.unit
class TestSetDraft:
    """Tests for the SetDraft entity."""

    def test_new_draft_is_empty(self):
        """A new draft has zero weight and reps and is not completed."""
        from domain.models import SetDraft

        draft = SetDraft()
        assert draft.weight == 0
        assert draft.reps == 0
        assert draft.is_completed is False
        assert draft.is_valid is False

    def test_drafts_get_distinct_ids(self):
        """Each draft has its own idempotency key."""
        from domain.models import SetDraft

        assert SetDraft().id != SetDraft().id

    @pytest.mark.parametrize(
        "weight,reps",
        [(0, 5), (5, 0), (-1, 5), (5, -1), (0, 0)],
    )
    def test_invalid_drafts(self, weight, reps):
        """Zero or negative weight or reps are never valid."""
        from domain.models import SetDraft

        assert SetDraft(weight=weight, reps=reps).is_valid is False

    def test_valid_draft(self):
        """Positive weight and reps make a valid draft."""
        from domain.models import SetDraft

        assert SetDraft(weight=135, reps=10).is_valid is True

    def test_volume(self):
        """Volume is weight times reps."""
        from domain.models import SetDraft

        assert SetDraft(weight=52.5, reps=4).volume == 210.0

    def test_display_text(self):
        """Invalid drafts show placeholders, valid ones weight × reps."""
        from domain.models import SetDraft

        assert SetDraft().display_text == "- × -"
        assert SetDraft(weight=135, reps=10).display_text == "135 × 10"
        assert SetDraft(weight=22.5, reps=8).display_text == "22.5 × 8"

    @pytest.mark.parametrize(
        "field,value",
        [("reps", 10.5), ("reps", "ten"), ("weight", float("inf")), ("weight", "heavy")],
    )
    def test_assignment_is_validated(self, field, value):
        """Reps must stay whole numbers and weight finite after edits."""
        from pydantic import ValidationError

        from domain.models import SetDraft

        draft = SetDraft(weight=100, reps=5)
        with pytest.raises(ValidationError):
            setattr(draft, field, value)
        assert (draft.weight, draft.reps) == (100, 5)

    def test_assignment_coerces_whole_floats(self):
        from domain.models import SetDraft

        draft = SetDraft()
        draft.reps = 8.0
        assert draft.reps == 8
        assert type(draft.reps) is int


@pytest.mark.unit
class TestFormatWeight:
    """Tests for weight display formatting."""

    def test_integral_weight_has_no_decimal_point(self):
        from domain.models import format_weight

        assert format_weight(135.0) == "135"
        assert format_weight(135) == "135"

    def test_fractional_weight_has_one_decimal(self):
        from domain.models import format_weight

        assert format_weight(52.5) == "52.5"
        assert format_weight(52.25) == "52.2"


@pytest.mark.unit
class TestLastWorkoutSummary:
    """Tests for the last-performance summary."""

    @staticmethod
    def _sets(*pairs):
        from domain.models import HistoricalSet

        return [HistoricalSet(weight=w, reps=r) for w, r in pairs]

    def test_no_sets(self):
        from domain.models import last_workout_summary

        assert last_workout_summary([]) == "No previous data"

    def test_single_set(self):
        from domain.models import last_workout_summary

        assert last_workout_summary(self._sets((135, 10))) == "135 × 10"

    def test_identical_sets_are_counted(self):
        from domain.models import last_workout_summary

        sets = self._sets((135, 10), (135, 10), (135, 10))
        assert last_workout_summary(sets) == "135 × 10 × 3"

    def test_identical_sets_compare_formatted_weight(self):
        """135 and 135.0 are the same weight."""
        from domain.models import last_workout_summary

        sets = self._sets((135.0, 8), (135, 8))
        assert last_workout_summary(sets) == "135 × 8 × 2"

    def test_varying_sets_show_best_volume(self):
        """125 × 12 = 1500 beats 135 × 10 = 1350."""
        from domain.models import last_workout_summary

        sets = self._sets((135, 10), (125, 12))
        assert last_workout_summary(sets) == "125 × 12 (best)"

    def test_best_volume_tie_keeps_first(self):
        """On equal volume the earlier set wins."""
        from domain.models import last_workout_summary

        sets = self._sets((100, 6), (60, 10), (120, 5))
        assert last_workout_summary(sets) == "100 × 6 (best)"

    def test_performance_exposes_summary_and_best_set(self):
        from domain.models import ExercisePerformance

        perf = ExercisePerformance(
            exercise_id="bench",
            exercise_name="Bench Press",
            sets=self._sets((135, 10), (135, 8), (125, 12)),
        )
        assert perf.best_set.reps == 12
        assert perf.summary == "125 × 12 (best)"

    def test_empty_performance(self):
        from domain.models import ExercisePerformance

        perf = ExercisePerformance(exercise_id="bench")
        assert perf.best_set is None
        assert perf.summary == "No previous data"


@pytest.mark.unit
class TestWorkoutCategory:
    """Tests for WorkoutCategory."""

    def test_labels(self):
        from domain.models import WorkoutCategory

        assert WorkoutCategory.PUSH.label() == "Push Day"
        assert WorkoutCategory.LEGS.label() == "Leg Day"

    def test_custom_label_uses_name(self):
        from domain.models import WorkoutCategory

        assert WorkoutCategory.CUSTOM.label("  Arms  ") == "Arms"

    def test_custom_requires_name(self):
        from domain.models import WorkoutCategory

        with pytest.raises(ValueError):
            WorkoutCategory.CUSTOM.label("   ")

    def test_lookup_by_label(self):
        from domain.models import WorkoutCategory

        assert WorkoutCategory("Shoulder Day") is WorkoutCategory.SHOULDERS

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Push Day", "PUSH"),
            ("Push", "PUSH"),
            ("legs", "LEGS"),
            (" Shoulders ", "SHOULDERS"),
            ("CUSTOM", "CUSTOM"),
        ],
    )
    def test_parse_accepts_label_or_name(self, value, expected):
        from domain.models import WorkoutCategory

        assert WorkoutCategory.parse(value) is WorkoutCategory[expected]

    def test_parse_passes_members_through(self):
        from domain.models import WorkoutCategory

        assert WorkoutCategory.parse(WorkoutCategory.PULL) is WorkoutCategory.PULL

    @pytest.mark.parametrize("value", ["Cardio Day", "", "push day!"])
    def test_parse_rejects_unknown(self, value):
        from domain.models import WorkoutCategory

        with pytest.raises(ValueError):
            WorkoutCategory.parse(value)


@pytest.mark.unit
class TestWorkoutRecord:
    """Tests for WorkoutRecord."""

    def test_finished_duration_excludes_pauses(self):
        from domain.models import WorkoutRecord

        start = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        record = WorkoutRecord(
            id="w-1",
            category="Push Day",
            started_at=start,
            ended_at=start + timedelta(minutes=45),
            paused_duration=300,
        )
        assert record.is_active is False
        assert record.actual_duration() == 2400
        assert record.formatted_duration == "40:00"

    def test_naive_timestamps_are_utc(self):
        from domain.models import WorkoutRecord

        record = WorkoutRecord(
            id="w-1", category="Leg Day", started_at=datetime(2024, 1, 1, 10, 0)
        )
        assert record.started_at.tzinfo == timezone.utc
        assert record.is_active is True

    def test_active_duration_uses_now(self):
        from domain.models import WorkoutRecord

        start = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        record = WorkoutRecord(id="w-1", category="Leg Day", started_at=start)
        assert record.actual_duration(now=start + timedelta(seconds=90)) == 90
