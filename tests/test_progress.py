from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict

from gymlog.models import WorkoutSet
from gymlog.services.progress import (
    comparison_series,
    compute_progress,
    find_previous_workout,
    last_session_sets,
    previous_set_at,
    summarize_workout,
)
from gymlog.store import InMemoryStore

from helpers import exercise_id, log_workout


def make_set(weight: float, reps: int, order: int = 1, workout_id: int = 1, exercise_id: int = 1) -> WorkoutSet:
    return WorkoutSet(
        id=order,
        workout_id=workout_id,
        exercise_id=exercise_id,
        weight=weight,
        reps=reps,
        set_order=order,
    )


def test_scenario_a_squat_pr_with_lower_volume(store) -> None:
    w1 = log_workout(store, [("Squat", 100, 5), ("Squat", 100, 5)])
    w2 = log_workout(store, [("Squat", 110, 5)])

    summary = summarize_workout(store, w2)

    assert summary.total_exercises == 1
    p = summary.exercises_progress[0]
    assert p.exercise_name == "Squat"
    assert [(s.weight, s.reps) for s in p.previous_sets] == [(100, 5), (100, 5)]
    assert all(s.workout_id == w1 for s in p.previous_sets)
    assert [(s.weight, s.reps) for s in p.current_sets] == [(110, 5)]
    assert p.previous_workout_id == w1
    assert p.weight_change == 10
    assert p.volume_change == -450
    assert p.is_pr is True


def test_scenario_b_first_time_exercise(store) -> None:
    w = log_workout(store, [("Deadlift", 140, 3)])
    p = summarize_workout(store, w).exercises_progress[0]

    assert p.previous_sets == []
    assert p.previous_workout_id is None
    assert p.weight_change == 0
    assert p.volume_change == 0
    assert p.is_pr is False
    assert p.is_first_time is True


def test_scenario_c_workout_without_sets(store) -> None:
    w = store.create_workout()
    summary = summarize_workout(store, w.id)

    assert summary.total_exercises == 0
    assert summary.total_sets == 0
    assert summary.total_volume == 0
    assert summary.exercises_progress == []


def test_scenario_d_best_set_decides_pr(store) -> None:
    log_workout(store, [("Bench Press", 80, 8)])
    w2 = log_workout(store, [("Bench Press", 80, 8), ("Bench Press", 85, 6)])

    p = summarize_workout(store, w2).exercises_progress[0]
    assert p.current_max_weight == 85
    assert p.previous_max_weight == 80
    assert p.weight_change == 5
    assert p.is_pr is True


def test_no_baseline_sentinel_ignores_current_values() -> None:
    p = compute_progress(1, "Squat", [make_set(200, 10), make_set(250, 1, order=2)], [])
    assert (p.weight_change, p.volume_change, p.is_pr) == (0, 0, False)


def test_equal_max_weight_is_not_a_pr() -> None:
    p = compute_progress(1, "Squat", [make_set(100, 8)], [make_set(100, 5)])
    assert p.is_pr is False
    assert p.weight_change == 0
    assert p.volume_change == 300


def test_weight_drop_gives_negative_change() -> None:
    p = compute_progress(1, "Squat", [make_set(90, 5)], [make_set(100, 5)])
    assert p.weight_change == -10
    assert p.volume_change == -50
    assert p.is_pr is False


def test_empty_current_sets_do_not_crash() -> None:
    p = compute_progress(1, "Squat", [], [make_set(100, 5)])
    assert p.current_max_weight == 0
    assert p.weight_change == -100
    assert p.volume_change == -500
    assert p.is_pr is False


def test_zero_weight_sets_are_tolerated() -> None:
    p = compute_progress(5, "Pull Up", [make_set(0, 12)], [make_set(0, 10)])
    assert p.volume_change == 0
    assert p.is_pr is False
    assert p.is_first_time is False


def test_summary_is_deterministic(store) -> None:
    log_workout(store, [("Squat", 100, 5), ("Bench Press", 60, 10)])
    w2 = log_workout(store, [("Bench Press", 62.5, 8), ("Squat", 105, 5), ("Lunge", 20, 12)])

    assert summarize_workout(store, w2) == summarize_workout(store, w2)


def test_total_volume_is_sum_over_all_sets(store) -> None:
    entries = [("Squat", 100, 5), ("Bench Press", 60, 10), ("Squat", 102.5, 3), ("Lunge", 0, 12)]
    w = log_workout(store, entries)

    summary = summarize_workout(store, w)
    assert summary.total_sets == 4
    assert summary.total_volume == sum(weight * reps for _, weight, reps in entries)
    assert summary.total_volume == sum(p.current_volume for p in summary.exercises_progress)


def test_progress_order_follows_first_appearance(store) -> None:
    w = log_workout(store, [("Lunge", 20, 10), ("Squat", 100, 5), ("Lunge", 20, 10), ("Deadlift", 120, 5)])
    names = [p.exercise_name for p in summarize_workout(store, w).exercises_progress]
    assert names == ["Lunge", "Squat", "Deadlift"]


def test_previous_workout_is_latest_strictly_earlier(store) -> None:
    w1 = log_workout(store, [("Squat", 100, 5)])
    log_workout(store, [("Bench Press", 60, 10)])
    w3 = log_workout(store, [("Squat", 105, 5)])
    w4 = log_workout(store, [("Squat", 110, 5)])
    squat = exercise_id(store, "Squat")

    assert find_previous_workout(store, squat, w4) == w3
    assert find_previous_workout(store, squat, w3) == w1
    assert find_previous_workout(store, squat, w1) is None
    for ref in (w1, w3, w4):
        found = find_previous_workout(store, squat, ref)
        assert found is None or found < ref


def test_previous_lookup_with_unknown_reference(store) -> None:
    w1 = log_workout(store, [("Squat", 100, 5)])
    squat = exercise_id(store, "Squat")

    assert find_previous_workout(store, squat, 999) == w1
    assert find_previous_workout(store, exercise_id(store, "Lunge"), 999) is None


def test_workout_without_the_exercise_is_skipped(store) -> None:
    w1 = log_workout(store, [("Squat", 100, 5)])
    w2 = store.create_workout()
    store.add_workout_exercise(w2.id, exercise_id(store, "Squat"))  # planned, never performed
    w3 = log_workout(store, [("Squat", 100, 5)])

    p = summarize_workout(store, w3).exercises_progress[0]
    assert p.previous_workout_id == w1
    assert p.is_pr is False


def test_deleted_previous_workout_falls_back_to_older(store) -> None:
    w1 = log_workout(store, [("Squat", 90, 5)])
    w2 = log_workout(store, [("Squat", 120, 5)])
    w3 = log_workout(store, [("Squat", 100, 5)])
    store.delete_workout(w2)

    p = summarize_workout(store, w3).exercises_progress[0]
    assert p.previous_workout_id == w1
    assert p.weight_change == 10
    assert p.is_pr is True


def test_summary_reflects_later_edits(store) -> None:
    log_workout(store, [("Squat", 100, 5)])
    w2 = log_workout(store, [("Squat", 100, 5)])
    assert summarize_workout(store, w2).exercises_progress[0].is_pr is False

    s = store.list_sets(w2)[0]
    store.update_set(s.id, 105, 5)
    assert summarize_workout(store, w2).exercises_progress[0].is_pr is True


def test_missing_workout_gives_empty_summary(store) -> None:
    summary = summarize_workout(store, 12345)
    assert summary.workout_id == 12345
    assert summary.total_exercises == 0
    assert summary.exercises_progress == []
    assert summary.duration_minutes == 0


class _NamelessStore(InMemoryStore):
    def exercise_names(self) -> Dict[int, str]:
        return {}


def test_unresolvable_exercise_name_defaults_to_unknown() -> None:
    store = _NamelessStore()
    w = log_workout(store, [("Squat", 100, 5)])
    assert summarize_workout(store, w).exercises_progress[0].exercise_name == "Unknown"


def test_duration_from_finished_workout() -> None:
    store = InMemoryStore()
    start = datetime(2026, 3, 1, 18, 0, tzinfo=timezone.utc)
    w = store.create_workout(created_at=start)
    store.add_set(w.id, 2, 100, 5)
    store.finish_workout(w.id, finished_at=start + timedelta(minutes=47, seconds=30))

    assert summarize_workout(store, w.id).duration_minutes == 47


def test_last_session_hints(store) -> None:
    log_workout(store, [("Squat", 100, 5), ("Squat", 105, 3)])
    w2 = store.create_workout()
    squat = exercise_id(store, "Squat")

    previous = last_session_sets(store, squat, w2.id)
    assert [(s.weight, s.reps) for s in previous] == [(100, 5), (105, 3)]

    second = previous_set_at(store, squat, w2.id, 2)
    assert second is not None and second.weight == 105
    assert previous_set_at(store, squat, w2.id, 3) is None
    assert previous_set_at(store, squat, w2.id, 0) is None
    assert last_session_sets(store, exercise_id(store, "Lunge"), w2.id) == []


def test_comparison_series_matches_progress(store) -> None:
    log_workout(store, [("Squat", 100, 5)])
    w2 = log_workout(store, [("Squat", 110, 5), ("Lunge", 20, 10)])

    series = comparison_series(summarize_workout(store, w2))
    assert series["labels"] == ["Squat", "Lunge"]
    assert series["current"] == [550, 200]
    assert series["previous"] == [500, 0]
