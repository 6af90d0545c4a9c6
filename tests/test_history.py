from __future__ import annotations

from datetime import datetime, timedelta, timezone

from gymlog.services.history import recent_workouts, weekly_workout_count

from helpers import exercise_id, log_workout


def test_recent_workouts_newest_first_with_counts(store) -> None:
    w1 = log_workout(store, [("Squat", 100, 5), ("Squat", 100, 5), ("Lunge", 20, 10)])
    w2 = store.create_workout()
    store.add_workout_exercise(w2.id, exercise_id(store, "Deadlift"))
    w3 = log_workout(store, [("Bench Press", 60, 10)])

    recent = recent_workouts(store, limit=5)
    assert [r.id for r in recent] == [w3, w2.id, w1]
    by_id = {r.id: r for r in recent}
    assert (by_id[w1].exercise_count, by_id[w1].total_sets) == (2, 3)
    assert (by_id[w2.id].exercise_count, by_id[w2.id].total_sets) == (1, 0)


def test_recent_workouts_limit(store) -> None:
    for _ in range(7):
        store.create_workout()
    assert len(recent_workouts(store)) == 5
    assert len(recent_workouts(store, limit=2)) == 2
    assert recent_workouts(store, limit=0) == []


def test_weekly_workout_count(store) -> None:
    now = datetime(2026, 5, 10, 12, 0, tzinfo=timezone.utc)
    store.create_workout(created_at=now - timedelta(days=10))
    store.create_workout(created_at=now - timedelta(days=6, hours=23))
    store.create_workout(created_at=now - timedelta(hours=1))

    assert weekly_workout_count(store, now=now) == 2
