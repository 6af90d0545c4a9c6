from __future__ import annotations

from gymlog.store import RecordStore


def exercise_id(store: RecordStore, name: str) -> int:
    return next(ex.id for ex in store.list_exercises() if ex.name == name)


def log_workout(store: RecordStore, entries: list[tuple[str, float, int]]) -> int:
    """Create a workout and log (exercise name, weight, reps) sets in order."""
    w = store.create_workout()
    for name, weight, reps in entries:
        store.add_set(w.id, exercise_id(store, name), weight, reps)
    return w.id
