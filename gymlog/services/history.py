from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from gymlog.config import get_settings
from gymlog.models import RecentWorkout
from gymlog.store import RecordStore


def recent_workouts(store: RecordStore, limit: Optional[int] = None) -> List[RecentWorkout]:
    """Newest workouts first (by id), with distinct exercise and set counts."""
    if limit is None:
        limit = get_settings().RECENT_WORKOUTS_LIMIT
    workouts = sorted(store.list_workouts(), key=lambda w: w.id, reverse=True)[: max(0, limit)]
    out: List[RecentWorkout] = []
    for w in workouts:
        sets = store.list_sets(w.id)
        exercise_ids = {s.exercise_id for s in sets}
        exercise_ids.update(we.exercise_id for we in store.list_workout_exercises(w.id))
        out.append(
            RecentWorkout(
                id=w.id,
                created_at=w.created_at,
                exercise_count=len(exercise_ids),
                total_sets=len(sets),
            )
        )
    return out


def _as_utc(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


def weekly_workout_count(store: RecordStore, now: Optional[datetime] = None) -> int:
    days = get_settings().WEEKLY_WINDOW_DAYS
    cutoff = _as_utc(now or datetime.now(tz=timezone.utc)) - timedelta(days=days)
    return sum(1 for w in store.list_workouts() if _as_utc(w.created_at) >= cutoff)
