from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from gymlog.config import get_settings
from gymlog.models import ExerciseProgress, WorkoutSet, WorkoutSummary
from gymlog.models.progress import max_weight, total_volume
from gymlog.store import RecordStore

logger = logging.getLogger(__name__)


def find_previous_workout(store: RecordStore, exercise_id: int, reference_workout_id: int) -> Optional[int]:
    """Return the latest workout before reference_workout_id that has a set of exercise_id.

    Workout ids are the ordering; a workout is never its own predecessor. The
    reference workout does not have to exist.
    """
    earlier = store.list_sets_for_exercise(exercise_id, before_workout_id=reference_workout_id)
    return max((s.workout_id for s in earlier), default=None)


def compute_progress(
    exercise_id: int,
    exercise_name: str,
    current_sets: Sequence[WorkoutSet],
    previous_sets: Sequence[WorkoutSet],
    previous_workout_id: Optional[int] = None,
) -> ExerciseProgress:
    """Compare one exercise's sets against its previous session.

    Rules:
    - Max weight of an empty list is 0.
    - Without previous sets there is no baseline: both changes are 0 and it is not a PR.
    - A PR needs a strictly higher max weight than last time; ties do not count.
    """
    current = list(current_sets)
    previous = list(previous_sets)

    current_max = max_weight(current)
    previous_max = max_weight(previous)

    if previous:
        weight_change = current_max - previous_max
        volume_change = total_volume(current) - total_volume(previous)
    else:
        weight_change = 0.0
        volume_change = 0.0

    return ExerciseProgress(
        exercise_id=exercise_id,
        exercise_name=exercise_name,
        current_sets=current,
        previous_sets=previous,
        previous_workout_id=previous_workout_id if previous else None,
        weight_change=weight_change,
        volume_change=volume_change,
        is_pr=bool(previous) and current_max > previous_max,
    )


def _sets_in_workout(store: RecordStore, workout_id: int, exercise_id: int) -> List[WorkoutSet]:
    return [s for s in store.list_sets(workout_id) if s.exercise_id == exercise_id]


def _group_by_exercise(sets: Sequence[WorkoutSet]) -> Dict[int, List[WorkoutSet]]:
    # dicts keep insertion order: first appearance of each exercise wins
    groups: Dict[int, List[WorkoutSet]] = {}
    for s in sets:
        groups.setdefault(s.exercise_id, []).append(s)
    return groups


def summarize_workout(store: RecordStore, workout_id: int) -> WorkoutSummary:
    """Build the progress summary of a workout from the store's current state.

    A missing workout, or one without sets, yields a summary with zero totals.
    Callers that need to tell the two apart check store.workout_exists first.
    """
    settings = get_settings()
    sets = store.list_sets(workout_id)
    groups = _group_by_exercise(sets)
    names = store.exercise_names() if groups else {}

    exercises_progress: List[ExerciseProgress] = []
    for exercise_id, current_sets in groups.items():
        previous_id = find_previous_workout(store, exercise_id, workout_id)
        previous_sets = _sets_in_workout(store, previous_id, exercise_id) if previous_id is not None else []
        exercises_progress.append(
            compute_progress(
                exercise_id,
                names.get(exercise_id, settings.UNKNOWN_EXERCISE_NAME),
                current_sets,
                previous_sets,
                previous_workout_id=previous_id,
            )
        )

    workout = store.get_workout(workout_id)
    if workout is None:
        logger.info("Workout %d not found; returning an empty summary", workout_id)

    summary = WorkoutSummary(
        workout_id=workout_id,
        total_exercises=len(groups),
        total_sets=len(sets),
        total_volume=total_volume(sets),
        duration_minutes=workout.duration_minutes if workout else 0,
        exercises_progress=exercises_progress,
    )
    logger.debug(
        "Summarized workout %d: %d exercises, %d sets, volume=%.1f, prs=%d",
        workout_id,
        summary.total_exercises,
        summary.total_sets,
        summary.total_volume,
        summary.pr_count,
    )
    return summary


def last_session_sets(store: RecordStore, exercise_id: int, workout_id: int) -> List[WorkoutSet]:
    """Sets of exercise_id in the latest earlier workout that had it, for "last time" hints."""
    previous_id = find_previous_workout(store, exercise_id, workout_id)
    if previous_id is None:
        return []
    return _sets_in_workout(store, previous_id, exercise_id)


def previous_set_at(store: RecordStore, exercise_id: int, workout_id: int, position: int) -> Optional[WorkoutSet]:
    """Set at the same 1-based position of the exercise in its previous session."""
    if position < 1:
        return None
    previous = last_session_sets(store, exercise_id, workout_id)
    if position > len(previous):
        return None
    return previous[position - 1]


def comparison_series(summary: WorkoutSummary) -> Dict[str, List]:
    """Per-exercise volumes for a Today vs Last Time chart."""
    return {
        "labels": [p.exercise_name for p in summary.exercises_progress],
        "current": [p.current_volume for p in summary.exercises_progress],
        "previous": [p.previous_volume for p in summary.exercises_progress],
    }
