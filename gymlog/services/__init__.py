from .progress import (
    find_previous_workout,
    compute_progress,
    summarize_workout,
    last_session_sets,
    previous_set_at,
    comparison_series,
)
from .history import recent_workouts, weekly_workout_count
from .templates import create_template_with_exercises, start_workout_from_template
from .export import to_csv, to_markdown, to_pdf

__all__ = [
    "find_previous_workout",
    "compute_progress",
    "summarize_workout",
    "last_session_sets",
    "previous_set_at",
    "comparison_series",
    "recent_workouts",
    "weekly_workout_count",
    "create_template_with_exercises",
    "start_workout_from_template",
    "to_csv",
    "to_markdown",
    "to_pdf",
]
