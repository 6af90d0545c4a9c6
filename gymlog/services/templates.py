from __future__ import annotations

import logging
from typing import Optional, Sequence

from gymlog.models import Workout, WorkoutTemplate
from gymlog.store import NotFoundError, RecordStore

logger = logging.getLogger(__name__)


def create_template_with_exercises(
    store: RecordStore,
    name: str,
    exercise_ids: Sequence[int],
    description: Optional[str] = None,
) -> WorkoutTemplate:
    if not name.strip():
        raise ValueError("Template name must not be empty")
    template = store.create_template(name.strip(), description)
    for order_index, exercise_id in enumerate(exercise_ids):
        store.add_template_exercise(template.id, exercise_id, order_index)
    logger.info("Created template %d (%s) with %d exercises", template.id, template.name, len(exercise_ids))
    return template


def start_workout_from_template(store: RecordStore, template_id: int) -> Workout:
    """Create a workout with the template's exercises linked in template order."""
    template = store.get_template(template_id)
    if template is None:
        raise NotFoundError(f"Template {template_id} does not exist.")
    workout = store.create_workout(notes=f"From template: {template.name}")
    for te in store.list_template_exercises(template_id):
        store.add_workout_exercise(workout.id, te.exercise_id)
    logger.info("Started workout %d from template %d", workout.id, template_id)
    return workout
