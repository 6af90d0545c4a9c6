"""In-memory record store, used for tests, demos and the `memory` backend."""

from __future__ import annotations

import itertools
import logging
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional

from gymlog.config import get_settings
from gymlog.models import (
    DEFAULT_EXERCISES,
    Exercise,
    TemplateExercise,
    UserProfile,
    Workout,
    WorkoutExercise,
    WorkoutSet,
    WorkoutTemplate,
)
from .base import NotFoundError, RecordStore, check_set_values

logger = logging.getLogger(__name__)


class InMemoryStore(RecordStore):
    def __init__(self, seed: bool = True) -> None:
        self._exercises: Dict[int, Exercise] = {}
        self._workouts: Dict[int, Workout] = {}
        self._sets: Dict[int, WorkoutSet] = {}
        self._links: Dict[int, WorkoutExercise] = {}
        self._templates: Dict[int, WorkoutTemplate] = {}
        self._template_exercises: Dict[int, TemplateExercise] = {}
        self._user: Optional[UserProfile] = None
        # Separate counters so ids stay monotonic after deletions
        self._ids: Dict[str, Iterator[int]] = {
            name: itertools.count(1)
            for name in ("exercise", "workout", "set", "link", "template", "template_exercise")
        }
        if seed:
            for name, muscle in DEFAULT_EXERCISES:
                self.add_exercise(name, muscle, is_custom=False)
            logger.debug("Seeded %d default exercises", len(DEFAULT_EXERCISES))

    def _next_id(self, kind: str) -> int:
        return next(self._ids[kind])

    def _unknown(self) -> str:
        return get_settings().UNKNOWN_EXERCISE_NAME

    # ----- exercises -----

    def list_exercises(self) -> List[Exercise]:
        return sorted(self._exercises.values(), key=lambda ex: (ex.name, ex.id))

    def get_exercise(self, exercise_id: int) -> Optional[Exercise]:
        return self._exercises.get(exercise_id)

    def add_exercise(self, name: str, muscle_group: str, is_custom: bool = True) -> Exercise:
        ex = Exercise(id=self._next_id("exercise"), name=name, muscle_group=muscle_group, is_custom=is_custom)
        self._exercises[ex.id] = ex
        return ex

    def update_exercise(
        self, exercise_id: int, name: Optional[str] = None, muscle_group: Optional[str] = None
    ) -> Exercise:
        ex = self._exercises.get(exercise_id)
        if ex is None:
            raise NotFoundError(f"Exercise {exercise_id} does not exist.")
        changes = {}
        if name is not None:
            changes["name"] = name
        if muscle_group is not None:
            changes["muscle_group"] = muscle_group
        updated = Exercise.model_validate({**ex.model_dump(), **changes})
        self._exercises[exercise_id] = updated
        return updated

    # ----- workouts -----

    def create_workout(self, notes: Optional[str] = None, created_at: Optional[datetime] = None) -> Workout:
        w = Workout(
            id=self._next_id("workout"),
            created_at=created_at or datetime.now(tz=timezone.utc),
            notes=notes,
        )
        self._workouts[w.id] = w
        return w

    def get_workout(self, workout_id: int) -> Optional[Workout]:
        return self._workouts.get(workout_id)

    def list_workouts(self) -> List[Workout]:
        return [self._workouts[k] for k in sorted(self._workouts)]

    def finish_workout(self, workout_id: int, finished_at: Optional[datetime] = None) -> Workout:
        w = self._workouts.get(workout_id)
        if w is None:
            raise NotFoundError(f"Workout {workout_id} does not exist.")
        updated = w.model_copy(update={"finished_at": finished_at or datetime.now(tz=timezone.utc)})
        self._workouts[workout_id] = updated
        return updated

    def delete_workout(self, workout_id: int) -> None:
        self._sets = {k: s for k, s in self._sets.items() if s.workout_id != workout_id}
        self._links = {k: we for k, we in self._links.items() if we.workout_id != workout_id}
        if self._workouts.pop(workout_id, None) is not None:
            logger.info("Deleted workout %d", workout_id)

    # ----- sets -----

    def add_set(
        self,
        workout_id: int,
        exercise_id: int,
        weight: float,
        reps: int,
        set_order: Optional[int] = None,
    ) -> WorkoutSet:
        check_set_values(weight, reps)
        if workout_id not in self._workouts:
            raise NotFoundError(f"Workout {workout_id} does not exist.")
        if exercise_id not in self._exercises:
            raise NotFoundError(f"Exercise {exercise_id} does not exist.")
        if set_order is None:
            orders = [s.set_order for s in self._sets.values() if s.workout_id == workout_id]
            set_order = max(orders, default=0) + 1
        s = WorkoutSet(
            id=self._next_id("set"),
            workout_id=workout_id,
            exercise_id=exercise_id,
            weight=weight,
            reps=reps,
            set_order=set_order,
        )
        self._sets[s.id] = s
        self.add_workout_exercise(workout_id, exercise_id)
        return s

    def update_set(self, set_id: int, weight: float, reps: int) -> WorkoutSet:
        check_set_values(weight, reps)
        s = self._sets.get(set_id)
        if s is None:
            raise NotFoundError(f"Set {set_id} does not exist.")
        updated = s.model_copy(update={"weight": float(weight), "reps": int(reps)})
        self._sets[set_id] = updated
        return updated

    def delete_set(self, set_id: int) -> None:
        self._sets.pop(set_id, None)

    def list_sets(self, workout_id: int) -> List[WorkoutSet]:
        out = [s for s in self._sets.values() if s.workout_id == workout_id]
        out.sort(key=lambda s: (s.set_order, s.id))
        return out

    def list_sets_for_exercise(
        self, exercise_id: int, before_workout_id: Optional[int] = None
    ) -> List[WorkoutSet]:
        out = [
            s
            for s in self._sets.values()
            if s.exercise_id == exercise_id and (before_workout_id is None or s.workout_id < before_workout_id)
        ]
        out.sort(key=lambda s: (s.workout_id, s.set_order, s.id))
        return out

    # ----- workout/exercise links -----

    def add_workout_exercise(self, workout_id: int, exercise_id: int) -> WorkoutExercise:
        if workout_id not in self._workouts:
            raise NotFoundError(f"Workout {workout_id} does not exist.")
        ex = self._exercises.get(exercise_id)
        if ex is None:
            raise NotFoundError(f"Exercise {exercise_id} does not exist.")
        for we in self._links.values():
            if we.workout_id == workout_id and we.exercise_id == exercise_id:
                return we
        we = WorkoutExercise(
            id=self._next_id("link"),
            workout_id=workout_id,
            exercise_id=exercise_id,
            exercise_name=ex.name,
        )
        self._links[we.id] = we
        return we

    def list_workout_exercises(self, workout_id: int) -> List[WorkoutExercise]:
        out: List[WorkoutExercise] = []
        for k in sorted(self._links):
            we = self._links[k]
            if we.workout_id != workout_id:
                continue
            # Names are resolved at read time so renames show up
            ex = self._exercises.get(we.exercise_id)
            out.append(we.model_copy(update={"exercise_name": ex.name if ex else self._unknown()}))
        return out

    # ----- templates -----

    def create_template(self, name: str, description: Optional[str] = None) -> WorkoutTemplate:
        t = WorkoutTemplate(
            id=self._next_id("template"),
            name=name,
            description=description,
            created_at=datetime.now(tz=timezone.utc),
        )
        self._templates[t.id] = t
        return t

    def list_templates(self) -> List[WorkoutTemplate]:
        return sorted(self._templates.values(), key=lambda t: (t.created_at, t.id), reverse=True)

    def get_template(self, template_id: int) -> Optional[WorkoutTemplate]:
        return self._templates.get(template_id)

    def delete_template(self, template_id: int) -> None:
        self._template_exercises = {
            k: te for k, te in self._template_exercises.items() if te.template_id != template_id
        }
        self._templates.pop(template_id, None)

    def add_template_exercise(self, template_id: int, exercise_id: int, order_index: int) -> TemplateExercise:
        if template_id not in self._templates:
            raise NotFoundError(f"Template {template_id} does not exist.")
        ex = self._exercises.get(exercise_id)
        if ex is None:
            raise NotFoundError(f"Exercise {exercise_id} does not exist.")
        te = TemplateExercise(
            id=self._next_id("template_exercise"),
            template_id=template_id,
            exercise_id=exercise_id,
            order_index=order_index,
            exercise_name=ex.name,
        )
        self._template_exercises[te.id] = te
        return te

    def list_template_exercises(self, template_id: int) -> List[TemplateExercise]:
        out: List[TemplateExercise] = []
        for te in self._template_exercises.values():
            if te.template_id != template_id:
                continue
            ex = self._exercises.get(te.exercise_id)
            out.append(te.model_copy(update={"exercise_name": ex.name if ex else self._unknown()}))
        out.sort(key=lambda te: (te.order_index, te.id))
        return out

    def remove_template_exercise(self, template_exercise_id: int) -> None:
        self._template_exercises.pop(template_exercise_id, None)

    # ----- user -----

    def get_user(self) -> Optional[UserProfile]:
        return self._user

    def save_user(self, profile: UserProfile) -> UserProfile:
        self._user = profile.model_copy()
        return self._user
