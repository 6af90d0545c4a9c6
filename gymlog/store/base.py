"""Record store interface shared by the SQLite and in-memory backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from gymlog.models import (
    Exercise,
    TemplateExercise,
    UserProfile,
    Workout,
    WorkoutExercise,
    WorkoutSet,
    WorkoutTemplate,
)


class StoreError(RuntimeError):
    pass


class NotFoundError(StoreError):
    """A write referenced a workout, exercise, set or template that does not exist."""


def check_set_values(weight: float, reps: int) -> None:
    if weight < 0:
        raise ValueError(f"weight must be >= 0, got {weight}")
    if reps < 1:
        raise ValueError(f"reps must be >= 1, got {reps}")


class RecordStore(ABC):
    """CRUD and simple filtered queries over the tracker's records.

    Workout ids are assigned in creation order and never reused; they are the
    authoritative order for "previous session" lookups.
    """

    # ----- exercises -----

    @abstractmethod
    def list_exercises(self) -> List[Exercise]:
        """All exercises ordered by name."""

    @abstractmethod
    def get_exercise(self, exercise_id: int) -> Optional[Exercise]: ...

    @abstractmethod
    def add_exercise(self, name: str, muscle_group: str, is_custom: bool = True) -> Exercise: ...

    @abstractmethod
    def update_exercise(
        self, exercise_id: int, name: Optional[str] = None, muscle_group: Optional[str] = None
    ) -> Exercise: ...

    def exercise_names(self) -> Dict[int, str]:
        return {ex.id: ex.name for ex in self.list_exercises()}

    # ----- workouts -----

    @abstractmethod
    def create_workout(self, notes: Optional[str] = None, created_at: Optional[datetime] = None) -> Workout: ...

    @abstractmethod
    def get_workout(self, workout_id: int) -> Optional[Workout]: ...

    @abstractmethod
    def list_workouts(self) -> List[Workout]:
        """All workouts, oldest (lowest id) first."""

    def workout_exists(self, workout_id: int) -> bool:
        return self.get_workout(workout_id) is not None

    @abstractmethod
    def finish_workout(self, workout_id: int, finished_at: Optional[datetime] = None) -> Workout: ...

    @abstractmethod
    def delete_workout(self, workout_id: int) -> None:
        """Delete a workout with its sets and exercise links. Missing ids are ignored."""

    # ----- sets -----

    @abstractmethod
    def add_set(
        self,
        workout_id: int,
        exercise_id: int,
        weight: float,
        reps: int,
        set_order: Optional[int] = None,
    ) -> WorkoutSet:
        """Append a set; set_order defaults to the next position in the workout.

        Also links the exercise to the workout if it was not linked yet.
        """

    @abstractmethod
    def update_set(self, set_id: int, weight: float, reps: int) -> WorkoutSet: ...

    @abstractmethod
    def delete_set(self, set_id: int) -> None: ...

    @abstractmethod
    def list_sets(self, workout_id: int) -> List[WorkoutSet]:
        """Sets of a workout ordered by set_order, then id."""

    @abstractmethod
    def list_sets_for_exercise(
        self, exercise_id: int, before_workout_id: Optional[int] = None
    ) -> List[WorkoutSet]:
        """Sets of an exercise across workouts, ordered by workout id then set_order.

        With before_workout_id, only workouts whose id is strictly lower are included.
        """

    # ----- workout/exercise links -----

    @abstractmethod
    def add_workout_exercise(self, workout_id: int, exercise_id: int) -> WorkoutExercise: ...

    @abstractmethod
    def list_workout_exercises(self, workout_id: int) -> List[WorkoutExercise]: ...

    # ----- templates -----

    @abstractmethod
    def create_template(self, name: str, description: Optional[str] = None) -> WorkoutTemplate: ...

    @abstractmethod
    def list_templates(self) -> List[WorkoutTemplate]:
        """Templates, newest first."""

    @abstractmethod
    def get_template(self, template_id: int) -> Optional[WorkoutTemplate]: ...

    @abstractmethod
    def delete_template(self, template_id: int) -> None: ...

    @abstractmethod
    def add_template_exercise(self, template_id: int, exercise_id: int, order_index: int) -> TemplateExercise: ...

    @abstractmethod
    def list_template_exercises(self, template_id: int) -> List[TemplateExercise]: ...

    @abstractmethod
    def remove_template_exercise(self, template_exercise_id: int) -> None: ...

    # ----- user -----

    @abstractmethod
    def get_user(self) -> Optional[UserProfile]: ...

    @abstractmethod
    def save_user(self, profile: UserProfile) -> UserProfile: ...

    def close(self) -> None:
        return None
