from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .workout_set import WorkoutSet


def max_weight(sets: List[WorkoutSet]) -> float:
    return max((s.weight for s in sets), default=0.0)


def total_volume(sets: List[WorkoutSet]) -> float:
    return sum(s.volume for s in sets)


class ExerciseProgress(BaseModel):
    """Change of one exercise against the latest earlier session that had it.

    weight_change and volume_change are 0 when there is no earlier session;
    is_first_time tells that case apart from "no change".
    """

    exercise_id: int
    exercise_name: str
    current_sets: List[WorkoutSet] = Field(default_factory=list)
    previous_sets: List[WorkoutSet] = Field(default_factory=list)
    previous_workout_id: Optional[int] = None
    weight_change: float = 0.0
    volume_change: float = 0.0
    is_pr: bool = False

    model_config = {"frozen": True}

    @property
    def is_first_time(self) -> bool:
        return not self.previous_sets

    @property
    def current_max_weight(self) -> float:
        return max_weight(self.current_sets)

    @property
    def previous_max_weight(self) -> float:
        return max_weight(self.previous_sets)

    @property
    def current_volume(self) -> float:
        return total_volume(self.current_sets)

    @property
    def previous_volume(self) -> float:
        return total_volume(self.previous_sets)


class WorkoutSummary(BaseModel):
    workout_id: int
    total_exercises: int = Field(0, ge=0)
    total_sets: int = Field(0, ge=0)
    total_volume: float = 0.0
    duration_minutes: int = Field(0, ge=0)
    exercises_progress: List[ExerciseProgress] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def pr_count(self) -> int:
        return sum(1 for p in self.exercises_progress if p.is_pr)
