from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Workout(BaseModel):
    id: int = Field(..., ge=1)
    created_at: datetime
    notes: Optional[str] = None
    finished_at: Optional[datetime] = None

    @property
    def duration_minutes(self) -> int:
        if self.finished_at is None:
            return 0
        seconds = (self.finished_at - self.created_at).total_seconds()
        return max(0, int(seconds // 60))


class WorkoutExercise(BaseModel):
    """Exercise planned for a workout, whether or not any set was logged yet."""

    id: int = Field(..., ge=1)
    workout_id: int
    exercise_id: int
    exercise_name: str = "Unknown"


class RecentWorkout(BaseModel):
    id: int
    created_at: datetime
    exercise_count: int = Field(..., ge=0)
    total_sets: int = Field(..., ge=0)
