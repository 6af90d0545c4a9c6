from __future__ import annotations

from pydantic import BaseModel, Field


class WorkoutSet(BaseModel):
    id: int = Field(..., ge=1)
    workout_id: int
    exercise_id: int
    weight: float = Field(..., ge=0)
    reps: int = Field(..., ge=0)
    set_order: int = Field(..., ge=1)

    @property
    def volume(self) -> float:
        return self.weight * self.reps
