from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class WorkoutTemplate(BaseModel):
    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    created_at: datetime


class TemplateExercise(BaseModel):
    id: int = Field(..., ge=1)
    template_id: int
    exercise_id: int
    order_index: int = Field(..., ge=0)
    exercise_name: str = "Unknown"
