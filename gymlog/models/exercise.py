from __future__ import annotations

from pydantic import BaseModel, Field


MuscleGroup = str


class Exercise(BaseModel):
    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    muscle_group: MuscleGroup = ""
    is_custom: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 2,
                    "name": "Squat",
                    "muscle_group": "Legs",
                    "is_custom": False,
                }
            ]
        }
    }


# Seeded into an empty store, in this order
DEFAULT_EXERCISES: list[tuple[str, MuscleGroup]] = [
    ("Bench Press", "Chest"),
    ("Squat", "Legs"),
    ("Deadlift", "Back"),
    ("Overhead Press", "Shoulders"),
    ("Pull Up", "Back"),
    ("Dumbbell Curl", "Biceps"),
    ("Tricep Extension", "Triceps"),
    ("Lat Pulldown", "Back"),
    ("Leg Press", "Legs"),
    ("Lunge", "Legs"),
]
