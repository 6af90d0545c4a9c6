from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


Unit = Literal["kg", "lb"]


class UserProfile(BaseModel):
    name: str = ""
    weight: float = Field(0.0, ge=0, description="body weight in the chosen unit")
    height: float = Field(0.0, ge=0, description="height in cm")
    goal: str = ""
    unit: Unit = "kg"
