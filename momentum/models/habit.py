"""Habit Pydantic models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class FrequencyType(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    CUSTOM = "CUSTOM"


class HabitStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"


class HabitCreate(BaseModel):
    """Payload for creating a habit under a goal."""

    goalId: str = Field(..., min_length=1, description="Owning goal ID")
    name: str = Field(..., min_length=1, max_length=100, description="Habit name")
    description: Optional[str] = Field(None, max_length=500, description="Habit description")
    frequency: FrequencyType = Field(..., description="How often the habit is performed")
    frequencyTarget: Optional[int] = Field(None, ge=1, le=7, description="Days per week for CUSTOM")
    isAiSuggested: bool = Field(False, description="Created from an AI suggestion")

    @model_validator(mode="after")
    def _require_custom_target(self) -> "HabitCreate":
        if self.frequency == FrequencyType.CUSTOM and not self.frequencyTarget:
            raise ValueError("Frequency target is required for custom frequency")
        return self


class HabitUpdate(BaseModel):
    """Partial update for a habit."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    frequency: Optional[FrequencyType] = None
    frequencyTarget: Optional[int] = Field(None, ge=1, le=7)
    status: Optional[HabitStatus] = None
