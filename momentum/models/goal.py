"""Goal Pydantic models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, NonNegativeInt


class GoalCategory(str, Enum):
    HEALTH = "HEALTH"
    FITNESS = "FITNESS"
    PRODUCTIVITY = "PRODUCTIVITY"
    LEARNING = "LEARNING"
    MINDFULNESS = "MINDFULNESS"
    RELATIONSHIPS = "RELATIONSHIPS"
    CAREER = "CAREER"
    FINANCE = "FINANCE"
    PERSONAL = "PERSONAL"
    OTHER = "OTHER"


class GoalStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    ACHIEVED = "ACHIEVED"
    ABANDONED = "ABANDONED"


class InsightStatus(str, Enum):
    """Lifecycle of an AI insight attached to a goal or habit."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class GoalCreate(BaseModel):
    """Payload for creating a goal."""

    title: str = Field(..., min_length=1, max_length=200, description="Goal title")
    description: Optional[str] = Field(None, max_length=1000, description="Free-form details")
    category: Optional[GoalCategory] = Field(None, description="Goal category")
    targetDate: Optional[datetime] = Field(None, description="Target completion date")


class GoalUpdate(BaseModel):
    """Partial update for a goal."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    category: Optional[GoalCategory] = None
    status: Optional[GoalStatus] = None
    targetDate: Optional[datetime] = None


class HabitsFromSuggestions(BaseModel):
    """Selection of suggested habits to turn into real habits."""

    suggestionIndices: List[NonNegativeInt] = Field(..., min_length=1, max_length=5)
