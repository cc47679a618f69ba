"""Pydantic models for AI analysis responses."""

from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field, StrictInt, StrictStr


def _integral_float_to_int(value: Any) -> Any:
    # 3.0 is a valid JSON integer; strings, bools and fractions still fail
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


DaysPerWeek = Annotated[StrictInt, Field(ge=1, le=7), BeforeValidator(_integral_float_to_int)]


class SuggestedHabit(BaseModel):
    """Single habit suggested by goal analysis."""

    name: StrictStr = Field(..., max_length=100, description="Concise, actionable habit")
    description: StrictStr = Field(
        ..., max_length=300, description="Why it matters and how it contributes to the goal"
    )
    frequency: Literal["DAILY", "WEEKLY", "CUSTOM"] = Field(..., description="Recommended frequency")
    frequencyTarget: Optional[DaysPerWeek] = Field(
        ..., description="Days per week for CUSTOM frequency, otherwise null"
    )
    rationale: StrictStr = Field(..., max_length=200, description="Why this habit matters for the goal")
    impact: Literal["high", "medium", "low"] = Field(..., description="Estimated impact level")
    difficulty: Literal["easy", "moderate", "challenging"] = Field(..., description="How challenging it is")


class GoalAnalysis(BaseModel):
    """Goal analysis result: free-text analysis plus 3-5 habit suggestions."""

    analysis: StrictStr = Field(..., min_length=50, description="Understanding of the goal and approach")
    suggestedHabits: List[SuggestedHabit] = Field(
        ..., min_length=3, max_length=5, description="Suggested habits in priority order"
    )


class HabitAnalysis(BaseModel):
    """Habit analysis result: coaching research for one habit."""

    research: StrictStr = Field(..., description="Common challenges and evidence-based strategies")
