"""Pydantic models."""

from momentum.models.analysis import (
    GoalAnalysis,
    HabitAnalysis,
    SuggestedHabit,
)
from momentum.models.goal import (
    GoalCategory,
    GoalCreate,
    GoalStatus,
    GoalUpdate,
    HabitsFromSuggestions,
    InsightStatus,
)
from momentum.models.habit import (
    FrequencyType,
    HabitCreate,
    HabitStatus,
    HabitUpdate,
)

__all__ = [
    "FrequencyType",
    "GoalAnalysis",
    "GoalCategory",
    "GoalCreate",
    "GoalStatus",
    "GoalUpdate",
    "HabitAnalysis",
    "HabitCreate",
    "HabitStatus",
    "HabitUpdate",
    "HabitsFromSuggestions",
    "InsightStatus",
    "SuggestedHabit",
]
