"""Tests for input models and validation utilities."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from momentum.models.analysis import SuggestedHabit
from momentum.models.goal import GoalCreate, HabitsFromSuggestions
from momentum.models.habit import FrequencyType, HabitCreate
from momentum.utils.exceptions import ValidationError
from momentum.utils.validators import habits_from_suggestions, validate_suggestion_indices


@pytest.fixture
def suggestions(goal_payload):
    return [SuggestedHabit.model_validate(habit) for habit in goal_payload["suggestedHabits"]]


def test_validate_suggestion_indices_valid():
    """Test indices within range are returned as given."""
    assert validate_suggestion_indices([2, 0], 3) == [2, 0]


def test_validate_suggestion_indices_empty():
    """Test an empty selection is rejected."""
    with pytest.raises(ValidationError, match="At least one suggestion"):
        validate_suggestion_indices([], 3)


def test_validate_suggestion_indices_out_of_range():
    """Test indices outside the suggestion list are rejected."""
    with pytest.raises(ValidationError, match="Invalid suggestion index: 3"):
        validate_suggestion_indices([0, 3], 3)
    with pytest.raises(ValidationError):
        validate_suggestion_indices([-1], 3)


def test_habits_from_suggestions(suggestions):
    """Test selected suggestions become AI-suggested habits."""
    habits = habits_from_suggestions("goal-1", suggestions, [0, 2])

    assert [habit.name for habit in habits] == ["Run for 20 minutes", "Log every workout"]
    assert habits[0].frequency == FrequencyType.CUSTOM
    assert habits[0].frequencyTarget == 3
    assert all(habit.goalId == "goal-1" for habit in habits)
    assert all(habit.isAiSuggested for habit in habits)


def test_habits_from_suggestions_no_suggestions():
    """Test selecting from an empty suggestion list fails."""
    with pytest.raises(ValidationError, match="No suggestions available"):
        habits_from_suggestions("goal-1", [], [0])


def test_habits_from_suggestions_custom_without_target(suggestions):
    """Test a CUSTOM suggestion without a target cannot become a habit."""
    broken = suggestions[0].model_copy(update={"frequencyTarget": None})

    with pytest.raises(ValidationError, match="Suggestion 0 cannot become a habit"):
        habits_from_suggestions("goal-1", [broken], [0])


def test_habit_create_requires_custom_target():
    """Test CUSTOM habits need a frequency target."""
    with pytest.raises(PydanticValidationError, match="Frequency target is required"):
        HabitCreate(goalId="goal-1", name="Stretch", frequency="CUSTOM")

    habit = HabitCreate(goalId="goal-1", name="Stretch", frequency="DAILY")
    assert habit.frequencyTarget is None
    assert habit.isAiSuggested is False


def test_goal_create_limits():
    """Test goal title must be 1-200 characters."""
    with pytest.raises(PydanticValidationError):
        GoalCreate(title="")
    with pytest.raises(PydanticValidationError):
        GoalCreate(title="x" * 201)
    assert GoalCreate(title="Read more", category="LEARNING").category.value == "LEARNING"


def test_habits_from_suggestions_request():
    """Test selection requests hold 1-5 non-negative indices."""
    assert HabitsFromSuggestions(suggestionIndices=[0, 1]).suggestionIndices == [0, 1]
    with pytest.raises(PydanticValidationError):
        HabitsFromSuggestions(suggestionIndices=[])
    with pytest.raises(PydanticValidationError):
        HabitsFromSuggestions(suggestionIndices=[-1])
    with pytest.raises(PydanticValidationError):
        HabitsFromSuggestions(suggestionIndices=[0, 1, 2, 3, 4, 5])
