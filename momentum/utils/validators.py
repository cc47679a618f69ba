"""Input validation utilities."""

from typing import List, Sequence

from pydantic import ValidationError as PydanticValidationError

from momentum.models.analysis import SuggestedHabit
from momentum.models.habit import HabitCreate
from momentum.utils.exceptions import ValidationError


def validate_suggestion_indices(indices: Sequence[int], suggestion_count: int) -> List[int]:
    """
    Validate indices selecting suggested habits.

    Args:
        indices: Selected positions in the suggestion list
        suggestion_count: Number of available suggestions

    Returns:
        Validated indices, in the order given

    Raises:
        ValidationError: If nothing is selected or an index is out of range
    """
    if not indices:
        raise ValidationError("At least one suggestion must be selected")

    for index in indices:
        if index < 0 or index >= suggestion_count:
            raise ValidationError(f"Invalid suggestion index: {index}")

    return list(indices)


def habits_from_suggestions(
    goal_id: str,
    suggestions: Sequence[SuggestedHabit],
    indices: Sequence[int],
) -> List[HabitCreate]:
    """Turn the selected suggestions into habit creation payloads."""
    if not suggestions:
        raise ValidationError("No suggestions available")

    habits = []
    for index in validate_suggestion_indices(indices, len(suggestions)):
        suggestion = suggestions[index]
        try:
            habit = HabitCreate(
                goalId=goal_id,
                name=suggestion.name,
                description=suggestion.description,
                frequency=suggestion.frequency,
                frequencyTarget=suggestion.frequencyTarget,
                isAiSuggested=True,
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Suggestion {index} cannot become a habit: {e}") from e
        habits.append(habit)
    return habits
