"""Tests for prompt generation."""

from momentum.services.prompt_service import (
    build_goal_analysis_prompt,
    build_habit_analysis_prompt,
    describe_frequency,
)


def test_goal_prompt_includes_goal_details():
    """Test goal prompt lists title, description and category."""
    prompt = build_goal_analysis_prompt("Learn Spanish", "Hold a conversation by summer", "LEARNING")

    assert "- Goal: Learn Spanish" in prompt
    assert "- Details: Hold a conversation by summer" in prompt
    assert "- Category: LEARNING" in prompt
    assert "3-5 specific, actionable habits" in prompt


def test_goal_prompt_omits_missing_details():
    """Test optional lines are left out when not given."""
    prompt = build_goal_analysis_prompt("Learn Spanish")

    assert "- Details:" not in prompt
    assert "- Category:" not in prompt


def test_goal_prompt_formatting_rules():
    """Test goal prompt asks for plain JSON without fences or contractions."""
    prompt = build_goal_analysis_prompt("Learn Spanish")

    assert "CRITICAL JSON FORMATTING RULES" in prompt
    assert "no markdown code fences" in prompt
    assert '"suggestedHabits"' in prompt
    assert '"frequencyTarget": null' in prompt
    assert prompt.rstrip().endswith("}")


def test_describe_frequency():
    """Test frequency descriptions."""
    assert describe_frequency("DAILY", None) == "every day"
    assert describe_frequency("WEEKLY", None) == "once per week"
    assert describe_frequency("CUSTOM", 3) == "3 times per week"
    assert describe_frequency("CUSTOM", None) == "once per week"


def test_habit_prompt():
    """Test habit prompt describes the habit and the expected JSON."""
    prompt = build_habit_analysis_prompt("Meditate", "Ten minutes after waking", "DAILY")

    assert "- Habit: Meditate" in prompt
    assert "- Description: Ten minutes after waking" in prompt
    assert "- Target frequency: every day" in prompt
    assert '"research"' in prompt
    assert "CRITICAL JSON FORMATTING RULES" in prompt


def test_habit_prompt_without_description():
    """Test habit prompt skips an empty description."""
    prompt = build_habit_analysis_prompt("Meditate", None, "CUSTOM", 5)

    assert "- Description:" not in prompt
    assert "- Target frequency: 5 times per week" in prompt
