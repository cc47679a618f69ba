"""Prompt generation for goal and habit analysis."""

from typing import Optional


_GOAL_JSON_RULES = (
    "**CRITICAL JSON FORMATTING RULES:**\n"
    '- All text must use straight double quotes ("), not curly quotes\n'
    '- Escape all internal quotes with backslash (\\")\n'
    "- No line breaks within string values\n"
    "- Do not use apostrophes (') in contractions - write them out (don't -> do not)\n"
    "- Keep all text on single lines\n"
)

_HABIT_JSON_RULES = (
    "**CRITICAL JSON FORMATTING RULES:**\n"
    '- Use only straight double quotes ("), not curly quotes\n'
    "- Avoid apostrophes in contractions - write them out (don't -> do not)\n"
    "- Keep all text on a single line within the string\n"
    "- No line breaks within the research string value\n"
)


def build_goal_analysis_prompt(
    goal_title: str,
    goal_description: Optional[str] = None,
    category: Optional[str] = None,
) -> str:
    """Create a prompt that breaks a goal down into 3-5 suggested habits."""
    details = f"- Details: {goal_description}\n" if goal_description else ""
    category_line = f"- Category: {category}\n" if category else ""

    return (
        "You are a behavioral psychology expert specializing in goal achievement and habit formation.\n\n"
        "A user wants to achieve the following goal:\n"
        f"- Goal: {goal_title}\n"
        f"{details}"
        f"{category_line}\n"
        "**IMPORTANT SAFETY CHECK:**\n"
        "Before proceeding, verify this goal is constructive and does not involve:\n"
        "- Harm to self or others (physical, mental, emotional)\n"
        "- Illegal activities\n"
        "- Manipulation or deception\n"
        "- Unhealthy restrictions (extreme dieting, overwork, etc.)\n\n"
        "If the goal raises safety concerns, respond with an error message explaining why it cannot be supported.\n\n"
        "**Your Task:**\n"
        "Break down this goal into 3-5 specific, actionable habits that would help achieve it. Each habit should be:\n"
        "- Small and achievable (not overwhelming)\n"
        "- Challenging enough to create progress\n"
        "- Directly connected to the goal\n"
        "- Based on behavioral science principles\n\n"
        "For each suggested habit, provide:\n"
        "1. **name**: Concise, actionable habit (max 80 chars)\n"
        "2. **description**: Why it matters and how it contributes to the goal (max 250 chars - be concise!)\n"
        "3. **frequency**: Recommended frequency (DAILY, WEEKLY, or CUSTOM)\n"
        "4. **frequencyTarget**: If CUSTOM, number of days per week (1-7), otherwise null\n"
        "5. **rationale**: Why this habit is important for achieving the goal (max 150 chars - be brief!)\n"
        "6. **impact**: Estimated impact level (high/medium/low)\n"
        "7. **difficulty**: How challenging this habit is (easy/moderate/challenging)\n\n"
        "**IMPORTANT:** Keep your response concise to avoid truncation. "
        "Aim for brevity while maintaining clarity.\n\n"
        f"{_GOAL_JSON_RULES}\n"
        "Respond with ONLY valid JSON in this exact format (no markdown code fences, no backticks):\n"
        "{\n"
        '  "analysis": "Your understanding of the goal and approach in 100-200 words. Be concise. '
        'Use only straight quotes. Avoid apostrophes.",\n'
        '  "suggestedHabits": [\n'
        "    {\n"
        '      "name": "Meditate for 10 minutes",\n'
        '      "description": "Daily meditation reduces anxiety and improves focus.",\n'
        '      "frequency": "DAILY",\n'
        '      "frequencyTarget": null,\n'
        '      "rationale": "Builds mental resilience and stress management.",\n'
        '      "impact": "high",\n'
        '      "difficulty": "easy"\n'
        "    }\n"
        "  ]\n"
        "}"
    )


def describe_frequency(frequency: str, frequency_target: Optional[int]) -> str:
    """Human-readable target frequency for a habit."""
    if frequency == "CUSTOM" and frequency_target:
        return f"{frequency_target} times per week"
    if frequency == "DAILY":
        return "every day"
    return "once per week"


def build_habit_analysis_prompt(
    habit_name: str,
    description: Optional[str],
    frequency: str,
    frequency_target: Optional[int] = None,
) -> str:
    """Create a prompt asking for research on the challenges of one habit."""
    description_line = f"- Description: {description}\n" if description else ""

    return (
        "You are a behavioral psychology expert and coach specializing in habit formation.\n\n"
        "A user wants to build the following habit:\n"
        f"- Habit: {habit_name}\n"
        f"{description_line}"
        f"- Target frequency: {describe_frequency(frequency, frequency_target)}\n\n"
        "**Your Task:**\n"
        "Analyze the 3-5 most common challenges people face when building this specific habit, including:\n"
        "- Common failure patterns and what makes people give up\n"
        "- Environmental, psychological, and scheduling barriers specific to this habit\n"
        "- Evidence-based strategies that help with adherence\n\n"
        "Be specific to this exact habit - do not give generic habit advice. "
        "Provide actionable insights the user can apply immediately.\n\n"
        f"{_HABIT_JSON_RULES}\n"
        "Respond with ONLY valid JSON in this exact format (no markdown code fences, no backticks):\n"
        "{\n"
        '  "research": "Your research analysis here as a single string. Use only straight quotes. '
        'Avoid apostrophes in contractions."\n'
        "}"
    )
