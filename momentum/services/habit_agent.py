"""Habit analysis agent: one LLM call producing coaching research."""

from __future__ import annotations

from typing import Optional

from momentum.models.analysis import HabitAnalysis
from momentum.models.habit import HabitCreate
from momentum.services.analysis_agent import AnalysisAgent, InsightResult
from momentum.services.prompt_service import build_habit_analysis_prompt


class HabitAgent(AnalysisAgent[HabitAnalysis]):
    """Researches the common challenges of building one habit."""

    trace_name = "habit-analysis"
    schema = HabitAnalysis

    async def analyze(
        self,
        habit: HabitCreate,
        *,
        habit_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> InsightResult[HabitAnalysis]:
        frequency = habit.frequency.value
        prompt = build_habit_analysis_prompt(habit.name, habit.description, frequency, habit.frequencyTarget)

        return await self._run(
            prompt,
            trace_input={
                "habitId": habit_id,
                "habitName": habit.name,
                "description": habit.description,
                "frequency": frequency,
                "frequencyTarget": habit.frequencyTarget,
            },
            trace_metadata={"userId": user_id, "habitId": habit_id},
            tags=[tag for tag in (habit_id, user_id) if tag],
        )
