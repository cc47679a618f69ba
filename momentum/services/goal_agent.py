"""Goal analysis agent: one LLM call producing analysis and habit suggestions."""

from __future__ import annotations

from typing import Optional

from momentum.models.analysis import GoalAnalysis
from momentum.models.goal import GoalCreate
from momentum.services.analysis_agent import AnalysisAgent, InsightResult
from momentum.services.prompt_service import build_goal_analysis_prompt


class GoalAgent(AnalysisAgent[GoalAnalysis]):
    """Breaks a goal down into 3-5 suggested habits."""

    trace_name = "goal-analysis"
    schema = GoalAnalysis

    async def analyze(
        self,
        goal: GoalCreate,
        *,
        goal_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> InsightResult[GoalAnalysis]:
        category = goal.category.value if goal.category else None
        prompt = build_goal_analysis_prompt(goal.title, goal.description, category)

        return await self._run(
            prompt,
            trace_input={
                "goalId": goal_id,
                "goalTitle": goal.title,
                "description": goal.description,
                "category": category,
            },
            trace_metadata={"userId": user_id, "goalId": goal_id},
            tags=[tag for tag in (goal_id, user_id) if tag],
        )
