"""Pytest configuration and fixtures."""

import copy
import json
from typing import List, Optional

import pytest

from momentum.services.gemini_service import GenerationResult

ANALYSIS_TEXT = (
    "Finishing a first 10k comes down to gradual weekly volume, "
    "easy pacing on most runs and enough recovery between sessions."
)

HABITS = [
    {
        "name": "Run for 20 minutes",
        "description": "Short easy runs build an aerobic base without overloading the legs.",
        "frequency": "CUSTOM",
        "frequencyTarget": 3,
        "rationale": "Consistency matters more than distance early on.",
        "impact": "high",
        "difficulty": "moderate",
    },
    {
        "name": "Lay out running gear the night before",
        "description": "Removes morning friction so the run starts on time.",
        "frequency": "DAILY",
        "frequencyTarget": 7,
        "rationale": "Lower friction makes starting easier.",
        "impact": "medium",
        "difficulty": "easy",
    },
    {
        "name": "Log every workout",
        "description": "A simple training log shows progress and flags overtraining early.",
        "frequency": "WEEKLY",
        "frequencyTarget": 1,
        "rationale": "Visible progress keeps motivation up.",
        "impact": "medium",
        "difficulty": "easy",
    },
]

RESEARCH_TEXT = (
    "Most people stop journaling after the first week because sessions feel open ended. "
    "Anchoring the habit to an existing evening routine and using a single prompt keeps it short."
)


@pytest.fixture
def goal_payload() -> dict:
    """Valid goal analysis payload with three suggestions."""
    return {"analysis": ANALYSIS_TEXT, "suggestedHabits": copy.deepcopy(HABITS)}


@pytest.fixture
def goal_json(goal_payload: dict) -> str:
    """Clean goal analysis JSON text."""
    return json.dumps(goal_payload)


@pytest.fixture
def habit_json() -> str:
    """Clean habit analysis JSON text."""
    return json.dumps({"research": RESEARCH_TEXT})


class FakeGenerator:
    """Stand-in for GeminiService returning canned text."""

    model_id = "fake-model"
    provider = "fake"
    temperature = 0.0
    max_tokens: Optional[int] = None

    def __init__(self, text: str = "", error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    async def generate_text(self, prompt: str) -> GenerationResult:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return GenerationResult(
            text=self.text,
            usage={"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
        )


class RecordingSink:
    """Telemetry sink that keeps submitted traces."""

    def __init__(self) -> None:
        self.traces = []
        self.flushes = 0

    def submit(self, trace) -> None:
        self.traces.append(trace)

    def flush(self) -> None:
        self.flushes += 1


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
