"""Shared flow for AI analysis agents: prompt, generate, parse, report."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Generic, List, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel

from momentum.core.telemetry import (
    AnalysisTrace,
    NoopTelemetrySink,
    TelemetrySink,
    robustness_metadata,
    robustness_tags,
)
from momentum.models.goal import InsightStatus
from momentum.services.analysis_parser import parse_analysis
from momentum.services.gemini_service import GenerationResult
from momentum.services.json_robustness import RobustnessScore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class TextGenerator(Protocol):
    """Anything that turns a prompt into raw completion text."""

    model_id: str
    provider: str
    temperature: float
    max_tokens: Optional[int]

    async def generate_text(self, prompt: str) -> GenerationResult: ...


class InsightResult(BaseModel, Generic[T]):
    """Outcome of one analysis run, ready to be stored by the caller."""

    status: InsightStatus
    data: Optional[T] = None
    error_message: Optional[str] = None
    robustness: Optional[RobustnessScore] = None
    trace_id: Optional[str] = None


class AnalysisAgent(Generic[T]):
    """Runs a single LLM analysis and reports it to the telemetry sink."""

    trace_name: str = "analysis"
    schema: Type[T]

    def __init__(self, client: TextGenerator, telemetry: Optional[TelemetrySink] = None) -> None:
        self.client = client
        self.telemetry = telemetry or NoopTelemetrySink()

    def _model_metadata(self) -> Dict[str, Any]:
        return {
            "model": self.client.model_id,
            "provider": self.client.provider,
            "temperature": self.client.temperature,
            "max_tokens": self.client.max_tokens,
        }

    async def _run(
        self,
        prompt: str,
        *,
        trace_input: Dict[str, Any],
        trace_metadata: Dict[str, Any],
        tags: List[str],
    ) -> InsightResult[T]:
        start = time.monotonic()
        trace = AnalysisTrace(
            name=self.trace_name,
            input={**trace_input, "prompt": prompt},
            metadata={**trace_metadata, **self._model_metadata()},
            tags=[self.trace_name, *tags],
        )

        try:
            logger.info("[%s] Using model: %s", self.trace_name, self.client.model_id)
            generation = await self.client.generate_text(prompt)
            trace.metadata["usage"] = generation.usage

            parsed = parse_analysis(generation.text, self.schema)
            robustness = parsed.robustness

            trace.output = {"status": InsightStatus.COMPLETED.value, **parsed.data.model_dump(mode="json")}
            trace.metadata.update(
                {
                    "durationMs": (time.monotonic() - start) * 1000,
                    "totalTokens": generation.usage.get("total_tokens", 0),
                    **robustness_metadata(robustness),
                }
            )
            trace.tags.extend(robustness_tags(robustness))

            return InsightResult[self.schema](
                status=InsightStatus.COMPLETED,
                data=parsed.data,
                robustness=robustness,
                trace_id=trace.id,
            )
        except Exception as e:
            robustness = getattr(e, "robustness", None)
            trace.output = {"status": InsightStatus.FAILED.value, "error": str(e)}
            trace.metadata["durationMs"] = (time.monotonic() - start) * 1000
            if robustness is not None:
                trace.metadata.update(robustness_metadata(robustness))
                trace.tags.extend(robustness_tags(robustness))

            logger.error("[%s] Analysis failed: %s", self.trace_name, str(e), exc_info=True)
            return InsightResult[self.schema](
                status=InsightStatus.FAILED,
                error_message=str(e),
                robustness=robustness,
                trace_id=trace.id,
            )
        finally:
            self.telemetry.submit(trace)
            self.telemetry.flush()
