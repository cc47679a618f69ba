"""Trace reporting for analysis runs."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from momentum.config import Settings
from momentum.services.json_robustness import RobustnessScore

logger = logging.getLogger(__name__)


def generate_trace_id() -> str:
    """Generate a unique trace ID."""
    return str(uuid.uuid4())


class AnalysisTrace(BaseModel):
    """One analysis run as reported to the telemetry sink."""

    id: str = Field(default_factory=generate_trace_id)
    name: str
    input: Dict[str, Any] = Field(default_factory=dict)
    output: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    tags: List[str] = Field(default_factory=list)


class TelemetrySink(Protocol):
    """Destination for analysis traces."""

    def submit(self, trace: AnalysisTrace) -> None: ...

    def flush(self) -> None: ...


class NoopTelemetrySink:
    """Sink used when telemetry is not configured."""

    def submit(self, trace: AnalysisTrace) -> None:
        pass

    def flush(self) -> None:
        pass


class LoggingTelemetrySink:
    """Buffers traces and emits them as structured log records on flush."""

    def __init__(self, project_name: str = "momentum", log: Optional[logging.Logger] = None) -> None:
        self.project_name = project_name
        self._logger = log or logger
        self._pending: List[AnalysisTrace] = []

    @property
    def pending(self) -> List[AnalysisTrace]:
        return list(self._pending)

    def submit(self, trace: AnalysisTrace) -> None:
        self._pending.append(trace)

    def flush(self) -> None:
        pending, self._pending = self._pending, []
        for trace in pending:
            self._logger.info(
                "trace %s",
                trace.name,
                extra={"project": self.project_name, "trace": trace.model_dump(mode="json")},
            )


def build_telemetry_sink(config: Settings) -> TelemetrySink:
    """Construct the sink described by ``config``."""
    if config.telemetry_enabled:
        return LoggingTelemetrySink(project_name=config.telemetry_project_name)
    return NoopTelemetrySink()


def robustness_metadata(robustness: RobustnessScore) -> Dict[str, Any]:
    """Flatten a robustness score into ``json_*`` trace metadata."""
    breakdown = robustness.breakdown
    return {
        "json_robustnessScore": robustness.score,
        "json_preParsingQuality": breakdown.preParsingQuality,
        "json_repairComplexity": breakdown.repairComplexity,
        "json_parseSuccess": breakdown.parseSuccess,
        "json_schemaCompliance": breakdown.schemaCompliance,
        "json_semanticQuality": breakdown.semanticQuality,
        "json_repairSteps": list(robustness.metrics.repair_steps),
        "json_repairCount": robustness.metrics.repair_count,
        "json_recommendation": robustness.recommendation,
    }


def robustness_tags(robustness: RobustnessScore) -> List[str]:
    if robustness.score >= 90:
        quality = "json-excellent"
    elif robustness.score >= 70:
        quality = "json-good"
    else:
        quality = "json-poor"
    repaired = "json-perfect" if robustness.metrics.repair_count == 0 else "json-repaired"
    return [quality, repaired]
