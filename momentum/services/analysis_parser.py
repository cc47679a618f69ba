"""
Parsing of goal and habit analysis responses.

Raw model text goes through repair, JSON parsing, schema validation and
semantic analysis. Every attempt is scored, including failed ones: the
raising entry points attach the score to the error, the ``try_*`` variants
return it inside a ParseFailure.
"""

from __future__ import annotations

import json
import logging
from typing import Generic, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from momentum.models.analysis import GoalAnalysis, HabitAnalysis
from momentum.services.json_repair import repair_json
from momentum.services.json_robustness import (
    ParseMetrics,
    RobustnessScore,
    calculate_json_robustness,
    finalize_parse_metrics,
    init_parse_metrics,
)
from momentum.utils.exceptions import (
    AnalysisParseError,
    ResponseSyntaxError,
    SchemaValidationError,
    SeverelyTruncatedError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

ERROR_CONTEXT_CHARS = 100
ERROR_SAMPLE_CHARS = 500


class ParseSuccess(BaseModel, Generic[T]):
    """Validated data plus the robustness score of the attempt."""

    ok: Literal[True] = True
    data: T
    robustness: RobustnessScore


class ParseFailure(BaseModel):
    """Failed attempt; the robustness score is still available."""

    ok: Literal[False] = False
    kind: Literal["severely_truncated", "syntax_error", "schema_error", "parse_error"]
    message: str
    robustness: RobustnessScore
    position: Optional[int] = None
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def from_error(cls, error: AnalysisParseError) -> "ParseFailure":
        return cls(
            kind=error.kind,
            message=str(error),
            robustness=error.robustness,
            position=getattr(error, "position", None),
            errors=getattr(error, "errors", []),
        )


ParseResult = ParseSuccess
ParseOutcome = Union[ParseSuccess[T], ParseFailure]


def _format_schema_errors(error: PydanticValidationError) -> List[str]:
    formatted = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "<root>"
        formatted.append(f"{location}: {detail['msg']}")
    return formatted


def _log_failure(label: str, cleaned: str, robustness: RobustnessScore, error: Exception) -> None:
    metrics = robustness.metrics
    logger.error(
        "Failed to parse %s JSON",
        label,
        extra={
            "robustness_score": robustness.score,
            "error": str(error),
            "text_length": len(cleaned),
            "text_sample": cleaned[:ERROR_SAMPLE_CHARS],
        },
    )

    position = metrics.parse_error_position
    if isinstance(error, json.JSONDecodeError) and position is not None:
        start = max(0, position - ERROR_CONTEXT_CHARS)
        end = min(len(cleaned), position + ERROR_CONTEXT_CHARS)
        logger.error(
            "Context around position %d:\n%s\n%s^",
            position,
            cleaned[start:end],
            " " * (position - start),
        )


def _fail(
    error_cls: Type[AnalysisParseError],
    cause: Exception,
    metrics: ParseMetrics,
    *,
    label: str,
    raw_text: str,
    cleaned: str,
    parse_success: bool = False,
    **details,
) -> AnalysisParseError:
    finalize_parse_metrics(metrics, parse_success, False, error=cause)
    robustness = calculate_json_robustness(metrics)
    _log_failure(label, cleaned, robustness, cause)
    return error_cls(
        f"Failed to parse AI response: {cause}",
        robustness=robustness,
        raw_text=raw_text,
        **details,
    )


def parse_analysis(raw_text: str, schema: Type[T]) -> ParseSuccess[T]:
    """
    Repair, parse and validate a model response against ``schema``.

    Raises:
        SeverelyTruncatedError: No closing brace or bracket in the response
        ResponseSyntaxError: Repaired text is not valid JSON
        SchemaValidationError: JSON does not match ``schema``
    """
    label = schema.__name__
    metrics = init_parse_metrics(raw_text)

    try:
        cleaned = repair_json(raw_text, metrics)
    except SeverelyTruncatedError as e:
        metrics.was_truncated = True
        metrics.truncation_recovered = False
        raise _fail(SeverelyTruncatedError, e, metrics, label=label, raw_text=raw_text, cleaned=raw_text) from e

    metrics.parse_attempts += 1
    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can handle
        raise _fail(
            ResponseSyntaxError,
            e,
            metrics,
            label=label,
            raw_text=raw_text,
            cleaned=cleaned,
            position=getattr(e, "pos", None),
        ) from e

    try:
        validated = schema.model_validate(parsed)
    except PydanticValidationError as e:
        errors = _format_schema_errors(e)
        metrics.schema_errors = errors
        raise _fail(
            SchemaValidationError,
            e,
            metrics,
            label=label,
            raw_text=raw_text,
            cleaned=cleaned,
            parse_success=True,
            errors=errors,
        ) from e

    finalize_parse_metrics(metrics, True, True, validated.model_dump(mode="json"))
    robustness = calculate_json_robustness(metrics)

    logger.info(
        "%s JSON robustness: %d",
        label,
        robustness.score,
        extra={
            "repair_steps": metrics.repair_steps,
            "repair_count": metrics.repair_count,
            "recommendation": robustness.recommendation,
        },
    )

    return ParseSuccess[schema](data=validated, robustness=robustness)


def try_parse_analysis(raw_text: str, schema: Type[T]) -> ParseOutcome:
    """Like parse_analysis, but returns a ParseFailure instead of raising."""
    try:
        return parse_analysis(raw_text, schema)
    except AnalysisParseError as e:
        return ParseFailure.from_error(e)


def parse_goal_analysis(raw_text: str) -> ParseResult[GoalAnalysis]:
    """Parse a goal analysis response: analysis text plus 3-5 suggested habits."""
    return parse_analysis(raw_text, GoalAnalysis)


def parse_habit_analysis(raw_text: str) -> ParseResult[HabitAnalysis]:
    """Parse a habit analysis response: coaching research text."""
    return parse_analysis(raw_text, HabitAnalysis)


def try_parse_goal_analysis(raw_text: str) -> ParseOutcome:
    return try_parse_analysis(raw_text, GoalAnalysis)


def try_parse_habit_analysis(raw_text: str) -> ParseOutcome:
    return try_parse_analysis(raw_text, HabitAnalysis)
