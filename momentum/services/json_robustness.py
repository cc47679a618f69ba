"""
JSON robustness tracking for AI-generated responses.

Tracks concrete metrics about JSON parsing, repair, and schema validation
so model/prompt combinations can be compared offline:

- ParseMetrics: one mutable record per parse attempt
- Semantic quality: empty fields, placeholder values, field completeness
- RobustnessScore: weighted 0-100 score with a recommendation
"""

from __future__ import annotations

import math
import re
import time
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Parsed JSON value: null, bool, number, string, array or object
JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

RAW_SAMPLE_LENGTH = 200

CONTRACTIONS: Dict[str, str] = {
    "don't": "do not",
    "doesn't": "does not",
    "can't": "cannot",
    "won't": "will not",
    "isn't": "is not",
    "aren't": "are not",
    "wasn't": "was not",
    "weren't": "were not",
    "haven't": "have not",
    "hasn't": "has not",
    "hadn't": "had not",
    "wouldn't": "would not",
    "shouldn't": "should not",
    "couldn't": "could not",
    "it's": "it is",
    "that's": "that is",
    "what's": "what is",
    "there's": "there is",
    "here's": "here is",
    "you're": "you are",
    "we're": "we are",
    "they're": "they are",
    "I'm": "I am",
    "you'll": "you will",
    "we'll": "we will",
    "they'll": "they will",
    "let's": "let us",
}

_FENCE_START_RE = re.compile(r"^```(?:json)?", re.MULTILINE)
_FENCE_END_RE = re.compile(r"```\s*$", re.MULTILINE)
_CURLY_QUOTES_RE = re.compile("[\u201c\u201d\u2018\u2019]")
_CONTRACTION_RE = re.compile(r"\b(" + "|".join(re.escape(c) for c in CONTRACTIONS) + r")\b")
_ERROR_POSITION_RE = re.compile(r"position (\d+)")

_GENERIC_PATTERNS = [
    re.compile(r"^(string|text|example|sample|placeholder|lorem ipsum|test|demo|todo|tbd|n/a)$", re.IGNORECASE),
    re.compile(r"^habit \d+$", re.IGNORECASE),
    re.compile(r"^item \d+$", re.IGNORECASE),
    re.compile(r"^untitled", re.IGNORECASE),
]

SCORE_WEIGHTS: Dict[str, int] = {
    "preParsingQuality": 15,
    "repairComplexity": 15,
    "parseSuccess": 40,
    "schemaCompliance": 20,
    "semanticQuality": 10,
}


def _now_ms() -> float:
    return time.monotonic() * 1000


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ParseMetrics(BaseModel):
    """Observations about a single parse attempt."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Input characteristics
    raw_text_length: int = 0
    raw_text_sample: str = ""

    # Pre-parsing issues detected on the untouched input
    had_markdown_fences: bool = False
    had_curly_quotes: bool = False
    had_contractions: bool = False
    had_leading_whitespace: bool = False
    had_trailing_whitespace: bool = False
    was_truncated: bool = False
    truncation_recovered: bool = False

    # Repair audit trail, in the order applied
    repair_steps: List[str] = Field(default_factory=list)
    repair_count: int = 0

    # Parsing outcome
    parse_success: bool = False
    parse_attempts: int = 0
    parse_error_message: Optional[str] = None
    parse_error_position: Optional[int] = None

    # Schema validation outcome
    schema_validation: bool = False
    schema_errors: Optional[List[str]] = None

    # Semantic quality
    has_empty_required_fields: bool = False
    has_generic_values: bool = False
    field_completeness: int = 0

    # Final output shape
    final_word_count: Optional[int] = None
    final_object_size: Optional[int] = None
    final_array_lengths: Optional[Dict[str, int]] = None

    # Monotonic timestamps in milliseconds
    start_time: float = 0.0
    end_time: float = 0.0
    duration_ms: float = 0.0


class RobustnessBreakdown(BaseModel):
    """Five 0-100 sub-scores that make up the overall robustness score."""

    model_config = ConfigDict(frozen=True)

    preParsingQuality: int
    repairComplexity: int
    parseSuccess: int
    schemaCompliance: int
    semanticQuality: int


class RobustnessScore(BaseModel):
    """Overall robustness of one parse attempt."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    breakdown: RobustnessBreakdown
    metrics: ParseMetrics
    recommendation: str


def init_parse_metrics(raw_text: str) -> ParseMetrics:
    """Initialize metrics tracking for a JSON parse operation."""
    return ParseMetrics(
        raw_text_length=len(raw_text),
        raw_text_sample=raw_text[:RAW_SAMPLE_LENGTH],
        had_markdown_fences=bool(_FENCE_START_RE.search(raw_text) or _FENCE_END_RE.search(raw_text)),
        had_curly_quotes=bool(_CURLY_QUOTES_RE.search(raw_text)),
        had_contractions=bool(_CONTRACTION_RE.search(raw_text)),
        had_leading_whitespace=raw_text != raw_text.lstrip(),
        had_trailing_whitespace=raw_text != raw_text.rstrip(),
        start_time=_now_ms(),
    )


def record_repair_step(metrics: ParseMetrics, step: str) -> None:
    """Record a repair step in the metrics."""
    metrics.repair_steps.append(step)
    metrics.repair_count = len(metrics.repair_steps)


def finalize_parse_metrics(
    metrics: ParseMetrics,
    parse_success: bool,
    schema_validation: bool,
    parsed_data: JSONValue = None,
    error: Optional[BaseException] = None,
) -> None:
    """Finalize metrics once parsing and validation are over."""
    metrics.parse_success = parse_success
    metrics.schema_validation = schema_validation
    metrics.end_time = _now_ms()
    metrics.duration_ms = metrics.end_time - metrics.start_time

    if error is not None:
        metrics.parse_error_message = str(error)
        position = getattr(error, "pos", None)
        if position is None:
            match = _ERROR_POSITION_RE.search(str(error))
            if match:
                position = int(match.group(1))
        metrics.parse_error_position = position

    if parsed_data is not None and parse_success and schema_validation:
        analyze_semantic_quality(metrics, parsed_data)


def analyze_semantic_quality(metrics: ParseMetrics, data: JSONValue) -> None:
    """Record semantic quality and output shape of validated data."""
    metrics.has_empty_required_fields = has_empty_fields(data)
    metrics.has_generic_values = has_generic_values(data)
    metrics.field_completeness = calculate_field_completeness(data)

    if not isinstance(data, dict):
        return

    habits = data.get("suggestedHabits")
    if isinstance(habits, list):
        metrics.final_array_lengths = {"suggestedHabits": len(habits)}

    for key in ("analysis", "research"):
        text = data.get(key)
        if isinstance(text, str) and text:
            metrics.final_word_count = len(text.split())

    metrics.final_object_size = len(data)


def _children(data: JSONValue) -> List[JSONValue]:
    if isinstance(data, dict):
        return list(data.values())
    if isinstance(data, list):
        return data
    return []


def has_empty_fields(data: JSONValue) -> bool:
    """True if any nested field is null, blank, or an empty array."""
    for value in _children(data):
        if value is None:
            return True
        if isinstance(value, str) and not value.strip():
            return True
        if isinstance(value, list) and not value:
            return True
        if isinstance(value, (dict, list)) and has_empty_fields(value):
            return True
    return False


def has_generic_values(data: JSONValue) -> bool:
    """True if any nested string looks like a placeholder."""
    if isinstance(data, str):
        text = data.strip()
        return any(pattern.search(text) for pattern in _GENERIC_PATTERNS)
    return any(has_generic_values(value) for value in _children(data))


def _is_populated(value: JSONValue) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (bool, int, float)):
        return True
    if isinstance(value, list):
        return bool(value)
    return isinstance(value, dict)


def calculate_field_completeness(data: JSONValue) -> int:
    """
    Percentage (0-100) of populated fields across the whole object graph.

    Every object value and array element visited counts as one field.
    Populated arrays and objects are descended into.
    """
    if not isinstance(data, (dict, list)):
        return 0

    total = 0
    populated = 0

    def count_fields(obj: JSONValue) -> None:
        nonlocal total, populated
        for value in _children(obj):
            total += 1
            if not _is_populated(value):
                continue
            populated += 1
            if isinstance(value, list):
                for item in value:
                    count_fields(item)
            elif isinstance(value, dict):
                count_fields(value)

    count_fields(data)

    return _round_half_up(populated / total * 100) if total > 0 else 0


def _recommendation(score: float, metrics: ParseMetrics) -> str:
    if score >= 90:
        recommendation = "Excellent: JSON output is robust and requires minimal repair"
    elif score >= 70:
        recommendation = "Good: Minor formatting issues, but parseable"
    elif score >= 50:
        recommendation = "Fair: Significant repairs needed, consider prompt improvements"
    elif score >= 30:
        recommendation = "Poor: Frequent parsing issues, prompt optimization required"
    else:
        recommendation = "Critical: JSON output unreliable, review prompt and model temperature"

    issues: List[str] = []
    if metrics.had_curly_quotes:
        issues.append("Use explicit quote instructions in prompt")
    if metrics.had_contractions:
        issues.append("Prohibit contractions in prompt")
    if metrics.was_truncated and not metrics.truncation_recovered:
        issues.append("Increase MAX_TOKENS")
    if not metrics.parse_success:
        issues.append("Review error context and adjust prompt format")
    if metrics.has_empty_required_fields:
        issues.append("Add field examples to prompt")
    if metrics.has_generic_values:
        issues.append("Request specific, concrete values in prompt")

    if issues:
        recommendation += ". Specific actions: " + "; ".join(issues)
    return recommendation


def calculate_json_robustness(metrics: ParseMetrics) -> RobustnessScore:
    """Calculate JSON robustness score from finalized parse metrics."""
    # How clean the raw output was
    penalty = 0
    if metrics.had_markdown_fences:
        penalty += 15
    if metrics.had_curly_quotes:
        penalty += 20
    if metrics.had_contractions:
        penalty += 10
    if metrics.had_leading_whitespace or metrics.had_trailing_whitespace:
        penalty += 5
    pre_parsing_quality = max(0, 100 - penalty)

    # 0 repairs = 100, 5+ repairs = 0
    repair_complexity = max(0, 100 - metrics.repair_count * 20)

    parse_success = 100 if metrics.parse_success else 0

    if not metrics.schema_validation:
        schema_compliance = 0
    elif metrics.schema_errors:
        schema_compliance = max(0, 100 - len(metrics.schema_errors) * 20)
    else:
        schema_compliance = 100

    semantic_quality: float = 100
    if metrics.has_empty_required_fields:
        semantic_quality -= 30
    if metrics.has_generic_values:
        semantic_quality -= 20
    semantic_quality = semantic_quality * metrics.field_completeness / 100

    sub_scores = {
        "preParsingQuality": pre_parsing_quality,
        "repairComplexity": repair_complexity,
        "parseSuccess": parse_success,
        "schemaCompliance": schema_compliance,
        "semanticQuality": semantic_quality,
    }
    score = sum(sub_scores[name] * weight for name, weight in SCORE_WEIGHTS.items()) / 100

    return RobustnessScore(
        score=_round_half_up(score),
        breakdown=RobustnessBreakdown(**{name: _round_half_up(value) for name, value in sub_scores.items()}),
        metrics=metrics.model_copy(deep=True),
        recommendation=_recommendation(score, metrics),
    )
