"""LLM JSON repair utilities applied before parsing model responses."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, Dict, Iterable

from momentum.services.json_robustness import CONTRACTIONS, ParseMetrics, record_repair_step
from momentum.utils.exceptions import SeverelyTruncatedError

logger = logging.getLogger(__name__)

_OPEN_FENCE_RE = re.compile(r"\A\s*```(?:json)?[ \t]*\r?\n?", re.IGNORECASE)
_CLOSE_FENCE_RE = re.compile(r"\r?\n?[ \t]*```\s*\Z")


class RepairStep(str, Enum):
    """Repair steps in the order they run. Values are the recorded step names."""

    STRIP_FENCES = "stripped_markdown_fences"
    CURLY_QUOTES = "replaced_curly_quotes"
    CONTRACTIONS = "expanded_contractions"
    TRUNCATION = "truncation"


DEFAULT_REPAIR_STEPS = tuple(RepairStep)


def strip_markdown_fences(text: str) -> str:
    """Remove one leading ```json / ``` marker and one trailing ``` marker."""
    stripped = _OPEN_FENCE_RE.sub("", text, count=1)
    stripped = _CLOSE_FENCE_RE.sub("", stripped, count=1)
    if stripped == text:
        return text
    return stripped.strip()


def normalize_quotes(text: str) -> str:
    """Replace typographic quotes with straight quotes."""
    return (
        text.replace("\u201c", '"').replace("\u201d", '"')
        .replace("\u2018", "'").replace("\u2019", "'")
    )


def expand_contractions(text: str) -> str:
    """Write out English contractions so stray apostrophes cannot break strings."""
    for contraction, expansion in CONTRACTIONS.items():
        text = text.replace(contraction, expansion)
    return text


def fix_truncated_json(text: str, metrics: ParseMetrics) -> str:
    """
    Cut a response back to its last complete JSON structure.

    Raises:
        SeverelyTruncatedError: If the text holds no closing brace or bracket
    """
    trimmed = text.strip()

    last_close = max(trimmed.rfind("}"), trimmed.rfind("]"))
    if last_close == -1:
        raise SeverelyTruncatedError("JSON appears to be severely truncated - no closing braces found")

    if trimmed[last_close + 1:].strip():
        logger.warning("Detected truncated content after last closing brace, trimming")
        metrics.was_truncated = True
        metrics.truncation_recovered = True
        record_repair_step(metrics, "truncated_after_brace")
        return trimmed[:last_close + 1]

    depth = 0
    in_string = False
    escaped = False
    last_complete = -1

    for i, char in enumerate(trimmed):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
            if depth == 0:
                last_complete = i

    if (in_string or depth != 0) and last_complete != -1:
        logger.warning("Detected incomplete JSON structure, truncating to last complete position")
        metrics.was_truncated = True
        metrics.truncation_recovered = True
        record_repair_step(metrics, "truncated_incomplete_structure")
        return trimmed[:last_complete + 1]

    return trimmed


_TEXT_REPAIRS: Dict[RepairStep, Callable[[str], str]] = {
    RepairStep.STRIP_FENCES: strip_markdown_fences,
    RepairStep.CURLY_QUOTES: normalize_quotes,
    RepairStep.CONTRACTIONS: expand_contractions,
}


def repair_json(
    text: str,
    metrics: ParseMetrics,
    steps: Iterable[RepairStep] = DEFAULT_REPAIR_STEPS,
) -> str:
    """
    Run the enabled repair steps, always in pipeline order.

    Each text step that changes the input is recorded in ``metrics``.
    Truncation recovery records its own step names.
    """
    enabled = set(steps)
    repaired = text

    for step in RepairStep:
        if step not in enabled:
            continue
        if step is RepairStep.TRUNCATION:
            repaired = fix_truncated_json(repaired, metrics)
            continue

        before = repaired
        repaired = _TEXT_REPAIRS[step](repaired)
        if repaired != before:
            record_repair_step(metrics, step.value)

    return repaired
