"""
Offline robustness evaluation of saved model outputs.

Usage:
    python -m momentum.evaluate goal responses/*.txt
    python -m momentum.evaluate habit responses/*.txt
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from momentum.config import settings
from momentum.models.analysis import GoalAnalysis, HabitAnalysis
from momentum.services.analysis_parser import ParseFailure, try_parse_analysis
from momentum.utils.logging_config import setup_logging

SCHEMAS = {
    "goal": GoalAnalysis,
    "habit": HabitAnalysis,
}


def evaluate_text(raw_text: str, kind: str) -> Dict[str, Any]:
    """Score one raw response and return a flat report row."""
    outcome = try_parse_analysis(raw_text, SCHEMAS[kind])
    robustness = outcome.robustness
    row: Dict[str, Any] = {
        "ok": outcome.ok,
        "score": robustness.score,
        "breakdown": robustness.breakdown.model_dump(),
        "repairSteps": robustness.metrics.repair_steps,
        "recommendation": robustness.recommendation,
    }
    if isinstance(outcome, ParseFailure):
        row["errorKind"] = outcome.kind
        row["error"] = outcome.message
    return row


def summarize(rows: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """Aggregate report rows into count, mean score and failure count."""
    scores = [row["score"] for row in rows]
    return {
        "count": len(rows),
        "meanScore": round(sum(scores) / len(scores), 1) if scores else 0.0,
        "parseFailures": sum(1 for row in rows if not row["ok"]),
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2 or args[0] not in SCHEMAS:
        print("Usage: python -m momentum.evaluate {goal|habit} <file> [<file> ...]")
        print("\nExample:")
        print("  python -m momentum.evaluate goal responses/goal-*.txt")
        return 1

    setup_logging(settings.log_level)
    kind, paths = args[0], args[1:]

    rows = []
    for path in paths:
        try:
            raw_text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: cannot read {path}: {e}", file=sys.stderr)
            return 1
        row = {"file": path, **evaluate_text(raw_text, kind)}
        rows.append(row)
        print(json.dumps(row, ensure_ascii=False))

    summary = summarize(rows)
    print(json.dumps({"summary": summary}))
    return 1 if summary["parseFailures"] else 0


if __name__ == "__main__":
    sys.exit(main())
