"""Shared helpers for reading Gemini responses."""

from __future__ import annotations

import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


def get_response_text(response: Any) -> str:
    """
    Robust extraction of text from google-genai responses.

    Tries:
    1) response.text
    2) response.candidates[0].content.parts[*].text
    """
    t = getattr(response, "text", None)
    if isinstance(t, str) and t.strip():
        return t

    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        texts = [p.text for p in parts if isinstance(getattr(p, "text", None), str)]
        if any(text.strip() for text in texts):
            return "".join(texts)

    return ""


def get_usage(response: Any) -> Dict[str, int]:
    """Token usage in prompt/completion/total form, zero where unknown."""
    usage = getattr(response, "usage_metadata", None)
    return {
        "prompt_tokens": getattr(usage, "prompt_token_count", None) or 0,
        "completion_tokens": getattr(usage, "candidates_token_count", None) or 0,
        "total_tokens": getattr(usage, "total_token_count", None) or 0,
    }


def response_debug_summary(response: Any) -> Dict[str, Any]:
    """
    Compact debug info for a response.
    Helps explain "HTTP 200 but empty text".
    """
    out: Dict[str, Any] = {}
    candidates = getattr(response, "candidates", None) or []
    out["candidates"] = len(candidates)
    if candidates:
        c0 = candidates[0]
        out["finish_reason"] = str(getattr(c0, "finish_reason", None))
        content = getattr(c0, "content", None)
        out["parts"] = len(getattr(content, "parts", None) or [])
    return out
