"""
Gemini LLM service for goal and habit analysis.

The service only produces raw text. JSON repair, validation and robustness
scoring happen in the analysis parser, so responses are requested as plain
text and never coerced by the SDK.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, Field

from momentum.config import Settings, settings as default_settings
from momentum.services.gemini_utils import get_response_text, get_usage, response_debug_summary
from momentum.utils.exceptions import GeminiError

logger = logging.getLogger(__name__)


class GenerationResult(BaseModel):
    """Raw completion text plus token usage."""

    text: str
    usage: Dict[str, int] = Field(default_factory=dict)


class GeminiService:
    """Service for interacting with Gemini API."""

    def __init__(self, config: Optional[Settings] = None) -> None:
        self.config = config or default_settings
        self._client: Optional[genai.Client] = None

    @property
    def model_id(self) -> str:
        return self.config.ai_model_id

    @property
    def provider(self) -> str:
        return self.config.ai_model_provider

    @property
    def temperature(self) -> float:
        return self.config.ai_model_temperature

    @property
    def max_tokens(self) -> Optional[int]:
        return self.config.ai_model_max_tokens

    @property
    def client(self) -> genai.Client:
        """Get or create Gemini client (lazy initialization)."""
        if self._client is None:
            if not self.config.gemini_api_key:
                raise GeminiError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.config.gemini_api_key)
        return self._client

    def _build_config(self) -> types.GenerateContentConfig:
        kwargs: Dict[str, Any] = {"temperature": self.temperature}
        if self.max_tokens:
            kwargs["max_output_tokens"] = self.max_tokens
        return types.GenerateContentConfig(**kwargs)

    async def generate_text(self, prompt: str) -> GenerationResult:
        """Single Gemini call returning the raw completion text."""

        def _sync_call() -> Any:
            return self.client.models.generate_content(
                model=self.model_id,
                contents=prompt,
                config=self._build_config(),
            )

        try:
            resp = await asyncio.to_thread(_sync_call)
        except GeminiError:
            raise
        except Exception as e:
            logger.error("Gemini call failed: %s", str(e), exc_info=True)
            raise GeminiError(f"Gemini call failed: {str(e)}") from e

        text = get_response_text(resp)
        if not text:
            logger.warning("Gemini empty response text. summary=%s", response_debug_summary(resp))
            raise GeminiError("Gemini returned empty response")

        logger.debug("Gemini raw response:\n%s", text)
        return GenerationResult(text=text, usage=get_usage(resp))
