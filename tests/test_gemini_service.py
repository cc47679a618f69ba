"""Tests for the Gemini service and response helpers."""

import asyncio
from types import SimpleNamespace

import pytest

from momentum.config import Settings
from momentum.services.gemini_service import GeminiService
from momentum.services.gemini_utils import get_response_text, get_usage, response_debug_summary
from momentum.utils.exceptions import GeminiError


def _settings(**overrides) -> Settings:
    values = {"gemini_api_key": "test-key", "ai_model_id": "gemini-test"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _response(text=None, parts=None, usage=None):
    candidates = []
    if parts is not None:
        content = SimpleNamespace(parts=[SimpleNamespace(text=part) for part in parts])
        candidates = [SimpleNamespace(content=content, finish_reason="STOP")]
    return SimpleNamespace(text=text, candidates=candidates, usage_metadata=usage)


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def _service(models: FakeModels, **overrides) -> GeminiService:
    service = GeminiService(_settings(**overrides))
    service._client = SimpleNamespace(models=models)
    return service


def test_get_response_text_prefers_text():
    """Test response.text is used when present."""
    assert get_response_text(_response(text='{"a": 1}', parts=["ignored"])) == '{"a": 1}'


def test_get_response_text_falls_back_to_parts():
    """Test candidate parts are joined when response.text is empty."""
    assert get_response_text(_response(text="", parts=['{"a": ', "1}"])) == '{"a": 1}'
    assert get_response_text(_response()) == ""


def test_get_usage():
    """Test token counts are mapped and default to zero."""
    usage = SimpleNamespace(prompt_token_count=12, candidates_token_count=30, total_token_count=42)
    assert get_usage(_response(usage=usage)) == {
        "prompt_tokens": 12,
        "completion_tokens": 30,
        "total_tokens": 42,
    }
    assert get_usage(_response()) == {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}


def test_response_debug_summary():
    """Test debug summary reports candidates and parts."""
    summary = response_debug_summary(_response(parts=["", ""]))
    assert summary == {"candidates": 1, "finish_reason": "STOP", "parts": 2}


def test_client_requires_api_key():
    """Test a missing API key is reported when the client is first used."""
    service = GeminiService(_settings(gemini_api_key=None))
    with pytest.raises(GeminiError, match="GEMINI_API_KEY"):
        service.client


def test_model_properties():
    """Test model settings are exposed for trace metadata."""
    service = GeminiService(_settings(ai_model_temperature=0.7, ai_model_max_tokens=2048))

    assert service.model_id == "gemini-test"
    assert service.provider == "google"
    assert service.temperature == 0.7
    assert service.max_tokens == 2048


def test_build_config_max_tokens():
    """Test output token limit is only sent when configured."""
    assert GeminiService(_settings())._build_config().max_output_tokens is None
    assert GeminiService(_settings(ai_model_max_tokens=512))._build_config().max_output_tokens == 512


def test_generate_text():
    """Test raw text and usage are returned."""
    usage = SimpleNamespace(prompt_token_count=5, candidates_token_count=7, total_token_count=12)
    models = FakeModels(response=_response(text='{"research": "x"}', usage=usage))
    service = _service(models)

    result = asyncio.run(service.generate_text("prompt"))

    assert result.text == '{"research": "x"}'
    assert result.usage["total_tokens"] == 12
    assert models.calls[0]["model"] == "gemini-test"
    assert models.calls[0]["contents"] == "prompt"


def test_generate_text_empty_response():
    """Test an empty completion is an error."""
    service = _service(FakeModels(response=_response(text="")))
    with pytest.raises(GeminiError, match="empty response"):
        asyncio.run(service.generate_text("prompt"))


def test_generate_text_wraps_sdk_errors():
    """Test SDK failures surface as GeminiError."""
    service = _service(FakeModels(error=RuntimeError("503 unavailable")))
    with pytest.raises(GeminiError, match="503 unavailable") as exc_info:
        asyncio.run(service.generate_text("prompt"))
    assert isinstance(exc_info.value.__cause__, RuntimeError)
