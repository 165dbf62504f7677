"""
Tests for topic suggestions.
"""

import json

import httpx
import pytest

from core.config import Settings
from services.suggestion_service import FALLBACK_SUGGESTIONS, SuggestionService, parse_suggestions


def _settings(**overrides) -> Settings:
    values = {
        "SECRET_KEY": "test-secret-key-for-testing",
        "AZURE_OPENAI_ENDPOINT": "https://example.openai.azure.com/",
        "AZURE_OPENAI_API_KEY": "test-key",
        "SUGGESTIONS_COUNT": 3,
    }
    values.update(overrides)
    return Settings(**values)


def _reply(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.unit
class TestParseSuggestions:
    """Model reply parsing."""

    def test_json_array(self) -> None:
        assert parse_suggestions('["One?", "Two?", "Three?"]', limit=2) == ["One?", "Two?"]

    def test_numbered_lines(self) -> None:
        content = '1. "Is tea better than coffee?"\n2) Should homework be banned?\n\n- Cats or dogs?'
        assert parse_suggestions(content, limit=5) == [
            "Is tea better than coffee?",
            "Should homework be banned?",
            "Cats or dogs?",
        ]

    def test_duplicates_removed(self) -> None:
        assert parse_suggestions('["Same?", "Same?"]', limit=5) == ["Same?"]


@pytest.mark.unit
class TestSuggestionService:
    """Generation and fallback."""

    async def test_unconfigured_uses_fallback(self) -> None:
        service = SuggestionService(_settings(AZURE_OPENAI_ENDPOINT=None))
        assert await service.suggestions() == FALLBACK_SUGGESTIONS

    async def test_generated_suggestions(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["api_key"] = request.headers.get("api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_reply('["A?", "B?", "C?", "D?"]'))

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = SuggestionService(_settings(), http_client=client)
            suggestions = await service.suggestions(context="sports")

        assert suggestions == ["A?", "B?", "C?"]
        assert seen["url"].startswith(
            "https://example.openai.azure.com/openai/deployments/gpt-4o-mini/chat/completions"
        )
        assert "api-version=" in seen["url"]
        assert seen["api_key"] == "test-key"
        assert "sports" in seen["body"]["messages"][-1]["content"]

    async def test_http_error_falls_back(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "boom"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = SuggestionService(_settings(), http_client=client)
            assert await service.suggestions() == FALLBACK_SUGGESTIONS

    async def test_malformed_reply_falls_back(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = SuggestionService(_settings(), http_client=client)
            assert await service.suggestions() == FALLBACK_SUGGESTIONS

    async def test_empty_reply_falls_back(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_reply("   "))

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = SuggestionService(_settings(), http_client=client)
            assert await service.suggestions() == FALLBACK_SUGGESTIONS
