"""
Topic title suggestions.

Asks an Azure OpenAI chat deployment for debate questions when one is
configured. Any failure falls back to a fixed list, so callers always get
suggestions and never an error.
"""

import json
import re
from typing import Optional

import httpx
import structlog

from core.config import Settings, settings

logger = structlog.get_logger(__name__)

FALLBACK_SUGGESTIONS = [
    "Should remote work become the new standard for office jobs?",
    "Is universal basic income a viable economic policy?",
    "Should social media platforms be regulated like public utilities?",
    "Are electric vehicles the best solution for reducing transportation emissions?",
    "Should voting be mandatory in democratic countries?",
]

SYSTEM_PROMPT = (
    "You write short, neutral, single-sentence debate questions for a public "
    "voting site. Reply with a JSON array of strings and nothing else."
)

_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def parse_suggestions(content: str, limit: int) -> list[str]:
    """
    Extract suggestion strings from a model reply.

    Accepts a JSON array, or falls back to one suggestion per line with
    bullet/numbering markers and surrounding quotes removed.
    """
    content = content.strip()
    items: list[str]
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        parsed = None

    if isinstance(parsed, list):
        items = [str(item) for item in parsed]
    else:
        items = [_LIST_MARKER.sub("", line) for line in content.splitlines()]

    cleaned = []
    for item in items:
        text = item.strip().strip('"').strip()
        if text and text not in cleaned:
            cleaned.append(text)
    return cleaned[:limit]


class SuggestionService:
    """Generates topic suggestions with a static fallback."""

    def __init__(self, config: Settings = settings, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.http_client = http_client

    async def suggestions(self, context: Optional[str] = None) -> list[str]:
        """Suggested topic titles. Never raises."""
        if not self.config.suggestions_enabled:
            return list(FALLBACK_SUGGESTIONS)

        try:
            generated = await self._generate(context)
        except Exception as e:
            logger.warning("suggestions_fallback", error=str(e), error_type=type(e).__name__)
            return list(FALLBACK_SUGGESTIONS)

        if not generated:
            logger.warning("suggestions_empty_reply")
            return list(FALLBACK_SUGGESTIONS)
        return generated

    async def _generate(self, context: Optional[str]) -> list[str]:
        count = self.config.SUGGESTIONS_COUNT
        prompt = f"Suggest {count} debate questions people would enjoy voting on."
        if context:
            prompt += f" Focus on: {context}"

        url = (
            f"{self.config.AZURE_OPENAI_ENDPOINT.rstrip('/')}"
            f"/openai/deployments/{self.config.AZURE_OPENAI_DEPLOYMENT}/chat/completions"
        )
        request = {
            "url": url,
            "params": {"api-version": self.config.AZURE_OPENAI_API_VERSION},
            "headers": {"api-key": self.config.AZURE_OPENAI_API_KEY or ""},
            "json": {
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "temperature": 0.8,
                "max_tokens": 400,
            },
        }

        if self.http_client is not None:
            response = await self.http_client.post(**request)
        else:
            async with httpx.AsyncClient(timeout=self.config.SUGGESTIONS_TIMEOUT_SECONDS) as client:
                response = await client.post(**request)

        response.raise_for_status()
        content = response.json()["choices"][0]["message"]["content"]
        suggestions = parse_suggestions(content, limit=count)
        logger.info("suggestions_generated", count=len(suggestions))
        return suggestions
