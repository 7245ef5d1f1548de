"""Async completion client (OpenAI-compatible chat/completions endpoint)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from . import AIConfig

logger = logging.getLogger(__name__)

CLIENT_HEADERS = {
    "X-Title": "code-deps",
}


class DeepSeekService:
    """Stateless request/response wrapper around the completion API.

    Failures are logged and turned into an empty answer; nothing is retried
    and no timeout is imposed.
    """

    def __init__(self, config: AIConfig | None = None, client: httpx.AsyncClient | None = None):
        self.config = config or AIConfig()
        self.client = client or httpx.AsyncClient(
            timeout=None,
            headers={
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
                **CLIENT_HEADERS,
            },
        )

    async def get_completion(self, context: str, max_tokens: int | None = None) -> str:
        """Send *context* as a single user message and return the reply text."""
        payload = {
            "model": self.config.model.value,
            "messages": [{"role": "user", "content": context}],
            "max_tokens": max_tokens or self.config.max_tokens,
            "temperature": self.config.temperature,
        }
        try:
            response = await self.client.post(f"{self.config.base_url}/chat/completions", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error("Completion API error: %s", e)
            return ""
        except ValueError as e:
            logger.error("Completion API returned invalid JSON: %s", e)
            return ""
        return _first_message(data)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> DeepSeekService:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _first_message(data: Any) -> str:
    """``choices[0].message.content`` or ``""`` when absent."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return content or ""
