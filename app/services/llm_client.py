"""
Chat-completions client for the configured LLM provider.

Sends one request per call: no retry, no caching, no streaming.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx
from fastapi import status

from app.core.config import settings
from app.errors import AppError

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, dict[str, Any], dict[str, str]], Awaitable[tuple[int, dict]]]


class LLMError(AppError):
    """Raised when the provider call fails or returns unusable content."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(status.HTTP_502_BAD_GATEWAY, "insight_generation_failed", message, details)


class LLMNotConfiguredError(AppError):
    def __init__(self):
        super().__init__(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "llm_not_configured",
            "LLM provider is not configured",
            {"missing": ["LLM_API_KEY"]},
        )


class LLMClient:
    """Minimal OpenAI-compatible chat-completions client."""

    def __init__(
        self,
        *,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        fetcher: Optional[Fetcher] = None,
    ):
        self.endpoint = endpoint or settings.LLM_API_URL
        self.api_key = api_key if api_key is not None else settings.LLM_API_KEY
        self.model = model or settings.LLM_MODEL
        self.fetcher = fetcher or self._http_post

    def build_request_body(
        self,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        schema: dict[str, Any],
    ) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                },
            },
        }

    async def _http_post(self, url: str, json_body: dict[str, Any], headers: dict[str, str]) -> tuple[int, dict]:
        async with httpx.AsyncClient(timeout=settings.LLM_TIMEOUT_SECONDS) as client:
            resp = await client.post(url, json=json_body, headers=headers)
        try:
            payload = resp.json()
        except ValueError:
            payload = {"text": resp.text}
        return resp.status_code, payload

    @staticmethod
    def parse_json_content(payload: dict) -> dict:
        """Extract choices[0].message.content and decode it as JSON."""
        choices = (payload or {}).get("choices") or []
        if not choices:
            raise LLMError("LLM response contained no choices")

        content = (choices[0].get("message") or {}).get("content")
        if not isinstance(content, str):
            raise LLMError("LLM response content was not text")

        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise LLMError("LLM response was not valid JSON", {"error": str(exc)}) from exc

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        schema: dict[str, Any],
    ) -> dict:
        """Run one schema-constrained completion and return the decoded JSON."""
        if not self.api_key:
            raise LLMNotConfiguredError()

        request_body = self.build_request_body(system_prompt, user_prompt, schema_name, schema)
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            status_code, payload = await self.fetcher(self.endpoint, request_body, headers)
        except httpx.HTTPError as exc:
            logger.warning("LLM request failed: %s", exc)
            raise LLMError("LLM request failed", {"error": str(exc)}) from exc

        if status_code != 200:
            logger.warning("LLM provider returned %s", status_code)
            raise LLMError("LLM provider returned non-200", {"status_code": status_code})

        return self.parse_json_content(payload)
