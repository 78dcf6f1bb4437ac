from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class GeminiError(RuntimeError):
    """Raised for generative API client errors."""


class GeminiNotConfiguredError(GeminiError):
    """Raised when no API key is available."""


class GeminiClient:
    def __init__(
        self,
        api_key: str | None,
        model: str = "models/gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1",
        timeout_seconds: float = 60.0,
        max_retries: int = 2,
        backoff_seconds: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = (api_key or "").strip()
        self.model = model.strip("/")
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(0, max_retries)
        self.backoff_seconds = max(0.0, backoff_seconds)
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self.transport
        ) as client:
            for attempt in range(self.max_retries + 1):
                try:
                    response = await client.post(
                        self.endpoint,
                        params={"key": self.api_key},
                        json=payload,
                        headers={"Content-Type": "application/json"},
                    )
                except httpx.HTTPError as exc:
                    raise GeminiError(f"Gemini request failed: {exc!r}") from exc

                status = response.status_code
                retryable = status == 429 or 500 <= status <= 599
                if retryable and attempt < self.max_retries:
                    logger.info("Gemini returned %s, retrying (attempt %d)", status, attempt + 1)
                    await asyncio.sleep(self.backoff_seconds * (2**attempt))
                    continue
                if status >= 400:
                    raise GeminiError(
                        f"Gemini request failed with status {status}: {response.text[:300]}"
                    )
                break

        try:
            parsed = response.json()
        except json.JSONDecodeError as exc:
            raise GeminiError("Gemini response was not valid JSON") from exc
        if not isinstance(parsed, dict):
            raise GeminiError("Gemini response was not a JSON object")
        return parsed

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise GeminiNotConfiguredError("GEMINI_API_KEY not configured")

        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        data = await self._post(payload)
        text = response_text(data)
        if text:
            return text
        return json.dumps(data)[:3000]


def response_text(data: dict[str, Any]) -> str | None:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None
