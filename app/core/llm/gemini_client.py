from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from app.domain.exceptions import CompletionProviderError


class GeminiError(CompletionProviderError):
    """Base error for Gemini client failures."""


class GeminiUpstreamError(GeminiError):
    """Raised when the Gemini API fails or returns an unexpected response."""


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float


@dataclass(frozen=True)
class ModelRequest:
    model: str
    contents: str

    def to_payload(self) -> dict[str, Any]:
        return {"contents": [{"role": "user", "parts": [{"text": self.contents}]}]}


def _extract_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate."""

    candidates = data["candidates"]
    parts = candidates[0]["content"]["parts"]
    return "".join(p["text"] for p in parts if isinstance(p, dict) and "text" in p)


class GeminiClient:
    """
    Minimal Gemini `generateContent` client.

    Design notes:
    - No logging in this module (prompts/outputs are user content).
    - One non-streamed request per call; a fresh HTTP client per call, so successive
      calls share no state.
    """

    def __init__(self, *, config: GeminiConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    @property
    def model(self) -> str:
        return self._config.model

    async def generate_text(self, *, contents: str, model: str | None = None) -> str:
        request = ModelRequest(model=model or self._config.model, contents=contents)
        url = f"{self._config.base_url.rstrip('/')}/models/{request.model}:generateContent"
        headers = {
            "x-goog-api-key": self._config.api_key,
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=request.to_payload())
        except httpx.TimeoutException as exc:
            raise GeminiUpstreamError("Gemini request timed out") from exc
        except httpx.HTTPError as exc:
            raise GeminiUpstreamError("Gemini request failed") from exc

        if resp.status_code != 200:
            # Keep the status only; upstream bodies can echo the request.
            raise GeminiUpstreamError(f"Gemini service returned HTTP {resp.status_code}")

        try:
            text = _extract_text(resp.json())
        except Exception as exc:  # noqa: BLE001
            raise GeminiUpstreamError("Gemini response had an unexpected shape") from exc

        if not text:
            raise GeminiUpstreamError("Gemini response contained no text")

        return text
