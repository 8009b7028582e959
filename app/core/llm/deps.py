from __future__ import annotations

from app.core.llm.gemini_client import GeminiClient, GeminiConfig
from app.core.settings import Settings, get_settings


def get_gemini_client(settings: Settings | None = None) -> GeminiClient | None:
    """
    Build a GeminiClient from settings.

    Returns None when no API key is configured so callers can report a clean failure
    instead of raising during construction.
    """

    settings = settings or get_settings()
    if not settings.gemini_api_key:
        return None

    config = GeminiConfig(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        model=settings.gemini_model,
        timeout_seconds=float(settings.gemini_timeout_seconds),
    )
    return GeminiClient(config=config)
