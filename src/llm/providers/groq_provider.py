from __future__ import annotations
import os
from typing import Optional

import httpx

from .openai_provider import OpenAIProvider

GROQ_PRIMARY_MODEL = "llama-3.3-70b-versatile"
GROQ_FALLBACK_MODEL = "mixtral-8x7b-32768"


class GroqProvider(OpenAIProvider):
    """Groq serves an OpenAI-compatible API."""

    name = "groq"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        fallback_model: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(
            api_key=api_key or os.getenv("GROQ_API_KEY", ""),
            model=model or os.getenv("GROQ_MODEL", GROQ_PRIMARY_MODEL),
            base_url=base_url or os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1"),
            transport=transport,
        )
        self.fallback_model = (fallback_model or os.getenv("GROQ_FALLBACK_MODEL", GROQ_FALLBACK_MODEL)).strip()

    @property
    def models(self) -> list[str]:
        return [m for m in dict.fromkeys([self.model, self.fallback_model]) if m]
