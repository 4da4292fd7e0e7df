from __future__ import annotations
import os
from typing import Optional

import httpx

from llm.errors import ProviderNotConfiguredError
from .base import LLMProvider

LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "30"))


class OpenAIProvider(LLMProvider):
    """Any OpenAI-compatible chat completions endpoint."""

    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = (api_key if api_key is not None else os.getenv("OPENAI_API_KEY", "")).strip()
        self.model = (model or os.getenv("OPENAI_MODEL", "gpt-4o-mini")).strip()
        self.base_url = (base_url or os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")).strip()
        self.transport = transport

        if not self.api_key:
            raise ProviderNotConfiguredError(f"{self.name}: API key is missing")

    def generate(self, *, system: str, user: str, model: Optional[str] = None) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": model or self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": 0.2,
            "max_tokens": 64,
        }

        with httpx.Client(timeout=LLM_TIMEOUT_S, transport=self.transport) as client:
            r = client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()

        return data["choices"][0]["message"]["content"] or ""
