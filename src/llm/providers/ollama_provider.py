from __future__ import annotations
import os
from typing import Optional

import httpx

from .base import LLMProvider

class OllamaProvider(LLMProvider):
    name = "ollama"

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        self.model = os.getenv("OLLAMA_MODEL", "llama3.1").strip()
        self.base_url = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434").strip()
        self.timeout_s = float(os.getenv("LLM_TIMEOUT_S", "60"))
        self.transport = transport

    def generate(self, *, system: str, user: str, model: Optional[str] = None) -> str:
        url = f"{self.base_url}/api/chat"
        payload = {
            "model": model or self.model,
            "stream": False,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "options": {"temperature": 0.2},
        }

        with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
            r = client.post(url, json=payload)
            r.raise_for_status()
            data = r.json()

        return data["message"]["content"]
