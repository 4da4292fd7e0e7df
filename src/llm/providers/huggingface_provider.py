from __future__ import annotations
import json
import os
from typing import Optional

import httpx

from llm.errors import ProviderNotConfiguredError
from .base import LLMProvider

LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "30"))

# tried in this order
DEFAULT_HF_MODELS = [
    "mistralai/Mistral-7B-Instruct-v0.3",
    "meta-llama/Meta-Llama-3-8B-Instruct",
    "microsoft/Phi-3-mini-4k-instruct",
    "HuggingFaceH4/zephyr-7b-beta",
]


def _models_from_env() -> list[str]:
    raw = os.getenv("HF_MODELS", "").strip()
    if not raw:
        return list(DEFAULT_HF_MODELS)
    return [m.strip() for m in raw.split(",") if m.strip()]


class HuggingFaceProvider(LLMProvider):
    """Hugging Face Inference API (text generation, plain prompt)."""

    name = "huggingface"

    def __init__(
        self,
        api_key: Optional[str] = None,
        models: Optional[list[str]] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = (api_key or os.getenv("HUGGINGFACE_API_KEY", "")).strip()
        self.models = models or _models_from_env()
        self.base_url = (base_url or os.getenv("HF_BASE_URL", "https://api-inference.huggingface.co/models")).strip()
        self.transport = transport

        if not self.api_key:
            raise ProviderNotConfiguredError(f"{self.name}: API key is missing")
        if not self.models:
            raise ProviderNotConfiguredError(f"{self.name}: no models configured (HF_MODELS)")
        self.model = self.models[0]

    @staticmethod
    def build_prompt(system: str, user: str) -> str:
        return f"SYSTEM: {system}\nUSER: {user}\nASSISTANT:"

    @staticmethod
    def extract_text(result) -> str:
        if isinstance(result, list) and result and isinstance(result[0], dict) and result[0].get("generated_text"):
            output = result[0]["generated_text"]
        elif isinstance(result, dict) and result.get("generated_text"):
            output = result["generated_text"]
        else:
            output = json.dumps(result)

        # some models echo the prompt back
        if "ASSISTANT:" in output:
            output = output.split("ASSISTANT:")[-1]
        return output.strip()

    def generate(self, *, system: str, user: str, model: Optional[str] = None) -> str:
        url = f"{self.base_url}/{model or self.model}"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "inputs": self.build_prompt(system, user),
            "parameters": {
                "max_new_tokens": 64,
                "temperature": 0.2,
                "return_full_text": False,
            },
        }

        with httpx.Client(timeout=LLM_TIMEOUT_S, transport=self.transport) as client:
            r = client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()

        return self.extract_text(data)
