from __future__ import annotations

from typing import List


class LLMError(Exception):
    pass


class ProviderNotConfiguredError(LLMError):
    """A provider is missing its credentials or settings."""


class ProviderError(LLMError):
    """A single provider/model step failed."""

    def __init__(self, provider: str, model: str, message: str):
        super().__init__(f"{provider}/{model}: {message}")
        self.provider = provider
        self.model = model


class AllProvidersFailedError(LLMError):
    def __init__(self, errors: List[Exception]):
        detail = "; ".join(str(e) for e in errors) or "no providers configured"
        super().__init__(f"All LLM providers failed ({detail})")
        self.errors = errors
