import logging
import os
from typing import List, Optional, Tuple

from llm.errors import AllProvidersFailedError, ProviderError, ProviderNotConfiguredError
from llm.providers.base import LLMProvider
from slot_scheduler.metrics import LLM_PROVIDER_FAILURES_TOTAL

logger = logging.getLogger(__name__)

CLASSIFIER_SYSTEM_PROMPT = "You are a task classifier. Reply with only the category name."

# (provider, model) steps, tried in order
ProviderChain = List[Tuple[LLMProvider, str]]


def _provider_steps(name: str) -> ProviderChain:
    if name == "groq":
        from llm.providers.groq_provider import GroqProvider
        groq = GroqProvider()
        return [(groq, m) for m in groq.models]
    if name == "huggingface":
        from llm.providers.huggingface_provider import HuggingFaceProvider
        hf = HuggingFaceProvider()
        return [(hf, m) for m in hf.models]
    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider
        openai = OpenAIProvider()
        return [(openai, openai.model)]
    if name == "ollama":
        from llm.providers.ollama_provider import OllamaProvider
        ollama = OllamaProvider()
        return [(ollama, ollama.model)]
    if name == "mock":
        from llm.providers.mock_provider import MockProvider
        mock = MockProvider()
        return [(mock, mock.model)]
    raise ValueError(f"Unknown LLM provider: {name}")


def chain_from_env() -> ProviderChain:
    """Build the fallback chain from LLM_PROVIDERS, skipping unconfigured providers."""
    names = [n.strip().lower() for n in os.getenv("LLM_PROVIDERS", "groq,huggingface").split(",") if n.strip()]
    chain: ProviderChain = []
    for name in names:
        try:
            chain.extend(_provider_steps(name))
        except ProviderNotConfiguredError as e:
            logger.warning(f"Skipping LLM provider {name}: {e}")
    return chain


class LLMClient:
    """Text completion over an ordered chain of provider/model steps.

    Each failing step is logged and the next one is tried; only when the whole
    chain is exhausted does complete() raise. Instances are callable, so a
    client can be handed to the scheduler directly as its classifier.
    """

    def __init__(self, provider: Optional[LLMProvider] = None, chain: Optional[ProviderChain] = None):
        if chain is not None:
            self.chain = list(chain)
        elif provider is not None:
            self.chain = [(provider, getattr(provider, "model", "") or "")]
        else:
            self.chain = chain_from_env()

    def complete(self, prompt: str, system: str = CLASSIFIER_SYSTEM_PROMPT) -> str:
        errors: List[Exception] = []

        for provider, model in self.chain:
            provider_name = getattr(provider, "name", type(provider).__name__)
            try:
                return provider.generate(system=system, user=prompt, model=model or None)
            except Exception as e:
                LLM_PROVIDER_FAILURES_TOTAL.labels(provider=provider_name).inc()
                logger.warning(f"LLM step {provider_name}/{model or 'default'} failed: {e}")
                errors.append(ProviderError(provider_name, model or "default", str(e)))

        raise AllProvidersFailedError(errors)

    def __call__(self, prompt: str) -> str:
        return self.complete(prompt)
