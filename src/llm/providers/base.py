from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

class LLMProvider(ABC):
    name: str = "provider"
    model: str = ""

    @abstractmethod
    def generate(self, *, system: str, user: str, model: Optional[str] = None) -> str:
        """
        Must return the model output as TEXT; callers parse it themselves.
        """
        raise NotImplementedError
