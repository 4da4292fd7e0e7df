from __future__ import annotations
import re
from typing import Optional

from llm.providers.base import LLMProvider

_CATEGORIES_LINE = re.compile(r"^Categories:\s*(.+)$", re.MULTILINE)
_TASK_LINE = re.compile(r'^Task:\s*"(.*)"$', re.MULTILINE)


class MockProvider(LLMProvider):
    """Offline stand-in: picks a category that shares a word with the task title."""

    name = "mock"
    model = "mock"

    def generate(self, *, system: str, user: str, model: Optional[str] = None) -> str:
        categories_match = _CATEGORIES_LINE.search(user)
        if not categories_match:
            return "Unknown"

        categories = [c.strip() for c in categories_match.group(1).split(",") if c.strip()]
        task_match = _TASK_LINE.search(user)
        title_words = set(task_match.group(1).lower().split()) if task_match else set()

        for category in categories:
            if set(category.lower().split()) & title_words:
                return category

        return categories[0] if categories else "Unknown"
