from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from slot_scheduler.metrics import CLASSIFIER_FAILURES_TOTAL

logger = logging.getLogger(__name__)

# (prompt) -> reply; may be sync or async and may raise
Classifier = Callable[[str], Union[str, Awaitable[str]]]


def unique_categories(categories: Sequence[str]) -> list[str]:
    out: list[str] = []
    for c in categories:
        if c not in out:
            out.append(c)
    return out


def build_classification_prompt(task_title: str, categories: Sequence[str]) -> str:
    """Short classification prompt, kept to a few dozen tokens."""
    return (
        "Classify this task into ONE category.\n"
        f'Task: "{task_title}"\n'
        f"Categories: {', '.join(unique_categories(categories))}\n"
        "Reply with ONLY the category name, nothing else."
    )


def parse_classification_response(response: str, categories: Sequence[str]) -> Optional[str]:
    """
    Map a free-text reply onto a known category.

    The first category (in the given order) whose lowercased name occurs
    anywhere in the lowercased reply wins, so "The category is Work." resolves
    to "Work". A category embedded in another name ("Work" in "Homework") is
    matched as well.
    """
    normalized = (response or "").strip().lower()
    if not normalized:
        return None

    for category in categories:
        if category.lower() in normalized:
            return category
    return None


class TaskClassifier:
    """Fallback adapter around an external text-classification collaborator.

    Never raises: a failing or unhelpful collaborator yields None so the
    caller can fall back to manual scheduling.
    """

    def __init__(self, classifier: Classifier):
        self.classifier = classifier

    def classify(self, task_title: str, categories: Sequence[str]) -> Optional[str]:
        candidates = unique_categories(categories)
        prompt = build_classification_prompt(task_title, candidates)
        try:
            reply = self.classifier(prompt)
            if inspect.isawaitable(reply):
                # sync path cannot await; close the coroutine so it is not leaked
                _close(reply)
                raise TypeError("async classifier passed to classify(); use aclassify()")
        except Exception as e:
            CLASSIFIER_FAILURES_TOTAL.inc()
            logger.error(f"LLM classification failed: {e}")
            return None
        return self._resolve(task_title, reply, candidates)

    async def aclassify(self, task_title: str, categories: Sequence[str]) -> Optional[str]:
        candidates = unique_categories(categories)
        prompt = build_classification_prompt(task_title, candidates)
        try:
            reply = self.classifier(prompt)
            if inspect.isawaitable(reply):
                reply = await reply
        except Exception as e:
            CLASSIFIER_FAILURES_TOTAL.inc()
            logger.error(f"LLM classification failed: {e}")
            return None
        return self._resolve(task_title, reply, candidates)

    def _resolve(self, task_title: str, reply: Any, candidates: list[str]) -> Optional[str]:
        if not isinstance(reply, str):
            logger.warning("Classifier returned a non-text reply (%s)", type(reply).__name__)
            return None

        category = parse_classification_response(reply, candidates)
        if category is None:
            logger.info("Classifier reply %r matched none of %s", reply[:80], candidates)
        else:
            logger.debug("Classified %r as %s", task_title, category)
        return category


def _close(awaitable: Any) -> None:
    close = getattr(awaitable, "close", None)
    if close is not None:
        close()
