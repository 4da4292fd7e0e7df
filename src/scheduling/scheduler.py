from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from classification.task_classifier import Classifier, TaskClassifier
from scheduling.keyword_matcher import find_slot_by_keywords
from scheduling.time_window import (
    TimeLike,
    active_slot,
    get_categories,
    get_next_available_slot,
)
from slot_scheduler.metrics import SCHEDULE_REQUESTS_TOTAL
from slot_scheduler.models import (
    ManualSelection,
    ScheduleSlot,
    SlotSummary,
    SmartScheduleResult,
)
from storage.schedule_store import ScheduleStore

logger = logging.getLogger(__name__)


def _search_text(title: str, description: Optional[str]) -> str:
    if not title or not title.strip():
        raise ValueError("task title is required")
    return f"{title} {description or ''}"


def _keyword_result(text: str, slots: Sequence[ScheduleSlot]) -> Optional[SmartScheduleResult]:
    match = find_slot_by_keywords(text, slots)
    if match is None:
        return None
    SCHEDULE_REQUESTS_TOTAL.labels(method="keyword").inc()
    logger.debug(f"Keyword '{match.matched_keyword}' -> {match.slot.category}")
    return SmartScheduleResult.from_slot(
        match.slot,
        match_method="keyword",
        confidence=match.confidence,
        matched_keyword=match.matched_keyword,
    )


def _llm_result(category: Optional[str], slots: Sequence[ScheduleSlot]) -> Optional[SmartScheduleResult]:
    if category is None:
        return None
    slot = get_next_available_slot(category, slots)
    if slot is None:
        return None
    SCHEDULE_REQUESTS_TOTAL.labels(method="llm").inc()
    return SmartScheduleResult.from_slot(slot, match_method="llm", confidence="medium")


def _unresolved(title: str) -> None:
    SCHEDULE_REQUESTS_TOTAL.labels(method="unresolved").inc()
    logger.info(f"Could not automatically schedule task '{title}'")
    return None


def smart_schedule_task(
    title: str,
    description: Optional[str],
    slots: Sequence[ScheduleSlot],
    use_llm_fallback: bool,
    classifier: Optional[Classifier] = None,
) -> Optional[SmartScheduleResult]:
    """
    Assign a task to a slot of the day template.

    1. keyword matching on title + description (no external cost)
    2. if enabled and a classifier is given, ask it for a category and take
       that category's first slot
    3. otherwise None: the caller should let the user pick manually
    """
    text = _search_text(title, description)

    result = _keyword_result(text, slots)
    if result is not None:
        return result

    if use_llm_fallback and classifier is not None:
        category = TaskClassifier(classifier).classify(title, get_categories(slots))
        result = _llm_result(category, slots)
        if result is not None:
            return result

    return _unresolved(title)


async def smart_schedule_task_async(
    title: str,
    description: Optional[str],
    slots: Sequence[ScheduleSlot],
    use_llm_fallback: bool,
    classifier: Optional[Classifier] = None,
) -> Optional[SmartScheduleResult]:
    """Same as smart_schedule_task, but the classifier may be a coroutine function."""
    text = _search_text(title, description)

    result = _keyword_result(text, slots)
    if result is not None:
        return result

    if use_llm_fallback and classifier is not None:
        category = await TaskClassifier(classifier).aclassify(title, get_categories(slots))
        result = _llm_result(category, slots)
        if result is not None:
            return result

    return _unresolved(title)


def manual_selection_options(slots: Sequence[ScheduleSlot]) -> ManualSelection:
    """Categories and slot windows to offer when automatic scheduling returns None."""
    return ManualSelection(
        available_categories=get_categories(slots),
        slots=[
            SlotSummary(
                category=s.category,
                start_time=s.start_time,
                end_time=s.end_time,
                description=s.description,
                color=s.color,
            )
            for s in slots
        ],
    )


def assign_manually(
    category: str,
    slots: Sequence[ScheduleSlot],
    current_time: Optional[TimeLike] = None,
) -> Optional[SmartScheduleResult]:
    """Turn the user's own category pick into a result; None for an unknown category."""
    slot = get_next_available_slot(category, slots, current_time)
    if slot is None:
        return None
    return SmartScheduleResult.from_slot(slot, match_method="manual", confidence="high")


class Scheduler:
    """Runs smart scheduling against the stored default schedule."""

    def __init__(self, store: Optional[ScheduleStore] = None, classifier: Optional[Classifier] = None):
        self.store = store or ScheduleStore()
        self.classifier = classifier

    def _use_llm(self, stored_flag: bool, is_temporary: bool, use_llm: Optional[bool]) -> bool:
        # a stored schedule's own flag wins over the request
        if not is_temporary:
            return stored_flag
        return True if use_llm is None else use_llm

    def schedule(
        self,
        title: str,
        description: Optional[str] = None,
        use_llm: Optional[bool] = None,
    ) -> Optional[SmartScheduleResult]:
        schedule = self.store.load_default()
        return smart_schedule_task(
            title,
            description,
            schedule.slots,
            self._use_llm(schedule.use_llm_fallback, schedule.is_temporary, use_llm),
            self.classifier,
        )

    async def aschedule(
        self,
        title: str,
        description: Optional[str] = None,
        use_llm: Optional[bool] = None,
    ) -> Optional[SmartScheduleResult]:
        schedule = self.store.load_default()
        return await smart_schedule_task_async(
            title,
            description,
            schedule.slots,
            self._use_llm(schedule.use_llm_fallback, schedule.is_temporary, use_llm),
            self.classifier,
        )

    def manual_options(self) -> ManualSelection:
        return manual_selection_options(self.store.load_default().slots)

    def active_slot(self, now: Optional[datetime] = None) -> Optional[ScheduleSlot]:
        return active_slot(now or datetime.now(), self.store.load_default().slots)
