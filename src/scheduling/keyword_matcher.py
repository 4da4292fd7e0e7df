from __future__ import annotations

from typing import Optional, Sequence

from slot_scheduler.models import Confidence, ScheduleMatch, ScheduleSlot


def keyword_confidence(keyword: str) -> Confidence:
    """Grade a keyword hit.

    Every keyword hit is graded "medium", whatever its length. Keyword matches
    are never reported as "high".
    """
    return "medium"


def find_slot_by_keywords(text: str, slots: Sequence[ScheduleSlot]) -> Optional[ScheduleMatch]:
    """
    Find the slot whose keyword best matches the task text.

    Matching is plain substring containment on lowercased text ("gym" hits
    "gymlingoo"). Among hits the longest keyword wins, then the higher slot
    priority; anything still tied keeps the first hit in slot/keyword order.
    """
    normalized = text.lower()

    best: Optional[ScheduleMatch] = None
    best_len = 0

    for slot in slots:
        for keyword in slot.keywords:
            kw = keyword.lower()
            if not kw or kw not in normalized:
                continue

            longer = len(kw) > best_len
            same_len_higher_priority = (
                best is not None and len(kw) == best_len and slot.priority > best.slot.priority
            )
            if longer or same_len_higher_priority:
                best_len = len(kw)
                best = ScheduleMatch(
                    slot=slot,
                    matched_keyword=keyword,
                    confidence=keyword_confidence(kw),
                )

    return best
