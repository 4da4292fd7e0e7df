from __future__ import annotations

from datetime import date, datetime, time
from typing import List, Optional, Sequence, Union

from slot_scheduler.models import ScheduleSlot, hhmm_to_minutes

TimeLike = Union[str, time]


def to_minutes(value: TimeLike) -> int:
    """Minutes since midnight for an HH:MM string or a time object."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    return hhmm_to_minutes(value)


def day_of_week_index(day: date) -> int:
    """Weekday index with Sunday = 0 (Python's weekday() has Monday = 0)."""
    return (day.weekday() + 1) % 7


def get_categories(slots: Sequence[ScheduleSlot]) -> List[str]:
    """Distinct categories in first-seen order."""
    seen: List[str] = []
    for slot in slots:
        if slot.category not in seen:
            seen.append(slot.category)
    return seen


def get_slots_for_category(category: str, slots: Sequence[ScheduleSlot]) -> List[ScheduleSlot]:
    wanted = category.lower()
    return [s for s in slots if s.category.lower() == wanted]


def slot_contains(slot: ScheduleSlot, minutes: int) -> bool:
    """Start inclusive, end exclusive; windows with end < start wrap past midnight."""
    start, end = slot.start_minutes, slot.end_minutes
    if end < start:
        return minutes >= start or minutes < end
    return start <= minutes < end


def get_slot_for_time(
    at: TimeLike,
    slots: Sequence[ScheduleSlot],
    day_of_week: Optional[int] = None,
) -> Optional[ScheduleSlot]:
    """
    Return the first slot (in list order) active at the given time of day.

    When day_of_week (0=Sunday) is given, slots restricted to other days are
    skipped; slots with no day restriction apply every day.
    """
    minutes = to_minutes(at)

    for slot in slots:
        if day_of_week is not None and slot.days_of_week and day_of_week not in slot.days_of_week:
            continue
        if slot_contains(slot, minutes):
            return slot

    return None


def get_next_available_slot(
    category: str,
    slots: Sequence[ScheduleSlot],
    current_time: Optional[TimeLike] = None,
) -> Optional[ScheduleSlot]:
    """
    Next slot of a category starting strictly after current_time.

    Wraps to the category's first slot (tomorrow's occurrence) when none is
    left today, and returns the first slot outright when no time is given.
    """
    category_slots = get_slots_for_category(category, slots)
    if not category_slots:
        return None

    if current_time is None:
        return category_slots[0]

    now = to_minutes(current_time)
    for slot in category_slots:
        if slot.start_minutes > now:
            return slot

    return category_slots[0]


def active_slot(now: datetime, slots: Sequence[ScheduleSlot]) -> Optional[ScheduleSlot]:
    """The slot active at a wall-clock instant, honouring weekday restrictions."""
    return get_slot_for_time(now.time(), slots, day_of_week=day_of_week_index(now))
