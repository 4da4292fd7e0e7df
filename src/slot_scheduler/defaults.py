from __future__ import annotations

from typing import List

from slot_scheduler.models import Schedule, ScheduleSlot

_MARKTIZ_KEYWORDS = ["marktiz", "startup", "product", "feature", "deploy", "backend", "frontend", "api"]
_BOUNTY_KEYWORDS = ["bug bounty", "bounty", "security", "vulnerability", "pentest", "hack"]

DEFAULT_SCHEDULE_SLOTS: List[ScheduleSlot] = [
    ScheduleSlot(
        category="Marktiz",
        start_time="10:00",
        end_time="14:00",
        keywords=_MARKTIZ_KEYWORDS,
        description="Main startup work",
        priority=10,
        color="#6366f1",
    ),
    ScheduleSlot(
        category="Bug Bounty",
        start_time="14:00",
        end_time="16:00",
        keywords=_BOUNTY_KEYWORDS + ["exploit", "xss", "sqli"],
        description="Bug bounty hunting",
        priority=8,
        color="#ef4444",
    ),
    ScheduleSlot(
        category="Gymlingoo",
        start_time="16:00",
        end_time="18:00",
        keywords=["gym", "workout", "exercise", "fitness", "content", "video", "youtube", "gymlingoo", "recording"],
        description="Gym + Content Creation",
        priority=7,
        color="#22c55e",
    ),
    ScheduleSlot(
        category="Break",
        start_time="18:00",
        end_time="18:30",
        keywords=["break", "rest", "food", "lunch", "dinner", "snack"],
        description="Food/Rest",
        priority=1,
        color="#f59e0b",
    ),
    ScheduleSlot(
        category="Marktiz",
        start_time="18:30",
        end_time="22:30",
        keywords=_MARKTIZ_KEYWORDS,
        description="Second session",
        priority=10,
        color="#6366f1",
    ),
    ScheduleSlot(
        category="Gymlingoo",
        start_time="22:30",
        end_time="00:30",
        keywords=["gymlingoo", "coding", "app", "mobile", "flutter", "react native"],
        description="Gymlingoo coding session",
        priority=7,
        color="#22c55e",
    ),
    ScheduleSlot(
        category="Bug Bounty",
        start_time="00:30",
        end_time="02:30",
        keywords=_BOUNTY_KEYWORDS,
        description="Bug bounty second session",
        priority=8,
        color="#ef4444",
    ),
    ScheduleSlot(
        category="Sleep",
        start_time="02:30",
        end_time="10:00",
        keywords=["sleep", "rest", "nap"],
        description="Rest",
        priority=0,
        color="#64748b",
    ),
]


def default_schedule() -> Schedule:
    """The built-in day template, flagged temporary since it is not stored anywhere."""
    return Schedule(
        name="Default Schedule",
        is_default=True,
        use_llm_fallback=True,
        slots=list(DEFAULT_SCHEDULE_SLOTS),
        is_temporary=True,
    )
