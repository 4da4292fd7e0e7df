from __future__ import annotations

import re
from typing import Literal, Optional, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


MatchMethod = Literal["keyword", "llm", "manual"]
Confidence = Literal["high", "medium", "low"]

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def hhmm_to_minutes(value: str) -> int:
    """Convert an HH:MM string to minutes since midnight."""
    h, m = map(int, value.split(":"))
    return h * 60 + m


class ScheduleSlot(BaseModel):
    """
    A named window of the day reserved for one category of work.

    Accepts both snake_case and the camelCase keys used by stored schedule
    documents ({"startTime": "10:00", "daysOfWeek": [], ...}).
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    category: str = Field(..., min_length=1)
    start_time: str
    end_time: str
    keywords: Tuple[str, ...] = ()
    description: Optional[str] = None
    priority: int = 0
    # 0=Sunday .. 6=Saturday, empty = every day
    days_of_week: Tuple[int, ...] = ()
    color: Optional[str] = None

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("category must not be blank")
        return v2

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_hhmm(cls, v: str) -> str:
        v2 = v.strip()
        if not _HHMM.match(v2):
            raise ValueError(f"time must be HH:MM (24h), got {v!r}")
        return v2

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        # an empty keyword is a substring of every text
        return tuple(k.strip().lower() for k in v if k and k.strip())

    @field_validator("days_of_week")
    @classmethod
    def valid_weekdays(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        for d in v:
            if not 0 <= d <= 6:
                raise ValueError(f"day of week must be in 0..6, got {d}")
        return v

    @property
    def start_minutes(self) -> int:
        return hhmm_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return hhmm_to_minutes(self.end_time)

    @property
    def crosses_midnight(self) -> bool:
        return self.end_minutes < self.start_minutes


class Schedule(BaseModel):
    """An ordered day template plus its fallback configuration."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = "Default Schedule"
    user_id: Optional[str] = None
    is_default: bool = True
    use_llm_fallback: bool = Field(True, alias="useLLMFallback")
    slots: List[ScheduleSlot] = Field(default_factory=list)

    # True when the built-in template is served because nothing is stored yet
    is_temporary: bool = False


class ScheduleMatch(BaseModel):
    slot: ScheduleSlot
    matched_keyword: str
    confidence: Confidence


class SmartScheduleResult(BaseModel):
    category: str
    start_time: str
    end_time: str
    match_method: MatchMethod
    confidence: Confidence
    matched_keyword: Optional[str] = None

    # display hints carried over from the slot
    description: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_slot(
        cls,
        slot: ScheduleSlot,
        match_method: MatchMethod,
        confidence: Confidence,
        matched_keyword: Optional[str] = None,
    ) -> "SmartScheduleResult":
        return cls(
            category=slot.category,
            start_time=slot.start_time,
            end_time=slot.end_time,
            match_method=match_method,
            confidence=confidence,
            matched_keyword=matched_keyword,
            description=slot.description,
            color=slot.color,
        )


class SlotSummary(BaseModel):
    category: str
    start_time: str
    end_time: str
    description: Optional[str] = None
    color: Optional[str] = None


class ManualSelection(BaseModel):
    """What a host shows the user when automatic scheduling gives up."""
    available_categories: List[str] = Field(default_factory=list)
    slots: List[SlotSummary] = Field(default_factory=list)
