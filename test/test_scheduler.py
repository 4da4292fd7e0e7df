import asyncio
from datetime import datetime

import pytest

from scheduling.scheduler import (
    Scheduler,
    assign_manually,
    manual_selection_options,
    smart_schedule_task,
    smart_schedule_task_async,
)
from slot_scheduler.models import Schedule, ScheduleSlot
from storage.schedule_store import ScheduleStore


def test_keyword_match_end_to_end(default_slots):
    result = smart_schedule_task("Deploy new API to staging", None, default_slots, use_llm_fallback=True)
    assert result.category == "Marktiz"
    assert result.start_time == "10:00"
    assert result.end_time == "14:00"
    assert result.match_method == "keyword"
    assert result.matched_keyword == "deploy"
    assert result.confidence == "medium"
    assert result.color == "#6366f1"


def test_keyword_match_skips_classifier(default_slots):
    def never(prompt):
        raise AssertionError("classifier must not be called on a keyword hit")

    result = smart_schedule_task("Deploy new API", None, default_slots, True, never)
    assert result.match_method == "keyword"


def test_description_is_searched(default_slots):
    result = smart_schedule_task("Tuesday evening", "record a youtube short", default_slots, False)
    assert result.category == "Gymlingoo"
    assert result.matched_keyword == "youtube"


def test_no_match_without_fallback(default_slots, fake_classifier):
    classify = fake_classifier("Gymlingoo")
    assert smart_schedule_task("Unrelated grocery list", None, default_slots, False, classify) is None
    assert classify.prompts == []


def test_no_match_without_classifier(default_slots):
    assert smart_schedule_task("Unrelated grocery list", None, default_slots, True) is None


def test_llm_fallback_end_to_end(default_slots, fake_classifier):
    classify = fake_classifier("Gymlingoo")
    result = smart_schedule_task("Unrelated grocery list", None, default_slots, True, classify)
    assert result.category == "Gymlingoo"
    assert result.match_method == "llm"
    assert result.confidence == "medium"
    assert result.matched_keyword is None
    assert (result.start_time, result.end_time) == ("16:00", "18:00")
    assert 'Task: "Unrelated grocery list"' in classify.prompts[0]
    assert "Categories: Marktiz, Bug Bounty, Gymlingoo, Break, Sleep" in classify.prompts[0]


def test_classifier_error_returns_none(default_slots):
    def boom(prompt):
        raise RuntimeError("service unavailable")

    assert smart_schedule_task("Unrelated grocery list", None, default_slots, True, boom) is None


def test_unknown_category_reply_returns_none(default_slots, fake_classifier):
    assert smart_schedule_task("Unrelated grocery list", None, default_slots, True, fake_classifier("Groceries")) is None


def test_empty_slots_returns_none(fake_classifier):
    assert smart_schedule_task("Deploy", None, [], True, fake_classifier("Marktiz")) is None


def test_blank_title_rejected(default_slots):
    with pytest.raises(ValueError):
        smart_schedule_task("   ", None, default_slots, False)


def test_async_entry_point_with_async_classifier(default_slots):
    async def classify(prompt: str) -> str:
        return "Break."

    result = asyncio.run(smart_schedule_task_async("Unrelated grocery list", None, default_slots, True, classify))
    assert result.category == "Break"
    assert result.match_method == "llm"


def test_async_entry_point_keyword(default_slots):
    result = asyncio.run(smart_schedule_task_async("pentest acme", None, default_slots, False))
    assert result.category == "Bug Bounty"


def test_manual_selection_options(default_slots):
    options = manual_selection_options(default_slots)
    assert options.available_categories == ["Marktiz", "Bug Bounty", "Gymlingoo", "Break", "Sleep"]
    assert len(options.slots) == 8
    assert options.slots[5].start_time == "22:30"


def test_assign_manually(default_slots):
    result = assign_manually("bug bounty", default_slots, current_time="10:00")
    assert result.category == "Bug Bounty"
    assert result.start_time == "14:00"
    assert result.match_method == "manual"
    assert result.confidence == "high"
    assert assign_manually("Chores", default_slots) is None


def test_scheduler_uses_template_when_nothing_stored(tmp_path, fake_classifier):
    store = ScheduleStore(path=str(tmp_path / "schedules.json"))
    scheduler = Scheduler(store=store, classifier=fake_classifier("Sleep"))

    assert scheduler.schedule("Unrelated grocery list").category == "Sleep"
    assert scheduler.schedule("Unrelated grocery list", use_llm=False) is None


def test_scheduler_stored_flag_wins_over_request(tmp_path, fake_classifier):
    store = ScheduleStore(path=str(tmp_path / "schedules.json"))
    store.save(Schedule(
        name="Mine",
        use_llm_fallback=False,
        slots=[ScheduleSlot(category="Errands", start_time="17:00", end_time="18:00", keywords=["shop"])],
    ))
    scheduler = Scheduler(store=store, classifier=fake_classifier("Errands"))

    assert scheduler.schedule("Unrelated grocery list", use_llm=True) is None
    assert scheduler.schedule("shopping run").category == "Errands"


def test_scheduler_active_slot(tmp_path):
    scheduler = Scheduler(store=ScheduleStore(path=str(tmp_path / "s.json")))
    assert scheduler.active_slot(datetime(2026, 1, 5, 23, 15)).description == "Gymlingoo coding session"
    assert scheduler.manual_options().available_categories[0] == "Marktiz"


def test_scheduler_aschedule(tmp_path):
    async def classify(prompt: str) -> str:
        return "Marktiz"

    scheduler = Scheduler(store=ScheduleStore(path=str(tmp_path / "s.json")), classifier=classify)
    result = asyncio.run(scheduler.aschedule("Unrelated grocery list"))
    assert result.category == "Marktiz"
    assert result.start_time == "10:00"


def test_assign_manually_wraps_to_tomorrow(default_slots):
    # Bug Bounty starts at 14:00 and 00:30; after 20:00 neither is later today
    assert assign_manually("Bug Bounty", default_slots, current_time="20:00").start_time == "14:00"
    assert assign_manually("Bug Bounty", default_slots, current_time="00:00").start_time == "14:00"
    assert assign_manually("Sleep", default_slots, current_time="03:00").start_time == "02:30"
