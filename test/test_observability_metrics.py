from prometheus_client import REGISTRY

from llm.llm_client import LLMClient
from scheduling.scheduler import smart_schedule_task


def _value(name, labels=None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


def test_outcome_counters(default_slots, fake_classifier):
    kw = _value("slot_scheduler_requests_total", {"method": "keyword"})
    llm = _value("slot_scheduler_requests_total", {"method": "llm"})
    unresolved = _value("slot_scheduler_requests_total", {"method": "unresolved"})

    smart_schedule_task("Deploy new API", None, default_slots, False)
    smart_schedule_task("Unrelated grocery list", None, default_slots, True, fake_classifier("Sleep"))
    smart_schedule_task("Unrelated grocery list", None, default_slots, False)

    assert _value("slot_scheduler_requests_total", {"method": "keyword"}) == kw + 1
    assert _value("slot_scheduler_requests_total", {"method": "llm"}) == llm + 1
    assert _value("slot_scheduler_requests_total", {"method": "unresolved"}) == unresolved + 1


def test_failure_counters(default_slots, failing_provider):
    classifier_failures = _value("slot_scheduler_classifier_failures_total")
    provider_failures = _value("slot_scheduler_llm_provider_failures_total", {"provider": "broken"})

    client = LLMClient(chain=[(failing_provider, "a"), (failing_provider, "b")])
    assert smart_schedule_task("Unrelated grocery list", None, default_slots, True, client) is None

    assert _value("slot_scheduler_classifier_failures_total") == classifier_failures + 1
    assert _value("slot_scheduler_llm_provider_failures_total", {"provider": "broken"}) == provider_failures + 2
