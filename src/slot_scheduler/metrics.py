from prometheus_client import Counter, REGISTRY


# we check if they are already registered to avoid errors during reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # Counter registers "<name>_total" plus its base name
        return REGISTRY._names_to_collectors.get(name) or REGISTRY._names_to_collectors[f"{name}_total"]


SCHEDULE_REQUESTS_TOTAL = get_or_create_metric(
    "slot_scheduler_requests",
    "Smart scheduling requests by outcome",
    Counter,
    labelnames=["method"],
)

CLASSIFIER_FAILURES_TOTAL = get_or_create_metric(
    "slot_scheduler_classifier_failures",
    "Fallback classifier calls that raised",
    Counter,
)

LLM_PROVIDER_FAILURES_TOTAL = get_or_create_metric(
    "slot_scheduler_llm_provider_failures",
    "Failed LLM provider steps",
    Counter,
    labelnames=["provider"],
)
