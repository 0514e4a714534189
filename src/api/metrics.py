from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        # Try to create it
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "gtd_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "gtd_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

INTERPRETER_MODE_TOTAL = get_or_create_metric(
    "gtd_interpreter_mode_total",
    "Chat messages by interpreter that produced the actions (llm, fallback, command)",
    Counter,
    labelnames=["mode"],
)

ACTIONS_CREATED_TOTAL = get_or_create_metric(
    "gtd_actions_created_total",
    "Actions persisted by the action executor",
    Counter,
    labelnames=["type"],
)

ACTIONS_SKIPPED_TOTAL = get_or_create_metric(
    "gtd_actions_skipped_total",
    "Actions skipped by the action executor",
    Counter,
    labelnames=["reason"],
)
