"""Prometheus metrics for masterdesk.

Tracks remote fetches behind the query cache, request deduplication,
form submissions and emitted notifications.
"""

from prometheus_client import Counter, Histogram

# Cache metrics
CACHE_FETCHES = Counter(
    "masterdesk_cache_fetches_total",
    "Remote fetches issued by the query cache",
    labelnames=["resource", "outcome"],
)

CACHE_DEDUPLICATED = Counter(
    "masterdesk_cache_deduplicated_total",
    "Subscriptions served by an already in-flight fetch",
    labelnames=["resource"],
)

CACHE_FETCH_LATENCY = Histogram(
    "masterdesk_cache_fetch_latency_seconds",
    "Latency of remote fetches issued by the query cache",
    labelnames=["resource"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Selector metrics
DEBOUNCED_INPUTS = Counter(
    "masterdesk_debounced_inputs_total",
    "Keystrokes coalesced away by the debounce timer",
)

# Form metrics
SUBMISSIONS = Counter(
    "masterdesk_submissions_total",
    "Form submission attempts",
    labelnames=["resource", "status"],
)

NOTIFICATIONS = Counter(
    "masterdesk_notifications_total",
    "Notifications emitted to the caller",
    labelnames=["kind"],
)


def record_fetch(resource: str, outcome: str, latency_seconds: float) -> None:
    """Record a completed cache fetch."""
    CACHE_FETCHES.labels(resource=resource, outcome=outcome).inc()
    CACHE_FETCH_LATENCY.labels(resource=resource).observe(latency_seconds)


def record_submission(resource: str, status: str) -> None:
    """Record a form submission outcome."""
    SUBMISSIONS.labels(resource=resource, status=status).inc()
