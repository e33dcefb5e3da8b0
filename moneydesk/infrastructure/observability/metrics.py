"""Prometheus metrics for instrument writes, store failures and request latency"""

from prometheus_client import Counter, Histogram

# Instrument write metrics
mutation_counter = Counter(
    "moneydesk_mutations_total",
    "Instrument writes completed",
    ["instrument", "operation"],  # fixed_deposit|emi_reminder|budget|savings_goal, create|update|...
)

# Store metrics
store_failure_counter = Counter(
    "moneydesk_store_failures_total",
    "Failed instrument store calls",
    ["method", "endpoint"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_mutation(instrument: str, operation: str) -> None:
    mutation_counter.labels(instrument=instrument, operation=operation).inc()


def record_store_failure(method: str, endpoint: str) -> None:
    store_failure_counter.labels(method=method, endpoint=endpoint).inc()
