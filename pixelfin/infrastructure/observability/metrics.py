"""Prometheus metrics for ledger activity and persistence health"""

from prometheus_client import Counter, Histogram

# Ledger metrics
transactions_recorded_counter = Counter(
    "pixelfin_transactions_recorded_total",
    "Transactions durably recorded",
    ["kind"],  # saving | expense
)

records_rejected_counter = Counter(
    "pixelfin_records_rejected_total",
    "Persisted records dropped while decoding the ledger",
)

validation_failures_counter = Counter(
    "pixelfin_validation_failures_total",
    "Mutations refused because the amount was not positive",
)

# Persistence metrics
storage_failures_counter = Counter(
    "pixelfin_storage_failures_total",
    "Failed persistence boundary calls",
    ["operation"],  # read | write | remove
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_storage_failure(operation: str) -> None:
    storage_failures_counter.labels(operation=operation).inc()
