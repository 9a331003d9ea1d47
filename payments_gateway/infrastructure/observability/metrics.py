"""Prometheus metrics for payment writes, pagination and store health"""

from prometheus_client import Counter, Histogram

# Write metrics
payment_write_counter = Counter(
    "payments_write_total",
    "Payment write operations",
    ["operation"],  # create | replace | delete_all
)

# Pagination metrics
page_served_counter = Counter(
    "payments_page_served_total",
    "Payment pages served",
    ["has_next"],  # true | false
)

page_length_histogram = Histogram(
    "payments_page_length",
    "Number of payments returned per page",
    buckets=[0, 1, 5, 10, 25, 50, 100, 250, 1000],
)

# Store metrics
storage_failures_counter = Counter(
    "payments_storage_failures_total",
    "Failed payment store calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_page(returned: int, has_next: bool) -> None:
    """Record pagination metrics for one served page"""
    page_served_counter.labels(has_next="true" if has_next else "false").inc()
    page_length_histogram.observe(returned)
