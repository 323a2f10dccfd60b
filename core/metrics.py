"""
Prometheus metrics for the key issuance service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Dispatcher metrics
key_commands_total = Counter(
    "key_commands_total",
    "Total dispatched commands",
    ["command", "outcome"],
)

# Key metrics
keys_issued_total = Counter(
    "keys_issued_total",
    "Total keys issued",
)

keys_deleted_total = Counter(
    "keys_deleted_total",
    "Total keys deleted",
    ["reason"],
)
