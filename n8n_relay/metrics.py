from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "n8n_relay_requests_total",
    "Total number of requests",
    ["method", "endpoint", "status_code"]
)

REQUEST_LATENCY = Histogram(
    "n8n_relay_request_duration_seconds",
    "Request latency",
    ["method", "endpoint", "status_code"]
)

UPSTREAM_REQUESTS = Counter(
    "n8n_relay_upstream_requests_total",
    "Calls made to the n8n server",
    ["operation", "outcome"]
)
