"""
Prometheus metrics for the back-office service.

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

# License metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["license_type"],
)

license_activations_total = Counter(
    "license_activations_total",
    "License activation attempts",
    ["result"],
)

licenses_renewed_total = Counter(
    "licenses_renewed_total",
    "Total licenses renewed",
    ["trigger"],
)

licenses_expired_total = Counter(
    "licenses_expired_total",
    "Licenses whose expiry was materialized by the sweep",
)

# Wallet metrics
wallet_operations_total = Counter(
    "wallet_operations_total",
    "Wallet ledger operations",
    ["operation", "result"],
)

wallet_amount_total = Counter(
    "wallet_amount_total",
    "Sum of amounts moved through wallets",
    ["operation"],
)

# Audit metrics
audit_write_failures_total = Counter(
    "audit_write_failures_total",
    "Audit rows that could not be written",
    ["sink"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
