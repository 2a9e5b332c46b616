"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "huissier_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "huissier_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# ============================================================
# Verification Metrics
# ============================================================

verifications_total = Counter(
    "huissier_verifications_total",
    "Total wallet verifications by outcome",
    ["outcome"],
)

verification_duration_seconds = Histogram(
    "huissier_verification_duration_seconds",
    "Wallet verification duration in seconds",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

linkage_conflicts_total = Counter(
    "huissier_linkage_conflicts_total",
    "Concurrent linkage updates that lost the compare-and-swap",
)

# ============================================================
# Blockchain Metrics
# ============================================================

balance_lookups_total = Counter(
    "huissier_balance_lookups_total",
    "Total token balance lookups",
    ["status"],
)

balance_lookup_duration_seconds = Histogram(
    "huissier_balance_lookup_duration_seconds",
    "Token balance lookup duration in seconds",
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# ============================================================
# Notification Metrics
# ============================================================

notifications_total = Counter(
    "huissier_notifications_total",
    "Role assignment notifications by status",
    ["status"],
)
