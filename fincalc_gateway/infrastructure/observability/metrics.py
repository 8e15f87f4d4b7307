"""Prometheus metrics for calculator usage, data quality and loans API health"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "fincalc_calculation_total",
    "Calculations served",
    ["operation", "outcome"],  # emi | schedule | sip | compare ; ok | invalid
)

data_quality_counter = Counter(
    "fincalc_data_quality_total",
    "Results clamped to stay non-negative",
    ["kind"],  # interest_clamp | returns_clamp
)

compared_offers_histogram = Histogram(
    "fincalc_compared_offers",
    "Offers per comparison request",
    buckets=[2, 3, 4, 5, 7, 10, 15, 25],
)

# Loans API metrics
loans_fetch_failures_counter = Counter(
    "loans_api_fetch_failures_total",
    "Failed loans listing API calls",
)

loans_latency_histogram = Histogram(
    "loans_api_latency_seconds",
    "Loans listing API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(operation: str, valid: bool = True) -> None:
    outcome = "ok" if valid else "invalid"
    calculation_counter.labels(operation=operation, outcome=outcome).inc()


def record_data_quality(kind: str) -> None:
    """Count a clamp-and-continue condition surfaced by the domain layer"""
    data_quality_counter.labels(kind=kind).inc()
