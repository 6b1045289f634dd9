"""Prometheus metrics for the Advocate Directory API.

Metrics are exposed at the /metrics endpoint.

Metrics Categories:
- HTTP request metrics (latency, count, in progress)
- Listing cache metrics (hits, misses, backend errors)
- Record store metrics (read latency, read failures)
"""

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Gauge, Histogram, Info

# Application info
APP_INFO = Info("advocates_app", "Advocate Directory application information")

# HTTP Request metrics
HTTP_REQUESTS_TOTAL = Counter(
    "advocates_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "advocates_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "advocates_http_requests_in_progress",
    "Number of HTTP requests currently in progress",
    ["method", "endpoint"],
)

# Listing cache metrics
LISTING_CACHE_LOOKUPS_TOTAL = Counter(
    "advocates_listing_cache_lookups_total",
    "Listing cache lookups by outcome",
    ["result"],  # hit, miss, error
)

LISTING_CACHE_INVALIDATIONS_TOTAL = Counter(
    "advocates_listing_cache_invalidations_total",
    "Tag invalidations fired against the listing cache",
    ["tag"],
)

# Record store metrics
STORE_READ_DURATION_SECONDS = Histogram(
    "advocates_store_read_duration_seconds",
    "Duration of record store reads in seconds",
    ["kind"],  # page, count
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

STORE_READ_FAILURES_TOTAL = Counter(
    "advocates_store_read_failures_total",
    "Listing requests that failed because the record store could not be read",
    ["reason"],  # error, timeout
)


def set_app_info(version: str, environment: str) -> None:
    """Set application info metric.

    Args:
        version: Application version string.
        environment: Deployment environment (development, staging, production).
    """
    APP_INFO.info({"version": version, "environment": environment})


def record_cache_lookup(result: str) -> None:
    LISTING_CACHE_LOOKUPS_TOTAL.labels(result=result).inc()


def record_cache_invalidation(tag: str) -> None:
    LISTING_CACHE_INVALIDATIONS_TOTAL.labels(tag=tag).inc()


def record_store_failure(reason: str) -> None:
    STORE_READ_FAILURES_TOTAL.labels(reason=reason).inc()


@contextmanager
def time_store_read(kind: str) -> Iterator[None]:
    """Observe the wall time of a record store read.

    Example:
        with time_store_read("page"):
            rows = store.fetch(predicate, offset=0, limit=10)
    """
    start_time = time.perf_counter()
    try:
        yield
    finally:
        STORE_READ_DURATION_SECONDS.labels(kind=kind).observe(time.perf_counter() - start_time)
