"""Monitoring utilities leveraging Prometheus client."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

http_requests_total = Counter(
    "peoplesync_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "peoplesync_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

migration_records_total = Counter(
    "peoplesync_migration_records_total",
    "Records processed by migration passes",
    ["action", "outcome"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)


def observe_migration(action: str, *, migrated: int = 0, skipped: int = 0, failed: int = 0) -> None:
    for outcome, amount in (("migrated", migrated), ("skipped", skipped), ("failed", failed)):
        if amount:
            migration_records_total.labels(action=action, outcome=outcome).inc(amount)
