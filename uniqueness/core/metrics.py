from __future__ import annotations

from prometheus_client import Counter, Histogram

# Labels carry class names and outcomes only. Never attribute values.

uniqueness_checks_total = Counter(
    "uniqueness_checks_total",
    "Total uniqueness checks by target class and outcome",
    labelnames=("target", "outcome"),
)

uniqueness_check_duration_seconds = Histogram(
    "uniqueness_check_duration_seconds",
    "Uniqueness check duration in seconds (lookup included)",
    labelnames=("target",),
    # A check is one indexed read; most land well under 50ms.
    buckets=(0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)


def observe_check(*, target: str, outcome: str, duration: float) -> None:
    uniqueness_checks_total.labels(target=target, outcome=outcome).inc()
    uniqueness_check_duration_seconds.labels(target=target).observe(duration)
