"""Prometheus metrics for monitoring branch risk, record writes, and webhook performance"""

from prometheus_client import Counter, Histogram

# Risk metrics
risk_assessment_counter = Counter(
    "branchwatch_risk_assessments_total",
    "Risk assessments computed",
    ["level"],  # low | medium | high
)

risk_level_change_counter = Counter(
    "branchwatch_risk_level_changes_total",
    "Branch risk level transitions caused by record writes",
    ["from_level", "to_level"],
)

# Data metrics
record_write_counter = Counter(
    "branchwatch_record_writes_total",
    "Performance record writes",
    ["operation"],  # created | updated | deleted
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Risk webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(level: str) -> None:
    """Count an assessment by the level it produced"""
    risk_assessment_counter.labels(level=level).inc()


def record_write(operation: str, previous_level: str, current_level: str) -> None:
    """Count a record write and any risk level transition it caused"""
    record_write_counter.labels(operation=operation).inc()

    if previous_level != current_level:
        risk_level_change_counter.labels(from_level=previous_level, to_level=current_level).inc()
