"""
Prometheus metrics collection for formrules

This module provides metrics instrumentation for monitoring
validation volume, rule failures and lookup health.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# VALIDATION METRICS
# =======================

# Validation calls counter
validations_total = Counter(
    name="formrules_validations_total",
    documentation="Total number of validation calls",
    labelnames=["form", "status"],  # status: passed, failed, error
    registry=REGISTRY,
)

# Rule failures counter
rule_failures_total = Counter(
    name="formrules_rule_failures_total",
    documentation="Total number of field-level rule failures",
    labelnames=["form", "rule_name", "field_name"],
    registry=REGISTRY,
)

# Validation duration histogram
validation_duration_seconds = Histogram(
    name="formrules_validation_duration_seconds",
    documentation="Time spent evaluating a session in seconds",
    labelnames=["form"],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
    registry=REGISTRY,
)

# =======================
# LOOKUP METRICS
# =======================

# Lookup failures counter
lookup_errors_total = Counter(
    name="formrules_lookup_errors_total",
    documentation="Total number of existence lookups that could not answer",
    labelnames=["table"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """
    Get content type for Prometheus metrics

    Returns:
        Content type string
    """
    return CONTENT_TYPE_LATEST


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    """
    Observe a value in a histogram metric

    Args:
        histogram: Prometheus Histogram metric
        value: Value to observe
        **labels: Label values for the metric
    """
    histogram.labels(**labels).observe(value)


def get_sample_value(name: str, labels: dict[str, str] | None = None) -> float | None:
    """Read the current value of a sample from the formrules registry."""
    return REGISTRY.get_sample_value(name, labels or {})


# =======================
# VALIDATION HELPERS
# =======================

def record_validation(form: str, passed: bool, failures: list[tuple[str, str]], duration_seconds: float) -> None:
    """
    Record the outcome of one validation call.

    Args:
        form: Form name (or "anonymous")
        passed: Whether the validation passed
        failures: (field_name, rule_name) pairs that failed
        duration_seconds: Evaluation duration in seconds
    """
    status = "passed" if passed else "failed"
    increment_counter(validations_total, 1, form=form, status=status)
    for field_name, rule_name in failures:
        increment_counter(rule_failures_total, 1, form=form, rule_name=rule_name, field_name=field_name)
    observe_histogram(validation_duration_seconds, duration_seconds, form=form)


def record_lookup_error(form: str, table: str) -> None:
    """
    Record a validation call aborted by an unavailable lookup.

    Args:
        form: Form name (or "anonymous")
        table: Table the failed lookup targeted
    """
    increment_counter(validations_total, 1, form=form, status="error")
    increment_counter(lookup_errors_total, 1, table=table)
