"""Prometheus metrics for generation runs."""
import time

from prometheus_client import REGISTRY, Counter, Gauge, Histogram


def _find_metric(name: str):
    # Counters register without their "_total" suffix
    base_name = name.removesuffix("_total")
    for collector in list(REGISTRY._collector_to_names.keys()):
        if getattr(collector, "_name", None) in (name, base_name):
            return collector
    return None


def _get_or_create_metric(metric_class, name: str, doc: str, labelnames=None, **kwargs):
    """Get existing metric or create new one to avoid duplication errors in tests."""
    existing = _find_metric(name)
    if existing is not None:
        return existing
    try:
        if labelnames is not None:
            kwargs["labelnames"] = labelnames
        return metric_class(name, doc, registry=REGISTRY, **kwargs)
    except ValueError as e:
        if "Duplicated timeseries" in str(e):
            # Race condition - try to find it again
            existing = _find_metric(name)
            if existing is not None:
                return existing
        raise


# Record metrics
records_generated_total = _get_or_create_metric(
    Counter,
    "datagen_records_generated_total",
    "Total number of records generated by completed runs",
)

bytes_generated_total = _get_or_create_metric(
    Counter,
    "datagen_bytes_generated_total",
    "Total UTF-8 bytes of output produced by completed runs",
)

# Run metrics
runs_total = _get_or_create_metric(
    Counter,
    "datagen_runs_total",
    "Total number of generation runs by outcome and strategy",
    ["outcome", "strategy"],
)

run_duration_seconds = _get_or_create_metric(
    Histogram,
    "datagen_run_duration_seconds",
    "Wall-clock duration of completed generation runs",
    ["strategy"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
)

runs_active = _get_or_create_metric(
    Gauge, "datagen_runs_active", "Number of generation runs currently in progress"
)

validation_failures_total = _get_or_create_metric(
    Counter,
    "datagen_validation_failures_total",
    "Total number of requests rejected by validation",
)


class MetricsCollector:
    """Helper class for collecting and updating metrics."""

    def __init__(self):
        self._started: dict[str, float] = {}

    def run_started(self, run_id: str):
        """Mark a run as started."""
        runs_active.inc()
        self._started[run_id] = time.perf_counter()

    def _finish(self, run_id: str) -> float | None:
        start = self._started.pop(run_id, None)
        if start is None:
            return None
        runs_active.dec()
        return time.perf_counter() - start

    def run_completed(self, run_id: str, strategy: str, records: int, byte_size: int):
        """Record a completed run."""
        duration = self._finish(run_id)
        runs_total.labels(outcome="completed", strategy=strategy).inc()
        records_generated_total.inc(records)
        bytes_generated_total.inc(byte_size)
        if duration is not None:
            run_duration_seconds.labels(strategy=strategy).observe(duration)

    def run_cancelled(self, run_id: str, strategy: str):
        """Record a cancelled run."""
        self._finish(run_id)
        runs_total.labels(outcome="cancelled", strategy=strategy).inc()

    def run_failed(self, run_id: str, strategy: str):
        """Record a run that failed mid-generation."""
        self._finish(run_id)
        runs_total.labels(outcome="failed", strategy=strategy).inc()

    def request_rejected(self):
        """Record a request rejected by validation."""
        validation_failures_total.inc()
        runs_total.labels(outcome="rejected", strategy="none").inc()


# Global metrics collector instance
metrics_collector = MetricsCollector()
