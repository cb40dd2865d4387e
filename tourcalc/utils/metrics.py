"""Prometheus metrics for pricing and its collaborators."""

from prometheus_client import Counter, Histogram

breakdown_compute_ms = Histogram(
    "breakdown_compute_ms",
    "Cost breakdown computation time in milliseconds",
    buckets=[0.1, 0.5, 1, 2, 5, 10, 50],
)

breakdown_recomputations_total = Counter(
    "breakdown_recomputations_total",
    "Total cost breakdown recomputations triggered by snapshot edits",
    ["edit"],
)

snapshot_rejections_total = Counter(
    "snapshot_rejections_total",
    "Total snapshots refused at the persistence boundary",
    ["source"],
)

advisory_requests_total = Counter(
    "advisory_requests_total",
    "Total advisory text requests",
    ["kind", "outcome"],
)

autosave_writes_total = Counter(
    "autosave_writes_total",
    "Total autosave attempts",
    ["outcome"],
)


class PrometheusPricingMetrics:
    """Prometheus-based pricing metrics implementation."""

    def record_recompute(self, edit: str, elapsed_ms: float) -> None:
        """Record one breakdown recomputation."""
        breakdown_recomputations_total.labels(edit=edit).inc()
        breakdown_compute_ms.observe(elapsed_ms)

    def inc_rejection(self, source: str) -> None:
        """Increment rejected snapshot counter."""
        snapshot_rejections_total.labels(source=source).inc()

    def inc_advisory(self, kind: str, outcome: str) -> None:
        """Increment advisory request counter."""
        advisory_requests_total.labels(kind=kind, outcome=outcome).inc()

    def inc_autosave(self, outcome: str) -> None:
        """Increment autosave counter."""
        autosave_writes_total.labels(outcome=outcome).inc()


metrics = PrometheusPricingMetrics()
