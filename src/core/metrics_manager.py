import logging
import os

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, write_to_textfile

from contracts.probe_outcome import ProbeOutcome
from contracts.run_summary import RunSummary
from core.profiler import Profiler

logger = logging.getLogger(__name__)

LATENCY_BUCKETS_MS = (1, 5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000)


class MetricsManager:
    """
    Prometheus metrics for a probing run, kept in a private registry so several
    managers can coexist in one process.
    """

    @Profiler.profile
    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the MetricsManager and set up Prometheus metrics.

        Args:
            registry: Registry to register metrics in. A fresh one is created if None.
        """
        self.registry = registry or CollectorRegistry()
        self.PROBES = Counter(
            "latency_probe_probes",
            "Probes sent, by result",
            ["result"],
            registry=self.registry,
        )
        self.HIGH_LATENCY = Counter(
            "latency_probe_high_latency",
            "Successful probes above the latency threshold",
            registry=self.registry,
        )
        self.LATENCY = Histogram(
            "latency_probe_latency_ms",
            "Round-trip latency of successful probes in milliseconds",
            buckets=LATENCY_BUCKETS_MS,
            registry=self.registry,
        )
        self.LOSS_RATIO = Gauge(
            "latency_probe_loss_ratio",
            "Fraction of probes without a reply in the last run",
            registry=self.registry,
        )
        logger.debug("MetricsManager initialized.")

    def record(self, outcome: ProbeOutcome, threshold_ms: float):
        if outcome.success:
            self.PROBES.labels(result="success").inc()
            self.LATENCY.observe(outcome.latency_ms)
            if outcome.latency_ms > threshold_ms:
                self.HIGH_LATENCY.inc()
        else:
            self.PROBES.labels(result="failure").inc()

    def record_summary(self, summary: RunSummary):
        self.LOSS_RATIO.set(summary.loss_ratio)

    def get_probe_count(self, result: str) -> float:
        value = self.registry.get_sample_value(
            "latency_probe_probes_total", {"result": result}
        )
        return value or 0.0

    def get_high_latency_count(self) -> float:
        return self.registry.get_sample_value("latency_probe_high_latency_total") or 0.0

    def write_textfile(self, path):
        """
        Write all metrics in the text exposition format, e.g. for node_exporter's
        textfile collector. Raises OSError on failure.
        """
        directory = os.path.dirname(os.fspath(path))
        if directory:
            os.makedirs(directory, exist_ok=True)
        write_to_textfile(os.fspath(path), self.registry)
        logger.info(f"Wrote metrics to {path}")
