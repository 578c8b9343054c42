"""Prometheus implementation of the ProbeMetrics protocol.

Instrument names mirror the stable ``probes.*`` names with dots replaced,
since Prometheus metric names may not contain them.  The latency histogram
plays the role of a timer.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram

from lagprobe.core.protocols.probe_metrics import (
    PROBE_ERROR,
    PROBE_LATENCY,
    PROBE_TOTAL,
    ProbeMetrics,
)

_LATENCY_BUCKETS = (0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)


def _prometheus_name(name: str) -> str:
    return "lagprobe_" + name.replace(".", "_")


class PrometheusProbeMetrics(ProbeMetrics):
    """Prometheus-backed probe metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()

        self._latency = Histogram(
            _prometheus_name(PROBE_LATENCY) + "_seconds",
            "Metric probe latency in seconds",
            buckets=_LATENCY_BUCKETS,
            registry=self._registry,
        )

        self._total = Counter(
            _prometheus_name(PROBE_TOTAL),
            "Total metric probe attempts",
            registry=self._registry,
        )

        self._errors = Counter(
            _prometheus_name(PROBE_ERROR),
            "Total failed metric probe attempts",
            registry=self._registry,
        )

    # -- ProbeMetrics protocol methods --

    def observe_latency(self, duration: float) -> None:
        self._latency.observe(duration)

    def inc_total(self) -> None:
        self._total.inc()

    def inc_errors(self) -> None:
        self._errors.inc()
