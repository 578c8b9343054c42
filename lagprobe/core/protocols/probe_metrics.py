"""ProbeMetrics protocol for metric-probe instrumentation.

Abstracts the telemetry sink so the probe depends on a protocol rather than
a concrete library.  Production uses Prometheus; tests inject a fake that
records calls in memory.
"""

from typing import Protocol, runtime_checkable

# Stable instrument names, independent of any backend's naming rules.
PROBE_LATENCY = "probes.latency"
PROBE_TOTAL = "probes.total"
PROBE_ERROR = "probes.error"


@runtime_checkable
class ProbeMetrics(Protocol):
    """Protocol for per-probe latency, attempt and error metrics."""

    def observe_latency(self, duration: float) -> None:
        """Record the elapsed time of one probe attempt.

        Args:
            duration: Probe duration in seconds.
        """
        ...

    def inc_total(self) -> None:
        """Count one probe attempt, successful or not."""
        ...

    def inc_errors(self) -> None:
        """Count one failed probe attempt."""
        ...
