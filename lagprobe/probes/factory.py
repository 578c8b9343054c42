"""Production wiring for ``MetricProbe``."""

from prometheus_client import CollectorRegistry

from lagprobe.adapters.probe_metrics import PrometheusProbeMetrics
from lagprobe.db.engine_cache import EngineCache
from lagprobe.probes.service import MetricProbe


def create_metric_probe(
    registry: CollectorRegistry | None = None,
    engine_cache: EngineCache | None = None,
) -> MetricProbe:
    """Build a ``MetricProbe`` backed by cached engines and Prometheus metrics.

    Args:
        registry: Registry the probe instruments register on.  A private one
            is created when omitted.
        engine_cache: Engine cache to share with other probes.  A new cache
            is created when omitted.
    """
    return MetricProbe(
        connection_provider=engine_cache if engine_cache is not None else EngineCache(),
        metrics=PrometheusProbeMetrics(registry=registry),
    )
