"""Probe metrics adapters."""

from lagprobe.adapters.probe_metrics.fake import BrokenProbeMetrics, FakeProbeMetrics
from lagprobe.adapters.probe_metrics.prometheus import PrometheusProbeMetrics

__all__ = ["BrokenProbeMetrics", "FakeProbeMetrics", "PrometheusProbeMetrics"]
