"""Replication-lag and custom-metric probing."""

from lagprobe.probes.errors import (
    ProbeConnectionError,
    ProbeError,
    QueryExecutionError,
    ReplicationNotRunningError,
    UnsupportedQueryError,
)
from lagprobe.probes.factory import create_metric_probe
from lagprobe.probes.models import InstanceKey, Probe
from lagprobe.probes.result import MetricResult
from lagprobe.probes.service import MetricProbe

__all__ = [
    "InstanceKey",
    "MetricProbe",
    "MetricResult",
    "Probe",
    "ProbeConnectionError",
    "ProbeError",
    "QueryExecutionError",
    "ReplicationNotRunningError",
    "UnsupportedQueryError",
    "create_metric_probe",
]
