"""Core protocols for dependency injection."""

from lagprobe.core.protocols.connection_provider import ConnectionProvider, PoolLimits
from lagprobe.core.protocols.probe_metrics import (
    PROBE_ERROR,
    PROBE_LATENCY,
    PROBE_TOTAL,
    ProbeMetrics,
)

__all__ = [
    "ConnectionProvider",
    "PROBE_ERROR",
    "PROBE_LATENCY",
    "PROBE_TOTAL",
    "PoolLimits",
    "ProbeMetrics",
]
