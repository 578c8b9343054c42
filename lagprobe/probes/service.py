"""Metric probe: read one number from a database instance.

``MetricProbe.measure`` never raises.  Every outcome, including connection
failures, comes back as a ``MetricResult``, and every attempt is recorded on
the injected ``ProbeMetrics`` from a detached task so telemetry never sits on
the probe's critical path.
"""

import asyncio
import time

from lagprobe.core.config import settings
from lagprobe.core.logging import logger
from lagprobe.core.protocols.connection_provider import ConnectionProvider, PoolLimits
from lagprobe.core.protocols.probe_metrics import ProbeMetrics
from lagprobe.probes.errors import ProbeConnectionError, ProbeError, QueryExecutionError
from lagprobe.probes.models import Probe
from lagprobe.probes.result import MetricResult
from lagprobe.probes.strategies import resolve_strategy


def default_pool_limits() -> PoolLimits:
    """Pool limits taken from settings."""
    return PoolLimits(
        max_open=settings.PROBE_MAX_POOL_CONNECTIONS,
        max_idle=settings.PROBE_MAX_IDLE_CONNECTIONS,
    )


class MetricProbe:
    """Measures replication lag or a custom metric for a probe target."""

    def __init__(
        self,
        connection_provider: ConnectionProvider,
        metrics: ProbeMetrics,
        *,
        pool_limits: PoolLimits | None = None,
        schema: str | None = None,
        replica_status_query: str | None = None,
    ) -> None:
        self._connection_provider = connection_provider
        self._metrics = metrics
        self._pool_limits = pool_limits or default_pool_limits()
        self._schema = schema or settings.PROBE_SCHEMA
        self._replica_status_query = replica_status_query or settings.PROBE_REPLICA_STATUS_QUERY
        self._pending: set[asyncio.Task[None]] = set()

    async def measure(self, probe: Probe) -> MetricResult:
        """Read the metric for ``probe``.

        Returns:
            A ``MetricResult`` keyed by ``probe.key``.  Either ``err`` is None
            and ``value`` holds the reading, or ``err`` is set and ``value``
            is ``0.0``.
        """
        started = time.perf_counter()
        try:
            value = await self._read(probe)
        except ProbeError as exc:
            result = MetricResult(key=probe.key, err=exc)
            logger.with_context(instance=str(probe.key)).debug(f"Probe failed: {exc}")
        else:
            result = MetricResult(key=probe.key, value=value)

        self._dispatch_telemetry(time.perf_counter() - started, failed=not result.ok)
        return result

    async def drain(self) -> None:
        """Wait for telemetry tasks still in flight."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _read(self, probe: Probe) -> float:
        strategy = resolve_strategy(
            probe.metric_query, replica_status_query=self._replica_status_query
        )
        strategy.check()

        try:
            engine, from_cache = self._connection_provider.get_engine(
                probe.get_db_uri(self._schema), pool_limits=self._pool_limits
            )
        except Exception as exc:
            raise ProbeConnectionError(str(exc)) from exc
        if not from_cache:
            logger.with_context(instance=str(probe.key)).debug(
                f"New connection pool (max_open={self._pool_limits.max_open}, "
                f"max_idle={self._pool_limits.max_idle})"
            )

        try:
            async with engine.connect() as conn:
                try:
                    return await strategy.read(conn)
                except ProbeError:
                    raise
                except Exception as exc:
                    raise QueryExecutionError(str(exc)) from exc
        except ProbeError:
            raise
        except Exception as exc:
            raise ProbeConnectionError(str(exc)) from exc

    # -- telemetry --

    def _dispatch_telemetry(self, elapsed: float, *, failed: bool) -> None:
        task = asyncio.get_running_loop().create_task(self._record(elapsed, failed))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _record(self, elapsed: float, failed: bool) -> None:
        try:
            self._metrics.observe_latency(elapsed)
            self._metrics.inc_total()
            if failed:
                self._metrics.inc_errors()
        except Exception as exc:
            logger.debug(f"Dropped probe telemetry: {exc}")
