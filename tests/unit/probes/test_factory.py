"""Unit tests for production MetricProbe wiring."""

import pytest
from prometheus_client import CollectorRegistry, generate_latest

from lagprobe.db import engine_cache as engine_cache_module
from lagprobe.db.engine_cache import EngineCache
from lagprobe.probes import (
    InstanceKey,
    MetricProbe,
    Probe,
    ProbeConnectionError,
    create_metric_probe,
)


class TestCreateMetricProbe:
    def test_registers_instruments_on_given_registry(self):
        registry = CollectorRegistry()

        probe = create_metric_probe(registry=registry)

        assert isinstance(probe, MetricProbe)
        output = generate_latest(registry).decode()
        assert "lagprobe_probes_total" in output
        assert "lagprobe_probes_error_total" in output
        assert "lagprobe_probes_latency_seconds" in output

    def test_shares_engine_cache(self):
        cache = EngineCache()

        first = create_metric_probe(engine_cache=cache)
        second = create_metric_probe(engine_cache=cache)

        assert first._connection_provider is cache
        assert second._connection_provider is cache

    @pytest.mark.asyncio
    async def test_empty_cache_is_used_for_new_engines(self, monkeypatch):
        """An empty cache passed in receives the engines created while measuring."""

        class _UnreachableEngine:
            def connect(self):
                raise ConnectionRefusedError("connection refused")

        def _create(uri, **kwargs):
            return _UnreachableEngine()

        monkeypatch.setattr(engine_cache_module, "create_async_engine", _create)
        cache = EngineCache()
        service = create_metric_probe(registry=CollectorRegistry(), engine_cache=cache)

        result = await service.measure(
            Probe(key=InstanceKey(hostname="replica-1"), user="probe", driver="mysql+aiomysql")
        )
        await service.drain()

        assert isinstance(result.err, ProbeConnectionError)
        assert service._connection_provider is cache
        assert len(cache) == 1

    def test_engine_cache_is_truthy_when_empty(self):
        assert EngineCache()
