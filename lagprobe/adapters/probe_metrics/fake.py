"""Fake ProbeMetrics for testing.

Records all calls in memory so tests can assert on probe telemetry without
reaching into prometheus-client internals.
"""


class FakeProbeMetrics:
    """In-memory spy implementing the ProbeMetrics protocol.

    Usage:
        fake = FakeProbeMetrics()
        # … inject into MetricProbe …
        assert fake.total == 1
        assert fake.errors == 0
    """

    def __init__(self) -> None:
        self.latencies: list[float] = []
        self.total: int = 0
        self.errors: int = 0

    def observe_latency(self, duration: float) -> None:
        self.latencies.append(duration)

    def inc_total(self) -> None:
        self.total += 1

    def inc_errors(self) -> None:
        self.errors += 1

    # -- test helpers --

    def clear(self) -> None:
        """Reset all recorded state."""
        self.latencies.clear()
        self.total = 0
        self.errors = 0


class BrokenProbeMetrics:
    """ProbeMetrics whose every call raises, simulating an unavailable sink."""

    def __init__(self) -> None:
        self.calls: int = 0

    def observe_latency(self, duration: float) -> None:
        self.calls += 1
        raise RuntimeError("metrics sink unavailable")

    def inc_total(self) -> None:
        self.calls += 1
        raise RuntimeError("metrics sink unavailable")

    def inc_errors(self) -> None:
        self.calls += 1
        raise RuntimeError("metrics sink unavailable")
