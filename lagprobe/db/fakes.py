"""Fake ConnectionProvider for testing.

Serves canned results per SQL statement and records every engine lookup and
every executed statement, so tests can drive ``MetricProbe`` without a
database server.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Mapping, Sequence

from lagprobe.core.protocols.connection_provider import PoolLimits


class _FakeMappings:
    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows = rows

    def all(self) -> list[dict[str, Any]]:
        return list(self._rows)


class FakeResult:
    """Minimal stand-in for a SQLAlchemy ``Result``."""

    def __init__(self, columns: Sequence[str], rows: Sequence[Sequence[Any]] = ()) -> None:
        self.columns = tuple(columns)
        self.rows = [tuple(row) for row in rows]

    @classmethod
    def from_mappings(cls, rows: Sequence[Mapping[str, Any]]) -> FakeResult:
        columns = tuple(rows[0].keys()) if rows else ()
        return cls(columns, [tuple(row[col] for col in columns) for row in rows])

    def first(self) -> tuple[Any, ...] | None:
        return self.rows[0] if self.rows else None

    def mappings(self) -> _FakeMappings:
        return _FakeMappings([dict(zip(self.columns, row)) for row in self.rows])


Response = FakeResult | Exception


class FakeConnection:
    """Connection that answers from a statement -> response table."""

    def __init__(self, engine: FakeEngine) -> None:
        self._engine = engine

    async def exec_driver_sql(
        self,
        statement: str,
        parameters: Any = None,
        execution_options: Mapping[str, Any] | None = None,
    ) -> FakeResult:
        self._engine.statements.append(statement)
        try:
            response = self._engine.responses[statement]
        except KeyError:
            raise RuntimeError(f"no canned response for {statement!r}") from None
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class FakeEngine:
    """Engine handing out ``FakeConnection`` objects."""

    uri: str
    pool_limits: PoolLimits
    responses: dict[str, Response]
    connect_error: Exception | None = None
    statements: list[str] = field(default_factory=list)
    connections_opened: int = 0
    connections_closed: int = 0

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[FakeConnection]:
        if self.connect_error is not None:
            raise self.connect_error
        self.connections_opened += 1
        try:
            yield FakeConnection(self)
        finally:
            self.connections_closed += 1


class FakeConnectionProvider:
    """In-memory spy implementing the ConnectionProvider protocol.

    Usage:
        provider = FakeConnectionProvider({"SELECT 42": FakeResult(["42"], [(42,)])})
        # … inject into MetricProbe …
        assert provider.statements == ["SELECT 42"]
    """

    def __init__(
        self,
        responses: Mapping[str, Response] | None = None,
        *,
        engine_error: Exception | None = None,
        connect_error: Exception | None = None,
    ) -> None:
        self.responses: dict[str, Response] = dict(responses or {})
        self.engine_error = engine_error
        self.connect_error = connect_error
        self.engines: dict[str, FakeEngine] = {}
        self.lookups: list[tuple[str, bool]] = []

    def get_engine(self, uri: str, *, pool_limits: PoolLimits) -> tuple[FakeEngine, bool]:
        if self.engine_error is not None:
            raise self.engine_error
        engine = self.engines.get(uri)
        from_cache = engine is not None
        if engine is None:
            engine = FakeEngine(
                uri=uri,
                pool_limits=pool_limits,
                responses=self.responses,
                connect_error=self.connect_error,
            )
            self.engines[uri] = engine
        self.lookups.append((uri, from_cache))
        return engine, from_cache

    # -- test helpers --

    @property
    def statements(self) -> list[str]:
        """Every statement executed, across all engines, in engine order."""
        return [stmt for engine in self.engines.values() for stmt in engine.statements]

    def set_response(self, statement: str, response: Response) -> None:
        """Set or replace the canned response for ``statement``."""
        self.responses[statement] = response
