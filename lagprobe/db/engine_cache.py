"""Cached SQLAlchemy engines keyed by connection URI.

One engine (and so one connection pool) exists per URI for the life of the
process.  Pool sizing is decided when the engine is created; later lookups
return the same engine with whatever limits it was built with.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from lagprobe.core.protocols.connection_provider import PoolLimits


class EngineCache:
    """Process-wide cache of async engines.

    Satisfies the ``ConnectionProvider`` protocol structurally.
    """

    def __init__(self) -> None:
        self._engines: dict[str, AsyncEngine] = {}

    def get_engine(self, uri: str, *, pool_limits: PoolLimits) -> tuple[AsyncEngine, bool]:
        """Return ``(engine, from_cache)`` for ``uri``, creating it on a miss."""
        engine = self._engines.get(uri)
        if engine is not None:
            return engine, True

        engine = create_async_engine(
            uri,
            pool_size=pool_limits.max_idle,
            max_overflow=pool_limits.max_open - pool_limits.max_idle,
            pool_pre_ping=True,
        )
        self._engines[uri] = engine
        return engine, False

    def __len__(self) -> int:
        return len(self._engines)

    def __bool__(self) -> bool:
        # An empty cache is still a usable provider.
        return True

    async def dispose(self) -> None:
        """Dispose every cached engine and empty the cache."""
        engines = list(self._engines.values())
        self._engines.clear()
        for engine in engines:
            await engine.dispose()
