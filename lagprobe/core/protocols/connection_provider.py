"""ConnectionProvider protocol for pooled database handles.

The probe asks the provider for an engine per connection URI.  Providers
cache engines so repeated probes of the same target share one pool; the
``from_cache`` flag tells the caller whether pool limits were just applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


@dataclass(frozen=True)
class PoolLimits:
    """Pool sizing applied when an engine is first created."""

    max_open: int
    max_idle: int

    def __post_init__(self) -> None:
        if self.max_open < 1:
            raise ValueError(f"max_open must be at least 1, got {self.max_open}")
        # QueuePool treats pool_size=0 as unbounded.
        if not 1 <= self.max_idle <= self.max_open:
            raise ValueError(
                f"max_idle must be between 1 and max_open={self.max_open}, got {self.max_idle}"
            )


@runtime_checkable
class ConnectionProvider(Protocol):
    """Protocol for resolving a (possibly cached) engine for a URI."""

    def get_engine(self, uri: str, *, pool_limits: PoolLimits) -> tuple[AsyncEngine, bool]:
        """Return ``(engine, from_cache)`` for ``uri``.

        ``pool_limits`` is only applied when a new engine is created; a cached
        engine keeps the limits it was created with.

        Raises:
            Any exception when the engine cannot be created.
        """
        ...
