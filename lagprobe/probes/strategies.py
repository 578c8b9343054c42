"""Query strategies for reading a single metric value.

A metric query string resolves to exactly one strategy:

* ``select ...``       -> ``SelectStrategy``: one numeric column.
* ``show global ...``  -> ``ShowGlobalStrategy``: ``(variable_name, value)``.
* empty                -> ``ReplicaStatusStrategy``: lag from replica status.
* anything else        -> ``UnsupportedStrategy``: fails without touching the DB.
"""

from __future__ import annotations

import abc
import enum
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from lagprobe.probes.errors import (
    QueryExecutionError,
    ReplicationNotRunningError,
    UnsupportedQueryError,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Result
    from sqlalchemy.ext.asyncio import AsyncConnection


class QueryKind(str, enum.Enum):
    """Shape of a metric query."""

    SELECT = "select"
    SHOW_GLOBAL = "show_global"
    REPLICA_STATUS = "replica_status"
    UNSUPPORTED = "unsupported"


# Pre-8.0.22 column names first; SHOW REPLICA STATUS names second.
_IO_RUNNING_COLUMNS = ("Slave_IO_Running", "Replica_IO_Running")
_SQL_RUNNING_COLUMNS = ("Slave_SQL_Running", "Replica_SQL_Running")
_LAG_COLUMNS = ("Seconds_Behind_Master", "Seconds_Behind_Source")


async def _execute(conn: AsyncConnection, statement: str) -> Result[Any]:
    try:
        return await conn.exec_driver_sql(
            statement, execution_options={"no_parameters": True}
        )
    except Exception as exc:
        raise QueryExecutionError(str(exc)) from exc


def _first_row(result: Result[Any], columns: int) -> tuple[Any, ...]:
    row = result.first()
    if row is None:
        raise QueryExecutionError("no rows in result set")
    if len(row) != columns:
        raise QueryExecutionError(f"expected {columns} column(s) in result, got {len(row)}")
    return tuple(row)


def _to_float(value: Any) -> float:
    if value is None:
        raise QueryExecutionError("converting NULL to float is unsupported")
    if isinstance(value, (bytes, bytearray)):
        value = value.decode()
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise QueryExecutionError(f"converting {value!r} to float: {exc}") from exc


def _get_string(row: Mapping[str, Any], names: tuple[str, ...]) -> str:
    for name in names:
        if name in row:
            value = row[name]
            if value is None:
                return ""
            if isinstance(value, (bytes, bytearray)):
                return value.decode()
            return str(value)
    return ""


def _get_optional_int(row: Mapping[str, Any], names: tuple[str, ...]) -> int | None:
    """Read a nullable integer column; missing or unparsable values are None."""
    for name in names:
        if name in row:
            value = row[name]
            if value is None:
                return None
            if isinstance(value, (bytes, bytearray)):
                value = value.decode()
            try:
                return int(value)
            except (TypeError, ValueError):
                return None
    return None


class QueryStrategy(abc.ABC):
    """Base strategy; subclasses read one float from an open connection."""

    kind: ClassVar[QueryKind]

    def __init__(self, statement: str) -> None:
        self.statement = statement

    def check(self) -> None:
        """Raise if the query must not be executed at all."""

    @abc.abstractmethod
    async def read(self, conn: AsyncConnection) -> float:
        """Execute the statement on ``conn`` and return the metric value."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.statement!r})"


class SelectStrategy(QueryStrategy):
    """Run the query as-is and read its single numeric column."""

    kind = QueryKind.SELECT

    async def read(self, conn: AsyncConnection) -> float:
        result = await _execute(conn, self.statement)
        (value,) = _first_row(result, 1)
        return _to_float(value)


class ShowGlobalStrategy(QueryStrategy):
    """Read the value column of a ``SHOW GLOBAL STATUS/VARIABLES`` row."""

    kind = QueryKind.SHOW_GLOBAL

    async def read(self, conn: AsyncConnection) -> float:
        result = await _execute(conn, self.statement)
        _variable_name, value = _first_row(result, 2)
        return _to_float(value)


class ReplicaStatusStrategy(QueryStrategy):
    """Read ``Seconds_Behind_Master`` from the replica status output.

    Every returned row must report a lag; the last row's lag wins.  No rows
    at all means the server is not replicating.
    """

    kind = QueryKind.REPLICA_STATUS

    async def read(self, conn: AsyncConnection) -> float:
        result = await _execute(conn, self.statement)
        rows = result.mappings().all()
        # An empty status is "not a replica", reported as an error rather than
        # as zero lag.
        if not rows:
            raise ReplicationNotRunningError("", "")

        lag: int | None = None
        for row in rows:
            lag = _get_optional_int(row, _LAG_COLUMNS)
            if lag is None:
                raise ReplicationNotRunningError(
                    _get_string(row, _IO_RUNNING_COLUMNS),
                    _get_string(row, _SQL_RUNNING_COLUMNS),
                )
        return float(lag)


class UnsupportedStrategy(QueryStrategy):
    """Reject the query without executing anything."""

    kind = QueryKind.UNSUPPORTED

    def check(self) -> None:
        raise UnsupportedQueryError(self.statement)

    async def read(self, conn: AsyncConnection) -> float:
        raise UnsupportedQueryError(self.statement)


def resolve_strategy(metric_query: str, *, replica_status_query: str) -> QueryStrategy:
    """Pick the strategy for ``metric_query`` by case-insensitive prefix."""
    normalized = metric_query.lower()
    if normalized.startswith("select"):
        return SelectStrategy(metric_query)
    if normalized.startswith("show global"):
        return ShowGlobalStrategy(metric_query)
    if metric_query:
        return UnsupportedStrategy(metric_query)
    return ReplicaStatusStrategy(replica_status_query)
