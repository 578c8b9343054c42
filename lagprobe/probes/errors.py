"""Errors a probe can report.

These are raised inside the probe and converted into ``MetricResult.err`` at
the ``MetricProbe.measure`` boundary; callers never see them raised.
"""


class ProbeError(Exception):
    """Base class for every probe failure."""


class ProbeConnectionError(ProbeError):
    """No usable connection could be obtained for the probe URI."""


class UnsupportedQueryError(ProbeError):
    """The metric query is neither a SELECT nor a SHOW GLOBAL statement."""

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"Unsupported metrics query type: {query}")


class QueryExecutionError(ProbeError):
    """The statement failed, or its result did not have the expected shape."""


class ReplicationNotRunningError(ProbeError):
    """Replica status reported no lag value."""

    def __init__(self, io_running: str, sql_running: str) -> None:
        self.io_running = io_running
        self.sql_running = sql_running
        super().__init__(
            f"replication not running; Slave_IO_Running={io_running}, "
            f"Slave_SQL_Running={sql_running}"
        )
