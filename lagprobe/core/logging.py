"""Logging setup.

``LoggerConfigurator.configure_logger`` hands out ``ContextualLogger``
instances.  Dimensions attached via ``with_context`` are rendered after the
message so every line about a probe carries the instance it concerns.
"""

import logging
import sys
from typing import Any, MutableMapping

from lagprobe.core.config import settings

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class _DimensionFormatter(logging.Formatter):
    """Append ``key=value`` pairs from ``record.dimensions`` to the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        dimensions = getattr(record, "dimensions", None)
        if dimensions:
            rendered = " ".join(f"{key}={value}" for key, value in dimensions.items())
            line = f"{line} [{rendered}]"
        return line


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a dict of dimensions."""

    def __init__(self, logger: logging.Logger, dimensions: dict[str, Any] | None = None):
        super().__init__(logger, dict(dimensions or {}))

    @property
    def dimensions(self) -> dict[str, Any]:
        return dict(self.extra)

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a child logger with ``dimensions`` merged over the current ones."""
        return ContextualLogger(self.logger, {**self.extra, **dimensions})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["dimensions"] = {**self.extra, **extra.get("dimensions", {})}
        kwargs["extra"] = extra
        return msg, kwargs


class LoggerConfigurator:
    """Builds package loggers with a shared handler."""

    _configured = False

    @classmethod
    def _configure_root(cls) -> None:
        if cls._configured:
            return
        root = logging.getLogger("lagprobe")
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_DimensionFormatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(settings.LOG_LEVEL.upper())
        root.propagate = False
        cls._configured = True

    @classmethod
    def configure_logger(
        cls, name: str, dimensions: dict[str, Any] | None = None
    ) -> ContextualLogger:
        """Configure and return a logger.

        Args:
            name (str): Logger name, usually ``__name__``.
            dimensions (dict[str, Any] | None): Initial context dimensions.

        Returns:
            ContextualLogger: The configured logger.
        """
        cls._configure_root()
        return ContextualLogger(logging.getLogger(name), dimensions)


logger = LoggerConfigurator.configure_logger("lagprobe")
