"""Outcome of a single probe invocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lagprobe.probes.errors import ProbeError
    from lagprobe.probes.models import InstanceKey


@dataclass(frozen=True)
class MetricResult:
    """A measurement or the error that prevented it.

    ``value`` is only meaningful when ``err`` is None; a failed probe leaves
    it at ``0.0``.
    """

    key: InstanceKey
    value: float = 0.0
    err: ProbeError | None = None

    @property
    def ok(self) -> bool:
        return self.err is None

    def get(self) -> tuple[float, ProbeError | None]:
        return self.value, self.err
