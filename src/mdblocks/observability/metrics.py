"""Metrics hook protocol and bundled implementations.

Documents report counters, timings and gauges through whatever object is
passed as ``DocumentConfig(metrics=...)``; anything with the three
:class:`MetricsHook` methods works (a StatsD client adapter, a Prometheus
bridge...).  Without one, :class:`NoopMetricsHook` absorbs the calls.
:class:`InMemoryMetricsHook` keeps every data point for inspection.

Emitted metric names:

* ``mdblocks.updates_total``            -- counter
* ``mdblocks.blocks_kept_total``        -- counter
* ``mdblocks.blocks_inserted_total``    -- counter
* ``mdblocks.blocks_removed_total``     -- counter
* ``mdblocks.commands_total``           -- counter, tagged ``command``
* ``mdblocks.update_duration_ms``       -- timing
* ``mdblocks.block_count``              -- gauge
* ``mdblocks.stale_html_writes_total``  -- counter
* ``mdblocks.commands_applied_total``   -- counter, tagged ``command``
  (emitted by :class:`~mdblocks.applier.BlockContainer`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

Tags = dict[str, str]


@runtime_checkable
class MetricsHook(Protocol):
    """Structural type of a metrics backend."""

    def increment(self, name: str, value: int = 1, tags: Tags | None = None) -> None:
        """Add *value* to the counter *name*."""
        ...

    def timing(self, name: str, ms: float, tags: Tags | None = None) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(self, name: str, value: float, tags: Tags | None = None) -> None:
        """Set *name* to an absolute value."""
        ...


class NoopMetricsHook:
    """Discards every data point."""

    __slots__ = ()

    def increment(self, name: str, value: int = 1, tags: Tags | None = None) -> None:
        pass

    def timing(self, name: str, ms: float, tags: Tags | None = None) -> None:
        pass

    def gauge(self, name: str, value: float, tags: Tags | None = None) -> None:
        pass


@dataclass(frozen=True)
class MetricPoint:
    """One recorded call on an :class:`InMemoryMetricsHook`."""

    kind: str
    name: str
    value: float
    tags: Tags | None = None


@dataclass
class InMemoryMetricsHook:
    """Records every call, in order, for debugging and tests."""

    points: list[MetricPoint] = field(default_factory=list)

    def increment(self, name: str, value: int = 1, tags: Tags | None = None) -> None:
        self.points.append(MetricPoint("counter", name, value, tags))

    def timing(self, name: str, ms: float, tags: Tags | None = None) -> None:
        self.points.append(MetricPoint("timing", name, ms, tags))

    def gauge(self, name: str, value: float, tags: Tags | None = None) -> None:
        self.points.append(MetricPoint("gauge", name, value, tags))

    def of_kind(self, kind: str, name: str | None = None) -> list[MetricPoint]:
        return [
            p for p in self.points
            if p.kind == kind and (name is None or p.name == name)
        ]

    def counter(self, name: str, **tags: str) -> int:
        """Sum of the increments of *name* whose tags include *tags*."""
        return int(sum(
            p.value
            for p in self.of_kind("counter", name)
            if all((p.tags or {}).get(k) == v for k, v in tags.items())
        ))

    def last_gauge(self, name: str) -> float | None:
        gauges = self.of_kind("gauge", name)
        return gauges[-1].value if gauges else None

    def reset(self) -> None:
        self.points.clear()
