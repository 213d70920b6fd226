"""Where the exporter gets its readings from.

The acquisition layer (API polling, account/zone selection) runs on its
own schedule and PUBLISHES a complete snapshot of metric definitions.
A render only ever reads the latest snapshot; it never triggers a fetch.

  producer thread:  poll upstream → build definitions → publish()
  render:           collect() → encode → body

Publishing replaces the whole snapshot.  There is no merging with the
previous one: a series that disappears upstream disappears from the
next render too.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from app.models.metric import MetricDefinition


@runtime_checkable
class MetricSource(Protocol):
    def collect(self) -> Sequence[MetricDefinition]:
        """Return the definitions to encode for one render."""
        ...


class InMemoryMetricSource:
    """Holds the most recently published snapshot."""

    def __init__(self, metrics: Iterable[MetricDefinition] = ()) -> None:
        self._lock = threading.Lock()
        self._snapshot: tuple[MetricDefinition, ...] = tuple(metrics)

    def publish(self, metrics: Iterable[MetricDefinition]) -> None:
        snapshot = tuple(metrics)
        with self._lock:
            self._snapshot = snapshot

    def clear(self) -> None:
        with self._lock:
            self._snapshot = ()

    def collect(self) -> Sequence[MetricDefinition]:
        with self._lock:
            return self._snapshot
