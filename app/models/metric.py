"""Metric readings as handed to the exposition encoder.

A ``MetricDefinition`` is one metric family: a name, a HELP string, a TYPE
token and the samples collected for it.  The acquisition layer builds these
per scrape; nothing here outlives a single render.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field
from typing import Literal

# Documentation only: the encoder emits whatever token it is given.
MetricType = Literal["counter", "gauge", "histogram", "summary", "untyped"]


@dataclass(frozen=True, slots=True)
class Sample:
    labels: Mapping[str, str]
    value: float


@dataclass(frozen=True, slots=True)
class MetricDefinition:
    name: str
    help: str
    type: str
    values: Sequence[Sample] = ()


@dataclass(frozen=True, slots=True)
class SerializeOptions:
    """Filters applied while encoding.

    denylist:       metric names dropped entirely (no header, no samples)
    exclude_labels: label keys stripped from every sample of every metric
    """

    denylist: Set[str] = field(default_factory=frozenset)
    exclude_labels: Set[str] = field(default_factory=frozenset)
