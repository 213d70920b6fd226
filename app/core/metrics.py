"""Exporter self-metrics using the Prometheus client library.

This module defines everything the exporter measures about ITSELF, in
one place.  The readings it exports on behalf of upstream systems are
plain ``MetricDefinition`` data; these are live ``prometheus_client``
objects that other modules increment/set at the point of action.

WHY A DEDICATED REGISTRY
--------------------------
prometheus_client ships a global default REGISTRY that also carries
process_* and python_gc_* collectors.  We keep our own
``EXPORTER_REGISTRY`` so that:

  - only the metrics below are appended to a render
  - tests can read values without the noise of the default collectors

HOW THEY REACH THE OUTPUT
---------------------------
``collect_exporter_metrics()`` walks the registry and converts counter
and gauge families into ``MetricDefinition`` objects.  The export
service then passes them through the same encoder as everything else,
so METRICS_DENYLIST and EXCLUDE_LABELS apply to them too.

Counters are exposed under their ``_total`` sample name, matching what
prometheus_client's own text exposition does.  The ``_created``
timestamps are skipped; they are an OpenMetrics feature that the plain
text format does not need.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge

from app.models.metric import MetricDefinition, Sample

EXPORTER_REGISTRY = CollectorRegistry(auto_describe=True)

RENDERS_TOTAL = Counter(
    "exporter_renders_total",
    "Exposition bodies rendered, by result",
    ["result"],  # "success" or "error"
    registry=EXPORTER_REGISTRY,
)
# Both series exist from the first render on, at 0.
RENDERS_TOTAL.labels(result="success")
RENDERS_TOTAL.labels(result="error")

DENIED_DEFINITIONS_TOTAL = Counter(
    "exporter_denied_definitions_total",
    "Metric definitions dropped by the denylist",
    registry=EXPORTER_REGISTRY,
)

LAST_RENDER_DURATION = Gauge(
    "exporter_last_render_duration_seconds",
    "Wall-clock time spent producing the most recent render",
    registry=EXPORTER_REGISTRY,
)

LAST_RENDER_SERIES = Gauge(
    "exporter_last_render_series",
    "Sample lines emitted by the most recent render",
    registry=EXPORTER_REGISTRY,
)


def collect_exporter_metrics(
    registry: CollectorRegistry = EXPORTER_REGISTRY,
) -> list[MetricDefinition]:
    """Snapshot counter and gauge families as ``MetricDefinition`` objects."""
    definitions: list[MetricDefinition] = []
    for family in registry.collect():
        if family.type == "counter":
            sample_name = f"{family.name}_total"
        elif family.type == "gauge":
            sample_name = family.name
        else:
            continue

        samples = [
            Sample(labels=dict(s.labels), value=s.value)
            for s in family.samples
            if s.name == sample_name
        ]
        definitions.append(
            MetricDefinition(
                name=sample_name,
                help=family.documentation,
                type=family.type,
                values=samples,
            )
        )
    return definitions
