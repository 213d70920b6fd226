"""Prometheus text exposition encoder.

Turns a list of ``MetricDefinition`` objects into the plain-text body a
Prometheus server expects when it scrapes an exporter.

THE TEXT FORMAT
----------------
Each metric family is a small block:

  # HELP http_requests Total requests
  # TYPE http_requests counter
  http_requests{method="GET"} 42
  http_requests{method="POST"} 7
  <blank line>

  - HELP: free-form description.  Backslash and newline are escaped so
    the comment stays on one line.
  - TYPE: counter | gauge | histogram | summary | untyped.  We emit the
    token verbatim; the producer is responsible for picking a valid one.
  - Sample lines: name, optional {label="value",...} block, a space,
    then the value.  Label values escape backslash, double quote and
    newline.

A scraper rejects a body where the same metric name has two TYPE lines,
so definitions that share a name are MERGED before emission:

  - the first occurrence fixes the family's position in the output
  - HELP/TYPE come from the last definition seen (last write wins)
  - samples are appended in input order

FILTERS
--------
Two independent filters run before merging:

  denylist        drop whole families by metric name
  exclude_labels  strip label keys from every sample (e.g. a
                  high-cardinality "zone_id" that blows up series counts)

The encoder is a pure function: it never mutates the definitions it is
given and keeps no state between calls, so it is safe to call from any
thread.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence, Set

from app.models.metric import MetricDefinition, Sample, SerializeOptions

_DEFAULT_OPTIONS = SerializeOptions()


def encode(
    metrics: Iterable[MetricDefinition],
    options: SerializeOptions | None = None,
) -> str:
    """Serialize metric definitions to Prometheus text exposition format.

    Args:
        metrics: Definitions to encode.  Repeated names are merged.
        options: Denylist / label exclusion.  ``None`` disables both.

    Returns:
        The exposition body.  Every family block ends with a blank line,
        so a non-empty result always ends with ``"\\n"``.  No families
        means an empty string.
    """
    opts = options if options is not None else _DEFAULT_OPTIONS
    denylist = opts.denylist
    exclude_labels = opts.exclude_labels

    # name -> (help, type, samples); dict order is first-seen order
    grouped: dict[str, tuple[str, str, list[Sample]]] = {}

    for metric in metrics:
        if metric.name in denylist:
            continue

        if exclude_labels:
            values: Sequence[Sample] = [
                Sample(labels=filter_labels(s.labels, exclude_labels), value=s.value)
                for s in metric.values
            ]
        else:
            values = metric.values

        existing = grouped.get(metric.name)
        samples = existing[2] if existing is not None else []
        samples.extend(values)
        grouped[metric.name] = (metric.help, metric.type, samples)

    lines: list[str] = []
    for name, (help_text, metric_type, samples) in grouped.items():
        lines.append(f"# HELP {name} {escape_help(help_text)}")
        lines.append(f"# TYPE {name} {metric_type}")
        for sample in samples:
            lines.append(
                f"{name}{format_labels(sample.labels)} {format_value(sample.value)}"
            )
        lines.append("")

    return "\n".join(lines)


def filter_labels(labels: Mapping[str, str], exclude: Set[str]) -> dict[str, str]:
    """Return a new label dict without the excluded keys."""
    return {k: v for k, v in labels.items() if k not in exclude}


def format_labels(labels: Mapping[str, str]) -> str:
    """``{k="v",...}`` in mapping order, or ``""`` for no labels."""
    if not labels:
        return ""
    inner = ",".join(f'{k}="{escape_label_value(v)}"' for k, v in labels.items())
    return f"{{{inner}}}"


def format_value(value: float) -> str:
    """Format a sample value the way scrapers parse it.

    NaN and the infinities use the spellings from the exposition format.
    Finite values use the shortest decimal that round-trips, with
    integral values written without a trailing ``.0`` (``42``, not
    ``42.0``).
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        # also folds -0.0
        return "0"
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def escape_help(text: str) -> str:
    # Backslash first, otherwise the "\n" we insert would get doubled.
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
