"""Render service: snapshot in, exposition body out.

One render is:

  1. collect()             read the latest snapshot from the MetricSource
  2. encode()              snapshot plus (optionally) the exporter_*
                           families, in ONE call, so denylist, label
                           exclusion and name merging cover both
  3. self-metrics          record duration, series count, denied count

The encoder itself stays pure; all counting and logging happens here.
Self-metrics describe the PREVIOUS render's duration/series, because a
render cannot report its own timing before it has finished.
"""

from __future__ import annotations

import logging
import time

from app.core.config import Settings
from app.core.metrics import (
    DENIED_DEFINITIONS_TOTAL,
    LAST_RENDER_DURATION,
    LAST_RENDER_SERIES,
    RENDERS_TOTAL,
    collect_exporter_metrics,
)
from app.models.metric import SerializeOptions
from app.services.exposition import encode
from app.services.metric_source import MetricSource

logger = logging.getLogger(__name__)


class ExportService:
    def __init__(
        self,
        source: MetricSource,
        options: SerializeOptions | None = None,
        *,
        include_exporter_metrics: bool = True,
    ) -> None:
        self._source = source
        self._options = options if options is not None else SerializeOptions()
        self._include_exporter_metrics = include_exporter_metrics

    @classmethod
    def from_settings(cls, source: MetricSource, settings: Settings) -> ExportService:
        return cls(
            source,
            settings.serialize_options(),
            include_exporter_metrics=settings.exporter_metrics,
        )

    @property
    def options(self) -> SerializeOptions:
        return self._options

    def render(self) -> str:
        """Produce the exposition body for the current snapshot.

        Raises whatever the source raises; the failure is logged and
        counted first so a broken producer shows up in both signals.
        """
        start = time.monotonic()
        try:
            metrics = self._source.collect()
        except Exception:
            RENDERS_TOTAL.labels(result="error").inc()
            logger.exception("render failed: metric source raised")
            raise

        denylist = self._options.denylist
        denied = sum(1 for m in metrics if m.name in denylist)
        families = {m.name for m in metrics if m.name not in denylist}
        series = sum(len(m.values) for m in metrics if m.name not in denylist)

        # One encode call so name merging and block separators cover the
        # exporter families as well.
        if self._include_exporter_metrics:
            body = encode([*metrics, *collect_exporter_metrics()], self._options)
        else:
            body = encode(metrics, self._options)

        duration = time.monotonic() - start
        RENDERS_TOTAL.labels(result="success").inc()
        if denied:
            DENIED_DEFINITIONS_TOTAL.inc(denied)
        LAST_RENDER_DURATION.set(duration)
        LAST_RENDER_SERIES.set(series)

        logger.info(
            "render complete  families=%d series=%d denied=%d duration_ms=%.1f",
            len(families),
            series,
            denied,
            duration * 1000,
            extra={
                "family_count": len(families),
                "series_count": series,
                "denied_count": denied,
                "duration_ms": round(duration * 1000, 3),
            },
        )
        return body
