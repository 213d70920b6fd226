from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

from app.models.metric import SerializeOptions
from app.services.filters import parse_comma_separated

LogLevel = Literal["debug", "info", "warning", "error"]

_TRUE = ("true", "1", "yes")
_FALSE = ("false", "0", "no")


def _getenv(name: str, default: str) -> str:
    # Centralize env access so it’s easy to extend later (type casting, required vars)
    return os.environ.get(name, default).strip()


def _getenv_bool(name: str, default: bool) -> bool:
    raw = _getenv(name, "true" if default else "false").lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f"{name} must be true|false (got {raw!r})")


@dataclass(frozen=True)
class Settings:
    log_level: LogLevel
    log_json: bool
    metrics_denylist: frozenset[str]
    exclude_labels: frozenset[str]
    account_ids: frozenset[str]
    zone_ids: frozenset[str]
    exporter_metrics: bool

    def serialize_options(self) -> SerializeOptions:
        return SerializeOptions(
            denylist=self.metrics_denylist,
            exclude_labels=self.exclude_labels,
        )


def load_settings() -> Settings:
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    return Settings(  # type: ignore[arg-type]
        log_level=log_level_raw,
        log_json=_getenv_bool("LOG_JSON", False),
        metrics_denylist=parse_comma_separated(_getenv("METRICS_DENYLIST", "")),
        exclude_labels=parse_comma_separated(_getenv("EXCLUDE_LABELS", "")),
        account_ids=parse_comma_separated(_getenv("ACCOUNT_IDS", "")),
        zone_ids=parse_comma_separated(_getenv("ZONE_IDS", "")),
        exporter_metrics=_getenv_bool("EXPORTER_METRICS", True),
    )


# Optional: module-level singleton so imports are cheap
SETTINGS = load_settings()
