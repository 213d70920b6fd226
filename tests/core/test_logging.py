"""Tests for setup_logging and the human-readable container format.

JSON output has its own file (test_structured_logging.py); here we check
the wiring from Settings to the root logger and what a render looks like
in a terminal.
"""

from __future__ import annotations

import logging

import pytest

from app.core.config import load_settings
from app.core.logging import _ContainerFormatter, _JsonFormatter, setup_logging
from app.services.export_service import ExportService
from app.services.metric_source import InMemoryMetricSource


def _root_formatter() -> logging.Formatter | None:
    [handler] = logging.getLogger().handlers
    return handler.formatter


def test_setup_logging_maps_level_names() -> None:
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging("error")
    assert logging.getLogger().level == logging.ERROR


def test_setup_logging_defaults_to_info_for_unknown_level() -> None:
    setup_logging("nonexistent")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_replaces_existing_handlers() -> None:
    setup_logging("info")
    setup_logging("info")
    assert len(logging.getLogger().handlers) == 1


def test_prometheus_client_never_below_warning() -> None:
    setup_logging("debug")
    assert logging.getLogger("prometheus_client").level == logging.WARNING

    setup_logging("error")
    assert logging.getLogger("prometheus_client").level == logging.ERROR


@pytest.mark.parametrize(
    ("raw", "formatter_cls"),
    [("true", _JsonFormatter), ("false", _ContainerFormatter)],
)
def test_log_json_setting_selects_formatter(
    monkeypatch: pytest.MonkeyPatch, raw: str, formatter_cls: type
) -> None:
    monkeypatch.setenv("LOG_JSON", raw)
    monkeypatch.setenv("LOG_LEVEL", "warning")
    settings = load_settings()

    setup_logging(settings.log_level, json_format=settings.log_json)

    assert isinstance(_root_formatter(), formatter_cls)
    assert logging.getLogger().level == logging.WARNING


def test_container_format_shows_render_stats(
    capsys: pytest.CaptureFixture[str],
) -> None:
    setup_logging("info")
    ExportService(InMemoryMetricSource(), include_exporter_metrics=False).render()

    [line] = [
        line
        for line in capsys.readouterr().out.splitlines()
        if "render complete" in line
    ]
    assert "INFO" in line
    assert "app.services.export_service" in line
    assert "families=0 series=0 denied=0" in line
    # INFO lines carry no [file:line] suffix
    assert "export_service.py:" not in line


def test_container_format_adds_location_for_errors() -> None:
    record = logging.LogRecord(
        name="app.services.export_service",
        level=logging.ERROR,
        pathname="export_service.py",
        lineno=71,
        msg="render failed: metric source raised",
        args=(),
        exc_info=None,
    )
    output = _ContainerFormatter().format(record)
    assert "render failed" in output
    assert "[export_service.py:71]" in output
