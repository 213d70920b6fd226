from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure repo root is on sys.path so `import app` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.models.account import Account, Zone  # noqa: E402
from app.models.metric import MetricDefinition, Sample  # noqa: E402
from app.services.metric_source import InMemoryMetricSource  # noqa: E402


@pytest.fixture
def accounts() -> list[Account]:
    return [
        Account(id="a1", name="Acme"),
        Account(id="a2", name="Globex"),
    ]


@pytest.fixture
def zones() -> list[Zone]:
    return [
        Zone(id="z1", name="acme.example", account_id="a1"),
        Zone(id="z2", name="shop.acme.example", account_id="a1"),
        Zone(id="z3", name="globex.example", account_id="a2"),
    ]


@pytest.fixture
def http_requests() -> MetricDefinition:
    return MetricDefinition(
        name="http_requests",
        help="Total requests",
        type="counter",
        values=[Sample(labels={"method": "GET"}, value=42)],
    )


@pytest.fixture
def source() -> InMemoryMetricSource:
    return InMemoryMetricSource()
