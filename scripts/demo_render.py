"""Demo: render a snapshot of zone readings the way a scrape would see it.

Run with:
    python scripts/demo_render.py

Try it with filters from the environment:
    ZONE_IDS=z1 EXCLUDE_LABELS=zone_id METRICS_DENYLIST=zone_bandwidth_bytes \
        python scripts/demo_render.py
"""

from __future__ import annotations

from app.core.config import SETTINGS
from app.core.logging import setup_logging
from app.models.account import Account, Zone
from app.models.metric import MetricDefinition, Sample
from app.services.export_service import ExportService
from app.services.metric_source import InMemoryMetricSource
from app.services.scope import resolve_scope

ACCOUNTS = [
    Account(id="a1", name="Acme"),
    Account(id="a2", name="Globex"),
]

ZONES = [
    Zone(id="z1", name="acme.example", account_id="a1"),
    Zone(id="z2", name="shop.acme.example", account_id="a1"),
    Zone(id="z3", name="globex.example", account_id="a2"),
]

# Per-zone (requests, bytes) as an upstream poll would have returned them.
READINGS = {
    "z1": (1532, 8_400_211.0),
    "z2": (87, 120_004.5),
    "z3": (4410, float("nan")),
}


def main() -> None:
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

    scope = resolve_scope(
        ACCOUNTS,
        ZONES,
        account_ids=SETTINGS.account_ids,
        zone_ids=SETTINGS.zone_ids,
    )
    in_scope = {z.id for z in scope.zones}

    requests: list[Sample] = []
    bandwidth: list[Sample] = []
    for zone_id, (count, nbytes) in READINGS.items():
        if zone_id not in in_scope:
            continue
        labels = {"zone": scope.zone_name(zone_id), "zone_id": zone_id}
        requests.append(Sample(labels=labels, value=count))
        bandwidth.append(Sample(labels=labels, value=nbytes))

    source = InMemoryMetricSource()
    source.publish(
        [
            MetricDefinition(
                name="zone_requests_total",
                help="Requests served per zone",
                type="counter",
                values=requests,
            ),
            MetricDefinition(
                name="zone_bandwidth_bytes",
                help="Bytes sent per zone\n(edge only)",
                type="gauge",
                values=bandwidth,
            ),
        ]
    )

    service = ExportService.from_settings(source, SETTINGS)
    print(service.render(), end="")


if __name__ == "__main__":
    main()
