"""Selection helpers for the acquisition side of the exporter.

These turn configuration strings into id sets and narrow the account/zone
catalog before readings are fetched.  None of them know anything about
the exposition format.
"""

from __future__ import annotations

from collections.abc import Iterable, Set

from app.models.account import Account, Zone


def parse_comma_separated(value: str | None) -> frozenset[str]:
    """Parse ``"a, b,,c"`` into ``{"a", "b", "c"}``.

    Whitespace around each token is trimmed and empty tokens are dropped.
    ``None``, ``""`` and whitespace-only input all give an empty set.
    """
    if not value or not value.strip():
        return frozenset()
    return frozenset(token.strip() for token in value.split(",") if token.strip())


def filter_accounts_by_ids(
    accounts: Iterable[Account], include_ids: Set[str]
) -> list[Account]:
    return [a for a in accounts if a.id in include_ids]


def filter_zones_by_ids(zones: Iterable[Zone], include_ids: Set[str]) -> list[Zone]:
    return [z for z in zones if z.id in include_ids]


def find_zone_name(zone_id: str, zones: Iterable[Zone]) -> str:
    """Name of the first zone with ``zone_id``, or the id itself if unknown."""
    for zone in zones:
        if zone.id == zone_id:
            return zone.name
    return zone_id
