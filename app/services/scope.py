"""Which accounts and zones a render covers.

ACCOUNT_IDS / ZONE_IDS narrow the catalog.  An empty set means "no
restriction" so that an unconfigured exporter reports everything it can
see.  Zones belonging to an account that was filtered out are dropped as
well, otherwise a zone allow-list could leak data from an account the
operator excluded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Set
from dataclasses import dataclass

from app.models.account import Account, Zone
from app.services.filters import (
    filter_accounts_by_ids,
    filter_zones_by_ids,
    find_zone_name,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Scope:
    accounts: tuple[Account, ...]
    zones: tuple[Zone, ...]

    def zone_name(self, zone_id: str) -> str:
        return find_zone_name(zone_id, self.zones)

    def zones_for(self, account_id: str) -> tuple[Zone, ...]:
        return tuple(z for z in self.zones if z.account_id == account_id)


def resolve_scope(
    accounts: Iterable[Account],
    zones: Iterable[Zone],
    *,
    account_ids: Set[str] = frozenset(),
    zone_ids: Set[str] = frozenset(),
) -> Scope:
    selected_accounts = list(accounts)
    if account_ids:
        selected_accounts = filter_accounts_by_ids(selected_accounts, account_ids)

    selected_zones = list(zones)
    if zone_ids:
        selected_zones = filter_zones_by_ids(selected_zones, zone_ids)
    if account_ids:
        kept = {a.id for a in selected_accounts}
        selected_zones = [z for z in selected_zones if z.account_id in kept]

    logger.debug(
        "scope resolved  accounts=%d zones=%d",
        len(selected_accounts),
        len(selected_zones),
    )
    return Scope(accounts=tuple(selected_accounts), zones=tuple(selected_zones))
