from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from domain_exporter.core.aggregate import AggregateKey, aggregate, new_table, table_total
from domain_exporter.core.criteria import NamedCriteria, criteria_from_query
from domain_exporter.suppliers.base import RESULT_CAP, ListingSearch
from domain_exporter.suppliers.errors import SearchError

LOG = logging.getLogger("domain_exporter.core.driver")


def collect_batch(
    client: ListingSearch,
    criteria: Iterable[NamedCriteria],
    result_cap: int = RESULT_CAP,
) -> Counter[AggregateKey]:
    """Search every criteria set into one table; failed searches are skipped."""
    table = new_table()
    for name, rsr in criteria:
        try:
            listings = client.search(rsr, result_cap)
        except SearchError as e:
            LOG.error("[%s] error searching %s for %s: %s", name, client.name, rsr.to_wire(), e)
            continue
        aggregate(listings, table)
        LOG.info("[%s] aggregated %d listings", name, len(listings))

    LOG.info("batch collected %d listings in %d buckets", table_total(table), len(table))
    return table


def collect_query(
    client: ListingSearch,
    state: str = "",
    suburb: str = "",
    postcode: str = "",
    result_cap: int = RESULT_CAP,
) -> Counter[AggregateKey]:
    """Single on-demand search. SearchError propagates to the caller."""
    rsr = criteria_from_query(state=state, suburb=suburb, postcode=postcode)
    table = new_table()
    aggregate(client.search(rsr, result_cap), table)
    return table
