from __future__ import annotations

from collections import Counter
from pathlib import Path

from prometheus_client import CollectorRegistry, Gauge, generate_latest
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.gc_collector import GCCollector
from prometheus_client.platform_collector import PlatformCollector
from prometheus_client.process_collector import ProcessCollector

from domain_exporter.core.aggregate import AggregateKey
from domain_exporter.core.criteria import load_criteria_dir
from domain_exporter.core.driver import collect_batch
from domain_exporter.suppliers.base import RESULT_CAP, ListingSearch

LISTING_METRIC = "domain_listing_count"
LISTING_HELP = "Number of listings per property type, location and room counts."
LABELS = ["propertytype", "suburb", "postcode", "bedrooms", "bathrooms", "carspaces"]


def render_table(table: Counter[AggregateKey]) -> bytes:
    """Exposition text for a one-shot table; nothing is kept between calls."""
    reg = CollectorRegistry()
    listing_count = Gauge(LISTING_METRIC, LISTING_HELP, LABELS, registry=reg)
    for key, count in table.items():
        listing_count.labels(*key).inc(count)
    return generate_latest(reg)


class ListingCountCollector:
    """Runs the batch searches on every scrape."""

    def __init__(self, client: ListingSearch, criteria_dir: str | Path, result_cap: int = RESULT_CAP):
        self._client = client
        self._criteria_dir = criteria_dir
        self._result_cap = result_cap

    def describe(self):
        # keeps registration from calling collect() and hitting the API
        return [GaugeMetricFamily(LISTING_METRIC, LISTING_HELP, labels=LABELS)]

    def collect(self):
        criteria = load_criteria_dir(self._criteria_dir)
        table = collect_batch(self._client, criteria, self._result_cap)
        family = GaugeMetricFamily(LISTING_METRIC, LISTING_HELP, labels=LABELS)
        for key, count in sorted(table.items()):
            family.add_metric(list(key), count)
        yield family


def build_registry(
    client: ListingSearch,
    criteria_dir: str | Path,
    result_cap: int = RESULT_CAP,
    registry: CollectorRegistry | None = None,
) -> CollectorRegistry:
    reg = registry or CollectorRegistry()
    ProcessCollector(registry=reg)
    PlatformCollector(registry=reg)
    GCCollector(registry=reg)
    reg.register(ListingCountCollector(client, criteria_dir, result_cap))
    return reg
