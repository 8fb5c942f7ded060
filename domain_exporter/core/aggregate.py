from __future__ import annotations

from collections import Counter
from typing import Iterable, NamedTuple

from domain_exporter.models import ListingRecord
from domain_exporter.utils.formatting import format_count, format_rooms


class AggregateKey(NamedTuple):
    property_type: str
    suburb: str
    postcode: str
    bedrooms: str     # "3.0"
    bathrooms: str    # "2.5"
    carspaces: str    # "1"


def listing_key(record: ListingRecord) -> AggregateKey:
    d = record.details
    return AggregateKey(
        property_type=d.property_type,
        suburb=d.suburb,
        postcode=d.postcode,
        bedrooms=format_rooms(d.bedrooms),
        bathrooms=format_rooms(d.bathrooms),
        carspaces=format_count(d.carspaces),
    )


def new_table() -> Counter[AggregateKey]:
    return Counter()


def aggregate(records: Iterable[ListingRecord], table: Counter[AggregateKey]) -> None:
    """Count every record once under its key."""
    for record in records:
        table[listing_key(record)] += 1


def table_total(table: Counter[AggregateKey]) -> int:
    return sum(table.values())
