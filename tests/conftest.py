from __future__ import annotations

import json
from typing import Any, Callable

import pytest

from domain_exporter.models import ListingRecord
from domain_exporter.suppliers.base import ListingSearch
from domain_exporter.suppliers.errors import UpstreamStatusError


def make_listing(
    property_type: str = "ApartmentUnitFlat",
    suburb: str = "Pyrmont",
    postcode: str = "2009",
    bedrooms: float = 2,
    bathrooms: float = 1,
    carspaces: int = 1,
    state: str = "NSW",
) -> dict[str, Any]:
    """One element of the upstream response array."""
    return {
        "type": "PropertyListing",
        "listing": {
            "listingType": "Rent",
            "propertyDetails": {
                "state": state,
                "propertyType": property_type,
                "bathrooms": bathrooms,
                "bedrooms": bedrooms,
                "carspaces": carspaces,
                "suburb": suburb,
                "postcode": postcode,
            },
        },
    }


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = None, reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self.text = text if text is not None else json.dumps(payload if payload is not None else [])
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class FakeSession:
    """Stands in for requests.Session; `handler(body)` answers each POST."""

    def __init__(self, handler: Callable[[dict[str, Any]], Any]):
        self._handler = handler
        self.calls: list[dict[str, Any]] = []
        self.responses: list[FakeResponse] = []

    @property
    def page_numbers(self) -> list[int]:
        return [c["json"]["pageNumber"] for c in self.calls]

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        result = self._handler(json)
        if isinstance(result, BaseException):
            raise result
        if not isinstance(result, FakeResponse):
            result = FakeResponse(200, result)
        self.responses.append(result)
        return result


def pages_session(*pages) -> FakeSession:
    """Answer the n-th request with pages[n]; an empty page after the last."""
    queue = list(pages)

    def handler(body):
        return queue.pop(0) if queue else []

    return FakeSession(handler)


def upstream_session(total: int) -> FakeSession:
    """An upstream holding `total` listings, sliced by pageNumber/pageSize."""
    listings = [make_listing(suburb=f"Suburb{i % 7}", bedrooms=i % 4) for i in range(total)]

    def handler(body):
        size, number = body["pageSize"], body["pageNumber"]
        if (number + 1) * size > 1000:
            return FakeResponse(400, text='{"message":"Cannot page beyond 1000 records"}',
                                reason="Bad Request")
        return listings[number * size:(number + 1) * size]

    return FakeSession(handler)


class FakeSearch(ListingSearch):
    """In-memory search backend keyed by the first location's suburb."""

    def __init__(self, results: dict[str, list[dict[str, Any]]], failing: tuple = ()):
        super().__init__(page_timeout=1.0, deadline=None)
        self.results = results
        self.failing = failing
        self.searched: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    def search_page(self, criteria, timeout):
        suburb = criteria.locations[0].suburb if criteria.locations else ""
        self.searched.append(suburb)
        if suburb in self.failing:
            raise UpstreamStatusError(500, "Internal Server Error", "boom")
        start = criteria.page_number * criteria.page_size
        page = self.results.get(suburb, [])[start:start + criteria.page_size]
        return [ListingRecord.model_validate(item) for item in page]


@pytest.fixture()
def three_listings():
    return [
        make_listing(bedrooms=3, bathrooms=2.5, carspaces=1),
        make_listing(bedrooms=3, bathrooms=2.5, carspaces=1),
        make_listing(property_type="House", bedrooms=4, bathrooms=2, carspaces=2),
    ]
