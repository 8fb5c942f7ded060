from __future__ import annotations

import json
import logging
import time

import requests
from prometheus_client import CollectorRegistry, Counter, Histogram
from pydantic import TypeAdapter, ValidationError

from domain_exporter.models import ListingRecord, SearchCriteria
from domain_exporter.suppliers.base import ListingSearch
from domain_exporter.suppliers.errors import DecodeError, TransportError, UpstreamStatusError

LOG = logging.getLogger("domain_exporter.suppliers.domain")

API_URL = "https://api.domain.com.au/v1/listings/residential/_search"

HEADERS = {
    "accept": "application/json",
}

_PAGE_ADAPTER = TypeAdapter(list[ListingRecord])


class DomainClient(ListingSearch):
    """Residential listing search against the Domain API."""

    def __init__(
        self,
        api_key: str,
        session: requests.Session | None = None,
        api_url: str = API_URL,
        page_timeout: float = 30.0,
        deadline: float | None = 120.0,
        registry: CollectorRegistry | None = None,
    ):
        super().__init__(page_timeout=page_timeout, deadline=deadline)
        self._api_key = api_key
        # Reuse a session for keep-alive + connection pooling
        self._session = session or requests.Session()
        self._api_url = api_url
        self._requests = Counter(
            "domain_api_requests_total",
            "Requests made to the Domain API.",
            ["code", "method"],
            registry=registry,
        )
        self._latency = Histogram(
            "domain_api_request_duration_seconds",
            "Latency of requests made to the Domain API.",
            ["method"],
            registry=registry,
        )

    @property
    def name(self) -> str:
        return "domain"

    def search_page(self, criteria: SearchCriteria, timeout: float) -> list[ListingRecord]:
        headers = dict(HEADERS)
        headers["X-Api-Key"] = self._api_key
        LOG.info("making request for page #%d: %s, %s",
                 criteria.page_number, self._api_url, criteria.to_wire())

        started = time.perf_counter()
        try:
            with self._session.post(
                self._api_url,
                headers=headers,
                json=criteria.to_wire(),
                timeout=timeout,
            ) as resp:
                # read the whole body so the connection goes back to the pool
                body = resp.text
                status = resp.status_code
                reason = resp.reason
        except requests.RequestException as e:
            self._requests.labels(code="error", method="post").inc()
            raise TransportError(f"request to {self._api_url} failed: {e}") from e
        finally:
            self._latency.labels(method="post").observe(time.perf_counter() - started)
        self._requests.labels(code=str(status), method="post").inc()

        if status != 200:
            LOG.warning("non-200 response from %s: %s", self._api_url, body)
            raise UpstreamStatusError(status, reason, body)

        try:
            page = _PAGE_ADAPTER.validate_python(json.loads(body))
        except (ValueError, RecursionError, ValidationError) as e:
            raise DecodeError(f"couldn't parse json: {e}") from e

        LOG.info("got %d listings", len(page))
        return page
