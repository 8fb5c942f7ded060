from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

from domain_exporter.models import ListingRecord, SearchCriteria
from domain_exporter.suppliers.errors import SearchDeadlineExceeded

LOG = logging.getLogger("domain_exporter.suppliers")

PAGE_SIZE = 200
# The upstream refuses to page beyond 1000 records for one search.
RESULT_CAP = 1000


def page_size_for(result_cap: int) -> int:
    """Largest page size <= PAGE_SIZE that divides `result_cap` (0 for no cap)."""
    if result_cap <= 0:
        return 0
    size = min(PAGE_SIZE, result_cap)
    while result_cap % size:
        size -= 1
    return size


class ListingSearch(ABC):
    def __init__(self, page_timeout: float = 30.0, deadline: float | None = 120.0):
        self.page_timeout = page_timeout
        self.deadline = deadline

    @property
    @abstractmethod
    def name(self) -> str:
        """Short unique backend name, e.g. 'domain'."""

    @abstractmethod
    def search_page(self, criteria: SearchCriteria, timeout: float) -> list[ListingRecord]:
        """Return one page of listings for `criteria.page_number`."""

    def search(self, criteria: SearchCriteria, result_cap: int = RESULT_CAP) -> list[ListingRecord]:
        """
        Page through every listing matching `criteria`.

        Paging stops on an empty or short page, or once `result_cap`
        records are in. The page size divides the cap, so no request
        reaches past it and every record under it is returned. The
        caller's criteria are never modified. Any SearchError aborts the
        whole search; records from earlier pages are dropped.
        """
        page_size = page_size_for(result_cap)
        listings: list[ListingRecord] = []
        if not page_size:
            return listings

        rsr = criteria.model_copy(update={"page_size": page_size, "page_number": 0})
        pages = 0
        started = time.monotonic()

        while (rsr.page_number + 1) * page_size <= result_cap:
            timeout = self.page_timeout
            if self.deadline is not None:
                remaining = self.deadline - (time.monotonic() - started)
                if remaining <= 0:
                    raise SearchDeadlineExceeded(
                        f"search exceeded {self.deadline}s deadline after {pages} page(s)")
                timeout = min(timeout, remaining)

            page = self.search_page(rsr, timeout)
            pages += 1
            listings.extend(page)
            if len(page) < page_size:
                break
            rsr = rsr.model_copy(update={"page_number": rsr.page_number + 1})

        LOG.info("[%s] search finished with %d listings after %d page(s)",
                 self.name, len(listings), pages)
        return listings
