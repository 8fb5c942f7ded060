# domain_exporter/server/deps.py
from fastapi import Request
from prometheus_client import CollectorRegistry

from domain_exporter.suppliers.base import ListingSearch


def get_client(request: Request) -> ListingSearch:
    """The one search client for the process, shared by every request."""
    return request.app.state.client


def get_registry(request: Request) -> CollectorRegistry:
    return request.app.state.registry


def get_result_cap(request: Request) -> int:
    return request.app.state.result_cap
