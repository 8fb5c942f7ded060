from __future__ import annotations

from fastapi import FastAPI
from prometheus_client import CollectorRegistry

from domain_exporter.core.metrics import build_registry
from domain_exporter.server import routes
from domain_exporter.suppliers.base import ListingSearch
from domain_exporter.suppliers.domain import DomainClient
from runner.config import Config


def create_app(
    config: Config,
    client: ListingSearch | None = None,
    registry: CollectorRegistry | None = None,
) -> FastAPI:
    reg = registry or CollectorRegistry()
    if client is None:
        client = DomainClient(
            config.api_key,
            api_url=config.api_url,
            page_timeout=config.page_timeout,
            deadline=config.search_deadline,
            registry=reg,
        )
    build_registry(client, config.criteria_dir, config.result_cap, registry=reg)

    app = FastAPI(
        title="Domain Exporter",
        version="1.0.0",
        description="Listing counts from the Domain residential search API as Prometheus metrics.",
    )
    app.state.client = client
    app.state.registry = reg
    app.state.result_cap = config.result_cap
    app.include_router(routes.router)
    return app
