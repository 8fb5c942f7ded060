# domain_exporter/server/routes.py
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from domain_exporter.core.driver import collect_query
from domain_exporter.core.metrics import render_table
from domain_exporter.server.deps import get_client, get_registry, get_result_cap
from domain_exporter.suppliers.base import ListingSearch
from domain_exporter.suppliers.errors import SearchError

LOG = logging.getLogger("domain_exporter.server")

router = APIRouter()

INDEX_HTML = """<!doctype html>
<title>Domain Exporter</title>
<h1>Domain Exporter</h1>
<a href="/metrics">Metrics</a>"""


@router.get("/", response_class=HTMLResponse)
def index():
    return INDEX_HTML


@router.get("/metrics")
def metrics(registry: CollectorRegistry = Depends(get_registry)):
    return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)


@router.get("/listings")
def listings(
    state: str = Query("", description="e.g. NSW"),
    suburb: str = Query(""),
    postcode: str = Query("", alias="postCode"),
    client: ListingSearch = Depends(get_client),
    result_cap: int = Depends(get_result_cap),
):
    """
    One-shot search for a single location, rendered as metrics:
      - map query params onto one location filter
      - search + aggregate
      - expose the table in a throwaway registry
    """
    try:
        table = collect_query(client, state=state, suburb=suburb, postcode=postcode,
                              result_cap=result_cap)
    except SearchError as e:
        LOG.error("error searching %s for state=%r suburb=%r postCode=%r: %s",
                  client.name, state, suburb, postcode, e)
        return PlainTextResponse(f"error searching domain: {e}", status_code=500)
    return Response(render_table(table), media_type=CONTENT_TYPE_LATEST)


@router.get("/api/health")
def health():
    return {"status": "ok"}
