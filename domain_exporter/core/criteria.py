from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from pydantic import ValidationError

from domain_exporter.models import LocationFilter, SearchCriteria

LOG = logging.getLogger("domain_exporter.core.criteria")

CRITERIA_GLOB = "*.json"


class NamedCriteria(NamedTuple):
    name: str          # file stem, used in log lines
    criteria: SearchCriteria


def load_criteria_file(path: Path) -> SearchCriteria:
    return SearchCriteria.model_validate_json(path.read_text(encoding="utf-8"))


def load_criteria_dir(path: str | Path) -> list[NamedCriteria]:
    """
    Read every search definition in `path`, one JSON document per file.
    Files that can't be read or parsed are skipped with a warning.
    """
    directory = Path(path)
    if not directory.is_dir():
        LOG.warning("criteria directory %s does not exist", directory)
        return []

    out: list[NamedCriteria] = []
    for file in sorted(directory.glob(CRITERIA_GLOB)):
        try:
            criteria = load_criteria_file(file)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            LOG.warning("skipping criteria file %s: %s", file, e)
            continue
        out.append(NamedCriteria(file.stem, criteria))
    return out


def criteria_from_query(state: str = "", suburb: str = "", postcode: str = "") -> SearchCriteria:
    return SearchCriteria(
        listing_type="Rent",
        min_bedrooms=0,
        min_bathrooms=0,
        min_carspaces=0,
        locations=[
            LocationFilter(
                state=state or "",
                suburb=suburb or "",
                postcode=postcode or "",
            ),
        ],
    )
