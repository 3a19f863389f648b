from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from viberooms_core.errors import CatalogLoadError
from viberooms_core.types import CatalogItem

from .schemas import CatalogRecord

log = logging.getLogger(__name__)


def parse_records(rows: Iterable[Mapping[str, Any]]) -> list[CatalogItem]:
    items: list[CatalogItem] = []
    seen: set[str] = set()
    for i, row in enumerate(rows):
        try:
            item = CatalogRecord.model_validate(row).to_item()
        except (ValidationError, ValueError) as e:
            raise CatalogLoadError(f"record {i} is malformed: {e}") from e
        if item.id in seen:
            raise CatalogLoadError(f"duplicate catalog id: {item.id}")
        seen.add(item.id)
        items.append(item)
    return items


def load_catalog(path: str | Path) -> list[CatalogItem]:
    """
    Read an ETL-produced JSON catalog: either a list of records or
    {"items": [...]}.
    """
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogLoadError(f"cannot read catalog {p}: {e}") from e

    rows = data.get("items", []) if isinstance(data, dict) else data
    if not isinstance(rows, list):
        raise CatalogLoadError(f"catalog {p} has no item list")
    items = parse_records(rows)
    log.info("loaded %d catalog items from %s", len(items), p)
    return items
