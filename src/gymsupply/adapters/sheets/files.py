"""Load a spreadsheet export saved to disk."""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .client import SheetsAPIError
from .translator import parse_catalog_records

if TYPE_CHECKING:
    from pathlib import Path

    from gymsupply.domain.model import CatalogRecord


def load_catalog_file(path: Path) -> list[CatalogRecord]:
    """Read a ``.json`` (list of row objects) or ``.csv`` (header row) export."""

    suffix = path.suffix.lower()
    if suffix == ".json":
        with path.open(encoding="utf-8") as handle:
            payload = json.load(handle)
        if isinstance(payload, dict) and "error" in payload:
            raise SheetsAPIError(str(payload["error"]))
        if not isinstance(payload, list):
            raise ValueError(f"Expected a list of rows in {path}")
        return parse_catalog_records(payload)
    if suffix == ".csv":
        with path.open(encoding="utf-8-sig", newline="") as handle:
            return parse_catalog_records(list(csv.DictReader(handle)))
    raise ValueError(f"Unsupported catalog file type: {path.suffix or path.name}")


@dataclass(slots=True, frozen=True)
class CatalogFileSource:
    path: Path

    def __call__(self) -> list[CatalogRecord]:
        return load_catalog_file(self.path)
