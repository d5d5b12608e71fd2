"""Public interface for the spreadsheet export adapter."""

from __future__ import annotations

from .client import SheetsAPIError, SheetsCatalogFetcher
from .files import CatalogFileSource, load_catalog_file
from .schema import SheetRow
from .translator import parse_catalog_record, parse_catalog_records

__all__ = [
    "CatalogFileSource",
    "SheetRow",
    "SheetsAPIError",
    "SheetsCatalogFetcher",
    "load_catalog_file",
    "parse_catalog_record",
    "parse_catalog_records",
]
