"""HTTP client for the spreadsheet export endpoint."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from gymsupply.adapters.http_resilience import ResilienceConfig, ResilientClient
from gymsupply.config.sheets import SheetsConfig, get_sheets_config

from .schema import ErrorResponse
from .translator import parse_catalog_records

if TYPE_CHECKING:
    from collections.abc import Callable

    from gymsupply.domain.model import CatalogRecord

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class SheetsAPIError(RuntimeError):
    """Raised when the export endpoint answers with an error or an unexpected payload."""


@dataclass(slots=True)
class SheetsCatalogFetcher:
    """Catalog source reading the authoritative item list from the spreadsheet export."""

    config: SheetsConfig = field(default_factory=get_sheets_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self) -> list[CatalogRecord]:
        return asyncio.run(self.fetch())

    async def fetch(self) -> list[CatalogRecord]:
        async with self.client_factory(self.config.resilience) as client:
            # Apps Script web apps answer with a redirect to the rendered content
            response = await client.get(self.config.export_url, follow_redirects=True)
        response.raise_for_status()

        payload = response.json()
        if isinstance(payload, dict) and "error" in payload:
            error_payload = ErrorResponse.model_validate(payload)
            log.error("Spreadsheet export error: %s", error_payload.error)
            raise SheetsAPIError(error_payload.error)
        if not isinstance(payload, list):
            raise SheetsAPIError("Unexpected spreadsheet export payload")

        records = parse_catalog_records(payload)
        log.info("Fetched %d catalog rows from the spreadsheet export", len(records))
        return records


if TYPE_CHECKING:
    from gymsupply.domain.ports.store import CatalogSource

    _source_check: CatalogSource = SheetsCatalogFetcher()
