"""Translate spreadsheet export rows into catalog records."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, cast

from gymsupply.domain.model import CatalogRecord, Preferred

from .schema import SheetRow

if TYPE_CHECKING:
    from collections.abc import Iterable

log = logging.getLogger(__name__)


def parse_catalog_record(payload: Mapping[str, object] | SheetRow) -> CatalogRecord:
    row = payload if isinstance(payload, SheetRow) else SheetRow.model_validate(payload)
    if row.preferred is not None and Preferred.parse(row.preferred) is None:
        log.warning(
            "Unrecognised preferred tag %r for part %s, keeping it verbatim",
            row.preferred,
            row.part_number,
        )
    return CatalogRecord(
        part_number=row.part_number,
        name=row.name,
        brand=row.brand,
        category=row.category,
        cost=row.cost,
        preferred=row.preferred,
        url=row.url,
        extras=row.extras,
    )


def parse_catalog_records(payloads: Iterable[object]) -> list[CatalogRecord]:
    """Parse export rows, dropping blank rows the way the export script does."""

    records: list[CatalogRecord] = []
    dropped = 0
    for index, payload in enumerate(payloads):
        if not isinstance(payload, Mapping):
            log.warning("Ignoring non-object row %d in spreadsheet export", index)
            dropped += 1
            continue
        row = SheetRow.model_validate(cast("Mapping[str, object]", payload))
        if not row.has_name:
            dropped += 1
            continue
        records.append(parse_catalog_record(row))
    if dropped:
        log.debug("Dropped %d rows without an item name", dropped)
    return records
