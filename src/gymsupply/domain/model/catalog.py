"""Catalog records as read from the spreadsheet export or the catalog store."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from gymsupply.domain.model.enums import CatalogField

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gymsupply.domain.model.primitives import PartNumber, StorageId


@dataclass(slots=True, kw_only=True)
class CatalogRecord:
    """One catalog entry.

    ``part_number`` is the business key; it may be missing on malformed input and
    such records are excluded from reconciliation. ``extras`` holds every attribute
    the reconciler does not know about and is carried through untouched.
    ``storage_id`` is only set on records read back from a store.
    """

    part_number: PartNumber | None
    name: str | None = None
    brand: str | None = None
    category: str | None = None
    cost: str | None = None
    preferred: str | None = None
    url: str | None = None
    extras: dict[str, object] = field(default_factory=dict[str, object])
    storage_id: StorageId | None = None

    @property
    def key(self) -> PartNumber | None:
        if self.part_number is None:
            return None
        stripped = str(self.part_number).strip()
        return stripped or None

    @property
    def display_name(self) -> str:
        return self.name or "(unnamed)"

    def value_of(self, catalog_field: CatalogField) -> str | None:
        return getattr(self, catalog_field.attribute)

    def to_payload(self) -> dict[str, object]:
        """Return the full write payload: comparable attributes, key and extras."""

        payload: dict[str, object] = dict(self.extras)
        payload["part_number"] = self.key
        for catalog_field in CatalogField:
            payload[catalog_field.attribute] = self.value_of(catalog_field)
        return payload

    def with_storage_id(self, storage_id: StorageId) -> CatalogRecord:
        return replace(self, storage_id=storage_id)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, object],
        *,
        storage_id: StorageId | None = None,
    ) -> CatalogRecord:
        known = {"part_number", *(catalog_field.attribute for catalog_field in CatalogField)}
        values = {name: _as_text(payload.get(name)) for name in known}
        extras = {name: value for name, value in payload.items() if name not in known}
        return cls(**values, extras=extras, storage_id=storage_id)


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
