"""Public domain model surface."""

from __future__ import annotations

from gymsupply.domain.model.catalog import CatalogRecord
from gymsupply.domain.model.enums import CatalogField, Preferred
from gymsupply.domain.model.primitives import CollectionName, PartNumber, StorageId

__all__ = [
    "CatalogField",
    "CatalogRecord",
    "CollectionName",
    "PartNumber",
    "Preferred",
    "StorageId",
]
