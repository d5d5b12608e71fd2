"""SQLAlchemy table metadata for the catalog store."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    Dialect,
    Index,
    MetaData,
    String,
    Table,
    TypeDecorator,
    Uuid,
)

from gymsupply.domain.model import CatalogField
from gymsupply.domain.reconciliation import CATALOG_COLLECTION

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# Record attribute columns, in CatalogRecord order.
RECORD_COLUMNS: tuple[str, ...] = (
    "part_number",
    *(catalog_field.attribute for catalog_field in CatalogField),
)

# Part numbers are not unique: the spreadsheet may repeat them and the
# reconciler reports that instead of the database rejecting it.
catalog_item_table = Table(
    "catalog_item",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("collection", String, nullable=False, default=CATALOG_COLLECTION),
    # Insertion sequence; creates in one batch share a timestamp.
    Column("position", Integer, nullable=False),
    Column("part_number", String, nullable=True),
    Column("name", String, nullable=True),
    Column("brand", String, nullable=True),
    Column("category", String, nullable=True),
    Column("cost", String, nullable=True),
    Column("preferred", String, nullable=True),
    Column("url", String, nullable=True),
    Column("extras", JSON, nullable=False, default=dict),
    Column("created_at", UTCDateTime, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
    Index("ix_catalog_item_collection_part_number", "collection", "part_number"),
)
