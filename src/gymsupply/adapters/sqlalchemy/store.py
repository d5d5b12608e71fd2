"""Catalog store backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from gymsupply.domain.model import CatalogRecord
from gymsupply.domain.ports.store import BatchCommitError, CatalogStoreError, OperationKind

from .mappings import RECORD_COLUMNS, catalog_item_table

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from sqlalchemy import RowMapping
    from sqlalchemy.orm import Session, sessionmaker

    from gymsupply.domain.model import CollectionName
    from gymsupply.domain.ports.store import BatchOperation

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyCatalogStore:
    """Document-collection style catalog store on one SQL table.

    ``batch_write`` runs inside a single transaction. An update whose target row
    is gone aborts the batch; deleting a missing row is a no-op.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.session_factory = session_factory
        self._clock = clock

    def list_all(self, collection: CollectionName) -> list[CatalogRecord]:
        table = catalog_item_table
        stmt = (
            select(table)
            .where(table.c.collection == collection)
            .order_by(table.c.position, table.c.id)
        )
        try:
            with self.session_factory() as session:
                rows = session.execute(stmt).mappings().all()
        except SQLAlchemyError as exc:
            raise CatalogStoreError(f"Could not read collection {collection!r}") from exc
        return [_record_from_row(row) for row in rows]

    def batch_write(self, operations: Sequence[BatchOperation]) -> None:
        if not operations:
            return
        now = self._clock()
        try:
            with self.session_factory.begin() as session:
                positions = _PositionAllocator(session)
                for operation in operations:
                    self._execute(session, operation, now, positions)
        except SQLAlchemyError as exc:
            raise BatchCommitError(f"Catalog batch rejected: {exc}") from exc
        log.debug("Committed catalog batch with %d operations", len(operations))

    def _execute(
        self,
        session: Session,
        operation: BatchOperation,
        now: datetime,
        positions: _PositionAllocator,
    ) -> None:
        table = catalog_item_table
        if operation.kind is OperationKind.CREATE:
            columns, extras = _split_payload(operation.payload)
            session.execute(
                insert(table).values(
                    id=operation.storage_id,
                    collection=operation.collection,
                    position=positions.next(),
                    extras=extras,
                    created_at=now,
                    updated_at=now,
                    **columns,
                )
            )
            return

        target = (table.c.id == operation.storage_id) & (
            table.c.collection == operation.collection
        )
        if operation.kind is OperationKind.UPDATE:
            columns, extras = _split_payload(operation.payload)
            values: dict[str, Any] = {**columns, "updated_at": now}
            if extras:
                current = session.execute(select(table.c.extras).where(target)).scalar_one_or_none()
                values["extras"] = {**(current or {}), **extras}
            result = session.execute(update(table).where(target).values(**values))
            if result.rowcount == 0:
                raise BatchCommitError(
                    f"Update target {operation.storage_id} no longer exists "
                    f"in collection {operation.collection!r}"
                )
            return

        result = session.execute(delete(table).where(target))
        if result.rowcount == 0:
            log.debug("Delete target %s already gone", operation.storage_id)


class _PositionAllocator:
    """Hand out insertion positions after the highest one stored, once per batch."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._last: int | None = None

    def next(self) -> int:
        if self._last is None:
            stored = self._session.execute(
                select(func.max(catalog_item_table.c.position))
            ).scalar_one()
            self._last = stored or 0
        self._last += 1
        return self._last


def _split_payload(payload: Mapping[str, object]) -> tuple[dict[str, object], dict[str, object]]:
    columns = {name: value for name, value in payload.items() if name in RECORD_COLUMNS}
    extras = {name: value for name, value in payload.items() if name not in RECORD_COLUMNS}
    return columns, extras


def _record_from_row(row: RowMapping) -> CatalogRecord:
    extras = cast("dict[str, object] | None", row["extras"])
    return CatalogRecord(
        part_number=row["part_number"],
        name=row["name"],
        brand=row["brand"],
        category=row["category"],
        cost=row["cost"],
        preferred=row["preferred"],
        url=row["url"],
        extras=dict(extras or {}),
        storage_id=row["id"],
    )


if TYPE_CHECKING:
    from gymsupply.domain.ports.store import CatalogStore

    _store_check: CatalogStore = SqlAlchemyCatalogStore(cast("sessionmaker[Session]", object()))
