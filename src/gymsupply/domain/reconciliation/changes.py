"""Change variants and the reviewable change set produced by reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Callable

    from gymsupply.domain.model import CatalogField, CatalogRecord, PartNumber, StorageId


class ChangeKind(StrEnum):
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


class ReconcileSide(StrEnum):
    """Which input list an anomaly was observed in."""

    SOURCE = "source"
    TARGET = "target"


@dataclass(slots=True, frozen=True)
class FieldChange:
    """Normalized before/after values of one differing attribute."""

    field: CatalogField
    old_value: str
    new_value: str


@dataclass(slots=True, frozen=True, kw_only=True)
class Add:
    record: CatalogRecord
    kind: Literal[ChangeKind.ADD] = ChangeKind.ADD

    @property
    def key(self) -> PartNumber:
        return self.record.key or ""

    @property
    def storage_id(self) -> StorageId | None:
        return None

    @property
    def description(self) -> str:
        return f"Add new item: {self.record.display_name} ({self.key})"


@dataclass(slots=True, frozen=True, kw_only=True)
class Update:
    key: PartNumber
    old_record: CatalogRecord
    new_record: CatalogRecord
    changed_fields: tuple[CatalogField, ...]
    field_changes: tuple[FieldChange, ...] = ()
    kind: Literal[ChangeKind.UPDATE] = ChangeKind.UPDATE

    def __post_init__(self) -> None:
        if not self.changed_fields:
            raise ValueError("Update must change at least one field")

    @property
    def storage_id(self) -> StorageId | None:
        return self.old_record.storage_id

    @property
    def description(self) -> str:
        return f"Update: {self.new_record.display_name} ({self.key})"


@dataclass(slots=True, frozen=True, kw_only=True)
class Delete:
    key: PartNumber
    record: CatalogRecord
    kind: Literal[ChangeKind.DELETE] = ChangeKind.DELETE

    @property
    def storage_id(self) -> StorageId | None:
        return self.record.storage_id

    @property
    def description(self) -> str:
        return f"Delete: {self.record.display_name} ({self.key})"


Change: TypeAlias = Add | Update | Delete


@dataclass(slots=True, frozen=True)
class DuplicateKey:
    """A business key seen more than once on one side; the last occurrence wins."""

    side: ReconcileSide
    key: PartNumber
    count: int


def _empty_counts() -> dict[ChangeKind, int]:
    return dict.fromkeys(ChangeKind, 0)


@dataclass(slots=True)
class ChangeSet:
    """Ordered changes plus the operator's selection.

    The selection is a set of indices into ``changes``. Freshly computed sets
    select everything.
    """

    changes: list[Change] = field(default_factory=list["Change"])
    selection: set[int] = field(default_factory=set[int])
    duplicates: list[DuplicateKey] = field(default_factory=list[DuplicateKey])
    malformed: dict[ReconcileSide, int] = field(
        default_factory=lambda: dict.fromkeys(ReconcileSide, 0)
    )

    def __len__(self) -> int:
        return len(self.changes)

    @property
    def is_empty(self) -> bool:
        return not self.changes

    @property
    def adds(self) -> list[Add]:
        return [change for change in self.changes if isinstance(change, Add)]

    @property
    def updates(self) -> list[Update]:
        return [change for change in self.changes if isinstance(change, Update)]

    @property
    def deletes(self) -> list[Delete]:
        return [change for change in self.changes if isinstance(change, Delete)]

    def is_selected(self, index: int) -> bool:
        return index in self.selection

    def select(self, index: int) -> None:
        self._check_index(index)
        self.selection.add(index)

    def deselect(self, index: int) -> None:
        self._check_index(index)
        self.selection.discard(index)

    def toggle(self, index: int) -> bool:
        """Flip one change and return whether it is now selected."""

        self._check_index(index)
        if index in self.selection:
            self.selection.remove(index)
            return False
        self.selection.add(index)
        return True

    def select_all(self) -> None:
        self.selection = set(range(len(self.changes)))

    def deselect_all(self) -> None:
        self.selection = set()

    def select_where(self, predicate: Callable[[Change], bool]) -> None:
        """Replace the selection with the changes matching ``predicate``."""

        self.selection = {
            index for index, change in enumerate(self.changes) if predicate(change)
        }

    def selected_changes(self) -> list[Change]:
        return [change for index, change in enumerate(self.changes) if index in self.selection]

    def counts(self) -> dict[ChangeKind, int]:
        counts = _empty_counts()
        for change in self.changes:
            counts[change.kind] += 1
        return counts

    def selected_counts(self) -> dict[ChangeKind, int]:
        counts = _empty_counts()
        for change in self.selected_changes():
            counts[change.kind] += 1
        return counts

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.changes):
            raise IndexError(f"Change index out of range: {index}")
