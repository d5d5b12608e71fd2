"""Plain-text presentation of change sets and apply outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gymsupply.domain.reconciliation import ChangeKind, ReconcileSide, Update

if TYPE_CHECKING:
    from collections.abc import Collection

    from gymsupply.domain.reconciliation import ApplyResult, Change, ChangeSet

EMPTY_VALUE = "(empty)"
_GROUP_ORDER = (ChangeKind.ADD, ChangeKind.UPDATE, ChangeKind.DELETE)
_GROUP_TITLES = {
    ChangeKind.ADD: "Add",
    ChangeKind.UPDATE: "Update",
    ChangeKind.DELETE: "Delete",
}


@dataclass(slots=True)
class ChangeSetPresenter:
    """Render a change set for review and forward selection edits to it."""

    change_set: ChangeSet

    def select(self, index: int) -> None:
        self.change_set.select(index)

    def deselect(self, index: int) -> None:
        self.change_set.deselect(index)

    def toggle(self, index: int) -> bool:
        return self.change_set.toggle(index)

    def select_all(self) -> None:
        self.change_set.select_all()

    def deselect_all(self) -> None:
        self.change_set.deselect_all()

    def narrow(
        self,
        *,
        kinds: Collection[ChangeKind] | None = None,
        excluded_keys: Collection[str] = (),
    ) -> None:
        """Keep only changes of ``kinds`` whose part number is not excluded."""

        allowed = set(kinds) if kinds else set(ChangeKind)
        excluded = set(excluded_keys)
        self.change_set.select_where(
            lambda change: change.kind in allowed and change.key not in excluded
        )

    def render(self) -> str:
        lines = self._render_changes() if self.change_set.changes else [
            "No changes detected. The catalog is already in sync."
        ]
        lines.extend(self._render_warnings())
        return "\n".join(lines)

    def _render_changes(self) -> list[str]:
        lines: list[str] = []
        width = len(str(len(self.change_set.changes) - 1))
        counts = self.change_set.counts()
        for kind in _GROUP_ORDER:
            lines.append(f"{_GROUP_TITLES[kind]} ({counts[kind]})")
            for index, change in enumerate(self.change_set.changes):
                if change.kind is not kind:
                    continue
                lines.extend(self._render_change(index, change, width))
        selected = self.change_set.selected_counts()
        lines.append(
            f"Selected: {len(self.change_set.selection)} of {len(self.change_set)} "
            f"(add {selected[ChangeKind.ADD]}, update {selected[ChangeKind.UPDATE]}, "
            f"delete {selected[ChangeKind.DELETE]})"
        )
        return lines

    def _render_change(self, index: int, change: Change, width: int) -> list[str]:
        mark = "x" if self.change_set.is_selected(index) else " "
        lines = [f"  [{mark}] {index:>{width}}  {change.description}"]
        if isinstance(change, Update):
            indent = " " * (width + 8)
            for difference in change.field_changes:
                old_value = difference.old_value or EMPTY_VALUE
                new_value = difference.new_value or EMPTY_VALUE
                lines.append(f"{indent}{difference.field}: {old_value} -> {new_value}")
        return lines

    def _render_warnings(self) -> list[str]:
        lines = [
            f"Warning: part number {duplicate.key} appears {duplicate.count} times "
            f"in {duplicate.side}; the last occurrence was used"
            for duplicate in self.change_set.duplicates
        ]
        for side in ReconcileSide:
            skipped = self.change_set.malformed.get(side, 0)
            if skipped:
                lines.append(f"Warning: {skipped} {side} record(s) without part number skipped")
        return lines


def render_result(result: ApplyResult) -> str:
    if result.is_noop:
        return "Nothing to apply: no changes were written."
    lines = [f"Applied: {result.added} added, {result.updated} updated, {result.deleted} deleted."]
    if result.skipped:
        lines.append(f"Skipped {len(result.skipped)} change(s) whose stored target could not be used:")
        lines.extend(
            f"  - {entry.change.description} [{entry.reason}]" for entry in result.skipped
        )
    return "\n".join(lines)


def render_failure(error: BaseException) -> str:
    return f"Apply failed, nothing was committed: {error}"
