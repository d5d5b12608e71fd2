"""Store-bound facade over compute and apply with result subscribers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from .apply import CATALOG_COLLECTION, ApplyResult, apply_changes
from .changes import ChangeSet
from .compare import DEFAULT_COMPARISON_RULES, ComparisonRule
from .compute import compute_changes

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gymsupply.domain.model import CatalogRecord, CollectionName
    from gymsupply.domain.ports.store import CatalogStore

    from .changes import Change

ResultCallback: TypeAlias = Callable[[ApplyResult], None]

log = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogReconciler:
    """Reconcile an authoritative item list against one store collection."""

    store: CatalogStore
    collection: CollectionName = CATALOG_COLLECTION
    rules: tuple[ComparisonRule, ...] = DEFAULT_COMPARISON_RULES
    _subscribers: list[ResultCallback] = field(default_factory=list["ResultCallback"])

    def subscribe(self, callback: ResultCallback) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: ResultCallback) -> None:
        self._subscribers.remove(callback)

    def compute(
        self,
        source: Iterable[CatalogRecord],
        target: Iterable[CatalogRecord] | None = None,
    ) -> ChangeSet:
        current = self.store.list_all(self.collection) if target is None else target
        return compute_changes(source, current, rules=self.rules)

    def apply(self, changes: ChangeSet | Iterable[Change]) -> ApplyResult:
        selected = changes.selected_changes() if isinstance(changes, ChangeSet) else changes
        result = apply_changes(selected, self.store, collection=self.collection)
        for callback in tuple(self._subscribers):
            callback(result)
        return result
