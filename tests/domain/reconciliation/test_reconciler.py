from __future__ import annotations

from gymsupply.domain.model import CatalogField
from gymsupply.domain.reconciliation import (
    ApplyResult,
    CatalogReconciler,
    ChangeKind,
    rules_for,
)
from tests.helpers.catalog import FakeCatalogStore, make_record


def test_compute_reads_target_from_store_collection() -> None:
    store = FakeCatalogStore()
    store.seed(make_record("D1", "Bar"), collection="gym")
    reconciler = CatalogReconciler(store=store, collection="gym")

    change_set = reconciler.compute([make_record("A1", "Bench")])

    assert [change.kind for change in change_set.changes] == [ChangeKind.ADD, ChangeKind.DELETE]
    assert store.list_calls == 1


def test_compute_with_explicit_target_skips_store_read() -> None:
    store = FakeCatalogStore()
    reconciler = CatalogReconciler(store=store)

    change_set = reconciler.compute([make_record("A1")], [make_record("A1")])

    assert change_set.is_empty
    assert store.list_calls == 0


def test_apply_uses_selection_and_notifies_subscribers() -> None:
    store = FakeCatalogStore()
    store.seed(make_record("D1", "Bar"))
    reconciler = CatalogReconciler(store=store)
    received: list[ApplyResult] = []
    reconciler.subscribe(received.append)
    change_set = reconciler.compute([make_record("A1", "Bench")])
    change_set.deselect(1)

    result = reconciler.apply(change_set)

    assert received == [result]
    assert (result.added, result.deleted) == (1, 0)


def test_unsubscribed_callbacks_are_not_called() -> None:
    reconciler = CatalogReconciler(store=FakeCatalogStore())
    received: list[ApplyResult] = []
    reconciler.subscribe(received.append)
    reconciler.unsubscribe(received.append)

    reconciler.apply([])

    assert received == []


def test_custom_rules_are_used_for_compute() -> None:
    store = FakeCatalogStore()
    store.seed(make_record("A1", "Old", cost="$1"))
    reconciler = CatalogReconciler(store=store, rules=rules_for([CatalogField.NAME]))

    change_set = reconciler.compute([make_record("A1", "Old", cost="$9")])

    assert change_set.is_empty
