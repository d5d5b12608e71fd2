from __future__ import annotations

import uuid

import pytest

from gymsupply.domain.ports.store import BatchCommitError, OperationKind
from gymsupply.domain.reconciliation import (
    Delete,
    SkipReason,
    Update,
    apply_changes,
    compute_changes,
)
from tests.helpers.catalog import FakeCatalogStore, make_record


def test_empty_selection_does_not_touch_store() -> None:
    store = FakeCatalogStore()

    result = apply_changes([], store)

    assert result.is_noop
    assert store.list_calls == 0
    assert store.batches == []


def test_add_creates_full_payload_with_new_identity() -> None:
    store = FakeCatalogStore()
    storage_id = uuid.uuid4()
    change_set = compute_changes([make_record("A1", "Bench", extras={"Notes": "x"})], [])

    result = apply_changes(change_set.selected_changes(), store, id_factory=lambda: storage_id)

    assert result.added == 1
    assert result.written == 1
    (batch,) = store.batches
    (operation,) = batch
    assert operation.kind is OperationKind.CREATE
    assert operation.storage_id == storage_id
    assert operation.payload["part_number"] == "A1"
    assert operation.payload["name"] == "Bench"
    assert operation.payload["Notes"] == "x"


def test_update_writes_only_changed_attributes() -> None:
    store = FakeCatalogStore()
    stored = store.seed(make_record("A1", "Bench", cost="$100", extras={"Notes": "keep"}))
    change_set = compute_changes([make_record("A1", "Bench", cost="$120")], stored)

    result = apply_changes(change_set.selected_changes(), store)

    assert result.updated == 1
    (operation,) = store.batches[0]
    assert operation.kind is OperationKind.UPDATE
    assert operation.storage_id == stored[0].storage_id
    assert dict(operation.payload) == {"cost": "$120"}
    (record,) = store.list_all("catalog")
    assert record.cost == "$120"
    assert record.extras == {"Notes": "keep"}


def test_delete_removes_stored_record() -> None:
    store = FakeCatalogStore()
    stored = store.seed(make_record("D1", "Bar"))
    change_set = compute_changes([], stored)

    result = apply_changes(change_set.selected_changes(), store)

    assert result.deleted == 1
    assert store.list_all("catalog") == []


def test_only_selected_changes_are_applied() -> None:
    store = FakeCatalogStore()
    stored = store.seed(make_record("D1", "Bar"))
    change_set = compute_changes([make_record("A1", "Bench")], stored)
    change_set.deselect(1)

    result = apply_changes(change_set.selected_changes(), store)

    assert (result.added, result.deleted) == (1, 0)
    assert {record.key for record in store.list_all("catalog")} == {"A1", "D1"}


def test_update_of_vanished_record_is_skipped_and_rest_commits() -> None:
    store = FakeCatalogStore()
    stored = store.seed(make_record("U1", "Rack", cost="$1"))
    change_set = compute_changes(
        [make_record("U1", "Rack", cost="$2"), make_record("A1", "Bench")],
        stored,
    )
    assert stored[0].storage_id is not None
    store.remove(stored[0].storage_id)

    result = apply_changes(change_set.selected_changes(), store)

    assert result.added == 1
    assert result.updated == 0
    assert [entry.reason for entry in result.skipped] == [SkipReason.MISSING]
    assert isinstance(result.skipped_changes[0], Update)
    assert [record.key for record in store.list_all("catalog")] == ["A1"]


def test_delete_of_vanished_record_is_skipped() -> None:
    store = FakeCatalogStore()
    stored = store.seed(make_record("D1", "Bar"))
    change_set = compute_changes([], stored)
    assert stored[0].storage_id is not None
    store.remove(stored[0].storage_id)

    result = apply_changes(change_set.selected_changes(), store)

    assert result.deleted == 0
    assert [entry.reason for entry in result.skipped] == [SkipReason.MISSING]
    assert store.batches == []
    assert not result.is_noop


def test_changes_without_snapshot_identity_resolve_by_key() -> None:
    store = FakeCatalogStore()
    store.seed(make_record("U1", "Rack", cost="$1"))
    change_set = compute_changes(
        [make_record("U1", "Rack", cost="$2")],
        [make_record("U1", "Rack", cost="$1")],
    )

    result = apply_changes(change_set.selected_changes(), store)

    assert result.updated == 1
    assert store.list_all("catalog")[0].cost == "$2"


def test_ambiguous_key_resolution_is_skipped() -> None:
    store = FakeCatalogStore()
    store.seed(make_record("D1", "One"), make_record("D1", "Two"))
    delete = Delete(key="D1", record=make_record("D1", "One"))

    result = apply_changes([delete], store)

    assert [entry.reason for entry in result.skipped] == [SkipReason.AMBIGUOUS]
    assert len(store.list_all("catalog")) == 2


def test_commit_failure_propagates_and_leaves_store_untouched() -> None:
    store = FakeCatalogStore()
    stored = store.seed(make_record("U1", "Rack", cost="$1"))
    change_set = compute_changes(
        [make_record("U1", "Rack", cost="$2"), make_record("A1", "Bench")],
        stored,
    )
    store.fail_next_batch = True

    with pytest.raises(BatchCommitError):
        apply_changes(change_set.selected_changes(), store)

    (record,) = store.list_all("catalog")
    assert record.cost == "$1"


def test_apply_then_recompute_converges() -> None:
    store = FakeCatalogStore()
    stored = store.seed(
        make_record("U1", "Rack", cost="$1"),
        make_record("D1", "Bar"),
    )
    source = [make_record("A1", "Bench"), make_record("U1", "Rack", cost="$2", url="https://r")]

    first = compute_changes(source, stored)
    apply_changes(first.selected_changes(), store)
    second = compute_changes(source, store.list_all("catalog"))

    assert len(first) == 3
    assert second.is_empty


def test_duplicate_target_records_are_all_deleted_and_converge() -> None:
    store = FakeCatalogStore()
    stored = store.seed(make_record("D1", "One"), make_record("D1", "Two"))

    first = compute_changes([], stored)
    result = apply_changes(first.selected_changes(), store)
    second = compute_changes([], store.list_all("catalog"))

    assert result.deleted == 2
    assert result.skipped == []
    assert second.is_empty


def test_applying_same_selection_twice_skips_stale_targets() -> None:
    store = FakeCatalogStore()
    stored = store.seed(make_record("D1", "Bar"))
    change_set = compute_changes([], stored)

    apply_changes(change_set.selected_changes(), store)
    second = apply_changes(change_set.selected_changes(), store)

    assert second.deleted == 0
    assert [entry.reason for entry in second.skipped] == [SkipReason.MISSING]


def test_writes_go_to_requested_collection() -> None:
    store = FakeCatalogStore()
    change_set = compute_changes([make_record("A1")], [])

    apply_changes(change_set.selected_changes(), store, collection="staging")

    assert [record.key for record in store.list_all("staging")] == ["A1"]
    assert store.list_all("catalog") == []
