from __future__ import annotations

from gymsupply.domain.reconciliation import (
    ApplyResult,
    ChangeKind,
    SkippedChange,
    SkipReason,
    compute_changes,
)
from gymsupply.ui.presenter import ChangeSetPresenter, render_failure, render_result
from tests.helpers.catalog import make_record


def _presenter() -> ChangeSetPresenter:
    change_set = compute_changes(
        [make_record("A1", "Bench"), make_record("U1", "Rack", cost="$2", url="https://r")],
        [make_record("U1", "Rack", cost="$1"), make_record("D1", "Bar")],
    )
    return ChangeSetPresenter(change_set)


def test_render_groups_changes_with_selection_marks() -> None:
    presenter = _presenter()
    presenter.toggle(2)

    lines = presenter.render().splitlines()

    assert lines == [
        "Add (1)",
        "  [x] 0  Add new item: Bench (A1)",
        "Update (1)",
        "  [x] 1  Update: Rack (U1)",
        "         Cost: 1 -> 2",
        "         URL: (empty) -> https://r",
        "Delete (1)",
        "  [ ] 2  Delete: Bar (D1)",
        "Selected: 2 of 3 (add 1, update 1, delete 0)",
    ]


def test_render_empty_change_set() -> None:
    presenter = ChangeSetPresenter(compute_changes([make_record("A1")], [make_record("A1")]))

    assert presenter.render() == "No changes detected. The catalog is already in sync."


def test_render_reports_duplicates_and_malformed_records() -> None:
    change_set = compute_changes(
        [make_record("A1", "One"), make_record("A1", "Two"), make_record(None, "Loose")],
        [make_record("A1", "Two")],
    )

    rendered = ChangeSetPresenter(change_set).render()

    assert rendered.startswith("No changes detected.")
    assert "Warning: part number A1 appears 2 times in source" in rendered
    assert "Warning: 1 source record(s) without part number skipped" in rendered


def test_narrow_filters_by_kind_and_excluded_keys() -> None:
    presenter = _presenter()

    presenter.narrow(kinds=[ChangeKind.ADD, ChangeKind.DELETE], excluded_keys=["D1"])

    assert [change.key for change in presenter.change_set.selected_changes()] == ["A1"]


def test_narrow_without_kinds_keeps_everything_not_excluded() -> None:
    presenter = _presenter()
    presenter.deselect_all()

    presenter.narrow(excluded_keys=["U1"])

    assert presenter.change_set.selection == {0, 2}


def test_render_result_variants() -> None:
    presenter = _presenter()
    skipped = SkippedChange(change=presenter.change_set.changes[2], reason=SkipReason.MISSING)

    assert render_result(ApplyResult()) == "Nothing to apply: no changes were written."
    assert render_result(ApplyResult(added=1, updated=1)) == (
        "Applied: 1 added, 1 updated, 0 deleted."
    )
    assert render_result(ApplyResult(added=1, skipped=[skipped])).splitlines() == [
        "Applied: 1 added, 0 updated, 0 deleted.",
        "Skipped 1 change(s) whose stored target could not be used:",
        "  - Delete: Bar (D1) [missing]",
    ]


def test_render_failure_mentions_cause() -> None:
    assert render_failure(RuntimeError("disk full")) == (
        "Apply failed, nothing was committed: disk full"
    )
