"""Catalog reconciliation: diff an authoritative item list against the store.

Flow:
1) ``compute_changes`` keys both lists by part number and emits add/update/delete
2) an operator narrows the ``ChangeSet`` selection
3) ``apply_changes`` re-reads the store and commits the selection as one batch
"""

from __future__ import annotations

from .apply import CATALOG_COLLECTION, ApplyResult, SkippedChange, SkipReason, apply_changes
from .changes import (
    Add,
    Change,
    ChangeKind,
    ChangeSet,
    Delete,
    DuplicateKey,
    FieldChange,
    ReconcileSide,
    Update,
)
from .compare import (
    DEFAULT_COMPARISON_RULES,
    ComparisonRule,
    changed_fields,
    compare_records,
    normalize_cost,
    normalize_text,
    rules_for,
)
from .compute import compute_changes
from .reconciler import CatalogReconciler, ResultCallback

__all__ = [
    "CATALOG_COLLECTION",
    "DEFAULT_COMPARISON_RULES",
    "Add",
    "ApplyResult",
    "CatalogReconciler",
    "Change",
    "ChangeKind",
    "ChangeSet",
    "ComparisonRule",
    "Delete",
    "DuplicateKey",
    "FieldChange",
    "ReconcileSide",
    "ResultCallback",
    "SkipReason",
    "SkippedChange",
    "Update",
    "apply_changes",
    "changed_fields",
    "compare_records",
    "compute_changes",
    "normalize_cost",
    "normalize_text",
    "rules_for",
]
