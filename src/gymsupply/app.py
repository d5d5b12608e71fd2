"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from gymsupply.adapters.sheets import SheetsCatalogFetcher
from gymsupply.adapters.sqlalchemy.session import catalog_store, ensure_started
from gymsupply.config import (
    NotificationConfig,
    ReconcileConfig,
    get_notification_config,
    get_reconcile_config,
)
from gymsupply.domain.notifications import SyncNotifier
from gymsupply.domain.reconciliation import CatalogReconciler, rules_for

if TYPE_CHECKING:
    from gymsupply.domain.ports.store import CatalogSource, CatalogStore
    from gymsupply.domain.reconciliation import ApplyResult, ChangeSet, ResultCallback


log = getLogger(__name__)


def build_default_store() -> CatalogStore:
    """Return the SQLAlchemy catalog store, initialising the adapter on first use."""

    ensure_started()
    return catalog_store()


def build_reconciler(
    *,
    store: CatalogStore | None = None,
    config: ReconcileConfig | None = None,
) -> CatalogReconciler:
    effective_config = config or get_reconcile_config()
    return CatalogReconciler(
        store=store or build_default_store(),
        collection=effective_config.collection,
        rules=rules_for(effective_config.fields),
    )


def preview_catalog_sync(
    *,
    source: CatalogSource | None = None,
    store: CatalogStore | None = None,
    config: ReconcileConfig | None = None,
) -> ChangeSet:
    """Fetch the authoritative item list and diff it against the stored catalog."""

    effective_source = source or SheetsCatalogFetcher()
    reconciler = build_reconciler(store=store, config=config)
    source_records = effective_source()
    log.info("Reconciling %d source records", len(source_records))
    return reconciler.compute(source_records)


def apply_catalog_sync(
    change_set: ChangeSet,
    *,
    store: CatalogStore | None = None,
    config: ReconcileConfig | None = None,
    notification_config: NotificationConfig | None = None,
    on_result: ResultCallback | None = None,
) -> ApplyResult:
    """Apply the selected changes of ``change_set`` and notify subscribers."""

    reconciler = build_reconciler(store=store, config=config)
    effective_notifications = notification_config or get_notification_config()
    reconciler.subscribe(SyncNotifier(template=effective_notifications.sync_notice_template))
    if on_result is not None:
        reconciler.subscribe(on_result)
    return reconciler.apply(change_set)
