"""Reconciliation and notification settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from gymsupply.domain.model import CatalogField
from gymsupply.domain.notifications import DEFAULT_SYNC_NOTICE_TEMPLATE
from gymsupply.domain.reconciliation import CATALOG_COLLECTION

from .env import optional_env_var
from .errors import ConfigurationError

COMPARE_FIELDS_VAR = "GYMSUPPLY_COMPARE_FIELDS"
DEFAULT_COMPARE_FIELDS: tuple[CatalogField, ...] = tuple(CatalogField)


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    collection: str = CATALOG_COLLECTION
    fields: tuple[CatalogField, ...] = field(default_factory=lambda: DEFAULT_COMPARE_FIELDS)


@dataclass(frozen=True, slots=True)
class NotificationConfig:
    sync_notice_template: str = DEFAULT_SYNC_NOTICE_TEMPLATE


def parse_compare_fields(raw: str) -> tuple[CatalogField, ...]:
    """Parse a comma-separated list of column labels, dropping repeats."""

    labels = [label for label in raw.split(",") if label.strip()]
    if not labels:
        raise ConfigurationError(
            f"{COMPARE_FIELDS_VAR} must name at least one field", variables=[COMPARE_FIELDS_VAR]
        )
    parsed: list[CatalogField] = []
    for label in labels:
        try:
            catalog_field = CatalogField.from_label(label)
        except ValueError as exc:
            raise ConfigurationError(str(exc), variables=[COMPARE_FIELDS_VAR]) from exc
        if catalog_field not in parsed:
            parsed.append(catalog_field)
    return tuple(parsed)


def get_reconcile_config() -> ReconcileConfig:
    collection = optional_env_var("GYMSUPPLY_CATALOG_COLLECTION")
    raw_fields = optional_env_var(COMPARE_FIELDS_VAR)
    return ReconcileConfig(
        collection=collection.strip() if collection else CATALOG_COLLECTION,
        fields=parse_compare_fields(raw_fields) if raw_fields else DEFAULT_COMPARE_FIELDS,
    )


def get_notification_config() -> NotificationConfig:
    template = optional_env_var("GYMSUPPLY_SYNC_NOTICE_TEMPLATE")
    if template is None:
        return NotificationConfig()
    return NotificationConfig(sync_notice_template=template)
