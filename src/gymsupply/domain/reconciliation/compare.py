"""Field normalization and comparison rules.

The comparable attribute list is defined once here; ``ReconcileConfig`` narrows
it by label when a deployment wants to ignore some columns.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from gymsupply.domain.model import CatalogField

from .changes import FieldChange

if TYPE_CHECKING:
    from gymsupply.domain.model import CatalogRecord

Normalizer: TypeAlias = Callable[[object], str]


def normalize_text(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize_cost(value: object) -> str:
    """Drop currency symbols and whitespace; the remainder is compared as text."""

    text = normalize_text(value)
    return "".join(
        char for char in text if not char.isspace() and unicodedata.category(char) != "Sc"
    )


@dataclass(slots=True, frozen=True)
class ComparisonRule:
    field: CatalogField
    normalize: Normalizer = normalize_text


DEFAULT_COMPARISON_RULES: tuple[ComparisonRule, ...] = (
    ComparisonRule(CatalogField.NAME),
    ComparisonRule(CatalogField.BRAND),
    ComparisonRule(CatalogField.CATEGORY),
    ComparisonRule(CatalogField.COST, normalize_cost),
    ComparisonRule(CatalogField.PREFERRED),
    ComparisonRule(CatalogField.URL),
)


def rules_for(fields: Iterable[CatalogField]) -> tuple[ComparisonRule, ...]:
    """Return the default rules restricted to ``fields``, in canonical order."""

    wanted = set(fields)
    return tuple(rule for rule in DEFAULT_COMPARISON_RULES if rule.field in wanted)


def compare_records(
    old: CatalogRecord,
    new: CatalogRecord,
    rules: Iterable[ComparisonRule] = DEFAULT_COMPARISON_RULES,
) -> tuple[FieldChange, ...]:
    differences: list[FieldChange] = []
    for rule in rules:
        old_value = rule.normalize(old.value_of(rule.field))
        new_value = rule.normalize(new.value_of(rule.field))
        if old_value != new_value:
            differences.append(FieldChange(rule.field, old_value, new_value))
    return tuple(differences)


def changed_fields(
    old: CatalogRecord,
    new: CatalogRecord,
    rules: Iterable[ComparisonRule] = DEFAULT_COMPARISON_RULES,
) -> tuple[CatalogField, ...]:
    return tuple(difference.field for difference in compare_records(old, new, rules))
