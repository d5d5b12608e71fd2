"""Notification text rendering and the log-only sync notifier."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gymsupply.domain.reconciliation import ApplyResult

DEFAULT_SYNC_NOTICE_TEMPLATE = (
    "Catalog sync applied: {added} added, {updated} updated, {deleted} deleted, "
    "{skipped} skipped"
)

log = logging.getLogger(__name__)


def render_template(template: str, variables: Mapping[str, object]) -> str:
    """Replace every ``{name}`` placeholder with its variable.

    Substitution is literal: no format spec, no escaping. ``None`` renders as an
    empty string and placeholders without a variable are left as they are.
    """

    rendered = template
    for name, value in variables.items():
        rendered = rendered.replace(f"{{{name}}}", "" if value is None else str(value))
    return rendered


@dataclass(slots=True)
class SyncNotifier:
    """Result subscriber that logs a rendered summary of each apply."""

    template: str = DEFAULT_SYNC_NOTICE_TEMPLATE
    logger: logging.Logger = log

    def render(self, result: ApplyResult) -> str:
        return render_template(
            self.template,
            {
                "added": result.added,
                "updated": result.updated,
                "deleted": result.deleted,
                "skipped": len(result.skipped),
                "written": result.written,
            },
        )

    def __call__(self, result: ApplyResult) -> None:
        self.logger.info(self.render(result))
