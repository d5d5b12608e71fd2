from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from gymsupply.adapters.sheets import CatalogFileSource
from gymsupply.app import apply_catalog_sync, preview_catalog_sync
from gymsupply.config import configure_logging
from gymsupply.domain.ports import BatchCommitError
from gymsupply.domain.reconciliation import ChangeKind
from gymsupply.ui.presenter import ChangeSetPresenter, render_failure, render_result

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from gymsupply.domain.ports import CatalogSource

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile the gymsupply catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    catalog = subparsers.add_parser("catalog", help="Catalog reconciliation commands")
    catalog_sub = catalog.add_subparsers(dest="catalog_command", required=True)

    diff = catalog_sub.add_parser(
        "diff",
        help="Show the changes needed to bring the stored catalog in line with the sheet",
    )
    _add_source_arguments(diff)

    sync = catalog_sub.add_parser("sync", help="Review and apply catalog changes")
    _add_source_arguments(sync)
    sync.add_argument(
        "--only",
        nargs="+",
        choices=[kind.value for kind in ChangeKind],
        help="Only keep changes of these kinds selected",
    )
    sync.add_argument(
        "--exclude",
        nargs="+",
        default=[],
        metavar="PART_NUMBER",
        help="Deselect changes for these part numbers",
    )
    sync.add_argument(
        "--yes",
        action="store_true",
        help="Apply the selected changes (otherwise only print them)",
    )

    return parser.parse_args(list(argv))


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--file",
        type=Path,
        help="Read the item list from a saved .json or .csv export instead of the web app",
    )


def _build_source(path: Path | None) -> CatalogSource | None:
    if path is None:
        return None
    if not path.is_file():
        raise ValueError(f"Catalog file not found: {path}")
    return CatalogFileSource(path)


def _emit(text: str) -> None:
    print(text)  # noqa: T201


def _run_catalog(parsed_args: argparse.Namespace, source: CatalogSource | None) -> None:
    change_set = preview_catalog_sync(source=source)
    presenter = ChangeSetPresenter(change_set)

    if parsed_args.catalog_command == "diff":
        _emit(presenter.render())
        return

    presenter.narrow(
        kinds=[ChangeKind(kind) for kind in parsed_args.only] if parsed_args.only else None,
        excluded_keys=parsed_args.exclude,
    )
    _emit(presenter.render())
    if change_set.is_empty:
        return
    if not parsed_args.yes:
        log.info("Dry run: pass --yes to apply %d selected changes", len(change_set.selection))
        return

    try:
        result = apply_catalog_sync(change_set)
    except BatchCommitError as exc:
        _emit(render_failure(exc))
        raise
    _emit(render_result(result))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        source = _build_source(parsed_args.file)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "catalog":
            _run_catalog(parsed_args, source)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during catalog sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
