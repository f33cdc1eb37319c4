# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from pricesync.app import update_prices, update_stock
from pricesync.config import ConfigurationError, configure_logging, get_logging_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from pricesync.adapters.api import ApiResponse

log = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = 2


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile catalog prices and stock")
    parser.add_argument(
        "--version-id",
        type=str,
        help="Catalog version to write to (defaults to PRICESYNC_VERSION_ID or the live version)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    price = subparsers.add_parser("price-update", help="Apply a price update request")
    price.add_argument("file", type=str, help="JSON request file, or - for stdin")

    stock = subparsers.add_parser("stock-update", help="Apply a stock update request")
    stock.add_argument("file", type=str, help="JSON request file, or - for stdin")

    return parser.parse_args(list(argv))


def _read_payload(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _emit(response: ApiResponse) -> None:
    rendered = json.dumps(response.body, indent=2, sort_keys=True)
    if response.ok:
        print(rendered)
    else:
        print(rendered, file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    try:
        configure_logging(get_logging_config(verbose=parsed_args.verbose))
    except ConfigurationError as error:
        print(f"Invalid logging configuration: {error}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    try:
        payload = _read_payload(parsed_args.file)
    except OSError:
        log.exception("Cannot read request from %s", parsed_args.file)
        sys.exit(EXIT_USAGE)

    try:
        if parsed_args.command == "price-update":
            response = update_prices(payload, version_id=parsed_args.version_id)
        elif parsed_args.command == "stock-update":
            response = update_stock(payload, version_id=parsed_args.version_id)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(EXIT_USAGE)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(EXIT_FAILURE)

    _emit(response)
    if not response.ok:
        sys.exit(EXIT_USAGE)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
