from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from skiptrace.app import process_results_file, submit_all_approved, submit_approved
from skiptrace.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Skip-trace pipeline commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    results = subparsers.add_parser(
        "process-results",
        help="Resolve, persist and validate search results from a JSON Lines file",
    )
    results.add_argument("file", type=Path, help="JSON Lines file with one result per line")

    submit = subparsers.add_parser("submit", help="Send approved records to the search service")
    submit.add_argument(
        "pairs",
        nargs="*",
        metavar="OWNER:PROPERTY",
        help="Owner and property ids of approved pipeline records",
    )
    submit.add_argument(
        "--all",
        action="store_true",
        help="Submit every record currently in the approved stage",
    )

    return parser.parse_args(list(argv))


def _parse_pair(value: str) -> tuple[str, str]:
    owner_id, sep, property_id = value.partition(":")
    if not sep or not owner_id.strip() or not property_id.strip():
        raise ValueError(f"Invalid OWNER:PROPERTY pair: {value}")
    return owner_id.strip(), property_id.strip()


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    pairs: list[tuple[str, str]] = []
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "submit":
            pairs = [_parse_pair(value) for value in parsed_args.pairs]
            if not pairs and not parsed_args.all:
                raise ValueError("Provide OWNER:PROPERTY pairs or --all")  # noqa: TRY301
        elif parsed_args.command == "process-results" and not parsed_args.file.is_file():
            raise ValueError(f"No such file: {parsed_args.file}")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "process-results":
            report = process_results_file(parsed_args.file)
            log.info(
                "Processed search results: succeeded=%s, failed=%s",
                report.succeeded,
                report.failed,
            )
        elif parsed_args.command == "submit":
            submission = submit_all_approved() if parsed_args.all else submit_approved(pairs)
            log.info(
                "Submitted %s record(s), skipped %s",
                len(submission.submitted),
                len(submission.skipped),
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()
