"""Command-line entry point for the inspection report crawler."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from . import config
from .config_validation import validate_runtime_config
from .error_codes import LedgerError, NavigationError
from .run import CrawlOptions, run_crawl
from .utils import configure_logger, log_error, log_line

PROG = "ltc-inspection-reports"
USAGE_LINE = (
    f"{PROG} [--help] [--repdir=DIR] [--startat=\"HOME NAME (all upper case)\"] "
    "[--verbose] [--agentconsole] [--nonheadless]"
)


def _non_empty_path(value: str) -> Path:
    if not value.strip():
        raise argparse.ArgumentTypeError("must not be empty")
    return Path(value)


def _build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the crawler."""

    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=USAGE_LINE,
        description=(
            "Scrape the list of LTC inspection reports from "
            f"{config.DIRECTORY_URL} saving each PDF report"
        ),
    )
    parser.add_argument(
        "-r",
        "--repdir",
        type=_non_empty_path,
        default=config.DEFAULT_REPORT_DIR,
        help=f"Use given output directory (default {config.DEFAULT_REPORT_DIR})",
    )
    parser.add_argument(
        "-s",
        "--startat",
        default=None,
        help=(
            "Start with this home (useful if the script fails for any reason; "
            "redo the current home)"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose progress",
    )
    parser.add_argument(
        "-A",
        "--agentconsole",
        action="store_true",
        help="Relay browser console output to the log",
    )
    parser.add_argument(
        "-H",
        "--nonheadless",
        action="store_true",
        help="Run the browser visibly",
    )
    parser.add_argument(
        "--records",
        type=_non_empty_path,
        default=config.RECORDS_LIST_FILENAME,
        help=f"Records list file (default {config.RECORDS_LIST_FILENAME})",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> CrawlOptions:
    return CrawlOptions(
        report_dir=args.repdir,
        records_path=args.records,
        start_at=args.startat or None,
        verbose=args.verbose,
        agent_console=args.agentconsole,
        headless=not args.nonheadless,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the crawler CLI."""

    parser = _build_parser()
    args, unknown = parser.parse_known_args(list(argv) if argv is not None else None)
    if unknown:
        print(f"use: {USAGE_LINE}")
        return 0

    configure_logger(verbose=args.verbose)
    options = options_from_args(args)
    try:
        validate_runtime_config(options)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        summary = run_crawl(options)
    except NavigationError as exc:
        log_error(f"Aborting: {exc}")
        return 1
    except LedgerError as exc:
        log_error(f"Aborting: records list could not be written ({exc})")
        raise

    print(f"retrieved {summary.retrieved} reports")
    if summary.failed:
        log_line(f"failed to retrieve {len(summary.failed)} homes: {', '.join(summary.failed)}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
