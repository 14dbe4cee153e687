"""Playwright-driven crawl of Ontario LTC home inspection reports.

Workflow:

- Open the public reporting search page and read the list of homes.
- Optionally skip ahead to a named home (``--startat``).
- For each home, open its page in a fresh tab, click "Inspections" to render
  the report list, and collect the report links.
- Stream every report not already on disk to ``<repdir>/<home>/``, and record
  each one (downloaded or already present) in the run ledger.

Each home is retried as a unit; a home that keeps failing is logged and
skipped so the rest of the crawl still completes.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional

from playwright.sync_api import sync_playwright

from . import config
from .discovery import Facility, apply_resume_filter, discover_facilities
from .disambiguation import InstanceCounter, document_filename
from .error_codes import LedgerError, NavigationError, ScraperError
from .facility_scraper import scrape_facility
from .fetcher import DocumentFetcher
from .ledger import Record, RecordLedger
from .logging_utils import _scraper_event
from .navigation import attempt_navigate
from .site_adapter import DEFAULT_ADAPTER, SiteAdapter
from .utils import ensure_directory, log_line, log_notice


@dataclass
class CrawlOptions:
    report_dir: Path = config.DEFAULT_REPORT_DIR
    records_path: Path = config.RECORDS_LIST_FILENAME
    start_at: Optional[str] = None
    verbose: bool = False
    agent_console: bool = False
    headless: bool = True
    directory_url: str = config.DIRECTORY_URL
    retries: int = config.N_RETRIES
    retry_delay_seconds: float = config.FACILITY_RETRY_DELAY_SECONDS
    settle_seconds: float = config.SETTLE_SECONDS


@dataclass
class RunSummary:
    facilities_found: int = 0
    facilities_selected: int = 0
    facilities_processed: int = 0
    failed: List[str] = field(default_factory=list)
    retrieved: int = 0
    skipped: int = 0
    records_written: int = 0
    records_path: Optional[Path] = None


@dataclass
class RunContext:
    """Mutable state for one crawl. Nothing here outlives the run."""

    options: CrawlOptions
    ledger: RecordLedger
    fetcher: DocumentFetcher
    adapter: SiteAdapter = DEFAULT_ADAPTER
    instances: InstanceCounter = field(default_factory=InstanceCounter)
    summary: RunSummary = field(default_factory=RunSummary)


def process_facility(ctx: RunContext, browser_context: Any, facility: Facility) -> int:
    """Scrape, download and record one facility. Returns documents fetched."""

    scraped = scrape_facility(
        browser_context,
        facility,
        report_dir=ctx.options.report_dir,
        adapter=ctx.adapter,
        settle_seconds=ctx.options.settle_seconds,
        retries=ctx.options.retries,
    )

    fetched = 0
    for document in scraped.documents:
        instance = ctx.instances.instance_of(scraped.home, document.title)
        destination = scraped.directory / document_filename(document.title, instance)

        if ctx.fetcher.fetch_if_missing(document.href, destination):
            fetched += 1
            ctx.summary.retrieved += 1
        else:
            ctx.summary.skipped += 1

        ctx.ledger.append(
            Record(
                uri=document.href,
                home=scraped.home,
                title=document.title,
                instance=instance,
            )
        )
        ctx.instances.observe(scraped.home, document.title)

    return fetched


def process_with_retries(ctx: RunContext, browser_context: Any, facility: Facility) -> bool:
    """Run :func:`process_facility` up to ``options.retries`` times.

    Ledger failures are never retried. Side effects of a failed attempt
    (directories, files, ledger records) are left as they are.
    """

    attempts = max(1, ctx.options.retries)
    for attempt in range(1, attempts + 1):
        try:
            process_facility(ctx, browser_context, facility)
            return True
        except LedgerError:
            raise
        except Exception as exc:  # noqa: BLE001
            error_code = exc.error_code if isinstance(exc, ScraperError) else None
            log_line(f"Exception for {facility.name} ({facility.url}): {exc}")
            _scraper_event(
                "error",
                phase="facility",
                home=facility.name,
                attempt=attempt,
                max_attempts=attempts,
                error_code=error_code,
                error=f"{type(exc).__name__}: {exc}",
            )
            if attempt >= attempts:
                log_line(
                    f"Failed to retrieve information for {facility.name} after {attempt} tries"
                )
                return False
            time.sleep(ctx.options.retry_delay_seconds)
    return False


def _relay_console(message: Any) -> None:
    log_notice(f"PAGE LOG {message.text}")


def run_crawl(
    options: CrawlOptions,
    *,
    playwright_factory: Callable[[], Any] = sync_playwright,
    fetcher: Optional[DocumentFetcher] = None,
    adapter: SiteAdapter = DEFAULT_ADAPTER,
) -> RunSummary:
    """Crawl the directory and return what happened.

    Raises ``NavigationError`` when the landing page cannot be loaded and
    ``LedgerError`` when the ledger cannot be written. The ledger is
    finalized in the first case and left as-is in the second.
    """

    log_line(f"Reports will be saved to {options.report_dir}")
    ensure_directory(options.report_dir)

    own_fetcher = fetcher is None
    fetcher = fetcher or DocumentFetcher()
    ledger = RecordLedger(options.records_path)
    ctx = RunContext(options=options, ledger=ledger, fetcher=fetcher, adapter=adapter)
    summary = ctx.summary
    summary.records_path = ledger.path

    try:
        with ledger, playwright_factory() as pw:
            browser = pw.chromium.launch(
                headless=options.headless,
                args=list(config.BROWSER_ARGS),
                timeout=config.BROWSER_LAUNCH_TIMEOUT_SECONDS * 1000,
            )
            try:
                context = browser.new_context()
                if options.agent_console:
                    context.on("console", _relay_console)

                page = context.new_page()
                log_line(f"loading {options.directory_url}")
                if not attempt_navigate(
                    page, options.directory_url, retries=options.retries, label="directory"
                ):
                    raise NavigationError(f"Could not load {options.directory_url}")

                facilities = discover_facilities(page, adapter)
                summary.facilities_found = len(facilities)
                selected = apply_resume_filter(facilities, options.start_at)
                summary.facilities_selected = len(selected)

                for facility in selected:
                    if process_with_retries(ctx, context, facility):
                        summary.facilities_processed += 1
                    else:
                        summary.failed.append(facility.name)

                page.close()
            finally:
                browser.close()
    finally:
        if own_fetcher:
            fetcher.close()
        summary.records_written = ledger.count

    _scraper_event(
        "state",
        phase="run_complete",
        found=summary.facilities_found,
        processed=summary.facilities_processed,
        failed=len(summary.failed),
        retrieved=summary.retrieved,
        skipped=summary.skipped,
        records=summary.records_written,
    )
    return summary


__all__ = [
    "CrawlOptions",
    "RunContext",
    "RunSummary",
    "process_facility",
    "process_with_retries",
    "run_crawl",
]
