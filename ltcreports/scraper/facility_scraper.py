"""Per-facility page scraping: open, reveal, collect document links."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from . import config
from .discovery import Facility
from .error_codes import NavigationError, SiteStructureError
from .logging_utils import _scraper_event
from .navigation import attempt_navigate
from .site_adapter import DEFAULT_ADAPTER, SiteAdapter, text_and_href
from .utils import ensure_directory, log_line, sanitize_home_name


@dataclass(frozen=True)
class Document:
    title: str
    href: str


@dataclass
class FacilityPage:
    """What one facility's page yielded."""

    home: str
    directory: Path
    documents: List[Document] = field(default_factory=list)


def _settle(seconds: float) -> None:
    if seconds and seconds > 0:
        time.sleep(seconds)


def scrape_facility(
    context: Any,
    facility: Facility,
    *,
    report_dir: Path,
    adapter: SiteAdapter = DEFAULT_ADAPTER,
    settle_seconds: Optional[float] = None,
    retries: Optional[int] = None,
) -> FacilityPage:
    """Collect the document list for ``facility``.

    ``context`` is anything with ``new_page()`` (a Playwright browser or
    browser context). A fresh page is used for this facility only and is
    always closed before returning or raising.
    """

    settle = config.SETTLE_SECONDS if settle_seconds is None else settle_seconds
    log_line(f"Retrieving reports for {facility.name} ({facility.url})")

    page = context.new_page()
    try:
        if not attempt_navigate(
            page, facility.url, retries=retries, label=facility.name
        ):
            raise NavigationError(f"Could not load page for {facility.name} ({facility.url})")
        _settle(settle)

        reveal = adapter.locate_reveal_control(page)
        if reveal is None:
            raise SiteStructureError(f"No inspections control on page for {facility.name}")
        adapter.activate(reveal)
        _settle(settle)

        documents = []
        for element in adapter.locate_document_links(page):
            title, href = text_and_href(element)
            documents.append(Document(title=title, href=href))

        home = sanitize_home_name(facility.name)
        directory = Path(report_dir) / home
        ensure_directory(directory)

        _scraper_event(
            "state",
            phase="facility_scraped",
            home=home,
            documents=len(documents),
        )
        return FacilityPage(home=home, directory=directory, documents=documents)
    finally:
        page.close()


__all__ = ["Document", "FacilityPage", "scrape_facility"]
