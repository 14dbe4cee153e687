"""Facility discovery on the directory landing page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from .site_adapter import DEFAULT_ADAPTER, SiteAdapter, text_and_href
from .utils import log_line


@dataclass(frozen=True)
class Facility:
    name: str
    url: str


def discover_facilities(page: Any, adapter: SiteAdapter = DEFAULT_ADAPTER) -> List[Facility]:
    """Return every facility listed on an already loaded landing page, in page order."""

    elements = adapter.locate_facility_list(page)
    log_line(f"found {len(elements)} homes")
    facilities: List[Facility] = []
    for element in elements:
        name, url = text_and_href(element)
        facilities.append(Facility(name=name, url=url))
    return facilities


def apply_resume_filter(
    facilities: Iterable[Facility], start_at: Optional[str]
) -> List[Facility]:
    """Drop facilities listed before ``start_at``.

    The match is exact and case-sensitive. Once found, the matching facility
    and everything after it is kept. When ``start_at`` never matches nothing
    is kept; when it is empty everything is.
    """

    facilities = list(facilities)
    if not start_at:
        return facilities

    for index, facility in enumerate(facilities):
        if facility.name == start_at:
            return facilities[index:]

    log_line(f"Start-at home {start_at!r} not found; nothing to process")
    return []


__all__ = ["Facility", "discover_facilities", "apply_resume_filter"]
