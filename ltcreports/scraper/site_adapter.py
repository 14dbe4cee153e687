from __future__ import annotations

"""Selectors and element helpers for the LTC public reporting site."""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

# Evaluated against a single element handle in the page.
INNER_TEXT_AND_HREF_JS = "e => [e.innerText, e.href]"
CLICK_JS = "e => e.click()"


@dataclass(frozen=True)
class SiteSelectors:
    """Structural selectors for one directory site.

    ``facility_list`` matches one anchor per facility on the landing page,
    ``reveal_control`` the element that must be clicked before a facility's
    documents are rendered, and ``document_links`` one anchor per document.
    """

    facility_list: str
    reveal_control: str
    document_links: str


LTC_HOMES_SELECTORS = SiteSelectors(
    facility_list="#ctl00_ContentPlaceHolder1_rsResults>ol>li>a",
    reveal_control="#ctl00_ContentPlaceHolder1_aInspection",
    document_links="div.divInspectionFileDataCol>a",
)


def text_and_href(element: Any) -> Tuple[str, str]:
    """Return the displayed text and destination URL of an anchor handle."""

    text, href = element.evaluate(INNER_TEXT_AND_HREF_JS)
    return text or "", href or ""


class SiteAdapter:
    """Locates the three things the crawl needs on a page.

    The crawl, retry and ledger code only talks to this class, so pointing the
    crawler at a different directory means supplying different selectors (or
    a subclass), not touching the core.
    """

    def __init__(self, selectors: SiteSelectors = LTC_HOMES_SELECTORS) -> None:
        self.selectors = selectors

    def locate_facility_list(self, page: Any) -> List[Any]:
        return list(page.query_selector_all(self.selectors.facility_list))

    def locate_reveal_control(self, page: Any) -> Optional[Any]:
        return page.query_selector(self.selectors.reveal_control)

    def locate_document_links(self, page: Any) -> List[Any]:
        return list(page.query_selector_all(self.selectors.document_links))

    def activate(self, element: Any) -> None:
        """Simulate a user click from inside the page."""

        element.evaluate(CLICK_JS)


DEFAULT_ADAPTER = SiteAdapter()

__all__ = [
    "SiteSelectors",
    "SiteAdapter",
    "LTC_HOMES_SELECTORS",
    "DEFAULT_ADAPTER",
    "text_and_href",
    "INNER_TEXT_AND_HREF_JS",
    "CLICK_JS",
]
