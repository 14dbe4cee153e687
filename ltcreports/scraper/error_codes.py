from __future__ import annotations

"""Error code taxonomy for crawl failures.

The codes appear in structured log lines so a failed facility or document can
be explained after the fact. Keep them stable; log readers grep for them.
"""

from typing import Optional


class ErrorCode:
    NAVIGATION = "navigation_failed"
    SITE_STRUCTURE = "site_structure_changed"
    NETWORK = "network_error"
    HTTP_4XX = "http_4xx"
    HTTP_404 = "http_404_not_found"
    HTTP_5XX = "http_5xx"
    LEDGER_IO = "ledger_io_error"
    INTERNAL = "internal_error"


class ScraperError(Exception):
    """Base class for failures raised by the crawler."""

    default_code = ErrorCode.INTERNAL

    def __init__(self, message: str, *, error_code: Optional[str] = None) -> None:
        super().__init__(message)
        self.error_code = error_code or self.default_code


class NavigationError(ScraperError):
    default_code = ErrorCode.NAVIGATION


class SiteStructureError(ScraperError):
    default_code = ErrorCode.SITE_STRUCTURE


class FetchError(ScraperError):
    default_code = ErrorCode.NETWORK

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        http_status: int | None = None,
    ) -> None:
        super().__init__(message, error_code=error_code)
        self.http_status = http_status


class LedgerError(ScraperError):
    default_code = ErrorCode.LEDGER_IO


def classify_http_status(status: Optional[int]) -> str:
    if status is None:
        return ErrorCode.INTERNAL
    if status == 404:
        return ErrorCode.HTTP_404
    if 400 <= status < 500:
        return ErrorCode.HTTP_4XX
    if status >= 500:
        return ErrorCode.HTTP_5XX
    return ErrorCode.INTERNAL


__all__ = [
    "ErrorCode",
    "ScraperError",
    "NavigationError",
    "SiteStructureError",
    "FetchError",
    "LedgerError",
    "classify_http_status",
]
