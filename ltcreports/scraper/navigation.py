"""Bounded-retry page navigation."""

from __future__ import annotations

import time
from typing import Optional

from playwright.sync_api import Error as PWError, Page, TimeoutError as PWTimeout

from . import config
from .logging_utils import _scraper_event
from .utils import log_line


def attempt_navigate(
    page: Page,
    url: str,
    *,
    retries: Optional[int] = None,
    delay_seconds: Optional[float] = None,
    label: str = "",
) -> bool:
    """Load ``url`` in ``page``, retrying with a fixed delay.

    Returns ``True`` on the first successful ``goto`` and ``False`` once every
    attempt has failed. Never raises for navigation failures; callers must
    check the result before touching the page.
    """

    attempts = config.N_RETRIES if retries is None else retries
    delay = config.NAV_RETRY_DELAY_SECONDS if delay_seconds is None else delay_seconds

    for attempt in range(1, attempts + 1):
        _scraper_event("nav", step="goto", target=label, url=url, attempt=attempt)
        try:
            page.goto(url, timeout=config.NAV_TIMEOUT_SECONDS * 1000)
            return True
        except PWTimeout as exc:
            step = "goto_timeout"
            error = exc
        except PWError as exc:
            step = "goto_error"
            error = exc
        except Exception as exc:  # noqa: BLE001
            step = "goto_exception"
            error = exc

        log_line(f"[NAV] {error} going to {url}, retrying")
        _scraper_event(
            "error",
            phase="nav",
            step=step,
            target=label,
            url=url,
            attempt=attempt,
            max_attempts=attempts,
            error=str(error),
        )
        time.sleep(delay)

    _scraper_event(
        "error",
        phase="nav",
        step="goto_exhausted",
        target=label,
        url=url,
        max_attempts=attempts,
    )
    return False


__all__ = ["attempt_navigate"]
