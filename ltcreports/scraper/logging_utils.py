from __future__ import annotations

from typing import Any

from .utils import log_line

MAX_FIELD_LENGTH = 200


def _short_value(value: Any, max_length: int = MAX_FIELD_LENGTH) -> str:
    text = repr(value)
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def _scraper_event(label: str = "", *, phase: str | None = None, **fields: Any) -> None:
    """Emit a structured ``[SCRAPER][LABEL] key=value`` log line.

    ``phase`` doubles as the label when no label is given; otherwise it is
    kept in the payload. Long values (exception text, page dumps) are cut to
    ``MAX_FIELD_LENGTH`` characters.
    """

    try:
        event_label = label or (phase or "")
        if phase and label:
            fields.setdefault("phase", phase)
        payload = ", ".join(f"{k}={_short_value(v)}" for k, v in sorted(fields.items()))
        log_line(f"[SCRAPER][{event_label.upper()}] {payload}")
    except Exception:
        # Never let logging break the crawl.
        return


__all__ = ["_scraper_event", "MAX_FIELD_LENGTH"]
