from __future__ import annotations

from typing import Any

from .logging_utils import _scraper_event
from .utils import log_line


def _raise_config_error(message: str, *, error: str, field: str, value: Any) -> None:
    _scraper_event(
        "error",
        phase="config",
        context="runtime_validation",
        error=error,
        field=field,
        value=value,
    )
    log_line(f"[CONFIG] {message}")
    raise ValueError(message)


def validate_runtime_config(options: Any) -> None:
    """Validate crawl options before any browser is launched.

    Raises ``ValueError`` for a blocking misconfiguration.
    """

    if options.retries < 1:
        _raise_config_error(
            "Retry count must be at least 1.",
            error="invalid_retries",
            field="retries",
            value=options.retries,
        )

    for field_name in ("retry_delay_seconds", "settle_seconds"):
        value = getattr(options, field_name)
        if value < 0:
            _raise_config_error(
                f"{field_name} must not be negative.",
                error="invalid_delay",
                field=field_name,
                value=value,
            )

    if not str(options.directory_url).lower().startswith(("http://", "https://")):
        _raise_config_error(
            "Directory URL must be an http(s) URL.",
            error="invalid_directory_url",
            field="directory_url",
            value=options.directory_url,
        )


__all__ = ["validate_runtime_config"]
