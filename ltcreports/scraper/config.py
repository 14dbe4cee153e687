"""Configuration constants for the LTC inspection report crawler."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

DIRECTORY_URL: str = os.getenv(
    "LTC_DIRECTORY_URL",
    "https://publicreporting.ltchomes.net/en-ca/Search_Selection.aspx",
)

DEFAULT_REPORT_DIR: Path = Path(os.getenv("LTC_REPORT_DIR", "reports"))
RECORDS_LIST_FILENAME: Path = Path(os.getenv("LTC_RECORDS_FILE", "ltc-records.json"))

_log_file = os.getenv("LTC_LOG_FILE", "").strip()
LOG_FILE: Optional[Path] = Path(_log_file) if _log_file else None

# Attempts for both page navigation and whole-facility processing.
N_RETRIES: int = int(os.getenv("LTC_RETRIES", "5"))

NAV_RETRY_DELAY_SECONDS: float = float(os.getenv("LTC_NAV_RETRY_DELAY_SECONDS", "1.0"))
FACILITY_RETRY_DELAY_SECONDS: float = float(
    os.getenv("LTC_FACILITY_RETRY_DELAY_SECONDS", "1.0")
)
# Pause after navigation and after clicking the reveal control; the
# directory renders its lists client-side.
SETTLE_SECONDS: float = float(os.getenv("LTC_SETTLE_SECONDS", "1.0"))


def _parse_timeout_seconds(env_var: str, default: int, *, minimum: int = 1) -> int:
    """Parse a timeout value in seconds from the environment with bounds."""

    try:
        value = int(os.getenv(env_var, str(default)))
    except ValueError:
        return default
    return max(minimum, value)


BROWSER_LAUNCH_TIMEOUT_SECONDS: int = _parse_timeout_seconds(
    "LTC_BROWSER_LAUNCH_TIMEOUT_SECONDS", 100
)
NAV_TIMEOUT_SECONDS: int = _parse_timeout_seconds("LTC_NAV_TIMEOUT_SECONDS", 30)
DOWNLOAD_TIMEOUT_SECONDS: int = _parse_timeout_seconds("LTC_DOWNLOAD_TIMEOUT_SECONDS", 120)

BROWSER_ARGS: list[str] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
]

COMMON_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "application/pdf,*/*",
    "Accept-Language": "en-CA,en;q=0.9",
}


def jsonl_path_for(records_path: Path) -> Path:
    """Return the line-per-record companion of the final ledger file."""

    return Path(records_path).with_suffix(".jsonl")
