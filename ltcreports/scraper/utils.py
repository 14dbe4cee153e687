from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from . import config

LOGGER = logging.getLogger("ltcreports")
_LOGGER_INITIALISED = False

# Characters that cannot appear in a home's directory name, with replacements.
_HOME_NAME_REPLACEMENTS = (
    ("/", "-"),
    ('"', ""),
    (":", "-"),
)


def configure_logger(*, verbose: bool = False, log_path: Optional[Path] = None) -> None:
    """Configure the shared logger.

    Progress lines are logged at INFO, so they only show up when ``verbose``
    is set. Errors are always shown.
    """

    global _LOGGER_INITIALISED

    for handler in list(LOGGER.handlers):
        LOGGER.removeHandler(handler)
        try:
            handler.close()
        except Exception:  # noqa: BLE001
            continue

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    LOGGER.addHandler(stream_handler)

    log_path = log_path or config.LOG_FILE
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        LOGGER.addHandler(file_handler)

    LOGGER.setLevel(logging.INFO if verbose else logging.WARNING)
    LOGGER.propagate = False
    _LOGGER_INITIALISED = True


def _ensure_logger() -> None:
    if _LOGGER_INITIALISED:
        return
    configure_logger()


def log_line(message: str) -> None:
    """Write a progress line (visible in verbose mode only)."""

    _ensure_logger()
    LOGGER.info(message)


def log_notice(message: str) -> None:
    """Write a line that is shown regardless of verbosity."""

    _ensure_logger()
    LOGGER.warning(message)


def log_error(message: str) -> None:
    """Write an error line (always shown)."""

    _ensure_logger()
    LOGGER.error(message)


def sanitize_home_name(name: str) -> str:
    """Return ``name`` with path-hostile characters replaced or removed."""

    for old, new in _HOME_NAME_REPLACEMENTS:
        name = name.replace(old, new)
    return name


def ensure_directory(path: Path) -> bool:
    """Create ``path`` if missing. Returns ``True`` when it was created."""

    path = Path(path)
    if path.is_dir():
        log_line(f"Directory {path} already exists")
        return False
    path.mkdir(parents=True, exist_ok=True)
    return True


__all__ = [
    "LOGGER",
    "configure_logger",
    "log_line",
    "log_notice",
    "log_error",
    "sanitize_home_name",
    "ensure_directory",
]
