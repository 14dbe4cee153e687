from __future__ import annotations

import urllib.parse
from pathlib import Path
from typing import Optional

import requests

from . import config
from .error_codes import ErrorCode, FetchError, classify_http_status
from .logging_utils import _scraper_event
from .utils import log_line

CHUNK_SIZE = 8192


def _redact_url(url: str) -> str:
    try:
        parsed = urllib.parse.urlparse(url)
        return urllib.parse.urlunparse(parsed._replace(query=""))
    except Exception:
        return url


def build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(config.COMMON_HEADERS)
    return session


class DocumentFetcher:
    """Streams documents to disk. No retries: failures surface to the caller."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        timeout: Optional[int] = None,
    ) -> None:
        self.session = session or build_session()
        self.timeout = config.DOWNLOAD_TIMEOUT_SECONDS if timeout is None else timeout

    def fetch(self, href: str, destination: Path) -> int:
        """Stream ``href`` into ``destination``, truncating any existing file.

        Returns the number of bytes written.
        """

        destination = Path(destination)
        safe_url = _redact_url(href)
        log_line(f"retrieving {destination} ({href})")
        status: Optional[int] = None
        try:
            with self.session.get(href, stream=True, timeout=self.timeout) as response:
                status = response.status_code
                response.raise_for_status()
                written = 0
                with destination.open("wb") as handle:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if not chunk:
                            continue
                        handle.write(chunk)
                        written += len(chunk)
        except requests.HTTPError as exc:
            status = getattr(exc.response, "status_code", None) or status
            raise FetchError(
                f"HTTP {status} fetching {safe_url}",
                error_code=classify_http_status(status),
                http_status=status,
            ) from exc
        except requests.RequestException as exc:
            # A body cut off mid-stream must not be mistaken for a finished
            # download on the next attempt.
            destination.unlink(missing_ok=True)
            raise FetchError(
                f"{type(exc).__name__} fetching {safe_url}: {exc}",
                error_code=ErrorCode.NETWORK,
            ) from exc

        _scraper_event(
            "download",
            url=safe_url,
            http_status=status,
            bytes=written,
            path=str(destination),
        )
        return written

    def fetch_if_missing(self, href: str, destination: Path) -> bool:
        """Fetch unless ``destination`` already exists. Returns ``True`` if fetched."""

        destination = Path(destination)
        if destination.exists():
            log_line(f"Skipping already retrieved file {destination.name}")
            return False
        self.fetch(href, destination)
        return True

    def close(self) -> None:
        self.session.close()


__all__ = ["DocumentFetcher", "build_session", "CHUNK_SIZE"]
