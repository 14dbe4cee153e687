"""Run ledger of every document record produced.

Two files are kept side by side:

- ``ltc-records.jsonl`` gets one JSON object per line, flushed as each record
  is appended. If the process dies mid-run every line already written is
  still independently parseable.
- ``ltc-records.json`` is the JSON array of all records. It is only written
  by :meth:`RecordLedger.finalize`, to a temporary file that then replaces
  the target, so it is either complete or absent.

Both are reset when the ledger is opened; each run starts fresh.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import IO, Any, Dict, List, Optional

from . import config
from .error_codes import LedgerError
from .logging_utils import _scraper_event
from .utils import log_error, log_line


@dataclass(frozen=True)
class Record:
    uri: str
    home: str
    title: str
    instance: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RecordLedger:
    def __init__(self, path: Path, *, jsonl_path: Optional[Path] = None) -> None:
        self.path = Path(path)
        self.jsonl_path = Path(jsonl_path) if jsonl_path else config.jsonl_path_for(self.path)
        self._handle: Optional[IO[str]] = None
        self._records: List[Record] = []
        self._finalized = False

    def _io_error(self, description: str, exc: OSError) -> LedgerError:
        log_error(f"IO error: {description}: {exc}")
        _scraper_event("error", phase="ledger", step=description, error=str(exc))
        return LedgerError(f"{description}: {exc}")

    def open(self) -> "RecordLedger":
        try:
            self.path.unlink(missing_ok=True)
            self.jsonl_path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = self.jsonl_path.open("w", encoding="utf-8")
        except OSError as exc:
            raise self._io_error("opening records list", exc) from exc
        log_line(f"Recording retrieved documents to {self.jsonl_path}")
        return self

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    def append(self, record: Record) -> None:
        if self._handle is None or self._finalized:
            raise LedgerError("ledger is not open for appending")
        try:
            self._handle.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
            self._handle.flush()
        except OSError as exc:
            raise self._io_error("appending record to records list", exc) from exc
        self._records.append(record)

    def finalize(self) -> Path:
        """Close the line log and write the complete JSON array."""

        if self._finalized:
            return self.path
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            if self._handle is not None:
                self._handle.close()
                self._handle = None
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump(
                    [record.to_dict() for record in self._records],
                    handle,
                    ensure_ascii=False,
                    indent=2,
                )
                handle.write("\n")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise self._io_error("writing final records list", exc) from exc
        self._finalized = True
        _scraper_event("state", phase="ledger_finalized", path=str(self.path), records=self.count)
        return self.path

    def __enter__(self) -> "RecordLedger":
        if self._handle is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        # A ledger failure already happened; don't mask it with a second one.
        if isinstance(exc, LedgerError):
            if self._handle is not None:
                self._handle.close()
                self._handle = None
            return
        self.finalize()


__all__ = ["Record", "RecordLedger"]
