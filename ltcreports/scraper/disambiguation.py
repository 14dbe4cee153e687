from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, Tuple

PDF_SUFFIX = ".pdf"


def instance_of(records: Iterable[Any], home: str, title: str) -> int:
    """Count ``records`` already seen with the same ``home`` and ``title``."""

    return sum(1 for record in records if record.home == home and record.title == title)


def document_filename(title: str, instance: int) -> str:
    """``Report.pdf`` for the first instance, ``Report-1.pdf`` for the next, ..."""

    suffix = "" if instance == 0 else f"-{instance}"
    return f"{title}{suffix}{PDF_SUFFIX}"


class InstanceCounter:
    """Run-scoped count of documents seen per ``(home, title)``."""

    def __init__(self) -> None:
        self._seen: Counter[Tuple[str, str]] = Counter()

    def instance_of(self, home: str, title: str) -> int:
        return self._seen[(home, title)]

    def observe(self, home: str, title: str) -> int:
        """Return the instance for this document and count it as seen."""

        key = (home, title)
        instance = self._seen[key]
        self._seen[key] += 1
        return instance

    def __len__(self) -> int:
        return sum(self._seen.values())


__all__ = ["InstanceCounter", "instance_of", "document_filename", "PDF_SUFFIX"]
