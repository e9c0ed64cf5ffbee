"""
Error types raised by the pokecache scrapers.

A cache miss is never an error: the scrapers test for cached artifacts with
plain existence checks and only raise for genuine failures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ScrapeError(Exception):
    """Base class for every pokecache failure."""


class FetchError(ScrapeError):
    """Network retrieval of *url* failed on a cache miss."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ExtractionError(ScrapeError):
    """A structural anchor (heading, table, link) is missing from a document."""

    def __init__(self, anchor: str, source: Optional[str] = None) -> None:
        where = f" in {source}" if source else ""
        super().__init__(f"Missing structural anchor '{anchor}'{where}")
        self.anchor = anchor
        self.source = source


class PersistError(ScrapeError):
    """A cache artifact at *path* could not be written or read back."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cache I/O failed for {path}: {reason}")
        self.path = Path(path)
        self.reason = reason
