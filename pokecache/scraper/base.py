"""
Base scraper for pokecache.

Every scraper inherits from BaseScraper and gets the following for free:

  - A requests.Session with a descriptive User-Agent (retries are opt-in)
  - The fetch-and-cache primitives: ``get_html`` for source pages and
    ``fetch_blob`` for binary assets
  - Atomic save_json / load_json helpers for the structured-record tier
  - An abstract scrape_all() contract that subclasses must implement

The cache is authoritative: once a file exists it is returned as-is, with no
freshness check, and nothing here ever deletes or truncates an entry.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from configs.constants import Constants
from pokecache.scraper.errors import FetchError, PersistError
from pokecache.scraper.paths import CachePaths

# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------


@dataclass
class ScrapeConfig:
    """
    Configuration shared by every BaseScraper subclass.

    Built once at startup and handed to every scraper; nothing reads paths
    or URLs from module state.

    Parameters
    ----------
    cache_dir : Path
        Base directory of the three cache tiers.  Re-running a scraper that
        already has a warm cache makes zero HTTP requests.
    base_url : str
        Root of the wiki being scraped.
    item_delay : float
        Seconds to wait after each detail item in a batch.
    max_retries : int
        Retries per failed request.  0 means a failure surfaces immediately.
    timeout : float, optional
        Per-request timeout in seconds; None waits indefinitely.
    """

    cache_dir: Path = field(default_factory=lambda: Path(Constants.BASE_CACHE_DIR))
    base_url: str = Constants.SCRAPING_BASE_URL
    item_delay: float = Constants.ITEM_DELAY_SECONDS
    max_retries: int = 0
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        # Accept plain strings so callers can write ScrapeConfig(cache_dir="…")
        self.cache_dir = Path(self.cache_dir)

    @property
    def paths(self) -> CachePaths:
        return CachePaths(self.cache_dir)


# ---------------------------------------------------------------------------
# Atomic file helpers
# ---------------------------------------------------------------------------


def write_atomic(path: Path, chunks: Iterator[bytes]) -> None:
    """Write *chunks* to a sibling temp file, then rename it onto *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            for chunk in chunks:
                if chunk:
                    fh.write(chunk)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


# ---------------------------------------------------------------------------
# Abstract base scraper
# ---------------------------------------------------------------------------


class BaseScraper(ABC):
    """
    Abstract base for all pokecache scrapers.

    Subclass and implement :py:meth:`scrape_all`.

    Example
    -------
    ::

        class MyScraper(BaseScraper):
            def scrape_all(self) -> dict[str, Any]:
                html = self.get_html("https://example.com/page", self.paths.listing_html("page"))
                self.save_json({"size": len(html)}, self.paths.listing_data("page"))
                return {"page": html}
    """

    def __init__(self, config: ScrapeConfig) -> None:
        self.config = config
        self.paths = config.paths
        self.paths.ensure_paths()

        self._session = self._build_session()
        self.logger = logging.getLogger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Session setup
    # ------------------------------------------------------------------

    def _build_session(self) -> requests.Session:
        """Build a requests.Session with a descriptive User-Agent."""
        session = requests.Session()
        retry = Retry(
            total=self.config.max_retries,
            backoff_factor=1.0,
            status_forcelist=[429, 500, 502, 503, 504],
            respect_retry_after_header=True,
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        session.headers["User-Agent"] = Constants.USER_AGENT
        return session

    def _get(self, url: str, stream: bool = False) -> requests.Response:
        try:
            resp = self._session.get(url, timeout=self.config.timeout, stream=stream)
            resp.raise_for_status()
        except requests.HTTPError as exc:
            code = exc.response.status_code if exc.response is not None else "?"
            raise FetchError(url, f"HTTP {code}") from exc
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        return resp

    # ------------------------------------------------------------------
    # Cache predicates
    # ------------------------------------------------------------------

    @staticmethod
    def is_cached(path: Path) -> bool:
        """Whether a cache artifact exists.  Content is never inspected."""
        return Path(path).is_file()

    # ------------------------------------------------------------------
    # Fetch-and-cache primitives
    # ------------------------------------------------------------------

    def get_html(self, url: str, cache_file: Path) -> str:
        """
        Return the page at *url*, reading *cache_file* when it exists.

        On a miss the response body is stored byte-for-byte in
        *cache_file* before being returned.

        Raises
        ------
        FetchError
            The request failed on a cache miss.
        PersistError
            The cache file could not be read or written.
        """
        cache_file = Path(cache_file)
        if self.is_cached(cache_file):
            try:
                return cache_file.read_bytes().decode("utf-8", errors="replace")
            except OSError as exc:
                raise PersistError(cache_file, str(exc)) from exc

        self.logger.debug(f"GET {url}")
        body = self._get(url).content
        try:
            write_atomic(cache_file, iter([body]))
        except OSError as exc:
            raise PersistError(cache_file, str(exc)) from exc
        return body.decode("utf-8", errors="replace")

    def fetch_blob(self, url: str, cache_file: Path) -> bool:
        """
        Download *url* to *cache_file* unless that file already exists.

        Only the existence of the file is checked.  Returns True when a
        download happened.
        """
        cache_file = Path(cache_file)
        if self.is_cached(cache_file):
            return False

        self.logger.debug(f"GET (blob) {url}")
        resp = self._get(url, stream=True)
        try:
            write_atomic(cache_file, resp.iter_content(chunk_size=64 * 1024))
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        except OSError as exc:
            raise PersistError(cache_file, str(exc)) from exc
        finally:
            resp.close()
        return True

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------

    def save_json(self, data: Any, path: Path) -> None:
        """Write *data* as indented JSON to *path* in one atomic step."""
        payload = json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")
        try:
            write_atomic(Path(path), iter([payload]))
        except OSError as exc:
            raise PersistError(path, str(exc)) from exc
        self.logger.debug(f"Saved → {path}")

    def load_json(self, path: Path) -> Any:
        """
        Load JSON from *path*.

        Callers check existence first; a missing or corrupt file here is a
        real failure and raises PersistError.
        """
        try:
            with open(path, encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistError(path, str(exc)) from exc

    # ------------------------------------------------------------------
    # Abstract contract
    # ------------------------------------------------------------------

    @abstractmethod
    def scrape_all(self) -> dict[str, Any]:
        """
        Run the complete scraping pipeline for this data source.

        Must persist its output under ``self.paths`` and return a summary
        dict.
        """
        ...
