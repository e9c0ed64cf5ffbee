from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest
import requests
from bs4 import BeautifulSoup

from pokecache.scraper.base import ScrapeConfig
from pokecache.scraper.bulbapedia import BulbapediaScraper


FIXTURES = Path(__file__).resolve().parent / "fixtures"

BASE_URL = "https://bulbapedia.bulbagarden.net"
PIKACHU_URL = f"{BASE_URL}/wiki/Pikachu_(Pok%C3%A9mon)"
PIKACHU_LEARNSET_URL = f"{BASE_URL}/wiki/Pikachu_(Pok%C3%A9mon)/Generation_IX_learnset"
PIKACHU_FILE_URL = f"{BASE_URL}/wiki/File:0025Pikachu.png"
PIKACHU_IMAGE_URL = "https://archives.bulbagarden.net/media/upload/4/4a/0025Pikachu.png"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-artwork"

POKEMON_INDEX_URL = f"{BASE_URL}/wiki/List_of_Pok%C3%A9mon_by_National_Pok%C3%A9dex_number"
MOVES_URL = f"{BASE_URL}/wiki/List_of_moves"
NATURES_URL = f"{BASE_URL}/wiki/Nature"
ABILITIES_URL = f"{BASE_URL}/wiki/Ability"
Z_MOVES_URL = f"{BASE_URL}/wiki/Z-Move"


def load_fixture_text(filename: str) -> str:
    return (FIXTURES / filename).read_text(encoding="utf-8")


def load_fixture_html(filename: str) -> BeautifulSoup:
    return BeautifulSoup(load_fixture_text(filename), "lxml")


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code
        self.closed = False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """
    Stands in for requests.Session.

    ``pages`` maps a URL to the response body, or to an int status code for
    an HTTP error.  Unknown URLs behave like an unreachable host.
    """

    def __init__(self, pages: Optional[Dict[str, Union[str, bytes, int]]] = None) -> None:
        self.pages = dict(pages or {})
        self.calls: List[str] = []

    def get(self, url: str, timeout=None, stream: bool = False) -> FakeResponse:
        self.calls.append(url)
        if url not in self.pages:
            raise requests.ConnectionError(f"no route to {url}")
        body = self.pages[url]
        if isinstance(body, int):
            return FakeResponse(b"", status_code=body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return FakeResponse(body)


def pikachu_pages() -> Dict[str, Union[str, bytes]]:
    return {
        PIKACHU_URL: load_fixture_text("pokemon_25.html"),
        PIKACHU_FILE_URL: load_fixture_text("pikachu_image_page.html"),
        PIKACHU_IMAGE_URL: PNG_BYTES,
    }


def listing_pages() -> Dict[str, str]:
    return {
        POKEMON_INDEX_URL: load_fixture_text("pokemon_index_list.html"),
        MOVES_URL: load_fixture_text("moves_list.html"),
        NATURES_URL: load_fixture_text("natures_list.html"),
        ABILITIES_URL: load_fixture_text("abilities_list.html"),
        Z_MOVES_URL: load_fixture_text("z_moves_list.html"),
    }


@pytest.fixture
def config(tmp_path) -> ScrapeConfig:
    return ScrapeConfig(cache_dir=tmp_path / "cache", base_url=BASE_URL, item_delay=0)


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def scraper(config, session) -> BulbapediaScraper:
    instance = BulbapediaScraper(config)
    instance._session = session
    return instance
