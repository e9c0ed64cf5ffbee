"""
Bulbapedia scraper for pokecache.

Builds a local, resumable dataset in two phases:

  1. Listings: the National Pokedex, the move list, natures, abilities
     and Z-Moves.  Each listing is scraped once and then read back verbatim
     from ``data/{listing}.json``.
  2. Details: one record per Pokemon (plus its artwork) and per move,
     scraped at most once per id.  ``get_unscraped`` diffs a listing
     against the record tier so an interrupted run picks up where it
     stopped.

Every step goes through three cache tiers::

    html/   raw pages        (get_html: fetch only when missing)
    data/   JSON records     (listing / detail wrappers)
    assets/ Pokemon artwork  (fetch_blob: fetch only when missing)

A Pokemon counts as done only when both its artwork and its record exist.
The artwork is downloaded before the record is written, so a record on
disk always has its asset next to it.

Failures are not caught here: a FetchError / ExtractionError / PersistError
on one item stops the batch it belongs to.  Whatever was persisted before
stays valid for the next run.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from configs.constants import Constants
from pokecache.scraper.base import BaseScraper, ScrapeConfig
from pokecache.scraper.models import (
    AbilityRecord,
    BasicCreatureRef,
    BasicMoveRef,
    CreatureRecord,
    MoveRecord,
    NatureRecord,
    UnscrapedDiff,
)
from scraping.extractors import (
    extract_abilities_list,
    extract_full_image_url,
    extract_move,
    extract_moves_list,
    extract_natures_list,
    extract_pokemon,
    extract_pokemon_index_list,
    extract_z_moves_list,
    find_image_page_url,
    find_latest_learnset_link,
    find_pokemon_tables,
)


T = TypeVar("T")


def _to_dict(obj: Any) -> Any:
    """Records serialise themselves; plain values (Z-Move names) pass through."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return obj


class BulbapediaScraper(BaseScraper):
    """
    Scrapes Bulbapedia into the pokecache cache tiers.

    Parameters
    ----------
    config : ScrapeConfig
        Cache location, wiki base URL and per-item delay.
    """

    def __init__(self, config: Optional[ScrapeConfig] = None) -> None:
        super().__init__(config or ScrapeConfig())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return urljoin(self.config.base_url, path)

    def _soup(self, url: str, cache_file: Path) -> BeautifulSoup:
        return BeautifulSoup(self.get_html(url, cache_file), "lxml")

    # ------------------------------------------------------------------
    # Cache predicates
    # ------------------------------------------------------------------

    def is_listing_cached(self, name: str) -> bool:
        return self.is_cached(self.paths.listing_data(name))

    def is_pokemon_scraped(self, no: int) -> bool:
        """The artwork is the completion marker; the record must exist too."""
        return self.is_cached(self.paths.pokemon_image(no)) and self.is_cached(
            self.paths.pokemon_data(no)
        )

    def is_move_scraped(self, index_no: int) -> bool:
        return self.is_cached(self.paths.move_data(index_no))

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def _scrape_listing(
        self,
        name: str,
        label: str,
        extract: Callable[[BeautifulSoup], list[T]],
        from_dict: Callable[[Any], T],
    ) -> list[T]:
        """Return the cached listing *name*, scraping and persisting it on a miss."""
        out_file = self.paths.listing_data(name)
        if self.is_listing_cached(name):
            self.logger.debug(f"{out_file.name} already exists — loading.")
            return [from_dict(item) for item in self.load_json(out_file)]

        self.logger.info(f"Scraping {label} list...")
        soup = self._soup(self._url(Constants.LISTING_PAGES[name]), self.paths.listing_html(name))
        records = extract(soup)
        self.save_json([_to_dict(r) for r in records], out_file)
        self.logger.info(f"{label} list scraped ({len(records)} entries)")
        return records

    def scrape_pokemon_index_list(self) -> list[BasicCreatureRef]:
        """All Pokemon, one per national dex number (alternate forms dropped)."""
        return self._scrape_listing(
            "pokemon_index_list",
            "Pokémon index",
            lambda soup: extract_pokemon_index_list(soup, self.config.base_url),
            BasicCreatureRef.from_dict,
        )

    def scrape_moves_list(self) -> list[BasicMoveRef]:
        return self._scrape_listing(
            "moves_list",
            "Move",
            lambda soup: extract_moves_list(soup, self.config.base_url),
            BasicMoveRef.from_dict,
        )

    def scrape_natures_list(self) -> list[NatureRecord]:
        return self._scrape_listing(
            "natures_list", "Nature", extract_natures_list, NatureRecord.from_dict
        )

    def scrape_abilities_list(self) -> list[AbilityRecord]:
        return self._scrape_listing(
            "abilities_list", "Ability", extract_abilities_list, AbilityRecord.from_dict
        )

    def scrape_z_moves_list(self) -> list[str]:
        return self._scrape_listing("z_moves_list", "Z-Move", extract_z_moves_list, str)

    # ------------------------------------------------------------------
    # Pokemon detail
    # ------------------------------------------------------------------

    def scrape_pokemon(
        self, ref: BasicCreatureRef, return_data: bool = False
    ) -> Optional[CreatureRecord]:
        """
        Scrape the full record for *ref* unless it is already cached.

        With ``return_data=False`` a cache hit only checks for the files and
        returns None.  With ``return_data=True`` the cached record is read
        back.  A miss always returns the freshly built record.
        """
        record_file = self.paths.pokemon_data(ref.id)
        if self.is_pokemon_scraped(ref.id):
            self.logger.debug(f"#{ref.id} already on disk.")
            if return_data:
                return CreatureRecord.from_dict(self.load_json(record_file))
            return None

        self.logger.info(f"Scraping {ref.id} {ref.name}...")
        soup = self._soup(ref.source_url, self.paths.pokemon_html(ref.id))

        level_up, technical = find_pokemon_tables(soup)
        if level_up is None:
            # The main page has no level-up data for the newest games yet;
            # the latest generation learnset page does.
            learnset_url = find_latest_learnset_link(soup, self.config.base_url, ref.source_url)
            learnset_soup = self._soup(learnset_url, self.paths.pokemon_html(ref.id, "learnset"))
            level_up, technical = find_pokemon_tables(learnset_soup, level_up_anchor="By_leveling_up")

        image_file = self.paths.pokemon_image(ref.id)
        record = extract_pokemon(soup, ref, level_up, technical, self.paths.asset_ref(image_file))

        self.scrape_image(
            find_image_page_url(soup, self.config.base_url, ref.source_url),
            self.paths.pokemon_html(ref.id, "img"),
            image_file,
        )
        self.save_json(record.to_dict(), record_file)

        self.logger.info(f"{ref.id} {ref.name} scraped")
        return record

    def scrape_image(self, url: str, html_cache_file: Path, image_cache_file: Path) -> None:
        """Follow a file viewer page at *url* to the real image and cache it."""
        soup = self._soup(url, html_cache_file)
        self.fetch_blob(extract_full_image_url(soup, url), image_cache_file)

    # ------------------------------------------------------------------
    # Move detail
    # ------------------------------------------------------------------

    def scrape_move(self, ref: BasicMoveRef, return_data: bool = False) -> Optional[MoveRecord]:
        """Same contract as :py:meth:`scrape_pokemon`, keyed by move index."""
        record_file = self.paths.move_data(ref.index_no)
        if self.is_move_scraped(ref.index_no):
            self.logger.debug(f"(Move) {ref.index_no} already on disk.")
            if return_data:
                return MoveRecord.from_dict(self.load_json(record_file))
            return None

        self.logger.info(f"Scraping (Move) {ref.index_no} {ref.name}...")
        soup = self._soup(ref.source_url, self.paths.move_html(ref.index_no))
        record = extract_move(soup, ref)
        self.save_json(record.to_dict(), record_file)

        self.logger.info(f"(Move) {ref.name} scraped")
        return record

    # ------------------------------------------------------------------
    # Resume support
    # ------------------------------------------------------------------

    @staticmethod
    def _cached_ids(directory: Path) -> set[int]:
        ids: set[int] = set()
        for path in directory.glob("*.json"):
            stem = path.name.split(".", 1)[0]
            if stem.isdigit():
                ids.add(int(stem))
        return ids

    def get_unscraped(
        self, pokemon: Sequence[BasicCreatureRef], moves: Sequence[BasicMoveRef]
    ) -> UnscrapedDiff:
        """Entries of the given listings that have no record on disk yet, in listing order."""
        scraped_pokemon = self._cached_ids(self.paths.data_pokemon_dir)
        scraped_moves = self._cached_ids(self.paths.data_moves_dir)
        return UnscrapedDiff(
            creatures=[p for p in pokemon if p.id not in scraped_pokemon],
            moves=[m for m in moves if m.index_no not in scraped_moves],
        )

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def slow_scrape_all(self, items: Iterable[T], scrape_one: Callable[[T], Any]) -> None:
        """
        Scrape *items* one at a time, in order, pausing after each one.

        The first failure propagates and the remaining items are left for
        the next run.
        """
        for item in items:
            scrape_one(item)
            time.sleep(self.config.item_delay)

    def slow_scrape_all_pokemon(self, pokemon: Iterable[BasicCreatureRef]) -> None:
        self.slow_scrape_all(pokemon, self.scrape_pokemon)

    def slow_scrape_all_moves(self, moves: Iterable[BasicMoveRef]) -> None:
        self.slow_scrape_all(moves, self.scrape_move)

    # ------------------------------------------------------------------
    # Full pipeline
    # ------------------------------------------------------------------

    def scrape_all(self) -> dict[str, Any]:
        """
        Run every listing and detail scrape in this thread, one after another.

        Returns a dict with the listings and the number of detail items that
        were missing at the start of the run.
        """
        self.logger.info("=" * 60)
        self.logger.info("pokecache Bulbapedia scraper — starting full run")
        self.logger.info("=" * 60)

        pokemon = self.scrape_pokemon_index_list()
        moves = self.scrape_moves_list()
        unscraped = self.get_unscraped(pokemon, moves)
        self.logger.info(
            f"Unscraped Pokémon={len(unscraped.creatures)} Moves={len(unscraped.moves)}"
        )

        self.slow_scrape_all_pokemon(unscraped.creatures)
        self.slow_scrape_all_moves(unscraped.moves)
        results = {
            "pokemon": pokemon,
            "moves": moves,
            "natures": self.scrape_natures_list(),
            "abilities": self.scrape_abilities_list(),
            "z_moves": self.scrape_z_moves_list(),
            "unscraped_pokemon": len(unscraped.creatures),
            "unscraped_moves": len(unscraped.moves),
        }

        self.logger.info("=" * 60)
        self.logger.info("Bulbapedia scrape complete.")
        self.logger.info("=" * 60)
        return results
