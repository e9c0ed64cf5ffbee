"""
Full-run driver for pokecache.

Sequence:

  1. Scrape (or load) the Pokemon and move listings.
  2. Diff them against the record tier.
  3. Run one lane per entity kind: Pokemon details, move details,
     natures, abilities, Z-Moves.  Lanes run side by side on a thread
     pool, each with its own scraper (and HTTP session); inside a lane the
     items are strictly one after another.
  4. Write the run summary.

A failing lane stops at its first error while the other lanes finish; the
error is then re-raised so the process exits non-zero.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from pokecache.pipeline.summary import RunSummary, write_run_summary
from pokecache.scraper.base import ScrapeConfig
from pokecache.scraper.bulbapedia import BulbapediaScraper
from pokecache.scraper.models import UnscrapedDiff
from utils.custom_threading import ThreadExecutor

logger = logging.getLogger(__name__)

Lane = Callable[[BulbapediaScraper], object]


def build_lanes(unscraped: UnscrapedDiff) -> Dict[str, Lane]:
    """One callable per entity kind; each touches only its own cache subtree."""
    return {
        "pokemon": lambda scraper: scraper.slow_scrape_all_pokemon(unscraped.creatures),
        "moves": lambda scraper: scraper.slow_scrape_all_moves(unscraped.moves),
        "natures": lambda scraper: scraper.scrape_natures_list(),
        "abilities": lambda scraper: scraper.scrape_abilities_list(),
        "z_moves": lambda scraper: scraper.scrape_z_moves_list(),
    }


def _run_lane(config: ScrapeConfig, name: str, lane: Lane) -> None:
    logger.info(f"Lane '{name}' started")
    lane(BulbapediaScraper(config))
    logger.info(f"Lane '{name}' done")


def run_lanes(config: ScrapeConfig, lanes: Dict[str, Lane]) -> None:
    """Run *lanes* concurrently and re-raise the first failure once all have stopped."""
    with ThreadExecutor(max_workers=len(lanes)) as executor:
        submitted = {
            executor.submit(_run_lane, config, name, lane): name for name, lane in lanes.items()
        }
        executor.wait_on_futures(submitted)

    failures = [(submitted[f], f.exception()) for f in submitted if f.exception() is not None]
    for name, exc in failures:
        logger.error(f"Lane '{name}' failed: {exc}")
    if failures:
        raise failures[0][1]


def run_full_scrape(config: ScrapeConfig, concurrent: bool = True) -> RunSummary:
    """Resume the dataset from whatever is cached and bring it up to date."""
    scraper = BulbapediaScraper(config)
    logger.info("Running full Pokémon data scrape...")

    if concurrent:
        pokemon = scraper.scrape_pokemon_index_list()
        moves = scraper.scrape_moves_list()
        unscraped = scraper.get_unscraped(pokemon, moves)
        logger.info(
            f"Unscraped Pokémon={len(unscraped.creatures)} Moves={len(unscraped.moves)}"
        )
        run_lanes(config, build_lanes(unscraped))
    else:
        scraper.scrape_all()

    summary = write_run_summary(config.paths)
    logger.info("done!")
    return summary
