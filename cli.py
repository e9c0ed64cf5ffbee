"""
pokecache unified CLI.

Single entry point for all project operations.

Usage
-----
# Full resumable run
python cli.py run                         # listings, then one lane per entity kind
python cli.py run --sequential            # same work, one kind after another

# Single steps
python cli.py list pokemon                # scrape (or load) one listing
python cli.py list z-moves
python cli.py pokemon 25                  # one Pokemon detail record
python cli.py move 84                     # one move detail record

# Inspection
python cli.py unscraped                   # what the next run still has to fetch
python cli.py summary                     # rewrite data/metadata.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from configs.constants import Constants
from utils.logger import setup_logging

logger = logging.getLogger("pokecache.cli")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _config(args: argparse.Namespace):
    from pokecache.scraper.base import ScrapeConfig

    return ScrapeConfig(
        cache_dir=Path(args.cache_dir),
        base_url=args.base_url,
        item_delay=args.delay,
        timeout=args.timeout,
    )


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _find(items, key, value, what: str):
    for item in items:
        if getattr(item, key) == value:
            return item
    raise KeyError(f"{what} {value} is not in the listing")


# ---------------------------------------------------------------------------
# Sub-command handlers
# ---------------------------------------------------------------------------


def cmd_run(args: argparse.Namespace) -> None:
    from pokecache.pipeline.run import run_full_scrape

    summary = run_full_scrape(_config(args), concurrent=not args.sequential)
    _print_json(summary.to_dict())


def cmd_list(args: argparse.Namespace) -> None:
    from pokecache.scraper.bulbapedia import BulbapediaScraper

    scraper = BulbapediaScraper(_config(args))
    dispatch = {
        "pokemon": scraper.scrape_pokemon_index_list,
        "moves": scraper.scrape_moves_list,
        "natures": scraper.scrape_natures_list,
        "abilities": scraper.scrape_abilities_list,
        "z-moves": scraper.scrape_z_moves_list,
    }
    records = dispatch[args.kind]()
    logger.info(f"{len(records)} {args.kind} entries")


def cmd_pokemon(args: argparse.Namespace) -> None:
    from pokecache.scraper.bulbapedia import BulbapediaScraper

    scraper = BulbapediaScraper(_config(args))
    ref = _find(scraper.scrape_pokemon_index_list(), "id", args.id, "Pokémon")
    _print_json(scraper.scrape_pokemon(ref, return_data=True).to_dict())


def cmd_move(args: argparse.Namespace) -> None:
    from pokecache.scraper.bulbapedia import BulbapediaScraper

    scraper = BulbapediaScraper(_config(args))
    ref = _find(scraper.scrape_moves_list(), "index_no", args.id, "Move")
    _print_json(scraper.scrape_move(ref, return_data=True).to_dict())


def cmd_unscraped(args: argparse.Namespace) -> None:
    from pokecache.scraper.bulbapedia import BulbapediaScraper

    scraper = BulbapediaScraper(_config(args))
    unscraped = scraper.get_unscraped(
        scraper.scrape_pokemon_index_list(), scraper.scrape_moves_list()
    )
    _print_json(
        {
            "pokemon": [p.id for p in unscraped.creatures],
            "moves": [m.index_no for m in unscraped.moves],
        }
    )


def cmd_summary(args: argparse.Namespace) -> None:
    from pokecache.pipeline.summary import write_run_summary

    _print_json(write_run_summary(_config(args).paths).to_dict())


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokecache",
        description="Scrape Bulbapedia into a resumable local Pokémon dataset.",
    )
    parser.add_argument(
        "--cache-dir",
        default=Constants.BASE_CACHE_DIR,
        help=f"Base cache directory (default: {Constants.BASE_CACHE_DIR})",
    )
    parser.add_argument(
        "--base-url",
        default=Constants.SCRAPING_BASE_URL,
        help=f"Wiki base URL (default: {Constants.SCRAPING_BASE_URL})",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=Constants.ITEM_DELAY_SECONDS,
        help="Seconds to wait after each detail item (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: wait indefinitely)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Full resumable scrape")
    run.add_argument(
        "--sequential",
        action="store_true",
        help="Scrape entity kinds one after another instead of in parallel lanes",
    )
    run.set_defaults(func=cmd_run)

    listing = sub.add_parser("list", help="Scrape or load one listing")
    listing.add_argument("kind", choices=["pokemon", "moves", "natures", "abilities", "z-moves"])
    listing.set_defaults(func=cmd_list)

    pokemon = sub.add_parser("pokemon", help="Scrape one Pokémon by national dex number")
    pokemon.add_argument("id", type=int)
    pokemon.set_defaults(func=cmd_pokemon)

    move = sub.add_parser("move", help="Scrape one move by index number")
    move.add_argument("id", type=int)
    move.set_defaults(func=cmd_move)

    unscraped = sub.add_parser("unscraped", help="List ids that have no record yet")
    unscraped.set_defaults(func=cmd_unscraped)

    summary = sub.add_parser("summary", help="Rewrite the run summary")
    summary.set_defaults(func=cmd_summary)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        args.func(args)
    except Exception:  # pylint: disable=broad-except
        logger.exception("pokecache run failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
