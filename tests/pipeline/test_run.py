import json

import pytest

from conftest import BASE_URL, FakeSession, listing_pages, load_fixture_text, pikachu_pages
from pokecache.pipeline.run import build_lanes, run_full_scrape, run_lanes
from pokecache.scraper.bulbapedia import BulbapediaScraper
from pokecache.scraper.errors import FetchError
from pokecache.scraper.models import UnscrapedDiff

MOVE_URLS = [
    f"{BASE_URL}/wiki/Pound_(move)",
    f"{BASE_URL}/wiki/Thunder_Shock_(move)",
    f"{BASE_URL}/wiki/Thunder_Wave_(move)",
    f"{BASE_URL}/wiki/Struggle_(move)",
]


@pytest.fixture
def shared_session(monkeypatch) -> FakeSession:
    session = FakeSession()
    monkeypatch.setattr(BulbapediaScraper, "_build_session", lambda self: session)
    return session


def _full_site(session: FakeSession) -> None:
    session.pages.update(listing_pages())
    session.pages.update(pikachu_pages())
    for url in MOVE_URLS:
        session.pages[url] = load_fixture_text("move_84.html")


def _seed_bulbasaur(config) -> None:
    config.paths.ensure_paths()
    record = {
        "id": 1,
        "localizedNames": [{"lang": "en", "value": "Bulbasaur"}, {"lang": "ja", "value": "フシギダネ"}],
        "category": "Seed Pokémon",
        "types": ["Grass", "Poison"],
        "moves": {"levelUp": [], "technical": []},
        "imageRef": "assets/pokemon/1.png",
    }
    config.paths.pokemon_data(1).write_text(json.dumps(record), encoding="utf-8")
    config.paths.pokemon_image(1).write_bytes(b"png")


@pytest.mark.parametrize("concurrent", [True, False])
def test_run_full_scrape_only_fetches_what_is_missing(config, shared_session, concurrent):
    _full_site(shared_session)
    _seed_bulbasaur(config)

    summary = run_full_scrape(config, concurrent=concurrent)

    assert "https://bulbapedia.bulbagarden.net/wiki/Bulbasaur_(Pok%C3%A9mon)" not in shared_session.calls
    assert config.paths.pokemon_data(25).is_file()
    assert config.paths.pokemon_image(25).is_file()
    assert sorted(p.name for p in config.paths.data_moves_dir.glob("*.json")) == [
        "1.json",
        "165.json",
        "84.json",
        "86.json",
    ]
    for listing in ("natures_list", "abilities_list", "z_moves_list"):
        assert config.paths.listing_data(listing).is_file()

    assert summary.creature_count == 2
    assert summary.language_counts["en"] == 2
    assert summary.language_counts["ja"] == 2
    assert json.loads(config.paths.metadata_file.read_text(encoding="utf-8"))["creatureCount"] == 2


def test_second_run_makes_no_requests(config, shared_session):
    _full_site(shared_session)
    _seed_bulbasaur(config)
    run_full_scrape(config)
    shared_session.calls.clear()

    run_full_scrape(config)

    assert shared_session.calls == []


def test_failing_lane_does_not_stop_the_others(config, shared_session):
    _full_site(shared_session)
    del shared_session.pages[MOVE_URLS[1]]
    _seed_bulbasaur(config)
    scraper = BulbapediaScraper(config)
    unscraped = scraper.get_unscraped(scraper.scrape_pokemon_index_list(), scraper.scrape_moves_list())

    with pytest.raises(FetchError):
        run_lanes(config, build_lanes(unscraped))

    # The move lane stopped at Thunder Shock, everything before it is kept
    assert scraper.is_move_scraped(1)
    assert not scraper.is_move_scraped(84)
    assert not scraper.is_move_scraped(86)
    # Independent lanes ran to completion
    assert scraper.is_pokemon_scraped(25)
    assert scraper.is_listing_cached("abilities_list")
    assert scraper.is_listing_cached("z_moves_list")


def test_build_lanes_cover_every_entity_kind():
    lanes = build_lanes(UnscrapedDiff())

    assert set(lanes) == {"pokemon", "moves", "natures", "abilities", "z_moves"}


def test_run_lanes_gives_each_lane_its_own_scraper(config, shared_session):
    seen = []
    lanes = {name: seen.append for name in ("a", "b", "c")}

    run_lanes(config, lanes)

    assert len(seen) == 3
    assert len({id(scraper) for scraper in seen}) == 3
