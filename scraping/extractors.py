"""
Extractors turning parsed Bulbapedia pages into pokecache records.

Every function here is pure: it takes a parsed document (plus the values it
cannot read from the page, such as the base URL) and returns records.  All
fetching and caching happens in ``pokecache.scraper.bulbapedia``.

Tables are located by a weak structural contract: find the section heading,
then walk its siblings to the next ``<table>``.  Some generations of the wiki
wrap the data table in a decorative outer table and some do not, which is why
``unwrap_table`` / ``sortable_table_in`` are applied after the walk.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from configs.constants import Constants
from pokecache.scraper.errors import ExtractionError
from pokecache.scraper.models import (
    AbilityRecord,
    BasicCreatureRef,
    BasicMoveRef,
    CreatureMoves,
    CreatureRecord,
    LevelUpMove,
    LocalizedName,
    MoveCategory,
    MoveDescription,
    MoveRecord,
    NatureRecord,
    TechnicalMove,
    unique_names,
)
from scraping.helpers import (
    clean_text,
    find_foreign_name,
    find_heading,
    first_per_key,
    heading_of,
    is_dash,
    is_hidden,
    language_name_to_code,
    next_sibling_of_tag,
    parse_int,
    roman_to_int,
    row_cells,
    sortable_table_in,
    strip_footnotes,
    unwrap_table,
)

logger = logging.getLogger(__name__)

GENERATION_ANCHOR = re.compile(r"^Generation")

# Learnset rows carry 7 cells; split tables add one leading game column
LEARNSET_ROW_CELLS = 7


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------


def extract_pokemon_index_list(soup: BeautifulSoup, base_url: str) -> list[BasicCreatureRef]:
    """
    Read the National Pokedex listing.

    The page has one ``Generation <roman>`` heading per generation, each
    followed by a table.  Alternate forms repeat the dex number; only the
    first row per number is kept, forms are left to the detail scrape.
    """
    refs: list[BasicCreatureRef] = []
    for anchor in soup.find_all(id=GENERATION_ANCHOR):
        generation = roman_to_int(clean_text(anchor).replace("Generation", ""))
        table = next_sibling_of_tag(heading_of(anchor), "table")
        if table is None:
            logger.warning("No table after heading '%s'", clean_text(anchor))
            continue

        for row in table.find_all("tr")[1:]:
            cells = row_cells(row)
            if len(cells) < 4:
                continue
            link = cells[3].find("a")
            refs.append(
                BasicCreatureRef(
                    id=parse_int(clean_text(cells[1]).replace("#", ""), -1),
                    name=clean_text(cells[3]),
                    generation=generation,
                    source_url=urljoin(base_url, link.get("href", "")) if link else "",
                )
            )

    return first_per_key(refs, key=lambda ref: ref.id)


def _moves_table(soup: BeautifulSoup) -> Optional[Tag]:
    table = next_sibling_of_tag(find_heading(soup, "List_of_moves"), "table")
    if table is not None:
        return unwrap_table(table)
    return soup.select_one("table table")


def extract_moves_list(soup: BeautifulSoup, base_url: str) -> list[BasicMoveRef]:
    """
    Read the move listing.

    Columns: index | name | type | category | contest | PP | power |
    accuracy | generation.  ``—`` in power or accuracy becomes -1.
    """
    table = _moves_table(soup)
    if table is None:
        logger.warning("Move list table not found")
        return []

    moves: list[BasicMoveRef] = []
    for row in table.find_all("tr"):
        cells = row.find_all("td")
        if len(cells) < 9:
            continue
        texts = [strip_footnotes(clean_text(cell)) for cell in cells]
        link = cells[1].find("a")

        power = -1 if is_dash(texts[6]) else parse_int(texts[6], -1)
        accuracy = -1 if is_dash(texts[7]) else parse_int(texts[7].replace("%", ""), -1)

        moves.append(
            BasicMoveRef(
                index_no=parse_int(texts[0], -1),
                localized_names=(LocalizedName("en", texts[1]),),
                type=texts[2],
                category=MoveCategory.parse(texts[3]),
                pp=parse_int(texts[5], -1),
                power=power,
                accuracy=accuracy,
                generation=roman_to_int(texts[8]),
                source_url=urljoin(base_url, link.get("href", "")) if link else "",
            )
        )
    return moves


def _stat(text: str, nature: str) -> Optional[str]:
    if is_dash(text):
        return None
    if text not in Constants.STATS:
        logger.warning("Nature '%s' has unknown stat '%s'; ignoring it", nature, text)
        return None
    return text


def extract_natures_list(soup: BeautifulSoup) -> list[NatureRecord]:
    """
    Read the nature table: index | English | Japanese | increased | decreased.

    ``—`` in a stat column means "no stat", and so does anything outside
    ``Constants.STATS``.  A nature whose increased and decreased stat
    coincide, or that has only one of them, is neutral and stored with both
    set to None.
    """
    table = soup.select_one("table.sortable")
    if table is None:
        logger.warning("Nature table not found")
        return []

    natures: list[NatureRecord] = []
    for row in table.find_all("tr"):
        if row.find("td") is None:
            continue
        texts = [clean_text(cell) for cell in row.find_all(["td", "th"])]
        if len(texts) < 5 or not texts[0]:
            continue

        increased = _stat(texts[3], texts[1])
        decreased = _stat(texts[4], texts[1])
        if increased == decreased:
            increased = decreased = None
        elif increased is None or decreased is None:
            logger.warning(
                "Nature '%s' has only one stat set (%s / %s); treating it as neutral",
                texts[1], increased, decreased,
            )
            increased = decreased = None

        natures.append(
            NatureRecord(
                index_no=parse_int(texts[0], -1),
                localized_names=(LocalizedName("en", texts[1]), LocalizedName("ja", texts[2])),
                increased_stat=increased,
                decreased_stat=decreased,
            )
        )
    return natures


def extract_abilities_list(soup: BeautifulSoup) -> list[AbilityRecord]:
    """
    Read the ability table: index | name | description | generation.

    Rows whose generation cannot be resolved are dropped; the result is
    sorted by index.
    """
    table = unwrap_table(next_sibling_of_tag(find_heading(soup, "List_of_Abilities"), "table"))
    if table is None:
        logger.warning("Ability table not found")
        return []

    abilities: list[AbilityRecord] = []
    for row in table.find_all("tr")[1:]:
        texts = [clean_text(cell) for cell in row.find_all(["td", "th"])]
        if len(texts) < 4 or not texts[0]:
            continue
        ability = AbilityRecord(
            index_no=parse_int(texts[0], -1),
            localized_names=(LocalizedName("en", texts[1]),),
            description=texts[2],
            generation=roman_to_int(texts[3]),
        )
        if ability.generation:
            abilities.append(ability)

    abilities.sort(key=lambda a: a.index_no)
    return abilities


def extract_z_moves_list(soup: BeautifulSoup) -> list[str]:
    """
    Type-based Z-Move names followed by species-specific ones.

    The two lists are concatenated as-is; a name present in both stays twice.
    """
    typed: list[str] = []
    table = unwrap_table(next_sibling_of_tag(find_heading(soup, "List_of_Z-Moves"), "table"))
    if table is not None:
        for row in table.find_all("tr"):
            cell = row.find("td")
            if cell is None:
                continue
            typed.append(clean_text(cell.find("a")))
    else:
        logger.warning("Type-based Z-Move table not found")

    specific: list[str] = []
    table = unwrap_table(next_sibling_of_tag(find_heading(soup, id_prefix="For_specific_Pok"), "table"))
    if table is not None:
        for row in table.find_all("tr"):
            cells = row.find_all("td")
            if len(cells) > 1:
                specific.append(clean_text(cells[1].find("a")))
    else:
        logger.warning("Species-specific Z-Move table not found")

    return typed + specific


# ---------------------------------------------------------------------------
# Pokemon detail
# ---------------------------------------------------------------------------


def find_info_table(soup: BeautifulSoup) -> Optional[Tag]:
    """The right-floated ``table.roundy`` info box of a Pokemon page."""
    for table in soup.select("table.roundy"):
        style = (table.get("style") or "").replace(" ", "").lower()
        if "float:right" in style:
            return table
    return None


def find_pokemon_tables(soup: BeautifulSoup, level_up_anchor: str = "Learnset") -> tuple[Optional[Tag], Optional[Tag]]:
    """
    Locate the level-up and TM tables.

    ``level_up_anchor`` is ``"Learnset"`` on the Pokemon's own page and
    ``"By_leveling_up"`` on a generation learnset page.
    """
    level_up = sortable_table_in(next_sibling_of_tag(find_heading(soup, level_up_anchor), "table"))
    technical = sortable_table_in(next_sibling_of_tag(find_heading(soup, id_prefix="By_TM"), "table"))
    return level_up, technical


def find_latest_learnset_link(soup: BeautifulSoup, base_url: str, source: Optional[str] = None) -> str:
    """URL of the newest generation learnset page linked from a Pokemon page."""
    anchor = soup.select_one('a[title$=" learnset"]:last-child')
    if anchor is None or not anchor.get("href"):
        raise ExtractionError("latest-generation learnset link", source)
    return urljoin(base_url, anchor["href"])


def _localized_names(soup: BeautifulSoup, english_name: str) -> tuple[LocalizedName, ...]:
    names = [LocalizedName("en", english_name)]
    wrapper = next_sibling_of_tag(find_heading(soup, "In_other_languages"), "table", "roundy")
    if wrapper is None:
        return tuple(names)

    for table in wrapper.find_all("table"):
        for row in table.find_all("tr"):
            if row.find("th") is not None:
                continue
            cells = row_cells(row)
            if len(cells) != 3:
                continue
            names.append(
                LocalizedName(
                    lang=language_name_to_code(clean_text(cells[0])),
                    value=find_foreign_name(strip_footnotes(clean_text(cells[1]))),
                )
            )
    return unique_names(names)


def _category(info_table: Tag) -> str:
    link = info_table.select_one('a[title="Pokémon category"]')
    if link is None:
        return ""
    return clean_text(link.find(True))


def _types(info_table: Tag) -> tuple[str, ...]:
    header = info_table.select_one('a[title="Type"]')
    if header is None or header.parent is None:
        return ()
    holder = header.parent.find_next_sibling()
    first_row = holder.find("tr") if holder is not None else None
    visible = [cell for cell in row_cells(first_row) if not is_hidden(cell)]
    if not visible:
        return ()

    types = []
    for cell in visible[0].find_all("td"):
        if is_hidden(cell):
            continue
        name = clean_text(cell.select_one('a[title$=" (type)"] span'))
        if name:
            types.append(name)
    return tuple(types)


def _level_up_moves(table: Optional[Tag]) -> tuple[LevelUpMove, ...]:
    if table is None:
        return ()
    moves = []
    for row in table.find_all("tr"):
        cells = row.find_all("td")
        if not cells:
            continue
        if len(cells) > LEARNSET_ROW_CELLS:
            cells = cells[1:]
        if len(cells) < 2:
            continue
        level_cell = cells[0].find("span") or cells[0]
        moves.append(LevelUpMove(level=parse_int(clean_text(level_cell), 0), move_name=clean_text(cells[1])))
    return tuple(moves)


def _technical_moves(table: Optional[Tag]) -> tuple[TechnicalMove, ...]:
    if table is None:
        return ()
    moves = []
    for row in table.find_all("tr"):
        cells = row.find_all("td")
        if len(cells) < 3:
            continue
        number_cell = cells[1].find("span") or cells[1]
        # "TM10" -> 10
        number = parse_int(clean_text(number_cell)[2:], 0)
        moves.append(TechnicalMove(item_number=number, move_name=clean_text(cells[2])))
    return tuple(moves)


def extract_pokemon(
    soup: BeautifulSoup,
    ref: BasicCreatureRef,
    level_up_table: Optional[Tag],
    technical_table: Optional[Tag],
    image_ref: str,
) -> CreatureRecord:
    """
    Build the full record for one Pokemon.

    The move tables are passed in because they may come from the separate
    learnset page rather than ``soup``.
    """
    info_table = find_info_table(soup)
    if info_table is None:
        raise ExtractionError("info box (right-floated table.roundy)", ref.source_url)

    return CreatureRecord(
        id=ref.id,
        localized_names=_localized_names(soup, ref.name),
        category=_category(info_table),
        types=_types(info_table),
        moves=CreatureMoves(
            level_up=_level_up_moves(level_up_table),
            technical=_technical_moves(technical_table),
        ),
        image_ref=image_ref,
    )


def find_image_page_url(soup: BeautifulSoup, base_url: str, source: Optional[str] = None) -> str:
    """URL of the file viewer page for the artwork in the info box."""
    info_table = find_info_table(soup)
    img = info_table.select_one('td[colspan="4"] img') if info_table is not None else None
    anchor = img.parent if img is not None else None
    if anchor is None or anchor.name != "a" or not anchor.get("href"):
        raise ExtractionError("artwork link (td[colspan=4] a > img)", source)
    return urljoin(base_url, anchor["href"])


def extract_full_image_url(soup: BeautifulSoup, page_url: str) -> str:
    """Real asset URL from a file viewer page (links are protocol-relative)."""
    anchor = soup.select_one("div.fullImageLink a")
    if anchor is None or not anchor.get("href"):
        raise ExtractionError("full image link (div.fullImageLink a)", page_url)
    return urljoin(page_url, anchor["href"])


# ---------------------------------------------------------------------------
# Move detail
# ---------------------------------------------------------------------------


def extract_move(soup: BeautifulSoup, ref: BasicMoveRef) -> MoveRecord:
    """Attach the flavor text descriptions of a move page to its listing row."""
    heading = find_heading(soup, "Description")
    if heading is None:
        raise ExtractionError("Description heading", ref.source_url)

    descriptions = []
    table = unwrap_table(next_sibling_of_tag(heading, "table"))
    if table is not None:
        for row in table.find_all("tr"):
            cells = row.find_all("td")
            if len(cells) < 2:
                continue
            games = first_per_key((a["title"] for a in cells[0].select("a[title]")), key=lambda title: title)
            descriptions.append(MoveDescription(text=clean_text(cells[1]), applies_to_games=tuple(games)))

    return MoveRecord.from_basic(ref, descriptions)
