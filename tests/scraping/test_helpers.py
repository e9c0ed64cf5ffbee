import pytest
from bs4 import BeautifulSoup

from scraping.helpers import (
    clean_text,
    find_foreign_name,
    find_heading,
    first_per_key,
    is_dash,
    language_name_to_code,
    next_sibling_of_tag,
    parse_int,
    roman_to_int,
    sortable_table_in,
    strip_footnotes,
    unwrap_table,
)


@pytest.mark.parametrize(
    "numeral,expected",
    [
        ("I", 1),
        ("IV", 4),
        ("VIII", 8),
        ("IX", 9),
        ("XIV", 14),
        ("MCMXCIV", 1994),
        (" ix ", 9),
    ],
)
def test_roman_to_int(numeral, expected):
    assert roman_to_int(numeral) == expected


@pytest.mark.parametrize("numeral", ["", "—", "Gen 2", "IIa"])
def test_roman_to_int_unresolved_is_zero(numeral):
    assert roman_to_int(numeral) == 0


@pytest.mark.parametrize(
    "caption,expected",
    [
        ("ピカチュウ Pikachu", "ピカチュウ"),
        ("Pikachuピカチュウ", "ピカチュウ"),
        ("皮卡丘", "皮卡丘"),
        ("Pikachu", "Pikachu"),
        ("", ""),
    ],
)
def test_find_foreign_name(caption, expected):
    assert find_foreign_name(caption) == expected


def test_language_name_to_code_known_and_unknown():
    assert language_name_to_code("Japanese") == "ja"
    assert language_name_to_code(" german ") == "de"
    assert language_name_to_code("Brazilian Portuguese") == "pt"
    assert language_name_to_code("Klingon") == "Klingon"


def test_parse_int_reads_leading_number():
    assert parse_int("#0025", -1) == 25
    assert parse_int("100%", -1) == 100
    assert parse_int(" 35 ", -1) == 35
    assert parse_int("Evo.", 0) == 0
    assert parse_int("", -1) == -1
    assert parse_int(None, -1) == -1


def test_dash_and_footnote_markers():
    assert is_dash("—")
    assert is_dash(" – ")
    assert not is_dash("40")
    assert strip_footnotes("Struggle*") == "Struggle"
    assert strip_footnotes("1*") == "1"


def test_clean_text_handles_missing_tag():
    soup = BeautifulSoup("<p>  Static \n</p>", "lxml")
    assert clean_text(soup.find("p")) == "Static"
    assert clean_text(None) == ""


def test_next_sibling_of_tag_walks_past_other_elements():
    soup = BeautifulSoup(
        """
        <div>
          <h2 id="start">Start</h2>
          <p>intro</p>
          <table class="plain"><tr><td>a</td></tr></table>
          <table class="roundy"><tr><td>b</td></tr></table>
        </div>
        """,
        "lxml",
    )
    heading = soup.find(id="start")

    assert clean_text(next_sibling_of_tag(heading, "table")) == "a"
    assert clean_text(next_sibling_of_tag(heading, "table", "roundy")) == "b"
    assert next_sibling_of_tag(heading, "ul") is None
    assert next_sibling_of_tag(None, "table") is None


def test_find_heading_supports_both_heading_markups():
    soup = BeautifulSoup(
        """
        <div>
          <h3><span class="mw-headline" id="Legacy">Legacy</span></h3>
          <table><tr><td>legacy</td></tr></table>
          <div class="mw-heading mw-heading3"><h3 id="By_TM_and_TR">By TM</h3></div>
          <table><tr><td>current</td></tr></table>
        </div>
        """,
        "lxml",
    )

    legacy = find_heading(soup, "Legacy")
    current = find_heading(soup, id_prefix="By_TM")

    assert legacy.name == "h3"
    assert current.name == "div"
    assert clean_text(next_sibling_of_tag(legacy, "table")) == "legacy"
    assert clean_text(next_sibling_of_tag(current, "table")) == "current"
    assert find_heading(soup, "Missing") is None


def test_find_heading_requires_an_id():
    with pytest.raises(ValueError):
        find_heading(BeautifulSoup("<p></p>", "lxml"))


def test_unwrap_and_sortable_table_lookup():
    soup = BeautifulSoup(
        """
        <table id="outer"><tr><td>
          <table id="inner" class="sortable"><tr><td>x</td></tr></table>
        </td></tr></table>
        <table id="flat"><tr><td>y</td></tr></table>
        """,
        "lxml",
    )
    outer = soup.find(id="outer")
    flat = soup.find(id="flat")

    assert unwrap_table(outer)["id"] == "inner"
    assert unwrap_table(flat)["id"] == "flat"
    assert unwrap_table(None) is None
    assert sortable_table_in(outer)["id"] == "inner"
    assert sortable_table_in(soup.find(id="inner"))["id"] == "inner"
    assert sortable_table_in(flat) is None


def test_first_per_key_keeps_first_occurrence_in_order():
    items = [(201, "Unown A"), (1, "Bulbasaur"), (201, "Unown B"), (201, "Unown C")]
    assert first_per_key(items, key=lambda item: item[0]) == [(201, "Unown A"), (1, "Bulbasaur")]
