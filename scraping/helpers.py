"""
Script contains functions used in scraping
"""

# Ignore pylint warnings
# pylint: disable=line-too-long

import re
from typing import Callable, Hashable, Iterable, List, Optional, TypeVar

from bs4 import BeautifulSoup
from bs4.element import Tag

from configs.constants import Constants

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

T = TypeVar("T")


def clean_text(tag: Optional[Tag]) -> str:
    """Text content of a tag with surrounding whitespace removed.

    Args:
        tag (Tag): Element to read, may be None.

    Returns:
        str: The stripped text, or an empty string for a missing tag.
    """
    if tag is None:
        return ""
    return tag.get_text().strip()


def strip_footnotes(text: str) -> str:
    """Removes the ``*`` footnote markers the wiki appends to table values."""
    return text.replace("*", "").strip()


def is_dash(text: str) -> bool:
    """Whether a cell holds the "not applicable" dash marker."""
    return text.strip() in Constants.DASH_MARKERS


def parse_int(text: Optional[str], default: int) -> int:
    """Parses the leading integer of ``text``, falling back to ``default``.

    Args:
        text (str): Cell text such as ``"#0025"``, ``"100%"`` or ``"Evo."``.
        default (int): Value returned when no integer can be read.

    Returns:
        int: The parsed integer.
    """
    match = re.match(r"\s*#?\s*(-?\d+)", text or "")
    if match is None:
        return default
    return int(match.group(1))


def roman_to_int(text: str) -> int:
    """Converts a roman numeral (e.g. ``VIII``) to its integer value.

    Symbols are read left to right; a symbol smaller than the one after it is
    subtracted, every other symbol is added. Empty input or any character that
    is not a roman numeral yields 0, which callers treat as "unresolved".

    Args:
        text (str): Roman numeral string.

    Returns:
        int: Integer equivalent.
    """
    symbols = text.strip().upper()
    if not symbols or any(symbol not in Constants.ROMAN_NUMERALS for symbol in symbols):
        return 0

    values = [Constants.ROMAN_NUMERALS[symbol] for symbol in symbols]
    total = 0
    for idx, value in enumerate(values):
        if idx + 1 < len(values) and value < values[idx + 1]:
            total -= value
        else:
            total += value
    return total


def language_name_to_code(name: str) -> str:
    """Maps a language name to its ISO 639-1 code, or returns it unchanged."""
    return Constants.LANGUAGE_CODES.get(name.strip().lower(), name)


def _is_foreign(char: str) -> bool:
    return char > "z"


def find_foreign_name(text: str) -> str:
    """Isolates the non-Latin name from an "In other languages" caption.

    Captions mix the foreign name with a romanised annotation and no fixed
    delimiter, e.g. ``"ピカチュウ Pikachu"`` or ``"Pikachuピカチュウ"``.

    Args:
        text (str): The caption text.

    Returns:
        str: The leading run of characters above ``'z'`` when the caption
        starts with one, else the trailing run when it ends with one, else the
        caption unchanged (so accented Latin names are kept whole).
    """
    if not text:
        return text

    if _is_foreign(text[0]):
        run = []
        for char in text:
            if not _is_foreign(char):
                break
            run.append(char)
        return "".join(run)

    if _is_foreign(text[-1]):
        start = len(text)
        while start > 0 and _is_foreign(text[start - 1]):
            start -= 1
        return text[start:]

    return text


def next_sibling_of_tag(root: Optional[Tag], tag: str, optional_class: Optional[str] = None) -> Optional[Tag]:
    """Walks forward through the siblings of ``root`` to the first ``tag`` element.

    Args:
        root (Tag): Element to start from, usually a section heading.
        tag (str): Tag name to look for.
        optional_class (str): When given, the sibling must also carry this class.

    Returns:
        Tag: The matching sibling, or None when the parent runs out first.
    """
    if root is None:
        return None
    if optional_class:
        return root.find_next_sibling(tag, class_=optional_class)
    return root.find_next_sibling(tag)


def heading_of(anchor: Optional[Tag]) -> Optional[Tag]:
    """Climbs from a section id anchor to the element whose siblings hold the content.

    Handles the legacy ``<h2><span class="mw-headline" id=..>`` markup as well
    as the newer ``<div class="mw-heading"><h2 id=..>`` wrapper.
    """
    if anchor is None:
        return None
    node = anchor
    if node.name not in HEADING_TAGS and node.parent is not None and node.parent.name in HEADING_TAGS:
        node = node.parent
    if node.parent is not None and "mw-heading" in (node.parent.get("class") or []):
        node = node.parent
    return node


def find_heading(soup: BeautifulSoup, anchor_id: Optional[str] = None, id_prefix: Optional[str] = None) -> Optional[Tag]:
    """Finds a section heading by its exact id or by an id prefix."""
    if anchor_id is not None:
        anchor = soup.find(id=anchor_id)
    elif id_prefix is not None:
        anchor = soup.find(id=re.compile("^" + re.escape(id_prefix)))
    else:
        raise ValueError("find_heading needs anchor_id or id_prefix")
    return heading_of(anchor)


def unwrap_table(table: Optional[Tag]) -> Optional[Tag]:
    """Returns the inner table of a decorative wrapper table, or the table itself."""
    if table is None:
        return None
    inner = table.find("table")
    return inner if inner is not None else table


def sortable_table_in(container: Optional[Tag]) -> Optional[Tag]:
    """The ``table.sortable`` at or below ``container``."""
    if container is None:
        return None
    if "sortable" in (container.get("class") or []):
        return container
    return container.select_one("table.sortable")


def row_cells(row: Optional[Tag]) -> List[Tag]:
    """Direct ``td``/``th`` children of a table row."""
    if row is None:
        return []
    return row.find_all(["td", "th"], recursive=False)


def is_hidden(tag: Tag) -> bool:
    style = (tag.get("style") or "").replace(" ", "").lower()
    return "display:none" in style


def first_per_key(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Keeps the first item for every key, preserving order."""
    seen = set()
    result = []
    for item in items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        result.append(item)
    return result
