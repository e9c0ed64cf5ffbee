"""Scraping utilities exported for convenience."""

from .helpers import (
    find_foreign_name,
    language_name_to_code,
    next_sibling_of_tag,
    roman_to_int,
)
from .extractors import (
    extract_abilities_list,
    extract_move,
    extract_moves_list,
    extract_natures_list,
    extract_pokemon,
    extract_pokemon_index_list,
    extract_z_moves_list,
)

__all__ = [
    "find_foreign_name",
    "language_name_to_code",
    "next_sibling_of_tag",
    "roman_to_int",
    "extract_pokemon_index_list",
    "extract_pokemon",
    "extract_moves_list",
    "extract_move",
    "extract_natures_list",
    "extract_abilities_list",
    "extract_z_moves_list",
]
