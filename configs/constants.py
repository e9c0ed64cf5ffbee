"""
Constants
"""

# Ignore pylint warnings
# pylint: disable = line-too-long

import os


class Constants:
    """
    Constants configurations
    """

    SCRAPING_BASE_URL = os.getenv("SCRAPING_BASE_URL", "https://bulbapedia.bulbagarden.net")
    BASE_CACHE_DIR = os.getenv("BASE_CACHE_DIR", "./_pokecache")
    ITEM_DELAY_SECONDS = float(os.getenv("SCRAPE_ITEM_DELAY", "1.0"))
    USER_AGENT = "pokecache/1.0 (bulbapedia-dataset-scraper)"

    # Wiki pages the listings are discovered from, relative to SCRAPING_BASE_URL
    LISTING_PAGES = {
        "pokemon_index_list": "/wiki/List_of_Pok%C3%A9mon_by_National_Pok%C3%A9dex_number",
        "moves_list": "/wiki/List_of_moves",
        "natures_list": "/wiki/Nature",
        "abilities_list": "/wiki/Ability",
        "z_moves_list": "/wiki/Z-Move",
    }

    # Language names as shown in the "In other languages" tables -> ISO 639-1
    LANGUAGE_CODES = {
        "japanese": "ja",
        "french": "fr",
        "spanish": "es",
        "german": "de",
        "italian": "it",
        "korean": "ko",
        "thai": "th",
        "swedish": "sv",
        "arabic": "ar",
        "bulgarian": "bg",
        "hebrew": "he",
        "hindi": "hi",
        "lithuanian": "li",
        "brazilian portuguese": "pt",
        "portuguese": "pt",
        "russian": "ru",
        "mandarin chinese": "zh",
        "cantonese chinese": "zh",
        "albanian": "sq",
        "azerbaijani": "az",
        "greek": "el",
        "icelandic": "is",
        "indonesian": "id",
        "macedonian": "mk",
        "mongolian": "mn",
        "serbian": "sr",
        "turkish": "tr",
        "ukrainian": "uk",
    }

    ROMAN_NUMERALS = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}

    STATS = ("Attack", "Defense", "Speed", "Sp. Attack", "Sp. Defense")

    # Markers used by the wiki for "not applicable" in numeric columns
    DASH_MARKERS = ("—", "–", "-")
