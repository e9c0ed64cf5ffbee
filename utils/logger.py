"""
Script contains logging setup for the pokecache scraper
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

logger = logging.getLogger(name="pokecache")


def setup_logging(verbose: bool = False) -> None:
    """Configure console logging; DEBUG shows per-item cache hits."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
    )
    # urllib3 is chatty at DEBUG about every pooled connection
    logging.getLogger("urllib3").setLevel(logging.WARNING)
