"""
Cache layout for pokecache.

Three parallel tiers live under one base directory::

    {base}/html/            raw source pages (listings at the top level)
    {base}/html/pokemon/    {id}.html, {id}_learnset.html, {id}_img.html
    {base}/html/moves/      {id}.html
    {base}/data/            listing JSON + metadata.json
    {base}/data/pokemon/    {id}.json
    {base}/data/moves/      {id}.json
    {base}/assets/pokemon/  {id}.png

Entity kinds never share a directory, so independent lanes can write
concurrently without coordination.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CachePaths:
    """Maps every cacheable artifact to a file path under *base_dir*."""

    base_dir: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_dir", Path(self.base_dir))

    # ------------------------------------------------------------------
    # Tier roots
    # ------------------------------------------------------------------

    @property
    def html_dir(self) -> Path:
        return self.base_dir / "html"

    @property
    def html_pokemon_dir(self) -> Path:
        return self.html_dir / "pokemon"

    @property
    def html_moves_dir(self) -> Path:
        return self.html_dir / "moves"

    @property
    def data_dir(self) -> Path:
        return self.base_dir / "data"

    @property
    def data_pokemon_dir(self) -> Path:
        return self.data_dir / "pokemon"

    @property
    def data_moves_dir(self) -> Path:
        return self.data_dir / "moves"

    @property
    def assets_dir(self) -> Path:
        return self.base_dir / "assets"

    @property
    def assets_pokemon_dir(self) -> Path:
        return self.assets_dir / "pokemon"

    @property
    def metadata_file(self) -> Path:
        return self.data_dir / "metadata.json"

    # ------------------------------------------------------------------
    # Per-artifact keys
    # ------------------------------------------------------------------

    def listing_html(self, name: str) -> Path:
        return self.html_dir / f"{name}.html"

    def listing_data(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def pokemon_html(self, no: int, variant: str = "") -> Path:
        """``variant`` is ``""``, ``"learnset"`` or ``"img"``."""
        suffix = f"_{variant}" if variant else ""
        return self.html_pokemon_dir / f"{no}{suffix}.html"

    def pokemon_data(self, no: int) -> Path:
        return self.data_pokemon_dir / f"{no}.json"

    def pokemon_image(self, no: int) -> Path:
        return self.assets_pokemon_dir / f"{no}.png"

    def move_html(self, index_no: int) -> Path:
        return self.html_moves_dir / f"{index_no}.html"

    def move_data(self, index_no: int) -> Path:
        return self.data_moves_dir / f"{index_no}.json"

    def asset_ref(self, path: Path) -> str:
        """Reference stored in records: the asset path relative to the base dir."""
        return Path(path).relative_to(self.base_dir).as_posix()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def ensure_paths(self) -> None:
        """Create every cache directory that does not exist yet."""
        for directory in (
            self.html_dir,
            self.html_pokemon_dir,
            self.html_moves_dir,
            self.data_dir,
            self.data_pokemon_dir,
            self.data_moves_dir,
            self.assets_dir,
            self.assets_pokemon_dir,
        ):
            directory.mkdir(parents=True, exist_ok=True)
