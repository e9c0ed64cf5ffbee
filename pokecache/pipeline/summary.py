"""
Run summary for the pokecache dataset.

After a run, ``data/metadata.json`` records when the run finished, how many
Pokemon records are on disk and how often each language code appears in
their localized names.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pokecache.scraper.base import write_atomic
from pokecache.scraper.errors import PersistError
from pokecache.scraper.paths import CachePaths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSummary:
    timestamp: str
    creature_count: int
    language_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "creatureCount": self.creature_count,
            "languageCounts": dict(self.language_counts),
        }


def build_run_summary(paths: CachePaths, now: Optional[datetime] = None) -> RunSummary:
    """Scan every persisted Pokemon record and aggregate the counts."""
    languages: Counter[str] = Counter()
    total = 0
    for record_file in sorted(paths.data_pokemon_dir.glob("*.json")):
        try:
            with open(record_file, encoding="utf-8") as fh:
                record = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistError(record_file, str(exc)) from exc
        total += 1
        languages.update({name["lang"] for name in record.get("localizedNames", [])})

    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return RunSummary(
        timestamp=timestamp,
        creature_count=total,
        language_counts=dict(sorted(languages.items())),
    )


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    data = json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")
    write_atomic(path, iter([data]))


def write_run_summary(paths: CachePaths, now: Optional[datetime] = None) -> RunSummary:
    summary = build_run_summary(paths, now=now)
    try:
        _write_json(paths.metadata_file, summary.to_dict())
    except OSError as exc:
        raise PersistError(paths.metadata_file, str(exc)) from exc
    logger.info(
        "Run summary: %d Pokémon, %d languages → %s",
        summary.creature_count,
        len(summary.language_counts),
        paths.metadata_file,
    )
    return summary
