"""
Record types produced by the pokecache scrapers.

Every record is a frozen dataclass.  ``to_dict`` gives the JSON shape that is
written to the structured-record cache tier (camelCase keys) and
``from_dict`` reads it back, so a cache hit returns the same objects a fresh
scrape would.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


# ---------------------------------------------------------------------------
# Shared value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LocalizedName:
    """One language entry of an entity's name set."""

    lang: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"lang": self.lang, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LocalizedName":
        return cls(lang=data["lang"], value=data["value"])


def unique_names(names: Iterable[LocalizedName]) -> tuple[LocalizedName, ...]:
    """Drop later entries whose language code was already seen."""
    seen: set[str] = set()
    result = []
    for name in names:
        if name.lang in seen:
            continue
        seen.add(name.lang)
        result.append(name)
    return tuple(result)


def _names_to_list(names: Iterable[LocalizedName]) -> list[dict[str, str]]:
    return [n.to_dict() for n in names]


def _names_from_list(data: Iterable[dict[str, Any]]) -> tuple[LocalizedName, ...]:
    return tuple(LocalizedName.from_dict(n) for n in data)


class MoveCategory(str, Enum):
    PHYSICAL = "Physical"
    SPECIAL = "Special"
    STATUS = "Status"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, text: Optional[str]) -> "MoveCategory":
        """Map the wiki's category text (``???`` included) onto the enum."""
        for member in cls:
            if text and text.strip().lower() == member.value.lower():
                return member
        return cls.UNKNOWN


# ---------------------------------------------------------------------------
# Creatures
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BasicCreatureRef:
    """A Pokemon as discovered on the National Pokedex listing."""

    id: int
    name: str
    generation: int
    # Absolute URL of the Pokemon's own wiki page
    source_url: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "generation": self.generation,
            "sourceUrl": self.source_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BasicCreatureRef":
        return cls(
            id=data["id"],
            name=data["name"],
            generation=data["generation"],
            source_url=data["sourceUrl"],
        )


@dataclass(frozen=True)
class LevelUpMove:
    level: int
    move_name: str

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "moveName": self.move_name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LevelUpMove":
        return cls(level=data["level"], move_name=data["moveName"])


@dataclass(frozen=True)
class TechnicalMove:
    item_number: int
    move_name: str

    def to_dict(self) -> dict[str, Any]:
        return {"itemNumber": self.item_number, "moveName": self.move_name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TechnicalMove":
        return cls(item_number=data["itemNumber"], move_name=data["moveName"])


@dataclass(frozen=True)
class CreatureMoves:
    level_up: tuple[LevelUpMove, ...] = ()
    technical: tuple[TechnicalMove, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "levelUp": [m.to_dict() for m in self.level_up],
            "technical": [m.to_dict() for m in self.technical],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreatureMoves":
        return cls(
            level_up=tuple(LevelUpMove.from_dict(m) for m in data.get("levelUp", [])),
            technical=tuple(TechnicalMove.from_dict(m) for m in data.get("technical", [])),
        )


@dataclass(frozen=True)
class CreatureRecord:
    """Fully scraped Pokemon, keyed by national dex ``id``."""

    id: int
    # First entry is always the canonical English name
    localized_names: tuple[LocalizedName, ...]
    category: str
    types: tuple[str, ...]
    moves: CreatureMoves
    # Asset path relative to the cache base dir
    image_ref: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "localizedNames": _names_to_list(self.localized_names),
            "category": self.category,
            "types": list(self.types),
            "moves": self.moves.to_dict(),
            "imageRef": self.image_ref,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreatureRecord":
        return cls(
            id=data["id"],
            localized_names=_names_from_list(data["localizedNames"]),
            category=data["category"],
            types=tuple(data["types"]),
            moves=CreatureMoves.from_dict(data["moves"]),
            image_ref=data["imageRef"],
        )


# ---------------------------------------------------------------------------
# Moves
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BasicMoveRef:
    """A move row from the move listing.  ``-1`` means "not applicable"."""

    index_no: int
    localized_names: tuple[LocalizedName, ...]
    type: str
    category: MoveCategory
    pp: int
    power: int
    accuracy: int
    generation: int
    source_url: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "indexNo": self.index_no,
            "localizedNames": _names_to_list(self.localized_names),
            "type": self.type,
            "category": self.category.value,
            "pp": self.pp,
            "power": self.power,
            "accuracy": self.accuracy,
            "generation": self.generation,
            "sourceUrl": self.source_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BasicMoveRef":
        return cls(
            index_no=data["indexNo"],
            localized_names=_names_from_list(data["localizedNames"]),
            type=data["type"],
            category=MoveCategory.parse(data["category"]),
            pp=data["pp"],
            power=data["power"],
            accuracy=data["accuracy"],
            generation=data["generation"],
            source_url=data["sourceUrl"],
        )

    @property
    def name(self) -> str:
        return self.localized_names[0].value if self.localized_names else ""


@dataclass(frozen=True)
class MoveDescription:
    text: str
    # Short names of the games sharing this flavor text, in page order
    applies_to_games: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "appliesToGames": list(self.applies_to_games)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MoveDescription":
        return cls(text=data["text"], applies_to_games=tuple(data["appliesToGames"]))


@dataclass(frozen=True)
class MoveRecord(BasicMoveRef):
    descriptions: tuple[MoveDescription, ...] = field(default=())

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["descriptions"] = [d.to_dict() for d in self.descriptions]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MoveRecord":
        basic = BasicMoveRef.from_dict(data)
        return cls.from_basic(
            basic, tuple(MoveDescription.from_dict(d) for d in data.get("descriptions", []))
        )

    @classmethod
    def from_basic(
        cls, basic: BasicMoveRef, descriptions: Iterable[MoveDescription]
    ) -> "MoveRecord":
        return cls(
            index_no=basic.index_no,
            localized_names=basic.localized_names,
            type=basic.type,
            category=basic.category,
            pp=basic.pp,
            power=basic.power,
            accuracy=basic.accuracy,
            generation=basic.generation,
            source_url=basic.source_url,
            descriptions=tuple(descriptions),
        )


# ---------------------------------------------------------------------------
# Natures / abilities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NatureRecord:
    """``increased_stat``/``decreased_stat`` are both None for neutral natures."""

    index_no: int
    localized_names: tuple[LocalizedName, ...]
    increased_stat: Optional[str]
    decreased_stat: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "indexNo": self.index_no,
            "localizedNames": _names_to_list(self.localized_names),
            "increasedStat": self.increased_stat,
            "decreasedStat": self.decreased_stat,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NatureRecord":
        return cls(
            index_no=data["indexNo"],
            localized_names=_names_from_list(data["localizedNames"]),
            increased_stat=data["increasedStat"],
            decreased_stat=data["decreasedStat"],
        )


@dataclass(frozen=True)
class AbilityRecord:
    index_no: int
    localized_names: tuple[LocalizedName, ...]
    description: str
    generation: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "indexNo": self.index_no,
            "localizedNames": _names_to_list(self.localized_names),
            "description": self.description,
            "generation": self.generation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AbilityRecord":
        return cls(
            index_no=data["indexNo"],
            localized_names=_names_from_list(data["localizedNames"]),
            description=data["description"],
            generation=data["generation"],
        )


# ---------------------------------------------------------------------------
# Derived, never persisted
# ---------------------------------------------------------------------------


@dataclass
class UnscrapedDiff:
    """Requested listing entries whose detail record is not cached yet."""

    creatures: list[BasicCreatureRef] = field(default_factory=list)
    moves: list[BasicMoveRef] = field(default_factory=list)
