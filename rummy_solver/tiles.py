from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence

VALUES = 13
JOKER_ID = 52
MAX_TILE_ID = 52
MULTISET_SIZE = 53

JOKER_CHAR = "j"
TILES_PER_LINE = 10


class TileParseError(ValueError):
    """Raised when a textual tile token does not follow the tile grammar."""


class Colour(IntEnum):
    RED = 0
    BLUE = 1
    YELLOW = 2
    BLACK = 3

    @property
    def char(self) -> str:
        return _COLOUR_CHARS[self]

    @classmethod
    def from_char(cls, char: str) -> "Colour":
        for colour, c in _COLOUR_CHARS.items():
            if c == char:
                return colour
        raise TileParseError("Invalid colour")


_COLOUR_CHARS = {
    Colour.RED: "r",
    Colour.BLUE: "b",
    Colour.YELLOW: "y",
    Colour.BLACK: "x",
}


def tile_id_of(colour: int, number: int) -> int:
    if not 1 <= number <= VALUES:
        raise ValueError(f"number must be in [1, {VALUES}], got {number}")
    return int(colour) * VALUES + (number - 1)


def colour_of(tile_id: int) -> int:
    if tile_id == JOKER_ID:
        raise ValueError("Joker has no inherent colour")
    return tile_id // VALUES


def number_of(tile_id: int) -> int:
    if tile_id == JOKER_ID:
        raise ValueError("Joker has no inherent number")
    return (tile_id % VALUES) + 1


@dataclass(frozen=True, order=True)
class Tile:
    """A physical tile, identified by its dense id.

    Normal tiles map ``(colour, number)`` to ``colour * 13 + number - 1`` and the
    Joker is ``JOKER_ID``, so ordering by id is the canonical tile order:
    Normals lexicographically by (colour, number), then Jokers.
    """

    tile_id: int

    def __post_init__(self) -> None:
        if not 0 <= self.tile_id <= MAX_TILE_ID:
            raise ValueError(f"tile id out of range: {self.tile_id}")

    @classmethod
    def normal(cls, colour: Colour, number: int) -> "Tile":
        return cls(tile_id_of(colour, number))

    @classmethod
    def joker(cls) -> "Tile":
        return cls(JOKER_ID)

    def is_joker(self) -> bool:
        return self.tile_id == JOKER_ID

    @property
    def colour(self) -> Optional[Colour]:
        if self.is_joker():
            return None
        return Colour(colour_of(self.tile_id))

    @property
    def number(self) -> Optional[int]:
        if self.is_joker():
            return None
        return number_of(self.tile_id)

    @classmethod
    def from_str(cls, string: str) -> "Tile":
        string = string.strip()
        if not string:
            raise TileParseError("No string")
        if len(string) == 1:
            if string == JOKER_CHAR:
                return JOKER
            raise TileParseError("Not joker")
        colour = Colour.from_char(string[0])
        digits = string[1:]
        if not (digits.isascii() and digits.isdigit()):
            raise TileParseError("Invalid number")
        number = int(digits)
        if not 1 <= number <= VALUES:
            raise TileParseError("Number out of range")
        return cls.normal(colour, number)

    def render(self) -> str:
        return f"{self.token()} "

    def token(self) -> str:
        if self.is_joker():
            return JOKER_CHAR
        return f"{self.colour.char}{self.number}"

    def __str__(self) -> str:
        return self.token()


JOKER = Tile(JOKER_ID)


@dataclass(frozen=True)
class TileSlot:
    """A tile in a group together with the (colour, number) it stands for."""

    tile: Tile
    assigned_colour: Colour
    assigned_number: int

    def is_joker(self) -> bool:
        return self.tile.is_joker()

    def render(self) -> str:
        if self.is_joker():
            return f"{JOKER_CHAR}({self.assigned_colour.char}{self.assigned_number})"
        return self.tile.token()


def parse_tiles(text: str) -> List[Tile]:
    return [Tile.from_str(token) for token in text.split()]


def format_list(tiles: Sequence[Tile]) -> str:
    lines = []
    for start in range(0, len(tiles), TILES_PER_LINE):
        chunk = tiles[start : start + TILES_PER_LINE]
        lines.append("".join(tile.render() for tile in chunk) + "\n")
    return "".join(lines)
