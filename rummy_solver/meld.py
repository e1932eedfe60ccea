from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from .multiset import TileMultiset
from .rules import DEFAULT_RULES, Ruleset
from .tiles import JOKER, VALUES, Colour, Tile, TileSlot


class GroupKind(str, Enum):
    RUN = "RUN"
    SET = "SET"
    INVALID = "INVALID"


@dataclass(frozen=True)
class Group:
    """A valid group with its tiles in canonical arrangement."""

    kind: GroupKind
    tiles: Tuple[Tile, ...]

    def key(self) -> Tuple[int, ...]:
        return tuple(tile.tile_id for tile in self.tiles)

    def multiset(self) -> TileMultiset:
        return TileMultiset.from_iterable(self.tiles)

    def jokers(self) -> int:
        return sum(1 for tile in self.tiles if tile.is_joker())

    def slots(self) -> List[TileSlot]:
        normals = [t for t in self.tiles if not t.is_joker()]
        if self.kind == GroupKind.RUN:
            colour = normals[0].colour
            start = normals[0].number - self.tiles.index(normals[0])
            return [TileSlot(tile, colour, start + i) for i, tile in enumerate(self.tiles)]
        number = normals[0].number
        missing = iter(c for c in Colour if c not in {t.colour for t in normals})
        return [
            TileSlot(tile, next(missing) if tile.is_joker() else tile.colour, number)
            for tile in self.tiles
        ]

    def render(self) -> str:
        return " ".join(slot.render() for slot in self.slots())

    def __len__(self) -> int:
        return len(self.tiles)


def _split(tiles: Iterable[Tile]) -> Tuple[List[Tile], int]:
    normals = []
    jokers = 0
    for tile in tiles:
        if tile.is_joker():
            jokers += 1
        else:
            normals.append(tile)
    return sorted(normals), jokers


def _check_common(size: int, jokers: int, ruleset: Ruleset) -> Tuple[bool, str]:
    if size < ruleset.min_group_size:
        return False, "group too short"
    if jokers > size - 1:
        return False, "group needs at least one concrete tile"
    return True, ""


def _check_run(normals: List[Tile], jokers: int, ruleset: Ruleset) -> Tuple[bool, str]:
    size = len(normals) + jokers
    if size > VALUES:
        return False, "run too long"
    if len({t.colour for t in normals}) != 1:
        return False, "run must have same colour"
    numbers = [t.number for t in normals]
    if len(set(numbers)) != len(numbers):
        return False, "run must not duplicate number"
    if numbers[-1] - numbers[0] + 1 > size:
        return False, "run gaps exceed jokers"
    return True, ""


def _check_set(normals: List[Tile], jokers: int, ruleset: Ruleset) -> Tuple[bool, str]:
    size = len(normals) + jokers
    if size > min(ruleset.max_set_size, len(Colour)):
        return False, f"set must have at most {min(ruleset.max_set_size, len(Colour))} tiles"
    if len({t.number for t in normals}) != 1:
        return False, "set must share number"
    if len({t.colour for t in normals}) != len(normals):
        return False, "set colours must be distinct"
    return True, ""


def explain(tiles: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULES) -> Tuple[bool, str]:
    normals, jokers = _split(tiles)
    ok, reason = _check_common(len(normals) + jokers, jokers, ruleset)
    if not ok:
        return False, reason
    run_ok, run_reason = _check_run(normals, jokers, ruleset)
    if run_ok:
        return True, ""
    set_ok, set_reason = _check_set(normals, jokers, ruleset)
    if set_ok:
        return True, ""
    return False, f"not a run ({run_reason}); not a set ({set_reason})"


def classify(tiles: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULES) -> GroupKind:
    normals, jokers = _split(tiles)
    if not _check_common(len(normals) + jokers, jokers, ruleset)[0]:
        return GroupKind.INVALID
    if _check_run(normals, jokers, ruleset)[0]:
        return GroupKind.RUN
    if _check_set(normals, jokers, ruleset)[0]:
        return GroupKind.SET
    return GroupKind.INVALID


def is_valid(tiles: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULES) -> bool:
    return classify(tiles, ruleset) != GroupKind.INVALID


def _arrange_run(normals: List[Tile], jokers: int, ruleset: Ruleset) -> Tuple[Tile, ...]:
    # Internal gaps take jokers first; the rest extend upward, then downward.
    lo, hi = normals[0].number, normals[-1].number
    spare = jokers - ((hi - lo + 1) - len(normals))
    up = min(spare, VALUES - hi)
    start = lo - (spare - up)
    by_number = {t.number: t for t in normals}
    size = len(normals) + jokers
    return tuple(by_number.get(start + i, JOKER) for i in range(size))


def canonicalize(tiles: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULES) -> Group:
    kind = classify(tiles, ruleset)
    if kind == GroupKind.INVALID:
        _, reason = explain(tiles, ruleset)
        raise ValueError(f"invalid group: {reason}")
    normals, jokers = _split(tiles)
    if kind == GroupKind.RUN:
        return Group(kind, _arrange_run(normals, jokers, ruleset))
    return Group(kind, tuple(normals) + (JOKER,) * jokers)
