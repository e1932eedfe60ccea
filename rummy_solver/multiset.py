from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

import structlog

from .rules import Ruleset
from .tiles import JOKER_ID, MULTISET_SIZE, Tile

logger = structlog.get_logger(__name__)


def _validate_counts(counts: Sequence[int]) -> None:
    if len(counts) != MULTISET_SIZE:
        raise ValueError(f"multiset length must be {MULTISET_SIZE}")
    if any(c < 0 for c in counts):
        raise ValueError("multiset counts must be non-negative")


@dataclass(frozen=True)
class TileMultiset:
    """Frequency table of tiles, one count per tile id.

    The physical order tiles were added in is not kept; ``tiles()`` expands the
    table in canonical order.
    """

    counts: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "counts", tuple(self.counts))
        _validate_counts(self.counts)

    @classmethod
    def empty(cls) -> "TileMultiset":
        return cls((0,) * MULTISET_SIZE)

    @classmethod
    def from_iterable(cls, tiles: Iterable[Tile]) -> "TileMultiset":
        counts = [0] * MULTISET_SIZE
        for tile in tiles:
            counts[tile.tile_id] += 1
        return cls(tuple(counts))

    @classmethod
    def coerce(cls, value: Union["TileMultiset", Iterable[Tile]]) -> "TileMultiset":
        if isinstance(value, TileMultiset):
            return value
        return cls.from_iterable(value)

    def tiles(self) -> List[Tile]:
        return [Tile(idx) for idx, c in enumerate(self.counts) for _ in range(c)]

    def add(self, other: "TileMultiset") -> "TileMultiset":
        return TileMultiset(tuple(a + b for a, b in zip(self.counts, other.counts)))

    def sub(self, other: "TileMultiset") -> "TileMultiset":
        if any(a < b for a, b in zip(self.counts, other.counts)):
            raise ValueError("cannot subtract: negative counts")
        return TileMultiset(tuple(a - b for a, b in zip(self.counts, other.counts)))

    def with_tile(self, tile: Tile) -> "TileMultiset":
        counts = list(self.counts)
        counts[tile.tile_id] += 1
        return TileMultiset(tuple(counts))

    def contains(self, other: "TileMultiset") -> bool:
        """True when ``other`` is a sub-multiset of this one."""
        return all(a >= b for a, b in zip(self.counts, other.counts))

    def count(self, tile: Tile) -> int:
        return self.counts[tile.tile_id]

    def jokers(self) -> int:
        return self.counts[JOKER_ID]

    def total(self) -> int:
        return sum(self.counts)

    def rule_violations(self, ruleset: Ruleset) -> List[str]:
        problems = []
        for idx, c in enumerate(self.counts[:JOKER_ID]):
            if c > ruleset.copies_per_tile:
                problems.append(f"{Tile(idx)} appears {c} times (max {ruleset.copies_per_tile})")
        if self.counts[JOKER_ID] > ruleset.num_jokers:
            problems.append(f"{self.counts[JOKER_ID]} jokers (max {ruleset.num_jokers})")
        return problems

    def warn_on_violations(self, ruleset: Ruleset, label: str) -> None:
        for problem in self.rule_violations(ruleset):
            logger.warning("multiset.rule_violation", multiset=label, problem=problem)

    def __len__(self) -> int:
        return self.total()

    def __iter__(self):
        return iter(self.tiles())
