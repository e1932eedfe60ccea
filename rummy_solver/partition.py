from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .meld import Group
from .multiset import TileMultiset


@dataclass
class Partition:
    """Valid groups plus the leftover bag of tiles that joined no group."""

    groups: Tuple[Group, ...]
    leftover: TileMultiset = field(default_factory=TileMultiset.empty)
    _placed_cache: TileMultiset | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.groups = tuple(self.groups)
        if any(not group.tiles for group in self.groups):
            raise ValueError("group cannot be empty")

    def canonicalize(self) -> "Partition":
        return Partition(tuple(sorted(self.groups, key=Group.key)), self.leftover)

    def placed(self) -> TileMultiset:
        if self._placed_cache is None:
            self._placed_cache = TileMultiset.from_iterable(
                tile for group in self.groups for tile in group.tiles
            )
        return self._placed_cache

    def multiset(self) -> TileMultiset:
        return self.placed().add(self.leftover)
