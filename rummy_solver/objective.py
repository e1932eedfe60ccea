"""Ranking of candidate partitions.

Every partition the search may return keeps all board tiles, so maximising the
hand tiles placed is the same as maximising the total tiles placed. Ties go to
the partition with more groups, then to the lexicographically smallest sorted
tuple of group keys.
"""

from __future__ import annotations

from bisect import insort
from dataclasses import dataclass
from typing import Optional, Tuple

GroupKey = Tuple[int, ...]


@dataclass(frozen=True)
class Score:
    placed: int = 0
    group_keys: Tuple[GroupKey, ...] = ()

    def rank(self) -> Tuple:
        return (-self.placed, -len(self.group_keys), self.group_keys)

    def with_group(self, key: GroupKey) -> "Score":
        keys = list(self.group_keys)
        insort(keys, key)
        return Score(self.placed + len(key), tuple(keys))


EMPTY_SCORE = Score()


def better(candidate: Optional[Score], incumbent: Optional[Score]) -> bool:
    """True when ``candidate`` is strictly preferred over ``incumbent``."""
    if candidate is None:
        return False
    if incumbent is None:
        return True
    return candidate.rank() < incumbent.rank()
