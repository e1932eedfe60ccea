"""Depth-first partition search with memoisation.

The search state is a pair of frequency tables: ``counts`` holds every tile
still available and ``required`` the board copies among them that must still
be placed. Groups consume board copies first, so a hand copy of a tile is only
ever left over when no board copy of it remains unplaced.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterator, List, Optional, Tuple

import structlog

from .meld import Group, canonicalize
from .multiset import TileMultiset
from .objective import EMPTY_SCORE, GroupKey, Score, better
from .partition import Partition
from .rules import DEFAULT_LIMITS, DEFAULT_RULES, Ruleset, SearchLimits
from .tiles import JOKER_ID, VALUES, Colour, Tile

logger = structlog.get_logger(__name__)

Counts = Tuple[int, ...]


@dataclass
class SearchStats:
    nodes: int = 0
    memo_hits: int = 0
    memo_entries: int = 0
    memo_full: bool = False
    exhausted: bool = False


class PartitionSearch:
    """Finds the best board-preserving partition of ``board ⊎ hand``.

    One instance serves one solve call; the memo table and statistics are
    private to it.
    """

    def __init__(self, ruleset: Ruleset = DEFAULT_RULES, limits: SearchLimits = DEFAULT_LIMITS) -> None:
        self.ruleset = ruleset
        self.limits = limits
        self.stats = SearchStats()
        self._memo: Dict[Tuple[Counts, Counts], Optional[Score]] = {}
        self._by_tiles: Dict[Tuple[int, ...], Group] = {}
        self._by_key: Dict[GroupKey, Group] = {}

    def run(self, board: TileMultiset, hand: TileMultiset) -> Optional[Partition]:
        total = board.add(hand)
        score = self._search(total.counts, board.counts)
        self.stats.memo_entries = len(self._memo)
        if score is None:
            return None
        groups = tuple(self._by_key[key] for key in score.group_keys)
        partition = Partition(groups)
        partition.leftover = total.sub(partition.placed())
        return partition

    # -- recursion ---------------------------------------------------------

    def _search(self, counts: Counts, required: Counts) -> Optional[Score]:
        key = (counts, required)
        if key in self._memo:
            self.stats.memo_hits += 1
            return self._memo[key]

        self.stats.nodes += 1
        max_nodes = self.limits.max_nodes
        if max_nodes is not None and self.stats.nodes > max_nodes and not self.stats.exhausted:
            self.stats.exhausted = True
            logger.warning("search.budget_exhausted", nodes=self.stats.nodes, max_nodes=max_nodes)

        result = self._expand(counts, required)

        if len(self._memo) < self.limits.max_memo_entries:
            self._memo[key] = result
        elif not self.stats.memo_full:
            self.stats.memo_full = True
            logger.warning("search.memo_full", entries=len(self._memo))
        return result

    def _expand(self, counts: Counts, required: Counts) -> Optional[Score]:
        pivot = next((idx for idx in range(JOKER_ID) if counts[idx]), None)
        if pivot is None:
            # Jokers cannot form a group on their own.
            return None if required[JOKER_ID] else EMPTY_SCORE
        if not self._board_tiles_placeable(counts, required):
            return None

        best: Optional[Score] = None
        for group in self._candidates(pivot, counts):
            if self.stats.exhausted and best is not None:
                return best
            sub = self._search(*self._consume(counts, required, group.key()))
            if sub is not None:
                score = sub.with_group(group.key())
                if better(score, best):
                    best = score

        if counts[pivot] > required[pivot] and not (self.stats.exhausted and best is not None):
            skipped = list(counts)
            skipped[pivot] -= 1
            sub = self._search(tuple(skipped), required)
            if better(sub, best):
                best = sub
        return best

    @staticmethod
    def _consume(counts: Counts, required: Counts, key: GroupKey) -> Tuple[Counts, Counts]:
        new_counts = list(counts)
        new_required = list(required)
        for tile_id in key:
            new_counts[tile_id] -= 1
            if new_required[tile_id]:
                new_required[tile_id] -= 1
        return tuple(new_counts), tuple(new_required)

    # -- pruning -----------------------------------------------------------

    def _board_tiles_placeable(self, counts: Counts, required: Counts) -> bool:
        return all(self._placeable(idx, counts) for idx in range(JOKER_ID) if required[idx])

    def _placeable(self, tile_id: int, counts: Counts) -> bool:
        colour, number = divmod(tile_id, VALUES)
        number += 1
        jokers = counts[JOKER_ID]
        need = self.ruleset.min_group_size - 1

        partners = sum(
            1
            for other in range(len(Colour))
            if other != colour and counts[other * VALUES + number - 1]
        )
        if partners + jokers >= need:
            return True

        span = self.ruleset.min_group_size
        for start in range(max(1, number - span + 1), min(number, VALUES - span + 1) + 1):
            missing = sum(
                1
                for n in range(start, start + span)
                if n != number and not counts[colour * VALUES + n - 1]
            )
            if missing <= jokers:
                return True
        return False

    # -- group enumeration -------------------------------------------------

    def _candidates(self, pivot: int, counts: Counts) -> List[Group]:
        seen: Dict[Tuple[int, ...], Group] = {}
        for tiles in self._run_tiles(pivot, counts):
            if tiles not in seen:
                seen[tiles] = self._group(tiles)
        for tiles in self._set_tiles(pivot, counts):
            if tiles not in seen:
                seen[tiles] = self._group(tiles)
        return list(seen.values())

    def _group(self, tiles: Tuple[int, ...]) -> Group:
        group = self._by_tiles.get(tiles)
        if group is None:
            group = canonicalize([Tile(tile_id) for tile_id in tiles], self.ruleset)
            self._by_tiles[tiles] = group
            self._by_key[group.key()] = group
        return group

    def _run_tiles(self, pivot: int, counts: Counts) -> Iterator[Tuple[int, ...]]:
        # The pivot is the smallest Normal left, so it is the lowest Normal in
        # any run through it; only Jokers may sit below it.
        colour, number = divmod(pivot, VALUES)
        number += 1
        jokers = counts[JOKER_ID]

        def extend(prefix: List[int], used: int, next_number: int) -> Iterator[Tuple[int, ...]]:
            if len(prefix) >= self.ruleset.min_group_size:
                yield tuple(sorted(prefix))
            if next_number > VALUES:
                return
            tile_id = colour * VALUES + next_number - 1
            if counts[tile_id]:
                yield from extend(prefix + [tile_id], used, next_number + 1)
            if used < jokers:
                yield from extend(prefix + [JOKER_ID], used + 1, next_number + 1)

        for below in range(min(jokers, number - 1) + 1):
            yield from extend([JOKER_ID] * below + [pivot], below, number + 1)

    def _set_tiles(self, pivot: int, counts: Counts) -> Iterator[Tuple[int, ...]]:
        colour, number = divmod(pivot, VALUES)
        number += 1
        jokers = counts[JOKER_ID]
        max_size = min(self.ruleset.max_set_size, len(Colour))
        others = [
            other * VALUES + number - 1
            for other in range(len(Colour))
            if other != colour and counts[other * VALUES + number - 1]
        ]
        for k in range(len(others) + 1):
            for combo in combinations(others, k):
                for used in range(min(jokers, max_size - 1 - k) + 1):
                    size = 1 + k + used
                    if size >= self.ruleset.min_group_size:
                        yield tuple(sorted((pivot,) + combo + (JOKER_ID,) * used))
