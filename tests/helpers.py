from itertools import combinations
from typing import List, Optional, Tuple

from rummy_solver.meld import canonicalize, is_valid
from rummy_solver.multiset import TileMultiset
from rummy_solver.objective import EMPTY_SCORE, Score, better
from rummy_solver.tiles import Tile, parse_tiles


def ms(text: str) -> TileMultiset:
    return TileMultiset.from_iterable(parse_tiles(text))


def tokens(multiset: TileMultiset) -> List[str]:
    return [tile.token() for tile in multiset.tiles()]


def brute_force_best(board: TileMultiset, hand: TileMultiset) -> Optional[Score]:
    """Exhaustively partition small inputs; returns the best score or None."""
    items: List[Tuple[Tile, bool]] = [(t, True) for t in board.tiles()] + [(t, False) for t in hand.tiles()]

    def rec(remaining: List[Tuple[Tile, bool]]) -> Optional[Score]:
        if not remaining:
            return EMPTY_SCORE
        first, rest = remaining[0], remaining[1:]
        best = rec(rest) if not first[1] else None
        for size in range(2, len(rest) + 1):
            for picked in combinations(range(len(rest)), size):
                group = [first[0]] + [rest[i][0] for i in picked]
                if not is_valid(group):
                    continue
                sub = rec([item for i, item in enumerate(rest) if i not in picked])
                if sub is None:
                    continue
                score = sub.with_group(canonicalize(group).key())
                if better(score, best):
                    best = score
        return best

    return rec(items)
