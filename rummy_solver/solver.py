from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple, Union

import structlog

from .meld import Group
from .multiset import TileMultiset
from .rules import DEFAULT_LIMITS, DEFAULT_RULES, Ruleset, SearchLimits
from .search import PartitionSearch, SearchStats
from .tiles import Tile

logger = structlog.get_logger(__name__)

TilesLike = Union[TileMultiset, Iterable[Tile]]


class SolveStatus(str, Enum):
    SOLVED = "SOLVED"
    NO_SOLUTION = "NO_SOLUTION"
    PARTIAL = "PARTIAL"


@dataclass(frozen=True)
class SolveResult:
    new_board: TileMultiset
    remaining_hand: TileMultiset
    groups: Tuple[Group, ...] = ()
    status: SolveStatus = SolveStatus.SOLVED
    stats: SearchStats = field(default_factory=SearchStats, compare=False)

    def __iter__(self) -> Iterator[TileMultiset]:
        yield self.new_board
        yield self.remaining_hand

    def hand_tiles_placed(self, hand: TilesLike) -> int:
        return TileMultiset.coerce(hand).total() - self.remaining_hand.total()

    def format_groups(self) -> str:
        return "".join(f"{group.kind.value.lower()}: {group.render()}\n" for group in self.groups)


def _check_result(board: TileMultiset, hand: TileMultiset, result: SolveResult) -> None:
    if result.new_board.add(result.remaining_hand) != board.add(hand):
        raise ValueError("solver lost or invented tiles")
    if not result.new_board.contains(board):
        raise ValueError("solver dropped a board tile")
    if not hand.contains(result.remaining_hand):
        raise ValueError("remaining hand is not part of the original hand")


def solve(
    board: TilesLike,
    hand: TilesLike,
    ruleset: Optional[Ruleset] = None,
    limits: Optional[SearchLimits] = None,
) -> SolveResult:
    """Rearrange ``board`` plus part of ``hand`` into valid groups.

    Every board tile stays on the board and as many hand tiles as possible are
    placed. When no arrangement keeps the whole board, board and hand come
    back unchanged with status ``NO_SOLUTION``.
    """
    board = TileMultiset.coerce(board)
    hand = TileMultiset.coerce(hand)
    ruleset = ruleset or DEFAULT_RULES
    limits = limits or DEFAULT_LIMITS
    board.add(hand).warn_on_violations(ruleset, "board+hand")

    log = logger.bind(board_tiles=board.total(), hand_tiles=hand.total())
    log.debug("solve.start")

    search = PartitionSearch(ruleset, limits)
    partition = search.run(board, hand)
    stats = search.stats

    if partition is None:
        log.info("solve.no_solution", nodes=stats.nodes, exhausted=stats.exhausted)
        return SolveResult(board, hand, status=SolveStatus.NO_SOLUTION, stats=stats)

    partition = partition.canonicalize()
    status = SolveStatus.PARTIAL if stats.exhausted else SolveStatus.SOLVED
    result = SolveResult(
        new_board=partition.placed(),
        remaining_hand=partition.leftover,
        groups=partition.groups,
        status=status,
        stats=stats,
    )
    _check_result(board, hand, result)
    log.info(
        "solve.done",
        status=status,
        placed_from_hand=result.hand_tiles_placed(hand),
        groups=len(result.groups),
        nodes=stats.nodes,
        memo_hits=stats.memo_hits,
    )
    return result
