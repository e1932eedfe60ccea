from __future__ import annotations

from dataclasses import dataclass, field

from .multiset import TileMultiset
from .tiles import Tile, format_list


@dataclass
class SolverState:
    """Current board and hand between solve calls."""

    board: TileMultiset = field(default_factory=TileMultiset.empty)
    hand: TileMultiset = field(default_factory=TileMultiset.empty)

    def add_to_board(self, tile: Tile) -> None:
        self.board = self.board.with_tile(tile)

    def add_to_hand(self, tile: Tile) -> None:
        self.hand = self.hand.with_tile(tile)

    def format(self) -> str:
        return "Board:\n" + format_list(self.board.tiles()) + "Hand:\n" + format_list(self.hand.tiles())
