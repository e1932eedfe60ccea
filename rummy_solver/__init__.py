"""Rummikub board rearrangement solver."""

from .meld import Group, GroupKind, canonicalize, classify, explain, is_valid
from .multiset import TileMultiset
from .objective import Score
from .partition import Partition
from .rules import Ruleset, SearchLimits
from .search import PartitionSearch, SearchStats
from .solver import SolveResult, SolveStatus, solve
from .state import SolverState
from .tiles import JOKER, Colour, Tile, TileParseError, TileSlot, format_list, parse_tiles

__all__ = [
    "Colour",
    "Tile",
    "TileSlot",
    "TileParseError",
    "JOKER",
    "parse_tiles",
    "format_list",
    "TileMultiset",
    "Ruleset",
    "SearchLimits",
    "Group",
    "GroupKind",
    "classify",
    "is_valid",
    "explain",
    "canonicalize",
    "Partition",
    "Score",
    "PartitionSearch",
    "SearchStats",
    "SolveResult",
    "SolveStatus",
    "solve",
    "SolverState",
]
