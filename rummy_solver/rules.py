from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Ruleset:
    copies_per_tile: int = 2
    num_jokers: int = 2
    min_group_size: int = 3
    max_set_size: int = 4


@dataclass(frozen=True)
class SearchLimits:
    """Resource bounds for a single solve call.

    ``max_memo_entries`` caps the memo table; ``max_nodes`` (when set) caps the
    number of search nodes expanded before the search settles for the best
    partition found so far.
    """

    max_memo_entries: int = 250_000
    max_nodes: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_memo_entries < 0:
            raise ValueError("max_memo_entries must be non-negative")
        if self.max_nodes is not None and self.max_nodes < 1:
            raise ValueError("max_nodes must be positive")


DEFAULT_RULES = Ruleset()
DEFAULT_LIMITS = SearchLimits()
