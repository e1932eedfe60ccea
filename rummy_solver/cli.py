from __future__ import annotations

import argparse
import sys
from typing import List, Optional, TextIO

import structlog

from .log import resolve_log_level, setup_logging
from .rules import DEFAULT_LIMITS, Ruleset, SearchLimits
from .solver import SolveResult, SolveStatus, solve
from .state import SolverState
from .tiles import TileParseError, Tile, parse_tiles

logger = structlog.get_logger(__name__)

PROMPT = "> "
HELP_LINES = (
    "\n's' to solve",
    "Prefix 'b' to add a tile to the board",
    "Prefix 'h' to add a tile to your hand",
    "'q' to quit",
)


def format_solution(result: SolveResult) -> str:
    solved = SolverState(board=result.new_board, hand=result.remaining_hand)
    text = solved.format()
    if result.status == SolveStatus.NO_SOLUTION:
        return text + "No arrangement keeps every board tile on the board\n"
    text += "Groups:\n" + result.format_groups()
    if result.status == SolveStatus.PARTIAL:
        text += "Search budget exhausted; best arrangement found so far\n"
    return text


def handle_command(
    line: str,
    state: SolverState,
    out: TextIO,
    ruleset: Optional[Ruleset] = None,
    limits: Optional[SearchLimits] = None,
) -> bool:
    """Apply one interactive command. Returns False when the loop should stop."""
    line = line.strip()
    if not line:
        print("Provide an input", file=out)
        return True

    code, rest = line[0], line[1:]
    if code in ("b", "h"):
        try:
            tile = Tile.from_str(rest)
        except TileParseError as exc:
            print(exc, file=out)
            return True
        if code == "b":
            state.add_to_board(tile)
        else:
            state.add_to_hand(tile)
    elif code == "s" and not rest:
        print(format_solution(solve(state.board, state.hand, ruleset, limits)), file=out)
    elif code == "q" and not rest:
        return False
    else:
        print("Invalid input", file=out)
        return True

    print(file=out)
    print(state.format(), file=out)
    return True


def run_interactive(
    state: SolverState,
    stdin: TextIO,
    stdout: TextIO,
    ruleset: Optional[Ruleset] = None,
    limits: Optional[SearchLimits] = None,
) -> int:
    while True:
        for line in HELP_LINES:
            print(line, file=stdout)
        stdout.write(PROMPT)
        stdout.flush()

        line = stdin.readline()
        if not line:
            return 0
        if not handle_command(line, state, stdout, ruleset, limits):
            return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rearrange a Rummikub board to place as many hand tiles as possible.")
    parser.add_argument("--board", default=None, help='Board tiles, e.g. "r1 r2 r3 j".')
    parser.add_argument("--hand", default=None, help='Hand tiles, e.g. "y5 x5".')
    parser.add_argument(
        "--max-memo",
        type=int,
        default=DEFAULT_LIMITS.max_memo_entries,
        help="Maximum number of memoised search states.",
    )
    parser.add_argument("--max-nodes", type=int, default=None, help="Stop exploring after this many search nodes.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        level = resolve_log_level(args.log_level)
        limits = SearchLimits(max_memo_entries=args.max_memo, max_nodes=args.max_nodes)
    except ValueError as exc:
        parser.error(str(exc))
    setup_logging(level=level, json_mode=args.log_json)

    state = SolverState()
    try:
        if args.board is not None or args.hand is not None:
            try:
                board = parse_tiles(args.board or "")
                hand = parse_tiles(args.hand or "")
            except TileParseError as exc:
                print(f"Invalid tile: {exc}", file=sys.stderr)
                return 1
            print(format_solution(solve(board, hand, limits=limits)))
            return 0
        return run_interactive(state, sys.stdin, sys.stdout, limits=limits)
    except OSError as exc:
        logger.error("cli.io_failure", error=str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
