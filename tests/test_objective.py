import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rummy_solver.meld import canonicalize
from rummy_solver.objective import EMPTY_SCORE, Score, better
from rummy_solver.partition import Partition
from rummy_solver.tiles import parse_tiles

from helpers import ms


def _group(text):
    return canonicalize(parse_tiles(text))


def test_more_tiles_beats_more_groups():
    big = EMPTY_SCORE.with_group(_group("r1 r2 r3 r4 r5 r6 r7").key())
    two = EMPTY_SCORE.with_group(_group("r1 r2 r3").key()).with_group(_group("r4 r5 r6").key())
    assert big.placed == 7 and two.placed == 6
    assert better(big, two)
    assert not better(two, big)


def test_more_groups_breaks_tie():
    one = EMPTY_SCORE.with_group(_group("r1 r2 r3 r4 r5 r6").key())
    two = EMPTY_SCORE.with_group(_group("r4 r5 r6").key()).with_group(_group("r1 r2 r3").key())
    assert better(two, one)
    assert two.group_keys == tuple(sorted(two.group_keys))


def test_lexicographic_tie_break_and_none_handling():
    low = Score(3, (_group("r1 r2 r3").key(),))
    high = Score(3, (_group("b1 b2 b3").key(),))
    assert better(low, high)
    assert not better(low, low)
    assert better(low, None)
    assert not better(None, low)


def test_partition_canonicalization_is_order_invariant():
    run = _group("r1 r2 r3")
    group = _group("b7 y7 x7")
    a = Partition((group, run), ms("j"))
    b = Partition((run, group), ms("j"))
    assert a.canonicalize().groups == b.canonicalize().groups == (run, group)
    assert a.canonicalize().canonicalize() == a.canonicalize()
    assert a.multiset() == ms("r1 r2 r3 b7 y7 x7 j")


def test_partition_placed_is_cached():
    partition = Partition((_group("r1 r2 r3"),))
    assert partition.placed() is partition.placed()
