import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rummy_solver.meld import GroupKind, canonicalize, classify, explain, is_valid
from rummy_solver.tiles import Colour, parse_tiles


@pytest.mark.parametrize(
    "text, kind",
    [
        ("r1 r2 r3", GroupKind.RUN),
        ("r3 r1 r2", GroupKind.RUN),
        ("r1 r2 r3 r4 r5 r6 r7 r8 r9 r10 r11 r12 r13", GroupKind.RUN),
        ("r7 j r9", GroupKind.RUN),
        ("r1 j j r4", GroupKind.RUN),
        ("r12 r13 j", GroupKind.RUN),
        ("r5 j j", GroupKind.RUN),
        ("r5 b5 y5", GroupKind.SET),
        ("r5 b5 y5 x5", GroupKind.SET),
        ("r5 b5 j", GroupKind.SET),
        ("x9 j j", GroupKind.RUN),
        ("j j j", GroupKind.INVALID),
        ("r1 r2", GroupKind.INVALID),
        ("r1 j", GroupKind.INVALID),
        ("r5 r5 b5", GroupKind.INVALID),
        ("r5 b6 j", GroupKind.INVALID),
        ("r1 j r5", GroupKind.INVALID),
        ("r1 r2 b3", GroupKind.INVALID),
        ("r5 b5 y5 x5 j", GroupKind.INVALID),
        ("r1 r2 r3 r4 r5 r6 r7 r8 r9 r10 r11 r12 r13 j", GroupKind.INVALID),
    ],
)
def test_classify(text, kind):
    tiles = parse_tiles(text)
    assert classify(tiles) == kind
    assert is_valid(tiles) == (kind != GroupKind.INVALID)


def test_explain_reports_reasons():
    assert explain(parse_tiles("r1 r2")) == (False, "group too short")
    assert explain(parse_tiles("j j j")) == (False, "group needs at least one concrete tile")
    ok, reason = explain(parse_tiles("r1 b2 y3"))
    assert not ok
    assert "not a run" in reason and "not a set" in reason
    assert explain(parse_tiles("y4 y5 y6")) == (True, "")


@pytest.mark.parametrize(
    "text, arranged",
    [
        ("r9 j r7", "r7 j r9"),
        ("j r8 r9 r7", "r7 r8 r9 j"),
        ("r12 j r13", "j r12 r13"),
        ("j r11 j r13", "j r11 j r13"),
        ("r2 j j r3", "r2 r3 j j"),
        ("x13 j j", "j j x13"),
        ("j x5 r5", "r5 x5 j"),
        ("x5 y5 b5 r5", "r5 b5 y5 x5"),
    ],
)
def test_canonical_arrangement(text, arranged):
    group = canonicalize(parse_tiles(text))
    assert " ".join(t.token() for t in group.tiles) == arranged


def test_canonicalize_rejects_invalid_group():
    with pytest.raises(ValueError, match="invalid group"):
        canonicalize(parse_tiles("r1 b2 y3"))


def test_joker_assignments():
    run = canonicalize(parse_tiles("r7 j r9"))
    slots = run.slots()
    assert slots[1].is_joker()
    assert (slots[1].assigned_colour, slots[1].assigned_number) == (Colour.RED, 8)
    assert run.render() == "r7 j(r8) r9"

    group = canonicalize(parse_tiles("r5 b5 j"))
    assert group.kind == GroupKind.SET
    assert group.render() == "r5 b5 j(y5)"
    assert canonicalize(parse_tiles("j r12 r13")).render() == "j(r11) r12 r13"


def test_group_key_and_multiset():
    group = canonicalize(parse_tiles("r9 j r7"))
    assert group.jokers() == 1
    assert len(group) == 3
    assert group.multiset().total() == 3
    assert group.key() == tuple(t.tile_id for t in parse_tiles("r7 j r9"))
