"""
Tests for set_operations.py — union, intersection, subtract, complement,
normalize, expand and contract.

Covers:
- Worked examples on the real verse table
- Chapter-boundary behaviour on the synthetic table
- Mismatched-book fallbacks (no exceptions from algebra)
"""
import pytest

from pericope.passage import Pericope, Range
from pericope.set_operations import (
    complement,
    contract,
    expand,
    intersection,
    normalize,
    subtract,
    union,
)


def _p(text: str) -> Pericope:
    return Pericope.from_reference(text)


# ---------------------------------------------------------------------------
# Binary operations
# ---------------------------------------------------------------------------

class TestUnion:
    def test_overlapping(self):
        assert str(union(_p("GEN 1:1-10"), _p("GEN 1:5-15"))) == "GEN 1:1-15"

    def test_adjacent_ranges_merge(self):
        assert str(_p("GEN 1:1-3") | _p("GEN 1:4-6")) == "GEN 1:1-6"

    def test_adjacent_across_chapters_merge(self):
        assert str(_p("GEN 1:29-31") | _p("GEN 2:1-2")) == "GEN 1:29-2:2"

    def test_disjoint_stay_separate(self):
        assert str(_p("GEN 1:1-3") | _p("GEN 1:10")) == "GEN 1:1-3,1:10"

    def test_other_book_returns_left(self):
        left = _p("GEN 1:1-3")
        assert union(left, _p("EXO 1:1")) is left

    def test_non_pericope_returns_left(self):
        left = _p("GEN 1:1-3")
        assert left.union("GEN 1:4") is left


class TestIntersection:
    def test_overlap(self):
        assert str(_p("GEN 1:1-10") & _p("GEN 1:5-15")) == "GEN 1:5-10"

    def test_disjoint_is_empty(self):
        assert intersection(_p("GEN 1:1-3"), _p("GEN 1:5-6")).is_empty()

    def test_other_book_is_empty_of_left_book(self):
        result = intersection(_p("GEN 1:1-3"), _p("EXO 1:1-3"))
        assert result.is_empty()
        assert result.book.code == "GEN"


class TestSubtract:
    def test_trailing_overlap(self):
        assert str(subtract(_p("GEN 1:1-10"), _p("GEN 1:5-15"))) == "GEN 1:1-4"

    def test_hole_in_middle(self):
        assert str(_p("GEN 1:1-10") - _p("GEN 1:4-6")) == "GEN 1:1-3,1:7-10"

    def test_subtract_everything(self):
        assert subtract(_p("GEN 1:1-3"), _p("GEN 1:1-31")).is_empty()

    def test_other_book_returns_left(self):
        left = _p("GEN 1:1-3")
        assert subtract(left, _p("EXO 1:1")) is left


class TestOperators:
    def test_non_pericope_operand_not_implemented(self):
        with pytest.raises(TypeError):
            _p("GEN 1:1") | 3


# ---------------------------------------------------------------------------
# Complement
# ---------------------------------------------------------------------------

class TestComplement:
    def test_within_scope(self):
        assert str(complement(_p("GEN 1:3-5"), _p("GEN 1:1-10"))) == "GEN 1:1-2,1:6-10"

    def test_whole_book_default(self, synthetic_versification):
        p = Pericope("TST", (Range(2, 1, 2, 2),), synthetic_versification)
        assert str(p.complement()) == "TST 1:1-3,3:1-4"

    def test_other_book_scope_falls_back_to_whole_book(self, synthetic_versification):
        p = Pericope("TST", (Range(1, 1, 3, 3),), synthetic_versification)
        scope = Pericope("OTR", (Range(1, 1, 1, 2),), synthetic_versification)
        assert str(p.complement(scope)) == "TST 3:4"

    def test_complement_of_whole_book_is_empty(self, synthetic_versification):
        p = Pericope("TST", (Range(1, 1, 3, 4),), synthetic_versification)
        assert p.complement().is_empty()

    def test_real_book_complement_size(self):
        assert _p("GEN 1:1").complement().verse_count() == 1532


# ---------------------------------------------------------------------------
# Normalize
# ---------------------------------------------------------------------------

class TestNormalize:
    def test_merges_duplicates_and_overlaps(self):
        p = normalize(_p("GEN 1:5-8,1:1-6,1:6"))
        assert p.ranges == (Range(1, 1, 1, 8),)

    def test_sorts(self):
        assert str(normalize(_p("GEN 2:1,1:1"))) == "GEN 1:1,2:1"

    def test_empty(self):
        assert normalize(Pericope.empty("GEN")).is_empty()


# ---------------------------------------------------------------------------
# Expand / contract
# ---------------------------------------------------------------------------

class TestExpand:
    def test_both_sides(self):
        assert str(expand(_p("GEN 1:5-6"), 2, 3)) == "GEN 1:3-9"

    def test_crosses_chapter(self):
        assert str(_p("GEN 2:1").expand(1, 0)) == "GEN 1:31-2:1"

    def test_stops_at_book_start(self, synthetic_versification):
        p = Pericope("TST", (Range(1, 2, 1, 2),), synthetic_versification)
        assert str(p.expand(5, 0)) == "TST 1:1-2"

    def test_stops_at_book_end(self, synthetic_versification):
        p = Pericope("TST", (Range(3, 3, 3, 3),), synthetic_versification)
        assert str(p.expand(0, 5)) == "TST 3:3-4"

    def test_fills_only_outer_edges(self):
        assert str(_p("GEN 1:3,1:7").expand(1, 1)) == "GEN 1:2-3,1:7-8"

    def test_negative_counts_ignored(self):
        assert _p("GEN 1:5").expand(-3, -1) == _p("GEN 1:5")

    def test_empty_stays_empty(self):
        assert Pericope.empty("GEN").expand(2, 2).is_empty()


class TestContract:
    def test_both_sides(self):
        assert str(contract(_p("GEN 1:1-10"), 2, 3)) == "GEN 1:3-7"

    def test_counts_verses_not_positions(self):
        assert str(_p("GEN 1:1,1:5-7,1:20").contract(1, 1)) == "GEN 1:5-7"

    def test_removing_everything_is_empty(self):
        assert contract(_p("GEN 1:1-3"), 2, 1).is_empty()
        assert contract(_p("GEN 1:1-3"), 5, 5).is_empty()

    def test_zero_is_identity(self):
        p = _p("GEN 1:1-3,1:9")
        assert contract(p, 0, 0) == p
