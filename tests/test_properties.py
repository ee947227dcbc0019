"""
Algebraic laws checked over a fixed set of references.

Covers:
- Representation stability: parsing the formatted form gives the same Pericope
- Canonical minimality after normalize
- Set-algebra laws (commutativity, subset, partition, double complement)
- Navigation inverse and book boundaries
- Idempotence of normalize and of zero-width expand / contract
"""
import itertools

import pytest

from pericope.passage import Pericope
from pericope.verse_ref import VerseRef
from pericope.versification import default_versification

REFERENCES = [
    "GEN 1:1",
    "GEN 1:1-3",
    "GEN 1:1,3,5",
    "GEN 1:5-8,1:1-6",
    "GEN 1:29-2:4",
    "GEN 2:1-3,1:1",
    "GEN 50:20-26",
    "OBA 1:1-21",
    "PSA 119:170-176",
    "MAT 5:3-12,5:43-48",
]

GENESIS_PAIRS = [
    ("GEN 1:1-10", "GEN 1:5-15"),
    ("GEN 1:1-3", "GEN 1:4-6"),
    ("GEN 1:1,3,5", "GEN 1:2-4"),
    ("GEN 1:29-2:4", "GEN 2:1"),
    ("GEN 1:1-31", "GEN 1:10,20,30"),
]

NAVIGATION_SAMPLES = [
    ("GEN", 1, 1),
    ("GEN", 1, 31),
    ("GEN", 49, 33),
    ("PSA", 119, 176),
    ("MAT", 5, 48),
    ("REV", 21, 27),
]


def _p(text: str) -> Pericope:
    return Pericope.from_reference(text)


def _is_minimal(p: Pericope) -> bool:
    for a, b in itertools.pairwise(p.ranges):
        end = VerseRef(p.book, a.end_chapter, a.end_verse)
        start = VerseRef(p.book, b.start_chapter, b.start_verse)
        # sorted, non-overlapping and non-adjacent
        if not end < start or end.next_verse() == start:
            return False
    return True


# ---------------------------------------------------------------------------
# Representation
# ---------------------------------------------------------------------------

class TestRepresentation:
    @pytest.mark.parametrize("reference", REFERENCES)
    def test_format_then_parse_is_stable(self, reference):
        p = _p(reference)
        assert _p(str(p)) == p

    @pytest.mark.parametrize("reference", REFERENCES)
    def test_full_name_format_then_parse_is_stable(self, reference):
        p = _p(reference)
        assert _p(p.to_string("full_name")) == p

    @pytest.mark.parametrize("reference", REFERENCES)
    def test_normalize_is_minimal(self, reference):
        assert _is_minimal(_p(reference).normalize())

    @pytest.mark.parametrize("reference", REFERENCES)
    def test_normalize_idempotent(self, reference):
        once = _p(reference).normalize()
        assert once.normalize().ranges == once.ranges

    @pytest.mark.parametrize("reference", REFERENCES)
    def test_zero_expand_then_contract(self, reference):
        p = _p(reference)
        assert p.expand(0, 0).contract(0, 0) == p


# ---------------------------------------------------------------------------
# Set algebra
# ---------------------------------------------------------------------------

class TestSetLaws:
    @pytest.mark.parametrize("a, b", GENESIS_PAIRS)
    def test_union_commutes(self, a, b):
        assert _p(a) | _p(b) == _p(b) | _p(a)

    @pytest.mark.parametrize("a, b", GENESIS_PAIRS)
    def test_union_results_are_minimal(self, a, b):
        assert _is_minimal(_p(a) | _p(b))

    @pytest.mark.parametrize("a, b", GENESIS_PAIRS)
    def test_intersection_is_subset_of_both(self, a, b):
        both = _p(a) & _p(b)
        assert _p(a).contains(both)
        assert _p(b).contains(both)

    @pytest.mark.parametrize("a, b", GENESIS_PAIRS)
    def test_subtract_and_intersection_partition_left(self, a, b):
        left = _p(a)
        diff, common = left - _p(b), left & _p(b)
        assert not diff.intersects(common)
        assert (diff | common).normalize() == left.normalize()

    @pytest.mark.parametrize("reference", ["GEN 1:1", "GEN 1:29-2:4", "GEN 1:1,3,5", "OBA 1:1-21"])
    def test_double_complement(self, reference):
        p = _p(reference)
        assert p.complement().complement() == p


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

class TestNavigationLaws:
    @pytest.mark.parametrize("code, chapter, verse", NAVIGATION_SAMPLES)
    def test_next_then_previous(self, code, chapter, verse):
        v = VerseRef(code, chapter, verse)
        assert v.next_verse().previous_verse() == v

    def test_every_book_boundary(self):
        vrs = default_versification()
        for book in vrs.catalog:
            last_chapter = vrs.chapter_count(book)
            last = VerseRef(book, last_chapter, vrs.verse_count(book, last_chapter))
            assert last.next_verse() is None
            assert VerseRef(book, 1, 1).previous_verse() is None
