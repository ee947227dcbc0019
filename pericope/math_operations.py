"""
Counting, gap analysis and ordering predicates over Pericopes.

Predicates comparing two Pericopes return False when the other operand is
not a Pericope of the same book.
"""
from __future__ import annotations

from pericope.passage import Pericope, canonicalize
from pericope.verse_ref import VerseRef


def _comparable(pericope: Pericope, other: object) -> bool:
    return isinstance(other, Pericope) and pericope.book == other.book


# ---------------------------------------------------------------------------
# Counting
# ---------------------------------------------------------------------------

def verses_in_chapter(pericope: Pericope, chapter: int) -> int:
    """Distinct verses of pericope in the given chapter; 0 for chapters outside the book."""
    if not pericope.versification.is_valid_chapter(pericope.book, chapter):
        return 0
    return sum(1 for v in pericope.sorted_verses() if v.chapter == chapter)


def chapters_in_range(pericope: Pericope) -> dict[int, list[int]]:
    """Map each touched chapter to its covered verse numbers, both ascending."""
    result: dict[int, list[int]] = {}
    for verse in pericope.sorted_verses():
        result.setdefault(verse.chapter, []).append(verse.verse)
    return result


def density(pericope: Pericope) -> float:
    """
    Covered verses divided by the total verses of every chapter the
    pericope touches. 0.0 for an empty pericope.
    """
    if pericope.is_empty():
        return 0.0
    vrs = pericope.versification
    possible = sum(vrs.verse_count(pericope.book, c) or 0 for c in pericope.chapter_list())
    if possible == 0:
        return 0.0
    return pericope.verse_count() / possible


# ---------------------------------------------------------------------------
# Continuity
# ---------------------------------------------------------------------------

def gaps(pericope: Pericope) -> list[VerseRef]:
    """Verses between the first and last verse that the pericope skips."""
    if pericope.is_empty() or pericope.is_single_verse():
        return []
    covered = pericope.ordinals
    last = pericope.last_verse()
    missing: list[VerseRef] = []
    current = pericope.first_verse()
    while current is not None and current <= last:
        if current.to_ordinal() not in covered:
            missing.append(current)
        current = current.next_verse()
    return missing


def continuous_ranges(pericope: Pericope) -> list[Pericope]:
    """Split into maximal runs of consecutive verses, one Pericope per run."""
    runs: list[list[VerseRef]] = []
    for verse in pericope.sorted_verses():
        if runs and runs[-1][-1].next_verse() == verse:
            runs[-1].append(verse)
        else:
            runs.append([verse])
    return [canonicalize(pericope.book, run, pericope.versification) for run in runs]


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def intersects(pericope: Pericope, other: object) -> bool:
    if not _comparable(pericope, other):
        return False
    return not pericope.ordinals.isdisjoint(other.ordinals)


def contains(pericope: Pericope, other: object) -> bool:
    if not _comparable(pericope, other):
        return False
    return other.ordinals <= pericope.ordinals


def is_adjacent_to(pericope: Pericope, other: object) -> bool:
    """True if one pericope ends on the verse right before the other starts."""
    if not _comparable(pericope, other) or pericope.is_empty() or other.is_empty():
        return False
    return (
        pericope.last_verse().next_verse() == other.first_verse()
        or other.last_verse().next_verse() == pericope.first_verse()
    )


def precedes(pericope: Pericope, other: object) -> bool:
    if not _comparable(pericope, other) or pericope.is_empty() or other.is_empty():
        return False
    return pericope.last_verse().is_before(other.first_verse())


def follows(pericope: Pericope, other: object) -> bool:
    if not _comparable(pericope, other) or pericope.is_empty() or other.is_empty():
        return False
    return pericope.first_verse().is_after(other.last_verse())
