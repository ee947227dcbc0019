"""
Set algebra over Pericopes.

Each operation expands its operands to verse ordinals, applies the set
operation, and rebuilds the result through canonicalize(), so every
result is already in minimal form.

Operands from different books are not comparable. Instead of raising,
binary operations fall back to a fixed result:
    union, subtract  -> the left operand unchanged
    intersection     -> an empty Pericope of the left operand's book
"""
from __future__ import annotations

from collections.abc import Iterable

from pericope.passage import Pericope, canonicalize
from pericope.verse_ref import VerseRef


def _same_book(pericope: Pericope, other: object) -> bool:
    return isinstance(other, Pericope) and pericope.book == other.book


def _rebuild(pericope: Pericope, ordinals: Iterable[int]) -> Pericope:
    vrs = pericope.versification
    verses = [VerseRef.from_ordinal(o, vrs) for o in ordinals]
    return canonicalize(pericope.book, verses, vrs)


def _whole_book_ordinals(pericope: Pericope) -> set[int]:
    vrs = pericope.versification
    first = VerseRef(pericope.book, 1, 1, vrs)
    ordinals: set[int] = set()
    current: VerseRef | None = first
    while current is not None:
        ordinals.add(current.to_ordinal())
        current = current.next_verse()
    return ordinals


# ---------------------------------------------------------------------------
# Binary operations
# ---------------------------------------------------------------------------

def union(pericope: Pericope, other: object) -> Pericope:
    if not _same_book(pericope, other):
        return pericope
    return _rebuild(pericope, pericope.ordinals | other.ordinals)


def intersection(pericope: Pericope, other: object) -> Pericope:
    if not _same_book(pericope, other):
        return Pericope.empty(pericope.book, pericope.versification)
    return _rebuild(pericope, pericope.ordinals & other.ordinals)


def subtract(pericope: Pericope, other: object) -> Pericope:
    if not _same_book(pericope, other):
        return pericope
    return _rebuild(pericope, pericope.ordinals - other.ordinals)


def complement(pericope: Pericope, scope: Pericope | None = None) -> Pericope:
    """
    Verses in scope that pericope does not cover.

    Scope defaults to the whole book; a scope from another book is ignored
    in favour of the whole book.
    """
    if _same_book(pericope, scope):
        scope_ordinals = set(scope.ordinals)
    else:
        scope_ordinals = _whole_book_ordinals(pericope)
    return _rebuild(pericope, scope_ordinals - pericope.ordinals)


# ---------------------------------------------------------------------------
# Unary operations
# ---------------------------------------------------------------------------

def normalize(pericope: Pericope) -> Pericope:
    """Merge duplicate, overlapping and adjacent ranges."""
    return _rebuild(pericope, pericope.ordinals)


def expand(pericope: Pericope, verses_before: int = 0, verses_after: int = 0) -> Pericope:
    """
    Add up to verses_before verses ahead of the first verse and up to
    verses_after verses past the last one, stopping at the book boundary.
    """
    ordinals = set(pericope.ordinals)

    current = pericope.first_verse()
    for _ in range(max(verses_before, 0)):
        current = current.previous_verse() if current is not None else None
        if current is None:
            break
        ordinals.add(current.to_ordinal())

    current = pericope.last_verse()
    for _ in range(max(verses_after, 0)):
        current = current.next_verse() if current is not None else None
        if current is None:
            break
        ordinals.add(current.to_ordinal())

    return _rebuild(pericope, ordinals)


def contract(pericope: Pericope, verses_from_start: int = 0, verses_from_end: int = 0) -> Pericope:
    """
    Drop the first verses_from_start and the last verses_from_end verses.

    Removing as many verses as the pericope holds, or more, leaves it empty.
    """
    from_start = max(verses_from_start, 0)
    from_end = max(verses_from_end, 0)
    ordered = sorted(pericope.ordinals)
    if len(ordered) <= from_start + from_end:
        return Pericope.empty(pericope.book, pericope.versification)
    return _rebuild(pericope, ordered[from_start:len(ordered) - from_end])
