"""
Pericope: an immutable, book-scoped set of verses stored as chapter:verse ranges.

A Pericope's identity is the set of verses it covers, not its range list:
equality and hashing compare the expanded verse set. Ranges produced by
canonicalize() (and therefore by every set operation) are sorted,
non-overlapping and non-adjacent, i.e. the unique minimal representation.
A Pericope parsed from text keeps the ranges as written until normalized.
"""
from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from pericope.books import Book
from pericope.errors import InvalidRangeError
from pericope.verse_ref import VerseRef
from pericope.versification import Versification, default_versification


class ReferenceFormat(str, Enum):
    CANONICAL = "canonical"   # "GEN 1:1-3"
    FULL_NAME = "full_name"   # "Genesis 1:1-3"


# ---------------------------------------------------------------------------
# Range
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=True)
class Range:
    """Inclusive chapter:verse span; may cross chapters. Start never follows end."""
    start_chapter: int
    start_verse: int
    end_chapter: int
    end_verse: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidRangeError(self.format())

    @classmethod
    def spanning(cls, first: VerseRef, last: VerseRef) -> "Range":
        return cls(first.chapter, first.verse, last.chapter, last.verse)

    @property
    def start(self) -> tuple[int, int]:
        return (self.start_chapter, self.start_verse)

    @property
    def end(self) -> tuple[int, int]:
        return (self.end_chapter, self.end_verse)

    def is_single_verse(self) -> bool:
        return self.start == self.end

    def spans_chapters(self) -> bool:
        return self.start_chapter != self.end_chapter

    def format(self) -> str:
        """'C:V', 'C:V-V2' or 'C:V-C2:V2'."""
        if self.is_single_verse():
            return f"{self.start_chapter}:{self.start_verse}"
        if not self.spans_chapters():
            return f"{self.start_chapter}:{self.start_verse}-{self.end_verse}"
        return f"{self.start_chapter}:{self.start_verse}-{self.end_chapter}:{self.end_verse}"


# ---------------------------------------------------------------------------
# Pericope
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Pericope:
    book: Book
    ranges: tuple[Range, ...] = ()
    versification: Versification = field(default=None, repr=False)

    def __post_init__(self) -> None:
        versification = self.versification or default_versification()
        book = versification.resolve_book(self.book)
        ranges = tuple(self.ranges)
        # Constructing the endpoints validates them against the verse table.
        for rng in ranges:
            VerseRef(book, rng.start_chapter, rng.start_verse, versification)
            VerseRef(book, rng.end_chapter, rng.end_verse, versification)
        object.__setattr__(self, "versification", versification)
        object.__setattr__(self, "book", book)
        object.__setattr__(self, "ranges", ranges)

    # -----------------------------------------------------------------------
    # Builders
    # -----------------------------------------------------------------------

    @classmethod
    def from_reference(cls, reference: str, versification: Versification | None = None) -> "Pericope":
        """
        Parse a single reference such as "GEN 1:1-3" or "John 3:16,18".

        Raises:
            ParseFailureError, InvalidBookError, InvalidChapterError,
            InvalidVerseError, InvalidRangeError.
        """
        from pericope.text_processor import TextProcessor
        return TextProcessor(versification).parse_reference(reference)

    @classmethod
    def parse(cls, text: str, versification: Versification | None = None) -> list["Pericope"]:
        """Extract every parseable reference embedded in free text."""
        from pericope.text_processor import TextProcessor
        return TextProcessor(versification).parse(text)

    @classmethod
    def empty(cls, book: Book | str, versification: Versification | None = None) -> "Pericope":
        return cls(book, (), versification)

    @classmethod
    def from_verses(
        cls,
        verses: Iterable[VerseRef],
        book: Book | str | None = None,
        versification: Versification | None = None,
    ) -> "Pericope":
        verses = list(verses)
        if book is None:
            if not verses:
                raise ValueError("book is required when no verses are given")
            book = verses[0].book
        if versification is None and verses:
            versification = verses[0].versification
        return canonicalize(book, verses, versification)

    @classmethod
    def from_ordinals(
        cls,
        book: Book | str,
        ordinals: Iterable[int],
        versification: Versification | None = None,
    ) -> "Pericope":
        versification = versification or default_versification()
        verses = [VerseRef.from_ordinal(o, versification) for o in set(ordinals)]
        return canonicalize(book, verses, versification)

    # -----------------------------------------------------------------------
    # Formatting
    # -----------------------------------------------------------------------

    def to_string(self, fmt: ReferenceFormat | str = ReferenceFormat.CANONICAL) -> str:
        from pericope.text_processor import TextProcessor
        return TextProcessor(self.versification).format_pericope(self, fmt)

    def __str__(self) -> str:
        return self.to_string()

    # -----------------------------------------------------------------------
    # Expansion
    # -----------------------------------------------------------------------

    def verses(self) -> list[VerseRef]:
        """Every verse covered, range by range, in range-list order."""
        result: list[VerseRef] = []
        for rng in self.ranges:
            current = VerseRef(self.book, rng.start_chapter, rng.start_verse, self.versification)
            while current is not None and (current.chapter, current.verse) <= rng.end:
                result.append(current)
                current = current.next_verse()
        return result

    @functools.cached_property
    def ordinals(self) -> frozenset[int]:
        """Dense ordinals of the covered verses; the Pericope's semantic identity."""
        return frozenset(v.to_ordinal() for v in self.verses())

    def sorted_verses(self) -> list[VerseRef]:
        """Distinct covered verses in canonical order."""
        return [VerseRef.from_ordinal(o, self.versification) for o in sorted(self.ordinals)]

    def __iter__(self) -> Iterator[VerseRef]:
        return iter(self.sorted_verses())

    def __len__(self) -> int:
        return len(self.ordinals)

    def __contains__(self, verse: object) -> bool:
        return isinstance(verse, VerseRef) and verse.to_ordinal() in self.ordinals

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pericope):
            return NotImplemented
        return self.book == other.book and self.ordinals == other.ordinals

    def __hash__(self) -> int:
        return hash((self.book.code, self.ordinals))

    # -----------------------------------------------------------------------
    # Shape queries
    # -----------------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self.ranges

    def is_single_verse(self) -> bool:
        return len(self.ranges) == 1 and self.ranges[0].is_single_verse()

    def is_single_chapter(self) -> bool:
        return all(not r.spans_chapters() for r in self.ranges)

    def spans_chapters(self) -> bool:
        return any(r.spans_chapters() for r in self.ranges)

    def verse_count(self) -> int:
        """Number of distinct verses covered."""
        return len(self.ordinals)

    def range_count(self) -> int:
        return len(self.ranges)

    def chapter_list(self) -> list[int]:
        chapters: set[int] = set()
        for rng in self.ranges:
            chapters.update(range(rng.start_chapter, rng.end_chapter + 1))
        return sorted(chapters)

    def chapter_count(self) -> int:
        return len(self.chapter_list())

    def first_verse(self) -> VerseRef | None:
        if not self.ranges:
            return None
        first = min(self.ranges, key=lambda r: r.start)
        return VerseRef(self.book, first.start_chapter, first.start_verse, self.versification)

    def last_verse(self) -> VerseRef | None:
        if not self.ranges:
            return None
        last = max(self.ranges, key=lambda r: r.end)
        return VerseRef(self.book, last.end_chapter, last.end_verse, self.versification)

    # -----------------------------------------------------------------------
    # Math and predicates (pericope.math_operations)
    # -----------------------------------------------------------------------

    def verses_in_chapter(self, chapter: int) -> int:
        from pericope.math_operations import verses_in_chapter
        return verses_in_chapter(self, chapter)

    def chapters_in_range(self) -> dict[int, list[int]]:
        from pericope.math_operations import chapters_in_range
        return chapters_in_range(self)

    def density(self) -> float:
        from pericope.math_operations import density
        return density(self)

    def gaps(self) -> list[VerseRef]:
        from pericope.math_operations import gaps
        return gaps(self)

    def continuous_ranges(self) -> list["Pericope"]:
        from pericope.math_operations import continuous_ranges
        return continuous_ranges(self)

    def intersects(self, other: object) -> bool:
        from pericope.math_operations import intersects
        return intersects(self, other)

    def overlaps(self, other: object) -> bool:
        return self.intersects(other)

    def contains(self, other: object) -> bool:
        from pericope.math_operations import contains
        return contains(self, other)

    def is_adjacent_to(self, other: object) -> bool:
        from pericope.math_operations import is_adjacent_to
        return is_adjacent_to(self, other)

    def precedes(self, other: object) -> bool:
        from pericope.math_operations import precedes
        return precedes(self, other)

    def follows(self, other: object) -> bool:
        from pericope.math_operations import follows
        return follows(self, other)

    # -----------------------------------------------------------------------
    # Set operations (pericope.set_operations)
    # -----------------------------------------------------------------------

    def union(self, other: object) -> "Pericope":
        from pericope.set_operations import union
        return union(self, other)

    def intersection(self, other: object) -> "Pericope":
        from pericope.set_operations import intersection
        return intersection(self, other)

    def subtract(self, other: object) -> "Pericope":
        from pericope.set_operations import subtract
        return subtract(self, other)

    def complement(self, scope: "Pericope | None" = None) -> "Pericope":
        from pericope.set_operations import complement
        return complement(self, scope)

    def normalize(self) -> "Pericope":
        from pericope.set_operations import normalize
        return normalize(self)

    def expand(self, verses_before: int = 0, verses_after: int = 0) -> "Pericope":
        from pericope.set_operations import expand
        return expand(self, verses_before, verses_after)

    def contract(self, verses_from_start: int = 0, verses_from_end: int = 0) -> "Pericope":
        from pericope.set_operations import contract
        return contract(self, verses_from_start, verses_from_end)

    def __or__(self, other: object) -> "Pericope":
        if not isinstance(other, Pericope):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: object) -> "Pericope":
        if not isinstance(other, Pericope):
            return NotImplemented
        return self.intersection(other)

    def __sub__(self, other: object) -> "Pericope":
        if not isinstance(other, Pericope):
            return NotImplemented
        return self.subtract(other)


# ---------------------------------------------------------------------------
# Canonicalization
# ---------------------------------------------------------------------------

def canonicalize(
    book: Book | str,
    verses: Iterable[VerseRef],
    versification: Versification | None = None,
) -> Pericope:
    """
    Reduce verses to the minimal Pericope covering exactly those verses.

    Sorts and deduplicates, then grows a run while each verse is the
    next_verse() of the run's end; a break closes the run as one Range.
    Every set operation returns through here.

    Raises:
        ValueError: a verse belongs to a different book.
    """
    versification = versification or default_versification()
    book = versification.resolve_book(book)
    verses = set(verses)
    foreign = sorted(str(v) for v in verses if v.book != book)
    if foreign:
        raise ValueError(f"verses {', '.join(foreign)} are not in {book.code}")

    ranges: list[Range] = []
    run_start: VerseRef | None = None
    run_end: VerseRef | None = None
    for verse in sorted(verses):
        if run_end is not None and run_end.next_verse() == verse:
            run_end = verse
            continue
        if run_start is not None:
            ranges.append(Range.spanning(run_start, run_end))
        run_start = run_end = verse
    if run_start is not None:
        ranges.append(Range.spanning(run_start, run_end))
    return Pericope(book, tuple(ranges), versification)
