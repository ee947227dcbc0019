from __future__ import annotations

import functools
from dataclasses import dataclass, field
from enum import Enum

from pericope.books import Book
from pericope.errors import InvalidChapterError, InvalidVerseError
from pericope.versification import Versification, default_versification

# ---------------------------------------------------------------------------
# Dense ordinal encoding
# ---------------------------------------------------------------------------

# book * 1_000_000 + chapter * 1_000 + verse, the same integer verse ID
# pythonbible uses. Assumes chapter and verse numbers stay below 1000;
# Versification refuses tables that break this.
BOOK_FACTOR: int = 1_000_000
CHAPTER_FACTOR: int = 1_000


def encode_ordinal(book_number: int, chapter: int, verse: int) -> int:
    return book_number * BOOK_FACTOR + chapter * CHAPTER_FACTOR + verse


def decode_ordinal(ordinal: int) -> tuple[int, int, int]:
    """Split an ordinal into (book number, chapter, verse)."""
    book_number, rest = divmod(ordinal, BOOK_FACTOR)
    chapter, verse = divmod(rest, CHAPTER_FACTOR)
    return book_number, chapter, verse


class Ordering(str, Enum):
    BEFORE = "before"
    EQUAL = "equal"
    AFTER = "after"


# ---------------------------------------------------------------------------
# VerseRef
# ---------------------------------------------------------------------------

@functools.total_ordering
@dataclass(frozen=True)
class VerseRef:
    """
    A validated (book, chapter, verse) address.

    Construction either succeeds with a valid address or raises
    InvalidBookError / InvalidChapterError / InvalidVerseError. Ordering
    follows book number, then chapter, then verse.

    next_verse() and previous_verse() hold the only chapter-rollover logic
    in the package; ranges are walked through them and nowhere else.
    """
    book: Book
    chapter: int
    verse: int
    versification: Versification = field(
        default=None, compare=False, repr=False, hash=False
    )

    def __post_init__(self) -> None:
        versification = self.versification or default_versification()
        book = versification.resolve_book(self.book)
        try:
            chapter = int(self.chapter)
        except (TypeError, ValueError) as exc:
            raise InvalidChapterError(book.code, self.chapter) from exc
        try:
            verse = int(self.verse)
        except (TypeError, ValueError) as exc:
            raise InvalidVerseError(book.code, chapter, self.verse) from exc

        object.__setattr__(self, "versification", versification)
        object.__setattr__(self, "book", book)
        object.__setattr__(self, "chapter", chapter)
        object.__setattr__(self, "verse", verse)

        if not versification.is_valid_chapter(book, chapter):
            raise InvalidChapterError(book.code, chapter)
        if not versification.is_valid_verse(book, chapter, verse):
            raise InvalidVerseError(book.code, chapter, verse)

    @classmethod
    def from_ordinal(cls, ordinal: int, versification: Versification | None = None) -> "VerseRef":
        versification = versification or default_versification()
        book_number, chapter, verse = decode_ordinal(ordinal)
        book = versification.catalog.find_by_number(book_number)
        if book is None:
            book = str(book_number)     # resolve_book raises InvalidBookError
        return cls(book, chapter, verse, versification)

    def __str__(self) -> str:
        return f"{self.book.code} {self.chapter}:{self.verse}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VerseRef):
            return NotImplemented
        return self.to_ordinal() < other.to_ordinal()

    def to_ordinal(self) -> int:
        return encode_ordinal(self.book.number, self.chapter, self.verse)

    def compare(self, other: "VerseRef") -> Ordering:
        mine, theirs = self.to_ordinal(), other.to_ordinal()
        if mine < theirs:
            return Ordering.BEFORE
        if mine > theirs:
            return Ordering.AFTER
        return Ordering.EQUAL

    def is_before(self, other: "VerseRef") -> bool:
        return self.compare(other) is Ordering.BEFORE

    def is_after(self, other: "VerseRef") -> bool:
        return self.compare(other) is Ordering.AFTER

    # -----------------------------------------------------------------------
    # Navigation
    # -----------------------------------------------------------------------

    def next_verse(self) -> "VerseRef | None":
        """The following verse, rolling into the next chapter; None at the end of the book."""
        vrs = self.versification
        if self.verse < vrs.verse_count(self.book, self.chapter):
            return VerseRef(self.book, self.chapter, self.verse + 1, vrs)
        if vrs.is_valid_chapter(self.book, self.chapter + 1):
            return VerseRef(self.book, self.chapter + 1, 1, vrs)
        return None

    def previous_verse(self) -> "VerseRef | None":
        """The preceding verse, rolling into the previous chapter; None at the start of the book."""
        vrs = self.versification
        if self.verse > 1:
            return VerseRef(self.book, self.chapter, self.verse - 1, vrs)
        if self.chapter > 1:
            prev_chapter = self.chapter - 1
            return VerseRef(self.book, prev_chapter, vrs.verse_count(self.book, prev_chapter), vrs)
        return None
