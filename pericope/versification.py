from __future__ import annotations

import functools
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import pythonbible as pb

from pericope.books import Book, Catalog, default_catalog
from pericope.config import warn
from pericope.errors import InvalidBookError

# Dense verse ordinals pack chapter and verse into three decimal digits each.
MAX_ENCODABLE_NUMBER: int = 999


@dataclass(frozen=True)
class ChapterInfo:
    book_code: str
    chapter: int
    verse_count: int


class Versification:
    """
    Per-book, per-chapter verse counts over one Catalog.

    This is the only place chapter boundaries come from. Every component
    that needs them takes a Versification, so tests can inject a synthetic
    corpus through the constructor.
    """

    def __init__(
        self,
        catalog: Catalog,
        verse_counts: Mapping[str, Sequence[int]],
        name: str = "english",
    ) -> None:
        self.catalog = catalog
        self.name = name
        self._counts: dict[str, tuple[int, ...]] = {}
        for code, counts in verse_counts.items():
            book = catalog.find_by_code(code)
            if book is None:
                warn(f"Versification {name!r} lists unknown book {code!r}; ignored")
                continue
            counts = tuple(int(c) for c in counts)
            if len(counts) != book.chapter_count:
                warn(
                    f"Versification {name!r} gives {book.code} {len(counts)} chapters, "
                    f"catalog says {book.chapter_count}"
                )
            if len(counts) > MAX_ENCODABLE_NUMBER or any(c > MAX_ENCODABLE_NUMBER for c in counts):
                raise ValueError(
                    f"{book.code} exceeds {MAX_ENCODABLE_NUMBER} chapters or verses; "
                    f"dense verse ordinals cannot encode it"
                )
            self._counts[book.code] = counts

    @classmethod
    def from_pythonbible(cls, catalog: Catalog | None = None) -> "Versification":
        """Build the verse table from pythonbible's reference data, keyed by book number."""
        catalog = catalog or default_catalog()
        counts: dict[str, list[int]] = {}
        for book in catalog:
            pb_book = pb.Book(book.number)
            chapters = pb.get_number_of_chapters(pb_book)
            counts[book.code] = [
                pb.get_number_of_verses(pb_book, chapter)
                for chapter in range(1, chapters + 1)
            ]
        return cls(catalog, counts)

    # -----------------------------------------------------------------------
    # Book resolution
    # -----------------------------------------------------------------------

    def resolve_book(self, book: Book | str) -> Book:
        """Return the catalog Book for a Book or code. Raises InvalidBookError."""
        if isinstance(book, Book):
            found = self.catalog.find_by_code(book.code)
        else:
            found = self.catalog.find_by_code(str(book))
        if found is None:
            raise InvalidBookError(str(book))
        return found

    def _table(self, book: Book | str) -> tuple[int, ...] | None:
        code = book.code if isinstance(book, Book) else str(book).strip().upper()
        return self._counts.get(code)

    # -----------------------------------------------------------------------
    # Lookups
    # -----------------------------------------------------------------------

    def chapter_count(self, book: Book | str) -> int | None:
        table = self._table(book)
        if table is None:
            return None
        found = self.catalog.find_by_code(book.code if isinstance(book, Book) else book)
        return min(len(table), found.chapter_count) if found else len(table)

    def verse_count(self, book: Book | str, chapter: int) -> int | None:
        """Number of verses in the chapter, or None if book/chapter is unknown."""
        if not self.is_valid_chapter(book, chapter):
            return None
        return self._table(book)[chapter - 1]

    def total_verses(self, book: Book | str) -> int | None:
        chapters = self.chapter_count(book)
        if chapters is None:
            return None
        return sum(self._table(book)[:chapters])

    def is_valid_chapter(self, book: Book | str, chapter: int) -> bool:
        chapters = self.chapter_count(book)
        return chapters is not None and 1 <= chapter <= chapters

    def is_valid_verse(self, book: Book | str, chapter: int, verse: int) -> bool:
        count = self.verse_count(book, chapter)
        return count is not None and 1 <= verse <= count

    def chapter_info(self, book: Book | str, chapter: int) -> ChapterInfo | None:
        count = self.verse_count(book, chapter)
        if count is None:
            return None
        code = book.code if isinstance(book, Book) else str(book).strip().upper()
        return ChapterInfo(book_code=code, chapter=chapter, verse_count=count)

    def book_chapters(self, book: Book | str) -> list[ChapterInfo]:
        chapters = self.chapter_count(book) or 0
        return [self.chapter_info(book, c) for c in range(1, chapters + 1)]


@functools.lru_cache(maxsize=None)
def default_versification() -> Versification:
    """Process-wide verse table for the default catalog."""
    return Versification.from_pythonbible(default_catalog())
