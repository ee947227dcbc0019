"""
Text <-> Pericope: reference parsing, formatting, free-text scanning and
autocomplete suggestions.

Reference grammar:
    ref        := book [range-list]
    range-list := range ("," range)*
    range      := point | point "-" end
    point      := [chapter ":"] verse
    end        := point | verse          (a bare verse inherits the start's chapter)

A bare number with no chapter established yet is read as a chapter and
points at its first verse ("GEN 3" is GEN 3:1). After that, bare numbers
are verses of the chapter the previous item started in ("GEN 1:1,3,5",
and "GEN 1:31-2:2,5" ends with 1:5).
A reference with no range list points at 1:1.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from pericope.books import Book
from pericope.config import debug
from pericope.errors import (
    InvalidBookError,
    InvalidChapterError,
    InvalidVerseError,
    ParseFailureError,
    PericopeError,
)
from pericope.passage import Pericope, Range, ReferenceFormat
from pericope.versification import Versification, default_versification

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_RANGE: str = "1:1"
MAX_SUGGESTIONS: int = 10
MAX_VERSE_SUGGESTIONS: int = 20
COMMON_BOOKS: tuple[str, ...] = (
    "Genesis", "Exodus", "Matthew", "Mark", "Luke", "John", "Acts", "Romans",
)

# A three-letter code (or digit + two letters) followed by chapter/verse punctuation.
_SCAN_PATTERN = re.compile(r"\b([A-Z]{3}|[1-3][A-Z]{2})\s+([0-9:,-]+)", re.IGNORECASE)
_ORDINAL_PREFIX = re.compile(r"^[1-3]$")
_DIGITS = re.compile(r"^\d+$")


@dataclass(frozen=True)
class ParseOutcome:
    """Result of a non-raising parse: exactly one of pericope / error is set."""
    text: str
    pericope: Pericope | None = None
    error: PericopeError | None = None

    @property
    def ok(self) -> bool:
        return self.pericope is not None


class TextProcessor:
    """Parser, formatter and suggestion engine bound to one Versification."""

    def __init__(self, versification: Versification | None = None) -> None:
        self.versification = versification or default_versification()
        self.catalog = self.versification.catalog

    # -----------------------------------------------------------------------
    # Parsing
    # -----------------------------------------------------------------------

    def parse_reference(self, text: str) -> Pericope:
        """
        Parse one reference string into a Pericope.

        Raises:
            ParseFailureError: empty or structurally malformed text.
            InvalidBookError: no book matches the book token.
            InvalidChapterError / InvalidVerseError: a resolved chapter:verse
                is outside the verse table. The whole parse is aborted.
            InvalidRangeError: a range ends before it starts.
        """
        trimmed = text.strip() if text else ""
        if not trimmed:
            raise ParseFailureError(text, "empty reference")

        parts = trimmed.split()
        book, rest = self._split_book(parts)
        if book is None:
            raise InvalidBookError(parts[0])

        range_text = " ".join(rest) or DEFAULT_RANGE
        ranges = self._parse_ranges(range_text, book)
        return Pericope(book, tuple(ranges), self.versification)

    def try_parse_reference(self, text: str) -> ParseOutcome:
        """Like parse_reference, but reports failure in the outcome instead of raising."""
        try:
            return ParseOutcome(text=text, pericope=self.parse_reference(text))
        except PericopeError as exc:
            return ParseOutcome(text=text, error=exc)

    def parse(self, text: str) -> list[Pericope]:
        """
        Extract every parseable reference from free text, in order of appearance.

        Only tokens that are a book code or alias as written count as a book;
        no approximate matching, so ordinary words ("The 3", "day 2") are not
        read as references. Candidates that fail to parse are skipped.
        """
        found: list[Pericope] = []
        for match in _SCAN_PATTERN.finditer(text or ""):
            candidate = f"{match.group(1)} {match.group(2).rstrip(',:-')}"
            if self.catalog.find_by_exact_alias(match.group(1)) is None:
                debug(f"Skipping candidate {candidate!r}: {match.group(1)!r} is not a book code")
                continue
            outcome = self.try_parse_reference(candidate)
            if outcome.ok:
                found.append(outcome.pericope)
            else:
                debug(f"Skipping candidate {candidate!r}: {outcome.error}")
        return found

    def _split_book(self, parts: list[str]) -> tuple[Book | None, list[str]]:
        """Resolve the leading book token(s); return the book and the remaining tokens."""
        # "1 John", "2 Cor"
        if _ORDINAL_PREFIX.match(parts[0]) and len(parts) > 1:
            book = self.catalog.find_by_name(f"{parts[0]} {parts[1]}")
            if book is not None:
                return book, parts[2:]

        # Multi-word aliases: "Song of Songs", "First Corinthians", "Gospel of John"
        words = 1
        while words < len(parts) and not any(ch.isdigit() for ch in parts[words]):
            words += 1
        for n in range(words, 1, -1):
            book = self.catalog.find_by_exact_alias(" ".join(parts[:n]))
            if book is not None:
                return book, parts[n:]

        return self.catalog.find_by_name(parts[0]), parts[1:]

    def _parse_ranges(self, range_text: str, book: Book) -> list[Range]:
        ranges: list[Range] = []
        chapter: int | None = None
        for item in range_text.split(","):
            item = item.strip()
            if not item:
                raise ParseFailureError(range_text, "empty range item")
            rng = self._parse_range(item, chapter, book)
            ranges.append(rng)
            chapter = rng.start_chapter
        return ranges

    def _parse_range(self, item: str, chapter: int | None, book: Book) -> Range:
        pieces = [p.strip() for p in item.split("-")]
        if len(pieces) > 2 or any(not p for p in pieces):
            raise ParseFailureError(item, "expected 'start' or 'start-end'")

        start_chapter, start_verse = self._parse_point(pieces[0], chapter)
        self._validate(book, start_chapter, start_verse)
        if len(pieces) == 1:
            return Range(start_chapter, start_verse, start_chapter, start_verse)

        end = pieces[1]
        if ":" in end:
            end_chapter, end_verse = self._parse_point(end, start_chapter)
        else:
            end_chapter, end_verse = start_chapter, self._to_int(end, item)
        self._validate(book, end_chapter, end_verse)
        return Range(start_chapter, start_verse, end_chapter, end_verse)

    def _parse_point(self, text: str, chapter: int | None) -> tuple[int, int]:
        if ":" in text:
            pieces = text.split(":")
            if len(pieces) != 2:
                raise ParseFailureError(text, "expected 'chapter:verse'")
            return self._to_int(pieces[0], text), self._to_int(pieces[1], text)
        if chapter is not None:
            return chapter, self._to_int(text, text)
        return self._to_int(text, text), 1

    @staticmethod
    def _to_int(token: str, context: str) -> int:
        token = token.strip()
        if not _DIGITS.match(token):
            raise ParseFailureError(context, f"{token!r} is not a number")
        return int(token)

    def _validate(self, book: Book, chapter: int, verse: int) -> None:
        if not self.versification.is_valid_chapter(book, chapter):
            raise InvalidChapterError(book.code, chapter)
        if not self.versification.is_valid_verse(book, chapter, verse):
            raise InvalidVerseError(book.code, chapter, verse)

    # -----------------------------------------------------------------------
    # Formatting
    # -----------------------------------------------------------------------

    def format_pericope(self, pericope: Pericope, fmt: ReferenceFormat | str = ReferenceFormat.CANONICAL) -> str:
        """'<label> <ranges>' with each range written in full; '' for an empty pericope."""
        if pericope.is_empty():
            return ""
        fmt = ReferenceFormat(fmt)
        label = pericope.book.name if fmt is ReferenceFormat.FULL_NAME else pericope.book.code
        return f"{label} {','.join(r.format() for r in pericope.ranges)}"

    # -----------------------------------------------------------------------
    # Autocomplete
    # -----------------------------------------------------------------------

    def suggest_completions(self, partial: str) -> list[str]:
        """
        Suggest textual continuations of a partially typed reference.

        - nothing typed:            a fixed list of common books
        - partial book name:        matching book names (max 10)
        - book only:                its first chapters (max 10)
        - partial chapter digits:   longer chapter numbers with that prefix,
                                    else "<chapter>:" if already complete
        - "<chapter>:":             its first verses (max 20)
        - partial verse digits:     longer verse numbers with that prefix,
                                    else "<verse>-" and "<verse>,"
        """
        trimmed = (partial or "").strip()
        if not trimmed:
            return list(COMMON_BOOKS)

        parts = trimmed.split()

        if len(parts) == 1:
            matches = self._books_with_prefix(trimmed)
            exact = any(b.name.lower() == trimmed.lower() for b in matches)
            if matches and (len(matches) > 1 or not exact):
                return _dedupe(b.name for b in matches)[:MAX_SUGGESTIONS]

        if _ORDINAL_PREFIX.match(parts[0]) and len(parts) == 2:
            matches = self._books_with_prefix(f"{parts[0]} {parts[1]}")
            if matches:
                return _dedupe(b.name for b in matches)[:MAX_SUGGESTIONS]

        book, label, rest = self._book_for_suggestions(parts)
        if book is None:
            return []

        prefix = f"{label} "
        content = "".join(rest)
        if not content:
            chapters = self.versification.chapter_count(book) or 0
            return [f"{prefix}{c}" for c in range(1, min(chapters, MAX_SUGGESTIONS) + 1)]

        if ":" not in content:
            return self._suggest_chapters(book, prefix, content)
        return self._suggest_verses(book, prefix, content)

    def _books_with_prefix(self, text: str) -> list[Book]:
        lowered = text.lower()
        return [
            b for b in self.catalog
            if b.name.lower().startswith(lowered)
            or any(a.lower().startswith(lowered) for a in b.aliases)
        ]

    def _book_for_suggestions(self, parts: list[str]) -> tuple[Book | None, str, list[str]]:
        """Resolve the book and the label to echo back: the typed alias if exact, else the name."""
        if _ORDINAL_PREFIX.match(parts[0]) and len(parts) > 1:
            typed = f"{parts[0]} {parts[1]}"
            book = self.catalog.find_by_name(typed)
            if book is not None:
                return book, _alias_or_name(book, typed), parts[2:]
        book = self.catalog.find_by_name(parts[0])
        if book is None:
            return None, "", []
        return book, _alias_or_name(book, parts[0]), parts[1:]

    def _suggest_chapters(self, book: Book, prefix: str, typed: str) -> list[str]:
        chapters = self.versification.chapter_count(book) or 0
        completions = _strict_prefix_completions(typed, chapters)
        if completions:
            return [f"{prefix}{c}" for c in completions]
        if _DIGITS.match(typed) and self.versification.is_valid_chapter(book, int(typed)):
            return [f"{prefix}{int(typed)}:"]
        return []

    def _suggest_verses(self, book: Book, prefix: str, content: str) -> list[str]:
        chapter_text, _, verse_text = content.partition(":")
        if not _DIGITS.match(chapter_text):
            return []
        chapter = int(chapter_text)
        verse_count = self.versification.verse_count(book, chapter)
        if verse_count is None:
            return []

        if not verse_text:
            return [f"{prefix}{chapter}:{v}" for v in range(1, min(verse_count, MAX_VERSE_SUGGESTIONS) + 1)]
        if not _DIGITS.match(verse_text):
            return []

        completions = _strict_prefix_completions(verse_text, verse_count)
        if completions:
            return [f"{prefix}{chapter}:{v}" for v in completions]
        verse = int(verse_text)
        if self.versification.is_valid_verse(book, chapter, verse):
            return [f"{prefix}{chapter}:{verse}-", f"{prefix}{chapter}:{verse},"]
        return []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _strict_prefix_completions(typed: str, upper: int) -> list[int]:
    """Numbers 1..upper whose digits start with typed and are longer than it (max 10)."""
    found: list[int] = []
    for n in range(1, upper + 1):
        digits = str(n)
        if digits.startswith(typed) and digits != typed:
            found.append(n)
            if len(found) >= MAX_SUGGESTIONS:
                break
    return found


def _alias_or_name(book: Book, typed: str) -> str:
    lowered = typed.lower()
    for alias in book.aliases:
        if alias.lower() == lowered:
            return alias
    return book.name


def _dedupe(names) -> list[str]:
    return list(dict.fromkeys(names))
