"""
Static book catalog: codes, canonical numbers, display names and aliases.

Lookups are case-insensitive. Approximate lookup is a bounded linear scan
over the alias table using Levenshtein distance; the table holds a few
hundred aliases, so no index is kept.
"""
from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from rapidfuzz.distance import Levenshtein

from pericope.config import debug

FUZZY_MAX_DISTANCE: int = 2
FUZZY_MIN_LENGTH: int = 3     # shorter inputs match too eagerly


class Testament(str, Enum):
    OLD = "old"
    NEW = "new"


@dataclass(frozen=True, eq=False)
class Book:
    """One canonical book. Equality and hashing use the code only."""
    code: str
    number: int
    name: str
    testament: Testament
    chapter_count: int
    aliases: tuple[str, ...]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Book) and other.code == self.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return self.code

    def is_old_testament(self) -> bool:
        return self.testament is Testament.OLD

    def is_new_testament(self) -> bool:
        return self.testament is Testament.NEW

    def matches(self, text: str | None) -> bool:
        """True if text equals one of this book's aliases, ignoring case."""
        if not text:
            return False
        lowered = text.strip().lower()
        return any(alias.lower() == lowered for alias in self.aliases)


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------

_OT = Testament.OLD
_NT = Testament.NEW

_BOOK_DATA: tuple[tuple[str, int, str, Testament, int, tuple[str, ...]], ...] = (
    ("GEN", 1, "Genesis", _OT, 50, ("Genesis", "Gen", "GEN", "Ge", "Genisis", "Geneses", "Book of Genesis")),
    ("EXO", 2, "Exodus", _OT, 40, ("Exodus", "Exod", "Exo", "EXO", "Ex", "Book of Exodus")),
    ("LEV", 3, "Leviticus", _OT, 27, ("Leviticus", "Lev", "LEV", "Le", "Book of Leviticus")),
    ("NUM", 4, "Numbers", _OT, 36, ("Numbers", "Num", "NUM", "Nu", "Nb", "Book of Numbers")),
    ("DEU", 5, "Deuteronomy", _OT, 34, ("Deuteronomy", "Deut", "DEU", "De", "Dt", "Book of Deuteronomy")),
    ("JOS", 6, "Joshua", _OT, 24, ("Joshua", "Josh", "JOS", "Jos", "Book of Joshua")),
    ("JDG", 7, "Judges", _OT, 21, ("Judges", "Judg", "JDG", "Jdg", "Book of Judges")),
    ("RUT", 8, "Ruth", _OT, 4, ("Ruth", "RUT", "Ru", "Book of Ruth")),
    ("1SA", 9, "1 Samuel", _OT, 31, ("1 Samuel", "1Sam", "1SA", "1 Sam", "First Samuel", "1st Samuel", "I Samuel")),
    ("2SA", 10, "2 Samuel", _OT, 24, ("2 Samuel", "2Sam", "2SA", "2 Sam", "Second Samuel", "2nd Samuel", "II Samuel")),
    ("1KI", 11, "1 Kings", _OT, 22, ("1 Kings", "1Kgs", "1KI", "1 Kgs", "First Kings", "1st Kings", "I Kings")),
    ("2KI", 12, "2 Kings", _OT, 25, ("2 Kings", "2Kgs", "2KI", "2 Kgs", "Second Kings", "2nd Kings", "II Kings")),
    ("1CH", 13, "1 Chronicles", _OT, 29, ("1 Chronicles", "1Chr", "1CH", "1 Chr", "First Chronicles", "1st Chronicles", "I Chronicles")),
    ("2CH", 14, "2 Chronicles", _OT, 36, ("2 Chronicles", "2Chr", "2CH", "2 Chr", "Second Chronicles", "2nd Chronicles", "II Chronicles")),
    ("EZR", 15, "Ezra", _OT, 10, ("Ezra", "EZR", "Ezr", "Book of Ezra")),
    ("NEH", 16, "Nehemiah", _OT, 13, ("Nehemiah", "Neh", "NEH", "Ne", "Book of Nehemiah")),
    ("EST", 17, "Esther", _OT, 10, ("Esther", "Esth", "EST", "Es", "Book of Esther")),
    ("JOB", 18, "Job", _OT, 42, ("Job", "JOB", "Jb", "Book of Job")),
    ("PSA", 19, "Psalms", _OT, 150, ("Psalms", "Psalm", "Ps", "PSA", "Psa", "Pss", "Book of Psalms")),
    ("PRO", 20, "Proverbs", _OT, 31, ("Proverbs", "Prov", "PRO", "Pr", "Book of Proverbs")),
    ("ECC", 21, "Ecclesiastes", _OT, 12, ("Ecclesiastes", "Eccl", "ECC", "Ec", "Ecc", "Book of Ecclesiastes")),
    ("SNG", 22, "Song of Songs", _OT, 8, ("Song of Songs", "Song", "SNG", "SS", "Song of Solomon", "Canticles")),
    ("ISA", 23, "Isaiah", _OT, 66, ("Isaiah", "Isa", "ISA", "Is", "Book of Isaiah")),
    ("JER", 24, "Jeremiah", _OT, 52, ("Jeremiah", "Jer", "JER", "Je", "Book of Jeremiah")),
    ("LAM", 25, "Lamentations", _OT, 5, ("Lamentations", "Lam", "LAM", "La", "Book of Lamentations")),
    ("EZK", 26, "Ezekiel", _OT, 48, ("Ezekiel", "Ezek", "EZK", "Eze", "Book of Ezekiel")),
    ("DAN", 27, "Daniel", _OT, 12, ("Daniel", "Dan", "DAN", "Da", "Book of Daniel")),
    ("HOS", 28, "Hosea", _OT, 14, ("Hosea", "Hos", "HOS", "Ho", "Book of Hosea")),
    ("JOL", 29, "Joel", _OT, 3, ("Joel", "JOL", "Joe", "Book of Joel")),
    ("AMO", 30, "Amos", _OT, 9, ("Amos", "AMO", "Am", "Book of Amos")),
    ("OBA", 31, "Obadiah", _OT, 1, ("Obadiah", "Obad", "OBA", "Ob", "Book of Obadiah")),
    ("JON", 32, "Jonah", _OT, 4, ("Jonah", "JON", "Jon", "Book of Jonah")),
    ("MIC", 33, "Micah", _OT, 7, ("Micah", "Mic", "MIC", "Mi", "Book of Micah")),
    ("NAM", 34, "Nahum", _OT, 3, ("Nahum", "Nah", "NAM", "Na", "Book of Nahum")),
    ("HAB", 35, "Habakkuk", _OT, 3, ("Habakkuk", "Hab", "HAB", "Hb", "Book of Habakkuk")),
    ("ZEP", 36, "Zephaniah", _OT, 3, ("Zephaniah", "Zeph", "ZEP", "Zp", "Book of Zephaniah")),
    ("HAG", 37, "Haggai", _OT, 2, ("Haggai", "Hag", "HAG", "Hg", "Book of Haggai")),
    ("ZEC", 38, "Zechariah", _OT, 14, ("Zechariah", "Zech", "ZEC", "Zc", "Book of Zechariah")),
    ("MAL", 39, "Malachi", _OT, 4, ("Malachi", "Mal", "MAL", "Ml", "Book of Malachi")),
    ("MAT", 40, "Matthew", _NT, 28, ("Matthew", "Matt", "MAT", "Mt", "Mathew", "Mattew", "Gospel of Matthew", "St Matthew", "Saint Matthew")),
    ("MRK", 41, "Mark", _NT, 16, ("Mark", "MRK", "Mk", "Gospel of Mark", "St Mark", "Saint Mark")),
    ("LUK", 42, "Luke", _NT, 24, ("Luke", "LUK", "Lk", "Gospel of Luke", "St Luke", "Saint Luke")),
    ("JHN", 43, "John", _NT, 21, ("John", "JHN", "Jn", "Gospel of John", "St John", "Saint John")),
    ("ACT", 44, "Acts", _NT, 28, ("Acts", "ACT", "Ac", "Acts of the Apostles", "Book of Acts")),
    ("ROM", 45, "Romans", _NT, 16, ("Romans", "Rom", "ROM", "Ro", "Rm", "Letter to the Romans")),
    ("1CO", 46, "1 Corinthians", _NT, 16, ("1 Corinthians", "1Corinthians", "1Cor", "1 Cor", "First Corinthians", "1st Corinthians", "I Corinthians", "1CO", "ICO", "I CO")),
    ("2CO", 47, "2 Corinthians", _NT, 13, ("2 Corinthians", "2Corinthians", "2Cor", "2 Cor", "Second Corinthians", "2nd Corinthians", "II Corinthians", "2CO", "IICO", "II CO")),
    ("GAL", 48, "Galatians", _NT, 6, ("Galatians", "Gal", "GAL", "Ga", "Letter to the Galatians")),
    ("EPH", 49, "Ephesians", _NT, 6, ("Ephesians", "Eph", "EPH", "Ep", "Letter to the Ephesians")),
    ("PHP", 50, "Philippians", _NT, 4, ("Philippians", "Phil", "PHP", "Php", "Ph", "Letter to the Philippians")),
    ("COL", 51, "Colossians", _NT, 4, ("Colossians", "Col", "COL", "Co", "Letter to the Colossians")),
    ("1TH", 52, "1 Thessalonians", _NT, 5, ("1 Thessalonians", "1Thess", "1TH", "1 Thess", "First Thessalonians", "1st Thessalonians", "I Thessalonians")),
    ("2TH", 53, "2 Thessalonians", _NT, 3, ("2 Thessalonians", "2Thess", "2TH", "2 Thess", "Second Thessalonians", "2nd Thessalonians", "II Thessalonians")),
    ("1TI", 54, "1 Timothy", _NT, 6, ("1 Timothy", "1Tim", "1TI", "1 Tim", "First Timothy", "1st Timothy", "I Timothy")),
    ("2TI", 55, "2 Timothy", _NT, 4, ("2 Timothy", "2Tim", "2TI", "2 Tim", "Second Timothy", "2nd Timothy", "II Timothy")),
    ("TIT", 56, "Titus", _NT, 3, ("Titus", "Tit", "TIT", "Ti", "Letter to Titus")),
    ("PHM", 57, "Philemon", _NT, 1, ("Philemon", "Phlm", "PHM", "Phm", "Letter to Philemon")),
    ("HEB", 58, "Hebrews", _NT, 13, ("Hebrews", "Heb", "HEB", "He", "Letter to the Hebrews")),
    ("JAS", 59, "James", _NT, 5, ("James", "Jas", "JAS", "Jm", "Letter of James")),
    ("1PE", 60, "1 Peter", _NT, 5, ("1 Peter", "1Pet", "1PE", "1 Pet", "First Peter", "1st Peter", "I Peter")),
    ("2PE", 61, "2 Peter", _NT, 3, ("2 Peter", "2Pet", "2PE", "2 Pet", "Second Peter", "2nd Peter", "II Peter")),
    ("1JN", 62, "1 John", _NT, 5, ("1 John", "1Jn", "1JN", "1 Jn", "First John", "1st John", "I John")),
    ("2JN", 63, "2 John", _NT, 1, ("2 John", "2Jn", "2JN", "2 Jn", "Second John", "2nd John", "II John")),
    ("3JN", 64, "3 John", _NT, 1, ("3 John", "3Jn", "3JN", "3 Jn", "Third John", "3rd John", "III John")),
    ("JUD", 65, "Jude", _NT, 1, ("Jude", "JUD", "Jd", "Letter of Jude")),
    ("REV", 66, "Revelation", _NT, 22, ("Revelation", "Rev", "REV", "Re", "Apocalypse", "Book of Revelation")),
)


def canonical_books() -> list[Book]:
    """Build Book instances for the 66-book canon, in canonical order."""
    return [
        Book(code=code, number=number, name=name, testament=testament,
             chapter_count=chapters, aliases=aliases)
        for code, number, name, testament, chapters, aliases in _BOOK_DATA
    ]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class Catalog:
    """
    Read-only lookup service over a fixed set of books.

    The alias table maps each lowercased alias (plus each code) to its book.
    When two books declare the same alias, the first book declared keeps it.
    """

    def __init__(self, books: Iterable[Book]) -> None:
        self._books: tuple[Book, ...] = tuple(sorted(books, key=lambda b: b.number))
        self._by_code: dict[str, Book] = {}
        self._by_number: dict[int, Book] = {}
        self._by_alias: dict[str, Book] = {}
        for book in self._books:
            self._by_code[book.code.upper()] = book
            self._by_number[book.number] = book
            for alias in (*book.aliases, book.code):
                self._by_alias.setdefault(alias.lower(), book)

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(self._books)

    def all_books(self) -> list[Book]:
        return list(self._books)

    def testament_books(self, testament: Testament | str) -> list[Book]:
        try:
            wanted = Testament(testament)
        except ValueError:
            return []
        return [b for b in self._books if b.testament is wanted]

    def find_by_code(self, code: str | None) -> Book | None:
        if not code:
            return None
        return self._by_code.get(code.strip().upper())

    def find_by_number(self, number: int | None) -> Book | None:
        if number is None:
            return None
        return self._by_number.get(number)

    def find_by_exact_alias(self, name: str | None) -> Book | None:
        if not name:
            return None
        return self._by_alias.get(name.strip().lower())

    def find_by_approximate_name(
        self, name: str | None, max_distance: int = FUZZY_MAX_DISTANCE
    ) -> Book | None:
        """
        Nearest alias by Levenshtein distance, or None.

        Inputs shorter than FUZZY_MIN_LENGTH never match. Ties go to the
        alias encountered first in table order.
        """
        if not name:
            return None
        needle = name.strip().lower()
        if len(needle) < FUZZY_MIN_LENGTH:
            return None

        best: Book | None = None
        best_alias = ""
        best_distance = max_distance + 1
        for alias, book in self._by_alias.items():
            d = Levenshtein.distance(needle, alias, score_cutoff=max_distance)
            if d < best_distance:
                best, best_alias, best_distance = book, alias, d
                if d == 0:
                    break

        if best is not None:
            debug(f"Fuzzy-matched {name!r} to {best.code} via alias {best_alias!r} (distance {best_distance})")
        return best

    def find_by_name(self, name: str | None) -> Book | None:
        """Exact alias match first, then approximate match."""
        return self.find_by_exact_alias(name) or self.find_by_approximate_name(name)

    def normalize_name(self, name: str | None) -> str | None:
        book = self.find_by_name(name)
        return book.code if book is not None else None


@functools.lru_cache(maxsize=None)
def default_catalog() -> Catalog:
    """Process-wide catalog of the 66 canonical books."""
    return Catalog(canonical_books())
