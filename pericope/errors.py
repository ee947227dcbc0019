class PericopeError(Exception):
    pass


class InvalidBookError(PericopeError):
    def __init__(self, book_input: str) -> None:
        super().__init__(f"Invalid book: {book_input!r}")
        self.book_input = book_input


class InvalidChapterError(PericopeError):
    def __init__(self, book: str, chapter: int) -> None:
        super().__init__(f"Invalid chapter {chapter} for book {book}")
        self.book = book
        self.chapter = chapter


class InvalidVerseError(PericopeError):
    def __init__(self, book: str, chapter: int, verse: int) -> None:
        super().__init__(f"Invalid verse {chapter}:{verse} for book {book}")
        self.book = book
        self.chapter = chapter
        self.verse = verse


class InvalidRangeError(PericopeError):
    def __init__(self, range_text: str) -> None:
        super().__init__(f"Invalid range: {range_text!r}")
        self.range_text = range_text


class ParseFailureError(PericopeError):
    def __init__(self, text: str | None, reason: str = "") -> None:
        message = f"Failed to parse: {text!r}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)
        self.text = text
        self.reason = reason
