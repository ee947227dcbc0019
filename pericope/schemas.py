from __future__ import annotations

from pydantic import BaseModel, field_validator, model_validator

from pericope.passage import Pericope, Range, ReferenceFormat


# ---------------------------------------------------------------------------
# Serialized shapes (CLI --json output)
# ---------------------------------------------------------------------------

class RangeModel(BaseModel):
    """One chapter:verse range as emitted in JSON output."""
    start_chapter: int
    start_verse: int
    end_chapter: int
    end_verse: int

    @model_validator(mode="after")
    def validate_order(self) -> "RangeModel":
        if (self.start_chapter, self.start_verse) > (self.end_chapter, self.end_verse):
            raise ValueError(
                f"range start {self.start_chapter}:{self.start_verse} "
                f"follows end {self.end_chapter}:{self.end_verse}"
            )
        return self

    @classmethod
    def from_range(cls, rng: Range) -> "RangeModel":
        return cls(
            start_chapter=rng.start_chapter,
            start_verse=rng.start_verse,
            end_chapter=rng.end_chapter,
            end_verse=rng.end_verse,
        )


class PericopeReport(BaseModel):
    """
    Summary of one Pericope for machine consumption.

    reference: formatted reference in the requested label style
    chapters:  every chapter the pericope touches, ascending
    density:   covered verses / total verses of the touched chapters, in [0, 1]
    """
    reference: str
    book: str
    book_name: str
    testament: str
    ranges: list[RangeModel] = []
    verse_count: int
    chapters: list[int] = []
    density: float

    @field_validator("density")
    @classmethod
    def validate_density(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"density must be within [0, 1], got {value}")
        return value

    @field_validator("verse_count")
    @classmethod
    def validate_verse_count(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"verse_count must be non-negative, got {value}")
        return value

    @classmethod
    def from_pericope(
        cls, pericope: Pericope, fmt: ReferenceFormat | str = ReferenceFormat.CANONICAL
    ) -> "PericopeReport":
        return cls(
            reference=pericope.to_string(fmt),
            book=pericope.book.code,
            book_name=pericope.book.name,
            testament=pericope.book.testament.value,
            ranges=[RangeModel.from_range(r) for r in pericope.ranges],
            verse_count=pericope.verse_count(),
            chapters=pericope.chapter_list(),
            density=pericope.density(),
        )
