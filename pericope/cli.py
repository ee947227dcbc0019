from enum import Enum
from typing import Optional

import typer
from dotenv import load_dotenv

load_dotenv()  # loads .env from the current working directory if present

from pericope.config import default_format, warn
from pericope.errors import (
    InvalidBookError,
    InvalidChapterError,
    InvalidRangeError,
    InvalidVerseError,
    ParseFailureError,
    PericopeError,
)
from pericope.passage import Pericope, ReferenceFormat
from pericope.schemas import PericopeReport
from pericope.text_processor import TextProcessor

# Exit codes: each PericopeError subtype maps to a distinct code
# so callers (scripts, CI) can distinguish failure modes.
EXIT_INVALID_BOOK: int = 2
EXIT_INVALID_CHAPTER: int = 3
EXIT_INVALID_VERSE: int = 4
EXIT_PARSE_FAILURE: int = 5
EXIT_INVALID_RANGE: int = 6

_EXIT_CODES: tuple[tuple[type[PericopeError], int], ...] = (
    (InvalidBookError, EXIT_INVALID_BOOK),
    (InvalidChapterError, EXIT_INVALID_CHAPTER),
    (InvalidVerseError, EXIT_INVALID_VERSE),
    (ParseFailureError, EXIT_PARSE_FAILURE),
    (InvalidRangeError, EXIT_INVALID_RANGE),
)

app = typer.Typer(
    name="pericope",
    help="Parse, combine and inspect Bible passage references.",
    add_completion=False,
)


class CombineOp(str, Enum):
    union = "union"
    intersection = "intersection"
    subtract = "subtract"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _exit_code_for(exc: PericopeError) -> int:
    for error_type, code in _EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    # Unhandled PericopeError subtypes (future additions) → exit 1
    return 1


def _fail(exc: PericopeError) -> None:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=_exit_code_for(exc))


def _format(full_name: bool) -> ReferenceFormat:
    if full_name:
        return ReferenceFormat.FULL_NAME
    return ReferenceFormat(default_format())


def _print_pericope(pericope: Pericope, fmt: ReferenceFormat) -> None:
    if pericope.is_empty():
        print("(empty)")
    else:
        print(pericope.to_string(fmt))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def show(
    reference: str = typer.Argument(..., help="Reference, e.g. 'John 3:16-21'"),
    full_name: bool = typer.Option(False, "--full-name", help="Label with the book's display name."),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON report instead of text."),
) -> None:
    """Parse a reference and print it in canonical form."""
    fmt = _format(full_name)
    try:
        pericope = Pericope.from_reference(reference)
    except PericopeError as exc:
        _fail(exc)

    if as_json:
        print(PericopeReport.from_pericope(pericope, fmt).model_dump_json(indent=2))
        return
    print(pericope.to_string(fmt))
    print(f"  verses:   {pericope.verse_count()}")
    print(f"  chapters: {', '.join(str(c) for c in pericope.chapter_list())}")
    print(f"  density:  {pericope.density():.2f}")


@app.command()
def scan(
    text: str = typer.Argument(..., help="Free text that may mention references."),
    full_name: bool = typer.Option(False, "--full-name"),
) -> None:
    """Print every reference found in free text, one per line."""
    fmt = _format(full_name)
    for pericope in Pericope.parse(text):
        print(pericope.to_string(fmt))


@app.command()
def suggest(partial: str = typer.Argument("", help="Partially typed reference.")) -> None:
    """Print autocomplete suggestions for a partial reference."""
    for suggestion in TextProcessor().suggest_completions(partial):
        print(suggestion)


@app.command()
def combine(
    operation: CombineOp = typer.Argument(..., help="union, intersection or subtract"),
    left: str = typer.Argument(...),
    right: str = typer.Argument(...),
    full_name: bool = typer.Option(False, "--full-name"),
) -> None:
    """Combine two references of the same book."""
    try:
        a = Pericope.from_reference(left)
        b = Pericope.from_reference(right)
    except PericopeError as exc:
        _fail(exc)

    if a.book != b.book:
        warn(f"{a.book} and {b.book} are different books; {operation.value} falls back to its default result")
    if operation is CombineOp.union:
        result = a.union(b)
    elif operation is CombineOp.intersection:
        result = a.intersection(b)
    else:
        result = a.subtract(b)
    _print_pericope(result, _format(full_name))


@app.command()
def complement(
    reference: str = typer.Argument(...),
    scope: Optional[str] = typer.Option(None, "--scope", help="Reference to complement within (default: whole book)."),
    full_name: bool = typer.Option(False, "--full-name"),
) -> None:
    """Print the verses of the scope that the reference does not cover."""
    try:
        pericope = Pericope.from_reference(reference)
        scope_pericope = Pericope.from_reference(scope) if scope else None
    except PericopeError as exc:
        _fail(exc)
    _print_pericope(pericope.complement(scope_pericope), _format(full_name))


@app.command()
def expand(
    reference: str = typer.Argument(...),
    before: int = typer.Option(0, "--before", min=0),
    after: int = typer.Option(0, "--after", min=0),
    full_name: bool = typer.Option(False, "--full-name"),
) -> None:
    """Grow a reference by whole verses on either side."""
    try:
        pericope = Pericope.from_reference(reference)
    except PericopeError as exc:
        _fail(exc)
    _print_pericope(pericope.expand(before, after), _format(full_name))


@app.command()
def contract(
    reference: str = typer.Argument(...),
    start: int = typer.Option(0, "--start", min=0),
    end: int = typer.Option(0, "--end", min=0),
    full_name: bool = typer.Option(False, "--full-name"),
) -> None:
    """Shrink a reference by whole verses from either end."""
    try:
        pericope = Pericope.from_reference(reference)
    except PericopeError as exc:
        _fail(exc)
    _print_pericope(pericope.contract(start, end), _format(full_name))


@app.command()
def gaps(reference: str = typer.Argument(...)) -> None:
    """List the verses skipped between the first and last verse."""
    try:
        pericope = Pericope.from_reference(reference)
    except PericopeError as exc:
        _fail(exc)
    for verse in pericope.gaps():
        print(verse)


@app.command()
def split(
    reference: str = typer.Argument(...),
    full_name: bool = typer.Option(False, "--full-name"),
) -> None:
    """Split a reference into its continuous runs, one per line."""
    try:
        pericope = Pericope.from_reference(reference)
    except PericopeError as exc:
        _fail(exc)
    fmt = _format(full_name)
    for run in pericope.continuous_ranges():
        print(run.to_string(fmt))
