"""
Shared test infrastructure.

synthetic_versification — two tiny books injected through Versification:
                           TST (chapters of 3, 2 and 4 verses) and OTR (one
                           chapter of 2 verses). Keeps algebra tests independent
                           of the real verse table.
tp / synthetic_tp        — TextProcessor over the real / synthetic tables.
"""
import pytest

from pericope.books import Book, Catalog, Testament
from pericope.text_processor import TextProcessor
from pericope.versification import Versification

SYNTHETIC_COUNTS: dict[str, list[int]] = {
    "TST": [3, 2, 4],
    "OTR": [2],
}


def make_synthetic_versification() -> Versification:
    catalog = Catalog([
        Book("TST", 1, "Testbook", Testament.OLD, 3, ("Testbook", "TST", "Tst")),
        Book("OTR", 2, "Otherbook", Testament.NEW, 1, ("Otherbook", "OTR")),
    ])
    return Versification(catalog, SYNTHETIC_COUNTS, name="synthetic")


@pytest.fixture
def synthetic_versification() -> Versification:
    return make_synthetic_versification()


@pytest.fixture
def synthetic_tp(synthetic_versification) -> TextProcessor:
    return TextProcessor(synthetic_versification)


@pytest.fixture
def tp() -> TextProcessor:
    return TextProcessor()


@pytest.fixture
def debug_on(monkeypatch):
    monkeypatch.setenv("PERICOPE_DEBUG", "1")
