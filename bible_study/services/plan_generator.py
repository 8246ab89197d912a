"""
Plan generator: expand a named scope (list of canonical book ids) into chapter readings
against one translation's book catalog. Output order is the order_index of the plan items.
"""
import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class BookCatalogEntry:
    """Catalog data for one book in a translation (from the content provider's books.json)."""

    first_chapter_number: int
    number_of_chapters: int
    common_name: str


@dataclass(frozen=True)
class PlanScope:
    id: str
    label: str
    book_ids: Tuple[str, ...]


@dataclass(frozen=True)
class GeneratedReading:
    """One chapter reading, before it is persisted as a PlanItem."""

    translation_id: str
    book_id: str
    chapter_number: int
    label: str


NEW_TESTAMENT_BOOKS: Tuple[str, ...] = (
    "MAT", "MRK", "LUK", "JHN", "ACT", "ROM", "1CO", "2CO", "GAL", "EPH",
    "PHP", "COL", "1TH", "2TH", "1TI", "2TI", "TIT", "PHM", "HEB", "JAS",
    "1PE", "2PE", "1JN", "2JN", "3JN", "JUD", "REV",
)

OLD_TESTAMENT_BOOKS: Tuple[str, ...] = (
    "GEN", "EXO", "LEV", "NUM", "DEU", "JOS", "JDG", "RUT", "1SA", "2SA",
    "1KI", "2KI", "1CH", "2CH", "EZR", "NEH", "EST", "JOB", "PSA", "PRO",
    "ECC", "SNG", "ISA", "JER", "LAM", "EZK", "DAN", "HOS", "JOL", "AMO",
    "OBA", "JON", "MIC", "NAM", "HAB", "ZEP", "HAG", "ZEC", "MAL",
)

PLAN_SCOPES: Tuple[PlanScope, ...] = (
    PlanScope("new-testament", "New Testament", NEW_TESTAMENT_BOOKS),
    PlanScope("old-testament", "Old Testament", OLD_TESTAMENT_BOOKS),
    PlanScope("gospels", "Gospels", ("MAT", "MRK", "LUK", "JHN")),
    PlanScope("psalms-proverbs", "Psalms + Proverbs", ("PSA", "PRO")),
)

_SCOPES_BY_ID: Dict[str, PlanScope] = {s.id: s for s in PLAN_SCOPES}


def get_scope(scope_id: str) -> Optional[PlanScope]:
    return _SCOPES_BY_ID.get(scope_id)


def generate_readings(
    scope_id: str,
    book_catalog: Mapping[str, BookCatalogEntry],
    translation_id: str,
) -> List[GeneratedReading]:
    """
    One reading per chapter for every scope book present in the catalog,
    books in scope order and chapters ascending. Unknown scope -> []; missing books are skipped.
    """
    scope = _SCOPES_BY_ID.get(scope_id)
    if scope is None:
        return []
    readings: List[GeneratedReading] = []
    for book_id in scope.book_ids:
        book = book_catalog.get(book_id)
        if book is None:
            continue
        start = book.first_chapter_number
        end = book.first_chapter_number + book.number_of_chapters - 1
        for chapter in range(start, end + 1):
            readings.append(
                GeneratedReading(
                    translation_id=translation_id,
                    book_id=book_id,
                    chapter_number=chapter,
                    label=f"{book.common_name} {chapter}",
                )
            )
    return readings


def estimate_days(item_count: int, readings_per_day: float) -> int:
    """ceil(N / R) with R truncated to an int >= 1; 0 for an empty plan."""
    if item_count <= 0:
        return 0
    rate = max(int(readings_per_day), 1)
    return math.ceil(item_count / rate)
