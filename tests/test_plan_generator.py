"""Scope expansion into chapter readings, and estimated days."""
from bible_study.services.plan_generator import (
    NEW_TESTAMENT_BOOKS,
    PLAN_SCOPES,
    BookCatalogEntry,
    estimate_days,
    generate_readings,
    get_scope,
)

GOSPELS = {
    "MAT": BookCatalogEntry(1, 28, "Matthew"),
    "MRK": BookCatalogEntry(1, 16, "Mark"),
    "LUK": BookCatalogEntry(1, 24, "Luke"),
    "JHN": BookCatalogEntry(1, 21, "John"),
}


def _nt_catalog() -> dict:
    """Every NT book with 3 chapters, named after its id."""
    return {book_id: BookCatalogEntry(1, 3, f"Book {book_id}") for book_id in NEW_TESTAMENT_BOOKS}


def test_scopes_table() -> None:
    assert [s.id for s in PLAN_SCOPES] == ["new-testament", "old-testament", "gospels", "psalms-proverbs"]
    assert len(get_scope("new-testament").book_ids) == 27
    assert len(get_scope("old-testament").book_ids) == 39
    assert get_scope("psalms-proverbs").book_ids == ("PSA", "PRO")
    assert get_scope("apocrypha") is None


def test_gospels_in_order_with_ascending_chapters() -> None:
    readings = generate_readings("gospels", GOSPELS, "BSB")
    assert len(readings) == 28 + 16 + 24 + 21

    books_in_order = []
    for r in readings:
        if not books_in_order or books_in_order[-1] != r.book_id:
            books_in_order.append(r.book_id)
    assert books_in_order == ["MAT", "MRK", "LUK", "JHN"]

    for book_id, entry in GOSPELS.items():
        chapters = [r.chapter_number for r in readings if r.book_id == book_id]
        assert chapters == list(range(1, entry.number_of_chapters + 1))

    assert readings[0].label == "Matthew 1"
    assert readings[-1].label == "John 21"
    assert all(r.translation_id == "BSB" for r in readings)


def test_missing_book_is_skipped_silently() -> None:
    catalog = _nt_catalog()
    del catalog["PHM"]
    readings = generate_readings("new-testament", catalog, "BSB")
    assert len(readings) == 26 * 3
    assert "PHM" not in {r.book_id for r in readings}
    book_order = list(dict.fromkeys(r.book_id for r in readings))
    assert book_order == [b for b in NEW_TESTAMENT_BOOKS if b != "PHM"]


def test_first_chapter_offset_respected() -> None:
    catalog = {"PSA": BookCatalogEntry(first_chapter_number=0, number_of_chapters=3, common_name="Psalms")}
    readings = generate_readings("psalms-proverbs", catalog, "WEB")
    assert [r.label for r in readings] == ["Psalms 0", "Psalms 1", "Psalms 2"]


def test_unknown_scope_is_empty() -> None:
    assert generate_readings("minor-prophets", GOSPELS, "BSB") == []


def test_generation_is_deterministic() -> None:
    assert generate_readings("gospels", GOSPELS, "BSB") == generate_readings("gospels", dict(reversed(GOSPELS.items())), "BSB")


def test_estimate_days() -> None:
    assert estimate_days(0, 2) == 0
    assert estimate_days(260, 2) == 130
    assert estimate_days(89, 2) == 45
    assert estimate_days(89, 2.9) == 45
    assert estimate_days(10, 0.5) == 10
    assert estimate_days(10, 0) == 10
    assert estimate_days(1, 5) == 1
