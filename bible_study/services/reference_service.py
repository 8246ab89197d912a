"""
Reference addressing: canonical "<translation> <book> <chapter>:<range>" strings for notes
and highlights, and normalisation of a text-selection gesture into a verse span.
The reference string is write-only display/search text; nothing parses it back.
"""
from dataclasses import dataclass
from typing import Optional

from bible_study.errors import ValidationError


@dataclass(frozen=True)
class SelectionRect:
    """On-screen bounding box of a selection (UI placement only)."""

    top: float
    left: float
    bottom: float
    right: float


@dataclass(frozen=True)
class VerseSelection:
    """Ephemeral selection between a text-select gesture and save/cancel. from_verse <= to_verse."""

    from_verse: int
    to_verse: int
    text: str
    rect: Optional[SelectionRect] = None


def format_verse_range(from_verse: int, to_verse: int) -> str:
    """Verse part of a reference: 5 for a single verse, 3-5 for a span."""
    if from_verse == to_verse:
        return f"{from_verse}"
    return f"{from_verse}-{to_verse}"


def format_reference(
    translation_id: str,
    book_label: str,
    chapter_number: int,
    from_verse: int,
    to_verse: int,
) -> str:
    """
    Build the reference string, e.g. format_reference("BSB", "John", 3, 16, 18) -> "BSB John 3:16-18".
    Labels are used as given (no trimming or case changes).
    Raises ValidationError for empty labels, non-positive numbers or from_verse > to_verse.
    """
    if not translation_id or not book_label:
        raise ValidationError("translation_id and book_label are required", code="invalid_reference")
    if chapter_number < 1 or from_verse < 1 or to_verse < 1:
        raise ValidationError("chapter and verse numbers must be positive", code="invalid_verse_range")
    if from_verse > to_verse:
        raise ValidationError("from_verse must not exceed to_verse", code="invalid_verse_range")
    return f"{translation_id} {book_label} {chapter_number}:{format_verse_range(from_verse, to_verse)}"


def resolve_selection(
    anchor_verse: Optional[int],
    focus_verse: Optional[int],
    selected_text: Optional[str],
    rect: Optional[SelectionRect] = None,
) -> Optional[VerseSelection]:
    """
    Order the two verse numbers seen at the ends of a selection gesture.
    Returns None ("no selection") when either verse is missing/zero or the trimmed text is empty.
    """
    if not anchor_verse or not focus_verse:
        return None
    if anchor_verse < 0 or focus_verse < 0:
        return None
    text = (selected_text or "").strip()
    if not text:
        return None
    return VerseSelection(
        from_verse=min(anchor_verse, focus_verse),
        to_verse=max(anchor_verse, focus_verse),
        text=text,
        rect=rect,
    )


def reference_or_passage(reference: Optional[str], passage: Optional[object]) -> str:
    """
    Reference for a note/highlight form: an explicit reference string wins,
    otherwise the passage (translation_id, book_label, chapter_number, from_verse, to_verse) is formatted.
    """
    if reference and reference.strip():
        return reference
    if passage is None:
        raise ValidationError("Reference is required.", code="reference_required")
    return format_reference(
        passage.translation_id,
        passage.book_label,
        passage.chapter_number,
        passage.from_verse,
        passage.to_verse,
    )
