"""SQLAlchemy models for the study server."""
from bible_study.models.reading_plan import ReadingPlan
from bible_study.models.plan_item import PlanItem
from bible_study.models.note import Note
from bible_study.models.highlight import Highlight

__all__ = [
    "ReadingPlan",
    "PlanItem",
    "Note",
    "Highlight",
]
