"""Plan item model: one chapter-level reading inside a plan."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bible_study.db import Base, utcnow


class PlanItem(Base):
    """
    Plan item. completed_at NULL = unread, set = completed.
    Only completed_at changes after creation.
    """

    __tablename__ = "plan_items"
    __table_args__ = (UniqueConstraint("plan_id", "order_index", name="uq_plan_items_plan_order"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("reading_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    translation_id: Mapped[str] = mapped_column(String(64), nullable=False)
    book_id: Mapped[str] = mapped_column(String(16), nullable=False)
    chapter_number: Mapped[int] = mapped_column(Integer, nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    plan = relationship("ReadingPlan", back_populates="items")

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None
