"""Reading plan model: one row = one plan; aggregate columns are derived from plan_items."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bible_study.db import Base, utcnow


class ReadingPlan(Base):
    """
    Reading plan owned by one user.
    progress / next_reading / total_items / completed_items are recomputed from the items
    on every toggle; for a plan without items they keep the values given at creation.
    """

    __tablename__ = "reading_plans"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    scope_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    readings_per_day: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    progress: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    next_reading: Mapped[str] = mapped_column(String(512), default="", nullable=False)
    total_items: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completed_items: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    items = relationship(
        "PlanItem",
        back_populates="plan",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PlanItem.order_index",
    )
