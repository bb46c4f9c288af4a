# File: app/models/item.py

"""
Item model.

One step of a roadmap. Within a roadmap, ``position`` values form the dense
sequence 1..N; only the order service and item deletion rewrite them.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base


class Item(Base):
    __tablename__ = "items"
    __table_args__ = (Index("ix_items_roadmap_position", "roadmap_id", "position"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_finished: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Always equal to the parent roadmap's owner_id (set on creation)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    roadmap_id: Mapped[int] = mapped_column(
        ForeignKey("roadmaps.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    modified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    roadmap = relationship("Roadmap", back_populates="items")
