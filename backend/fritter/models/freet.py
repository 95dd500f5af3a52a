"""
Fritter Backend: Freet SQLAlchemy Model
========================================

What:  ORM model representing the `freets` table.

Lifecycle:
    1. Created by its author (optionally anonymous, private, or in a circle)
    2. Content may be edited by the author; date_modified moves forward
    3. Deleted by the author, or automatically once enough users report it.
       Deletion sets `deleted`; the row stays so replies keep their parent.

Visibility:
    private           → author only
    circle_id is set  → circle creator and circle members only
    otherwise         → everyone
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fritter.database import Base, utcnow
from fritter.models.circle import Circle
from fritter.models.user import User


class Freet(Base):
    """A short post of at most `settings.max_content_length` characters."""

    __tablename__ = "freets"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # NULL once the author deletes their account; the row itself is soft-deleted
    author_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    date_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    anonymous: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    private: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    # Set to NULL when the circle is deleted; the service marks such freets
    # private first so they never become public.
    circle_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("circles.id", ondelete="SET NULL"),
        nullable=True,
    )

    deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    author: Mapped[Optional[User]] = relationship(lazy="selectin")
    circle: Mapped[Optional[Circle]] = relationship(lazy="selectin")

    __table_args__ = (
        Index("idx_freets_date_modified", date_modified.desc()),
        Index("idx_freets_author", "author_id"),
        Index("idx_freets_circle", "circle_id"),
    )

    def is_visible_to(self, viewer_id: Optional[uuid.UUID]) -> bool:
        if viewer_id is not None and viewer_id == self.author_id:
            return True
        if self.private:
            return False
        if self.circle_id is not None:
            return viewer_id is not None and self.circle is not None and self.circle.has_access(viewer_id)
        return True

    def __repr__(self) -> str:
        return f"<Freet(id={self.id}, author_id={self.author_id}, deleted={self.deleted})>"
