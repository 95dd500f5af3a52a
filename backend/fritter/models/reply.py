"""
Fritter Backend: Reply SQLAlchemy Model
========================================

What:  ORM model for the `replies` table.
How:   A reply hangs off exactly one parent, either a freet or another reply
       (enforced by ck_replies_one_parent). Replies are soft-deleted so that
       deeper replies in the same thread keep a parent row.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Text,
    Uuid,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fritter.database import Base, utcnow
from fritter.models.user import User


class Reply(Base):
    __tablename__ = "replies"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # NULL once the author deletes their account; the row itself is soft-deleted
    author_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    parent_freet_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("freets.id", ondelete="CASCADE"),
        nullable=True,
    )

    parent_reply_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("replies.id", ondelete="CASCADE"),
        nullable=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    date_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    anonymous: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    author: Mapped[Optional[User]] = relationship(lazy="selectin")

    __table_args__ = (
        CheckConstraint(
            "(parent_freet_id IS NULL) <> (parent_reply_id IS NULL)",
            name="ck_replies_one_parent",
        ),
        Index("idx_replies_parent_freet", "parent_freet_id"),
        Index("idx_replies_parent_reply", "parent_reply_id"),
    )

    def __repr__(self) -> str:
        return f"<Reply(id={self.id}, author_id={self.author_id}, deleted={self.deleted})>"
