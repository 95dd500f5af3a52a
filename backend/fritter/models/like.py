"""
Fritter Backend: Like SQLAlchemy Model
=======================================

One row per (user, freet) or (user, reply) like. The unique constraints
back up the duplicate check in the like service; NULL targets never collide.
"""

import uuid
from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fritter.database import Base
from fritter.models.user import User


class Like(Base):
    __tablename__ = "likes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    liker_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    freet_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("freets.id", ondelete="CASCADE"), nullable=True, index=True
    )
    reply_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("replies.id", ondelete="CASCADE"), nullable=True, index=True
    )

    liker: Mapped[User] = relationship(lazy="selectin")

    __table_args__ = (
        UniqueConstraint("liker_id", "freet_id", name="uq_likes_liker_freet"),
        UniqueConstraint("liker_id", "reply_id", name="uq_likes_liker_reply"),
        CheckConstraint(
            "(freet_id IS NULL) <> (reply_id IS NULL)",
            name="ck_likes_one_target",
        ),
    )

    def __repr__(self) -> str:
        return f"<Like(id={self.id}, liker_id={self.liker_id})>"
