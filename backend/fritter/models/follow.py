"""
Fritter Backend: Follow SQLAlchemy Model
=========================================

Directed edge follower → followee. A user cannot follow themselves and an
edge exists at most once.
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fritter.database import Base, utcnow
from fritter.models.user import User


class Follow(Base):
    __tablename__ = "follows"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    follower_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    followee_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    follower: Mapped[User] = relationship(foreign_keys=[follower_id], lazy="selectin")
    followee: Mapped[User] = relationship(foreign_keys=[followee_id], lazy="selectin")

    __table_args__ = (
        UniqueConstraint("follower_id", "followee_id", name="uq_follows_pair"),
        CheckConstraint("follower_id <> followee_id", name="ck_follows_not_self"),
    )

    def __repr__(self) -> str:
        return f"<Follow(follower_id={self.follower_id}, followee_id={self.followee_id})>"
