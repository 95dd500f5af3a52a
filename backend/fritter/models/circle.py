"""
Fritter Backend: Circle SQLAlchemy Model
=========================================

What:  ORM model for `circles` and the `circle_members` association table.
How:   A circle belongs to its creator and holds a many-to-many set of member
       users. Freets posted to a circle are visible only to the creator and
       the members.

Query Patterns:
    - Circles of a user: WHERE creator_id = :uid (idx_circles_creator)
    - Membership check: members are eager-loaded with the circle (selectin)
"""

import uuid
from datetime import datetime
from typing import List

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    UniqueConstraint,
    Uuid,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fritter.database import Base, utcnow
from fritter.models.user import User

circle_members = Table(
    "circle_members",
    Base.metadata,
    Column(
        "circle_id",
        Uuid,
        ForeignKey("circles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Circle(Base):
    """A named, owner-curated group of users."""

    __tablename__ = "circles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    creator_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # False only for the default circle created with every account
    deletable: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    creator: Mapped[User] = relationship(lazy="selectin")
    members: Mapped[List[User]] = relationship(
        secondary=circle_members,
        lazy="selectin",
        order_by=User.username,
    )

    __table_args__ = (
        UniqueConstraint("creator_id", "name", name="uq_circles_creator_name"),
        Index("idx_circles_creator", "creator_id"),
    )

    def has_access(self, user_id: uuid.UUID) -> bool:
        """True for the creator and for every member."""
        if self.creator_id == user_id:
            return True
        return any(member.id == user_id for member in self.members)

    def __repr__(self) -> str:
        return f"<Circle(id={self.id}, name='{self.name}', creator_id={self.creator_id})>"
