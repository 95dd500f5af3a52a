"""
Fritter Backend: User SQLAlchemy Model
=======================================

What:  ORM model for the `users` table.
Who:   Referenced by every other table through a foreign key declared with
       ON DELETE CASCADE, so deleting a user removes their freets, replies,
       likes, reports, follows and circles in one statement.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fritter.database import Base, utcnow


class User(Base):
    """A registered account. Passwords are stored as bcrypt hashes only."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Alphanumeric and underscore only; enforced by the user service
    username: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        comment="Public handle, unique across accounts",
    )

    password_hash: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="bcrypt hash of the account password",
    )

    date_joined: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
