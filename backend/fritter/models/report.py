"""
Fritter Backend: Report SQLAlchemy Model
=========================================

One row per (user, freet) or (user, reply) report. The report service
counts these rows to decide when a freet or reply is removed.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fritter.database import Base, utcnow
from fritter.models.user import User


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    reporter_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    freet_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("freets.id", ondelete="CASCADE"), nullable=True, index=True
    )
    reply_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("replies.id", ondelete="CASCADE"), nullable=True, index=True
    )

    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    reporter: Mapped[User] = relationship(lazy="selectin")

    __table_args__ = (
        UniqueConstraint("reporter_id", "freet_id", name="uq_reports_reporter_freet"),
        UniqueConstraint("reporter_id", "reply_id", name="uq_reports_reporter_reply"),
        CheckConstraint(
            "(freet_id IS NULL) <> (reply_id IS NULL)",
            name="ck_reports_one_target",
        ),
    )

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, reporter_id={self.reporter_id})>"
