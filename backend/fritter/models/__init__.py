"""
Fritter Backend: ORM Models
============================

Importing this package registers every table with `Base.metadata`, which
Alembic autogenerate and the test schema setup both depend on.
"""

from fritter.models.user import User
from fritter.models.circle import Circle, circle_members
from fritter.models.freet import Freet
from fritter.models.reply import Reply
from fritter.models.like import Like
from fritter.models.report import Report
from fritter.models.follow import Follow

__all__ = [
    "User",
    "Circle",
    "circle_members",
    "Freet",
    "Reply",
    "Like",
    "Report",
    "Follow",
]
