"""
Fritter Backend: Freet Service
===============================

What:  Business rules for freets: listing, the following feed, creation,
       editing, deletion and visibility.
Who:   Called by the /api/freets and /api/circles route handlers, and by the
       reply, like and report services to resolve a freet id.

Check order (mirrors the route contract):
    PATCH  /api/freets/{id}: exists (404) → author (403) → content (400/413)
    POST   /api/freets:      content (400/413) → circle exists (404) → circle owner (403)
    GET    /api/freets/{id}: exists (404) → visible to viewer (403)

Deletion is a soft delete (`deleted = True`); deleted freets behave as
missing everywhere, but their replies keep a parent row.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.database import utcnow
from fritter.exceptions import DatabaseError, ForbiddenError, NotFoundError, ValidationError
from fritter.models.circle import Circle
from fritter.models.follow import Follow
from fritter.models.freet import Freet
from fritter.models.user import User
from fritter.schemas.freet import FreetResponse
from fritter.services.circle_service import circle_service
from fritter.services.user_service import user_service
from fritter.services.validation import parse_id, validate_content

logger = logging.getLogger(__name__)


class FreetService:
    """
    Responsibilities:
        - list_freets(): all visible freets, or one author's
        - following_feed(): visible freets by users the viewer follows
        - view_freet(): single freet with a visibility check
        - create_freet() / update_freet() / delete_freet()
        - get_freet(): id → live Freet or NotFoundError
    """

    @staticmethod
    def to_response(freet: Freet, viewer_id: Optional[uuid.UUID] = None) -> FreetResponse:
        """Shapes a freet for the client, hiding the author of anonymous freets."""
        show_author = not freet.anonymous or viewer_id == freet.author_id
        return FreetResponse(
            id=freet.id,
            author=freet.author.username if show_author and freet.author else None,
            content=freet.content,
            date_created=freet.date_created,
            date_modified=freet.date_modified,
            anonymous=freet.anonymous,
            private=freet.private,
            circle_id=freet.circle_id,
        )

    async def get_freet(self, db: AsyncSession, freet_id: str) -> Freet:
        parsed = parse_id(freet_id, "freet")
        result = await db.execute(
            select(Freet).where(Freet.id == parsed, Freet.deleted.is_(False))
        )
        freet = result.scalar_one_or_none()
        if freet is None:
            raise NotFoundError(resource="freet", resource_id=freet_id)
        return freet

    @staticmethod
    def require_author(freet: Freet, user: User) -> None:
        if freet.author_id != user.id:
            raise ForbiddenError(message="Cannot modify other users' freets.")

    async def list_freets(
        self,
        db: AsyncSession,
        viewer: Optional[User],
        author: Optional[str] = None,
    ) -> List[Freet]:
        """
        Freets visible to `viewer`, newest modification first.

        With `author`, only that user's freets; their anonymous freets are
        left out unless the viewer is that author.

        Raises:
            ValidationError: author given but empty (→ 400)
            NotFoundError: no user with that username (→ 404)
        """
        viewer_id = viewer.id if viewer else None
        query = select(Freet).where(Freet.deleted.is_(False))

        if author is not None:
            if not author.strip():
                raise ValidationError(message="Provided author username must be nonempty.", field="author")
            author_user = await user_service.require_by_username(db, author)
            query = query.where(Freet.author_id == author_user.id)
            if viewer_id != author_user.id:
                query = query.where(Freet.anonymous.is_(False))

        query = query.order_by(Freet.date_modified.desc())
        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Database error listing freets: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve freets. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [f for f in result.scalars().all() if f.is_visible_to(viewer_id)]

    async def following_feed(self, db: AsyncSession, viewer: User) -> List[Freet]:
        """Visible freets written by the users `viewer` follows."""
        followees = select(Follow.followee_id).where(Follow.follower_id == viewer.id)
        query = (
            select(Freet)
            .where(Freet.deleted.is_(False), Freet.author_id.in_(followees))
            .order_by(Freet.date_modified.desc())
        )
        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Database error building feed for %s: %s", viewer.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve your feed. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [f for f in result.scalars().all() if f.is_visible_to(viewer.id)]

    async def view_freet(self, db: AsyncSession, freet_id: str, viewer: Optional[User]) -> Freet:
        freet = await self.get_freet(db, freet_id)
        if not freet.is_visible_to(viewer.id if viewer else None):
            raise ForbiddenError(message="You do not have access to view this freet.")
        return freet

    async def create_freet(
        self,
        db: AsyncSession,
        author: User,
        content: str,
        anonymous: bool = False,
        private: bool = False,
        circle_id: Optional[str] = None,
    ) -> Freet:
        validate_content(content, "Freet")

        circle: Optional[Circle] = None
        if circle_id:
            circle = await circle_service.require_owned_circle(db, circle_id, author)

        now = utcnow()
        freet = Freet(
            author=author,
            content=content,
            anonymous=anonymous,
            private=private,
            circle=circle,
            date_created=now,
            date_modified=now,
        )
        db.add(freet)
        await db.flush()
        logger.info("Freet %s created by %s", freet.id, author.username)
        return freet

    async def update_freet(self, db: AsyncSession, freet_id: str, user: User, content: str) -> Freet:
        freet = await self.get_freet(db, freet_id)
        self.require_author(freet, user)
        validate_content(content, "Freet")

        freet.content = content
        freet.date_modified = utcnow()
        await db.flush()
        return freet

    async def delete_freet(self, db: AsyncSession, freet_id: str, user: User) -> None:
        freet = await self.get_freet(db, freet_id)
        self.require_author(freet, user)
        self.mark_deleted(freet)
        await db.flush()
        logger.info("Freet %s deleted by its author", freet.id)

    @staticmethod
    def mark_deleted(freet: Freet) -> None:
        freet.deleted = True
        freet.date_modified = utcnow()


freet_service = FreetService()
