"""
Fritter Backend: Reply Service
===============================

What:  Threaded replies: to a freet or to another reply.
Who:   Called by the /api/freets/{id}/replies and /api/replies route handlers,
       and by the like and report services to resolve a reply id.

Threads:
    A reply has exactly one parent. Listing the children of a freet or reply
    includes soft-deleted children, blanked out, so a client can still walk
    to their own replies. A deleted reply cannot be fetched, edited, liked,
    reported or replied to (404).
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.database import utcnow
from fritter.exceptions import ForbiddenError, NotFoundError
from fritter.models.freet import Freet
from fritter.models.reply import Reply
from fritter.models.user import User
from fritter.schemas.reply import ReplyResponse
from fritter.services.validation import parse_id, validate_content

logger = logging.getLogger(__name__)


class ReplyService:
    """
    Responsibilities:
        - get_reply(): id → live Reply or NotFoundError
        - replies_to_freet() / replies_to_reply(): direct children, oldest first
        - reply_to_freet() / reply_to_reply(): creation with content checks
        - update_reply() / delete_reply(): author only
    """

    @staticmethod
    def to_response(reply: Reply, viewer_id: Optional[uuid.UUID] = None) -> ReplyResponse:
        show_author = not reply.anonymous or viewer_id == reply.author_id
        return ReplyResponse(
            id=reply.id,
            author=reply.author.username if show_author and reply.author and not reply.deleted else None,
            content="" if reply.deleted else reply.content,
            date_created=reply.date_created,
            date_modified=reply.date_modified,
            anonymous=reply.anonymous,
            deleted=reply.deleted,
            parent_freet_id=reply.parent_freet_id,
            parent_reply_id=reply.parent_reply_id,
        )

    async def get_reply(self, db: AsyncSession, reply_id: str) -> Reply:
        parsed = parse_id(reply_id, "reply")
        result = await db.execute(
            select(Reply).where(Reply.id == parsed, Reply.deleted.is_(False))
        )
        reply = result.scalar_one_or_none()
        if reply is None:
            raise NotFoundError(resource="reply", resource_id=reply_id)
        return reply

    @staticmethod
    def require_author(reply: Reply, user: User) -> None:
        if reply.author_id != user.id:
            raise ForbiddenError(message="Cannot modify or delete other users' replies.")

    async def replies_to_freet(self, db: AsyncSession, freet: Freet) -> List[Reply]:
        result = await db.execute(
            select(Reply)
            .where(Reply.parent_freet_id == freet.id)
            .order_by(Reply.date_created)
        )
        return list(result.scalars().all())

    async def replies_to_reply(self, db: AsyncSession, parent: Reply) -> List[Reply]:
        result = await db.execute(
            select(Reply)
            .where(Reply.parent_reply_id == parent.id)
            .order_by(Reply.date_created)
        )
        return list(result.scalars().all())

    async def _add(self, db: AsyncSession, reply: Reply) -> Reply:
        db.add(reply)
        await db.flush()
        logger.info("Reply %s created by %s", reply.id, reply.author.username)
        return reply

    async def reply_to_freet(
        self, db: AsyncSession, freet: Freet, author: User, content: str, anonymous: bool = False
    ) -> Reply:
        validate_content(content, "Reply")
        now = utcnow()
        return await self._add(
            db,
            Reply(
                author=author,
                parent_freet_id=freet.id,
                content=content,
                anonymous=anonymous,
                date_created=now,
                date_modified=now,
            ),
        )

    async def reply_to_reply(
        self, db: AsyncSession, parent: Reply, author: User, content: str, anonymous: bool = False
    ) -> Reply:
        validate_content(content, "Reply")
        now = utcnow()
        return await self._add(
            db,
            Reply(
                author=author,
                parent_reply_id=parent.id,
                content=content,
                anonymous=anonymous,
                date_created=now,
                date_modified=now,
            ),
        )

    async def update_reply(self, db: AsyncSession, reply_id: str, user: User, content: str) -> Reply:
        reply = await self.get_reply(db, reply_id)
        self.require_author(reply, user)
        validate_content(content, "Reply")

        reply.content = content
        reply.date_modified = utcnow()
        await db.flush()
        return reply

    async def delete_reply(self, db: AsyncSession, reply_id: str, user: User) -> None:
        reply = await self.get_reply(db, reply_id)
        self.require_author(reply, user)
        self.mark_deleted(reply)
        await db.flush()
        logger.info("Reply %s deleted by its author", reply.id)

    @staticmethod
    def mark_deleted(reply: Reply) -> None:
        reply.deleted = True
        reply.date_modified = utcnow()


reply_service = ReplyService()
