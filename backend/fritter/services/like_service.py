"""
Fritter Backend: Like Service
==============================

What:  Likes on freets and replies.
How:   A like targets exactly one freet or one reply. The target is resolved
       by the caller (freet or reply service), so this service only checks
       for an existing like: 409 when adding a duplicate, 404 when removing
       one that does not exist.
"""

import logging
from typing import List, Optional, Union

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.exceptions import ConflictError, NotFoundError
from fritter.models.freet import Freet
from fritter.models.like import Like
from fritter.models.reply import Reply
from fritter.models.user import User
from fritter.schemas.like import LikeResponse

logger = logging.getLogger(__name__)

Target = Union[Freet, Reply]


def _noun(target: Target) -> str:
    return "freet" if isinstance(target, Freet) else "reply"


def _target_filter(target: Target):
    if isinstance(target, Freet):
        return Like.freet_id == target.id
    return Like.reply_id == target.id


class LikeService:

    @staticmethod
    def to_response(like: Like) -> LikeResponse:
        return LikeResponse(
            id=like.id,
            liker=like.liker.username,
            freet_id=like.freet_id,
            reply_id=like.reply_id,
        )

    async def _find(self, db: AsyncSession, target: Target, user: User) -> Optional[Like]:
        result = await db.execute(
            select(Like).where(_target_filter(target), Like.liker_id == user.id)
        )
        return result.scalar_one_or_none()

    async def list_likes(self, db: AsyncSession, target: Target) -> List[Like]:
        result = await db.execute(select(Like).where(_target_filter(target)))
        return list(result.scalars().all())

    async def count_likes(self, db: AsyncSession, target: Target) -> int:
        result = await db.execute(
            select(func.count()).select_from(Like).where(_target_filter(target))
        )
        return result.scalar_one()

    async def add_like(self, db: AsyncSession, target: Target, user: User) -> Like:
        noun = _noun(target)
        if await self._find(db, target, user) is not None:
            raise ConflictError(message=f"You have already liked this {noun}.")

        like = Like(liker=user)
        if isinstance(target, Freet):
            like.freet_id = target.id
        else:
            like.reply_id = target.id
        db.add(like)
        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError(message=f"You have already liked this {noun}.")

        logger.info("%s liked %s %s", user.username, noun, target.id)
        return like

    async def remove_like(self, db: AsyncSession, target: Target, user: User) -> None:
        like = await self._find(db, target, user)
        if like is None:
            raise NotFoundError(
                resource="like",
                message=f"You have not liked this {_noun(target)}.",
            )
        await db.delete(like)
        await db.flush()


like_service = LikeService()
