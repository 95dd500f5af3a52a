"""
Fritter Backend: Follow Service
================================

What:  Follow/unfollow and follower listings for /api/users/{username}/...

Check order for POST /api/users/{username}/followers:
    target exists (404) → not yourself (403) → not already following (409)
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.exceptions import ConflictError, ForbiddenError, NotFoundError
from fritter.models.follow import Follow
from fritter.models.user import User
from fritter.schemas.user import FollowResponse
from fritter.services.user_service import user_service

logger = logging.getLogger(__name__)


class FollowService:

    @staticmethod
    def to_response(follow: Follow) -> FollowResponse:
        return FollowResponse(
            id=follow.id,
            follower=follow.follower.username,
            followee=follow.followee.username,
            date_created=follow.date_created,
        )

    async def _find(
        self, db: AsyncSession, follower: User, followee: User
    ) -> Optional[Follow]:
        result = await db.execute(
            select(Follow).where(
                Follow.follower_id == follower.id,
                Follow.followee_id == followee.id,
            )
        )
        return result.scalar_one_or_none()

    async def follow(self, db: AsyncSession, follower: User, username: str) -> Follow:
        followee = await user_service.require_by_username(db, username)
        if followee.id == follower.id:
            raise ForbiddenError(message="You cannot follow yourself.")
        if await self._find(db, follower, followee) is not None:
            raise ConflictError(message=f"You are already following {followee.username}.")

        follow = Follow(follower=follower, followee=followee)
        db.add(follow)
        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError(message=f"You are already following {followee.username}.")

        logger.info("%s followed %s", follower.username, followee.username)
        return follow

    async def unfollow(self, db: AsyncSession, follower: User, username: str) -> None:
        followee = await user_service.require_by_username(db, username)
        follow = await self._find(db, follower, followee)
        if follow is None:
            raise NotFoundError(
                resource="follow",
                message=f"You are not following {followee.username}.",
            )
        await db.delete(follow)
        await db.flush()

    async def followers(self, db: AsyncSession, username: str) -> List[Follow]:
        user = await user_service.require_by_username(db, username)
        result = await db.execute(
            select(Follow)
            .where(Follow.followee_id == user.id)
            .order_by(Follow.date_created.desc())
        )
        return list(result.scalars().all())

    async def following(self, db: AsyncSession, username: str) -> List[Follow]:
        user = await user_service.require_by_username(db, username)
        result = await db.execute(
            select(Follow)
            .where(Follow.follower_id == user.id)
            .order_by(Follow.date_created.desc())
        )
        return list(result.scalars().all())


follow_service = FollowService()
