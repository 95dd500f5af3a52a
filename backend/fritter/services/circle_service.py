"""
Fritter Backend: Circle Service
================================

What:  Creation, renaming, membership changes and deletion of circles, plus
       the freets posted to a circle.

Rules:
    name      non-empty after stripping (400), unique per creator (409)
    members   every username must exist (404); the creator is never stored
              as a member; duplicates collapse
    modify    creator only (403)
    delete    creator only (403); the default circle is not deletable (403);
              freets posted to the circle become private
    view      creator or member (403)
"""

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from fritter.models.circle import Circle
from fritter.models.freet import Freet
from fritter.models.user import User
from fritter.schemas.circle import CircleResponse
from fritter.services.user_service import user_service
from fritter.services.validation import parse_id

logger = logging.getLogger(__name__)

MAX_CIRCLE_NAME_LENGTH = 100


class CircleService:

    @staticmethod
    def to_response(circle: Circle) -> CircleResponse:
        return CircleResponse(
            id=circle.id,
            name=circle.name,
            creator=circle.creator.username,
            members=sorted(member.username for member in circle.members),
            deletable=circle.deletable,
        )

    async def get_circle(self, db: AsyncSession, circle_id: str) -> Circle:
        parsed = parse_id(circle_id, "circle")
        circle = await db.get(Circle, parsed)
        if circle is None:
            raise NotFoundError(resource="circle", resource_id=circle_id)
        return circle

    @staticmethod
    def require_creator(circle: Circle, user: User) -> None:
        if circle.creator_id != user.id:
            raise ForbiddenError(message="Cannot modify other users' circles.")

    async def require_owned_circle(self, db: AsyncSession, circle_id: str, user: User) -> Circle:
        """Circle lookup for posting a freet: exists (404), owned by `user` (403)."""
        circle = await self.get_circle(db, circle_id)
        if circle.creator_id != user.id:
            raise ForbiddenError(message="You can only post to circles you created.")
        return circle

    async def list_circles(self, db: AsyncSession, creator: User) -> List[Circle]:
        result = await db.execute(
            select(Circle)
            .where(Circle.creator_id == creator.id)
            .order_by(Circle.date_created, Circle.name)
        )
        return list(result.scalars().all())

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError(message="Circle name must be at least one character long.", field="name")
        if len(cleaned) > MAX_CIRCLE_NAME_LENGTH:
            raise ValidationError(
                message=f"Circle name must be no more than {MAX_CIRCLE_NAME_LENGTH} characters.",
                field="name",
            )
        return cleaned

    async def _ensure_name_free(
        self, db: AsyncSession, creator: User, name: str, current: Optional[Circle] = None
    ) -> None:
        result = await db.execute(
            select(Circle).where(Circle.creator_id == creator.id, Circle.name == name)
        )
        existing = result.scalar_one_or_none()
        if existing is not None and (current is None or existing.id != current.id):
            raise ConflictError(message=f"You already have a circle named {name}.")

    async def _resolve_members(self, db: AsyncSession, creator: User, usernames: List[str]) -> List[User]:
        members: List[User] = []
        seen = set()
        for username in usernames:
            member = await user_service.require_by_username(db, username)
            if member.id == creator.id or member.id in seen:
                continue
            seen.add(member.id)
            members.append(member)
        return members

    async def _flush(self, db: AsyncSession, name: str) -> None:
        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError(message=f"You already have a circle named {name}.")

    async def create_circle(
        self, db: AsyncSession, creator: User, name: str, members: List[str]
    ) -> Circle:
        name = self._clean_name(name)
        await self._ensure_name_free(db, creator, name)
        resolved = await self._resolve_members(db, creator, members)

        circle = Circle(creator=creator, name=name, members=resolved, deletable=True)
        db.add(circle)
        await self._flush(db, name)
        logger.info("Circle %s (%s) created by %s", circle.id, name, creator.username)
        return circle

    async def update_circle(
        self,
        db: AsyncSession,
        circle_id: str,
        user: User,
        name: Optional[str] = None,
        members: Optional[List[str]] = None,
    ) -> Circle:
        circle = await self.get_circle(db, circle_id)
        self.require_creator(circle, user)

        if name is not None:
            name = self._clean_name(name)
            await self._ensure_name_free(db, user, name, current=circle)
            circle.name = name
        if members is not None:
            circle.members = await self._resolve_members(db, user, members)

        await self._flush(db, circle.name)
        return circle

    async def delete_circle(self, db: AsyncSession, circle_id: str, user: User) -> None:
        circle = await self.get_circle(db, circle_id)
        self.require_creator(circle, user)
        if not circle.deletable:
            raise ForbiddenError(message="This circle cannot be deleted.")

        await db.execute(
            update(Freet)
            .where(Freet.circle_id == circle.id)
            .values(private=True, circle_id=None)
            .execution_options(synchronize_session=False)
        )
        await db.delete(circle)
        await db.flush()
        logger.info("Circle %s deleted by %s", circle.id, user.username)

    async def circle_freets(self, db: AsyncSession, circle_id: str, viewer: User) -> List[Freet]:
        circle = await self.get_circle(db, circle_id)
        if not circle.has_access(viewer.id):
            raise ForbiddenError(message="You do not have access to this circle.")

        result = await db.execute(
            select(Freet)
            .where(Freet.circle_id == circle.id, Freet.deleted.is_(False))
            .order_by(Freet.date_modified.desc())
        )
        return [f for f in result.scalars().all() if f.is_visible_to(viewer.id)]


circle_service = CircleService()
