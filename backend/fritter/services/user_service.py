"""
Fritter Backend: User Service
==============================

What:  Account lifecycle: registration, sign-in, profile updates, deletion.
Who:   Called by the /api/users route handlers.

Registration Flow (POST /api/users):
    validate username/password → check username free → insert user
    → insert the default, non-deletable circle → flush

Deletion:
    The user's freets and replies are soft-deleted, then a single DELETE on
    `users` runs. Their author_id is SET NULL so threads keep their rows;
    likes, reports, follows, circles and circle memberships cascade.
"""

import logging
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.auth import hash_password, verify_password
from fritter.config import settings
from fritter.database import utcnow
from fritter.exceptions import AuthenticationError, ConflictError, NotFoundError
from fritter.models.circle import Circle
from fritter.models.freet import Freet
from fritter.models.reply import Reply
from fritter.models.user import User
from fritter.schemas.user import UserResponse
from fritter.services.validation import validate_password, validate_username

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for accounts.

    Responsibilities:
        - create_user(): registration with the default circle
        - authenticate(): credential check for sign-in
        - update_user(): username and/or password change
        - delete_user(): account removal
        - find/require helpers used by the follow, freet and circle services
    """

    @staticmethod
    def to_response(user: User) -> UserResponse:
        return UserResponse(
            id=user.id,
            username=user.username,
            date_joined=user.date_joined,
        )

    async def find_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        """Case-insensitive username lookup."""
        result = await db.execute(
            select(User).where(func.lower(User.username) == username.lower())
        )
        return result.scalar_one_or_none()

    async def require_by_username(self, db: AsyncSession, username: str) -> User:
        user = await self.find_by_username(db, username) if username else None
        if user is None:
            raise NotFoundError(
                resource="user",
                message=f"A user with username {username} does not exist.",
            )
        return user

    async def _ensure_username_free(
        self, db: AsyncSession, username: str, current: Optional[User] = None
    ) -> None:
        existing = await self.find_by_username(db, username)
        if existing is not None and (current is None or existing.id != current.id):
            raise ConflictError(message="An account with this username already exists.")

    async def create_user(self, db: AsyncSession, username: str, password: str) -> User:
        """
        Registers a new account.

        Raises:
            ValidationError: malformed username or password (→ 400)
            ConflictError: username already in use (→ 409)
        """
        validate_username(username)
        await self._ensure_username_free(db, username)
        validate_password(password)

        user = User(username=username, password_hash=hash_password(password))
        db.add(user)
        db.add(
            Circle(
                creator=user,
                name=settings.default_circle_name,
                deletable=False,
                members=[],
            )
        )
        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError(message="An account with this username already exists.")

        logger.info("Created account %s (%s)", user.username, user.id)
        return user

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> User:
        """
        Checks sign-in credentials.

        Raises:
            ValidationError: malformed username or password (→ 400)
            AuthenticationError: no such user or wrong password (→ 401)
        """
        validate_username(username)
        validate_password(password)

        user = await self.find_by_username(db, username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed sign-in attempt for username %s", username)
            raise AuthenticationError()
        return user

    async def update_user(
        self,
        db: AsyncSession,
        user: User,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """Changes username and/or password; omitted fields stay unchanged."""
        if username is not None:
            validate_username(username)
            await self._ensure_username_free(db, username, current=user)
        if password is not None:
            validate_password(password)

        if username is not None:
            user.username = username
        if password is not None:
            user.password_hash = hash_password(password)

        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError(message="An account with this username already exists.")
        return user

    async def delete_user(self, db: AsyncSession, user: User) -> None:
        """
        Removes the account.

        Freets and replies are soft-deleted first and lose their author
        through ON DELETE SET NULL, so other users' replies beneath them stay
        in their threads. Everything else the user owns cascades.
        """
        now = utcnow()
        await db.execute(
            update(Reply)
            .where(Reply.author_id == user.id, Reply.deleted.is_(False))
            .values(deleted=True, date_modified=now)
        )
        await db.execute(
            update(Freet)
            .where(Freet.author_id == user.id, Freet.deleted.is_(False))
            .values(deleted=True, date_modified=now)
        )
        await db.execute(delete(User).where(User.id == user.id))
        logger.info("Deleted account %s (%s)", user.username, user.id)


user_service = UserService()
