"""
Fritter Backend: Session Authentication
========================================

What:  Password hashing, session login/logout, and the FastAPI dependencies
       that resolve the signed-in user for a request.
How:   Starlette's SessionMiddleware (registered in main.py) keeps a signed
       cookie; we store only the user id in it. Every protected route declares
       `Depends(require_user)`, which loads the user through the request's
       database session.
Who:   Used by route handlers and the user service.

Status codes:
    require_user        → 403 when nobody is signed in (or the account is gone)
    require_logged_out  → 403 when a user is already signed in
"""

import logging
import uuid
from typing import Optional

import bcrypt
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.database import get_db_session
from fritter.exceptions import ForbiddenError
from fritter.models.user import User

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


# ── Passwords ─────────────────────────────────────────────────────────────

def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hashed value"""
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


# ── Session State ─────────────────────────────────────────────────────────

def login(request: Request, user: User) -> None:
    request.session[SESSION_USER_KEY] = str(user.id)
    logger.info("User %s signed in", user.username)


def logout(request: Request) -> None:
    request.session.pop(SESSION_USER_KEY, None)


# ── Dependencies ──────────────────────────────────────────────────────────

async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Optional[User]:
    """
    Returns the signed-in user, or None.

    A session that points at a deleted account or carries a malformed id is
    cleared, so the client is treated as signed out from then on.
    """
    raw_id = request.session.get(SESSION_USER_KEY)
    if not raw_id:
        return None
    try:
        user_id = uuid.UUID(raw_id)
    except (TypeError, ValueError):
        logout(request)
        return None

    user = await db.get(User, user_id)
    if user is None:
        logout(request)
    return user


async def require_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise ForbiddenError(message="You must be logged in to complete this action.")
    return user


async def require_logged_out(user: Optional[User] = Depends(get_optional_user)) -> None:
    if user is not None:
        raise ForbiddenError(message="You are already signed in.")
