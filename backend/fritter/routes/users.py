"""
Fritter Backend: User Route Handlers
=====================================

What:  Accounts, sign-in sessions and follows.
How:   Session state lives in the signed cookie managed by SessionMiddleware;
       `fritter.auth.login`/`logout` write the user id into it.

Routes:
    GET    /api/users/session                current user (or null)
    POST   /api/users/session                sign in
    DELETE /api/users/session                sign out
    POST   /api/users                        create account (and sign in)
    PUT    /api/users                        change username and/or password
    DELETE /api/users                        delete account
    GET    /api/users/{username}/followers   followers of a user
    POST   /api/users/{username}/followers   follow a user
    DELETE /api/users/{username}/followers   unfollow a user
    GET    /api/users/{username}/following   users a user follows
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.auth import get_optional_user, login, logout, require_logged_out, require_user
from fritter.database import get_db_session
from fritter.models.user import User
from fritter.schemas.common import ErrorResponse, MessageResponse
from fritter.schemas.user import (
    FollowActionResponse,
    FollowersResponse,
    FollowingResponse,
    SessionResponse,
    UserActionResponse,
    UserCredentials,
    UserUpdate,
)
from fritter.services.follow_service import follow_service
from fritter.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

_FORBIDDEN = {403: {"description": "Not allowed for this session", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}


# ── Session ───────────────────────────────────────────────────────────────

@router.get(
    "/session",
    response_model=SessionResponse,
    summary="Get the signed-in user",
)
async def get_session_user(user: Optional[User] = Depends(get_optional_user)) -> SessionResponse:
    if user is None:
        return SessionResponse(message="You are not logged in.", user=None)
    return SessionResponse(
        message="Your session info was found successfully.",
        user=user_service.to_response(user),
    )


@router.post(
    "/session",
    response_model=UserActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Malformed username or password", "model": ErrorResponse},
        401: {"description": "Wrong credentials", "model": ErrorResponse},
        **_FORBIDDEN,
    },
    summary="Sign in",
)
async def sign_in(
    body: UserCredentials,
    request: Request,
    _: None = Depends(require_logged_out),
    db: AsyncSession = Depends(get_db_session),
) -> UserActionResponse:
    user = await user_service.authenticate(db, body.username, body.password)
    login(request, user)
    return UserActionResponse(
        message="You have logged in successfully.",
        user=user_service.to_response(user),
    )


@router.delete(
    "/session",
    response_model=MessageResponse,
    responses=_FORBIDDEN,
    summary="Sign out",
)
async def sign_out(request: Request, user: User = Depends(require_user)) -> MessageResponse:
    logout(request)
    logger.info("User %s signed out", user.username)
    return MessageResponse(message="You have been logged out successfully.")


# ── Account ───────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=UserActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Malformed username or password", "model": ErrorResponse},
        409: {"description": "Username already taken", "model": ErrorResponse},
        **_FORBIDDEN,
    },
    summary="Create an account",
    description=(
        "Registers a new user, creates their default circle and signs them in."
    ),
)
async def create_user(
    body: UserCredentials,
    request: Request,
    _: None = Depends(require_logged_out),
    db: AsyncSession = Depends(get_db_session),
) -> UserActionResponse:
    user = await user_service.create_user(db, body.username, body.password)
    login(request, user)
    return UserActionResponse(
        message=f"Your account was created successfully. You have been logged in as {user.username}",
        user=user_service.to_response(user),
    )


@router.put(
    "",
    response_model=UserActionResponse,
    responses={
        400: {"description": "Malformed username or password", "model": ErrorResponse},
        409: {"description": "Username already taken", "model": ErrorResponse},
        **_FORBIDDEN,
    },
    summary="Update your account",
)
async def update_user(
    body: UserUpdate,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserActionResponse:
    user = await user_service.update_user(db, user, username=body.username, password=body.password)
    return UserActionResponse(
        message="Your profile was updated successfully.",
        user=user_service.to_response(user),
    )


@router.delete(
    "",
    response_model=MessageResponse,
    responses=_FORBIDDEN,
    summary="Delete your account",
    description="Deletes the account together with every freet, reply, like, report, follow and circle it owns.",
)
async def delete_user(
    request: Request,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.delete_user(db, user)
    logout(request)
    return MessageResponse(message="Your account has been deleted successfully.")


# ── Follows ───────────────────────────────────────────────────────────────

@router.get(
    "/{username}/followers",
    response_model=FollowersResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="List a user's followers",
)
async def get_followers(
    username: str,
    _: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> FollowersResponse:
    follows = await follow_service.followers(db, username)
    return FollowersResponse(
        message=f"{username} has {len(follows)} followers.",
        followers=[follow_service.to_response(f) for f in follows],
    )


@router.post(
    "/{username}/followers",
    response_model=FollowActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_FORBIDDEN,
        **_NOT_FOUND,
        409: {"description": "Already following", "model": ErrorResponse},
    },
    summary="Follow a user",
)
async def follow_user(
    username: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> FollowActionResponse:
    follow = await follow_service.follow(db, user, username)
    return FollowActionResponse(
        message=f"You are now following {follow.followee.username}.",
        follow=follow_service.to_response(follow),
    )


@router.delete(
    "/{username}/followers",
    response_model=MessageResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Unfollow a user",
)
async def unfollow_user(
    username: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await follow_service.unfollow(db, user, username)
    return MessageResponse(message=f"You have unfollowed {username}.")


@router.get(
    "/{username}/following",
    response_model=FollowingResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="List the users a user follows",
)
async def get_following(
    username: str,
    _: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> FollowingResponse:
    follows = await follow_service.following(db, username)
    return FollowingResponse(
        message=f"{username} follows {len(follows)} users.",
        following=[follow_service.to_response(f) for f in follows],
    )
