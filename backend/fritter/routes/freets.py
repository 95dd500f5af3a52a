"""
Fritter Backend: Freet Route Handlers
======================================

What:  Freets and everything hanging off a freet: replies, likes, reports.
Who:   Called by the feed, profile and freet pages of the front end.

Routes:
    GET    /api/freets[?author=name]   visible freets, newest first
    GET    /api/freets/followingFeed   freets by the users you follow
    GET    /api/freets/{id}            one freet
    POST   /api/freets                 create
    PATCH  /api/freets/{id}            edit (body with content) or delete (without)
    DELETE /api/freets/{id}            delete
    GET    /api/freets/{id}/replies    direct replies
    POST   /api/freets/{id}/replies    reply
    GET    /api/freets/{id}/likes      likes
    POST   /api/freets/{id}/likes      like
    DELETE /api/freets/{id}/likes      unlike
    GET    /api/freets/{id}/reports    reports
    POST   /api/freets/{id}/reports    report; removes the freet at the threshold

Every route below /{id} resolves the freet first (404), then checks that the
viewer may see it (403).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.auth import get_optional_user, require_user
from fritter.database import get_db_session
from fritter.models.user import User
from fritter.schemas.common import ErrorResponse, MessageResponse
from fritter.schemas.freet import (
    FreetActionResponse,
    FreetCreate,
    FreetListResponse,
    FreetResponse,
    FreetUpdate,
)
from fritter.schemas.like import (
    LikeActionResponse,
    LikeListResponse,
    ReportActionResponse,
    ReportListResponse,
)
from fritter.schemas.reply import ReplyActionResponse, ReplyCreate, ReplyListResponse
from fritter.services.freet_service import freet_service
from fritter.services.like_service import like_service
from fritter.services.reply_service import reply_service
from fritter.services.report_service import report_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/freets", tags=["Freets"])

_FORBIDDEN = {403: {"description": "Not signed in or not allowed", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Freet not found", "model": ErrorResponse}}
_CONTENT = {
    400: {"description": "Empty content", "model": ErrorResponse},
    413: {"description": "Content too long", "model": ErrorResponse},
}


# ── Freets ────────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=FreetListResponse,
    responses={
        400: {"description": "Empty author", "model": ErrorResponse},
        404: {"description": "Author not found", "model": ErrorResponse},
    },
    summary="List freets",
    description=(
        "Returns every freet the viewer may see, most recently modified first. "
        "With `author`, only that user's freets."
    ),
)
async def list_freets(
    author: Optional[str] = Query(default=None, description="Username to filter by"),
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db_session),
) -> FreetListResponse:
    freets = await freet_service.list_freets(db, viewer, author=author)
    viewer_id = viewer.id if viewer else None
    return FreetListResponse(
        message=f"Found {len(freets)} freets.",
        freets=[freet_service.to_response(f, viewer_id) for f in freets],
    )


@router.get(
    "/followingFeed",
    response_model=FreetListResponse,
    responses=_FORBIDDEN,
    summary="Freets from the users you follow",
)
async def following_feed(
    viewer: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> FreetListResponse:
    freets = await freet_service.following_feed(db, viewer)
    return FreetListResponse(
        message=f"Found {len(freets)} freets from the users you follow.",
        freets=[freet_service.to_response(f, viewer.id) for f in freets],
    )


@router.get(
    "/{freet_id}",
    response_model=FreetResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Get a single freet",
)
async def get_freet(
    freet_id: str,
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db_session),
) -> FreetResponse:
    freet = await freet_service.view_freet(db, freet_id, viewer)
    return freet_service.to_response(freet, viewer.id if viewer else None)


@router.post(
    "",
    response_model=FreetActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_CONTENT,
        **_FORBIDDEN,
        404: {"description": "Circle not found", "model": ErrorResponse},
    },
    summary="Create a freet",
)
async def create_freet(
    body: FreetCreate,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> FreetActionResponse:
    freet = await freet_service.create_freet(
        db,
        user,
        content=body.content,
        anonymous=body.anonymous,
        private=body.private,
        circle_id=body.circle_id,
    )
    return FreetActionResponse(
        message="Your freet was created successfully.",
        freet=freet_service.to_response(freet, user.id),
    )


@router.patch(
    "/{freet_id}",
    response_model=FreetActionResponse | MessageResponse,
    responses={**_CONTENT, **_FORBIDDEN, **_NOT_FOUND},
    summary="Edit or delete a freet",
    description="With `content` the freet is edited; without it the freet is deleted.",
)
async def update_freet(
    freet_id: str,
    body: Optional[FreetUpdate] = None,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> FreetActionResponse | MessageResponse:
    content = body.content if body else None
    if not content:
        await freet_service.delete_freet(db, freet_id, user)
        return MessageResponse(message="Your freet was deleted successfully.")

    freet = await freet_service.update_freet(db, freet_id, user, content)
    return FreetActionResponse(
        message="Your freet was updated successfully.",
        freet=freet_service.to_response(freet, user.id),
    )


@router.delete(
    "/{freet_id}",
    response_model=MessageResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Delete a freet",
)
async def delete_freet(
    freet_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await freet_service.delete_freet(db, freet_id, user)
    return MessageResponse(message="Your freet was deleted successfully.")


# ── Replies ───────────────────────────────────────────────────────────────

@router.get(
    "/{freet_id}/replies",
    response_model=ReplyListResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="List the replies to a freet",
)
async def get_freet_replies(
    freet_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReplyListResponse:
    freet = await freet_service.view_freet(db, freet_id, user)
    replies = await reply_service.replies_to_freet(db, freet)
    return ReplyListResponse(
        message=f"Freet {freet.id} has {len(replies)} replies.",
        replies=[reply_service.to_response(r, user.id) for r in replies],
    )


@router.post(
    "/{freet_id}/replies",
    response_model=ReplyActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_CONTENT, **_FORBIDDEN, **_NOT_FOUND},
    summary="Reply to a freet",
)
async def reply_to_freet(
    freet_id: str,
    body: ReplyCreate,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReplyActionResponse:
    freet = await freet_service.view_freet(db, freet_id, user)
    reply = await reply_service.reply_to_freet(db, freet, user, body.content, body.anonymous)
    return ReplyActionResponse(
        message="Your reply was created successfully.",
        reply=reply_service.to_response(reply, user.id),
    )


# ── Likes ─────────────────────────────────────────────────────────────────

@router.get(
    "/{freet_id}/likes",
    response_model=LikeListResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="List the likes on a freet",
)
async def get_freet_likes(
    freet_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> LikeListResponse:
    freet = await freet_service.view_freet(db, freet_id, user)
    likes = await like_service.list_likes(db, freet)
    return LikeListResponse(
        message=f"Freet {freet.id} has {len(likes)} likes.",
        likes=[like_service.to_response(like) for like in likes],
    )


@router.post(
    "/{freet_id}/likes",
    response_model=LikeActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_FORBIDDEN,
        **_NOT_FOUND,
        409: {"description": "Already liked", "model": ErrorResponse},
    },
    summary="Like a freet",
)
async def like_freet(
    freet_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> LikeActionResponse:
    freet = await freet_service.view_freet(db, freet_id, user)
    like = await like_service.add_like(db, freet, user)
    return LikeActionResponse(
        message="Your like was added successfully.",
        like=like_service.to_response(like),
    )


@router.delete(
    "/{freet_id}/likes",
    response_model=MessageResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Unlike a freet",
)
async def unlike_freet(
    freet_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    freet = await freet_service.view_freet(db, freet_id, user)
    await like_service.remove_like(db, freet, user)
    return MessageResponse(message="Your like was deleted successfully.")


# ── Reports ───────────────────────────────────────────────────────────────

@router.get(
    "/{freet_id}/reports",
    response_model=ReportListResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="List the reports on a freet",
)
async def get_freet_reports(
    freet_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReportListResponse:
    freet = await freet_service.view_freet(db, freet_id, user)
    reports = await report_service.list_reports(db, freet)
    return ReportListResponse(
        message=f"Freet {freet.id} has {len(reports)} reports.",
        reports=[report_service.to_response(r) for r in reports],
    )


@router.post(
    "/{freet_id}/reports",
    response_model=ReportActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_FORBIDDEN,
        **_NOT_FOUND,
        409: {"description": "Already reported", "model": ErrorResponse},
    },
    summary="Report a freet",
    description="The freet is removed once it collects FREET_REPORT_THRESHOLD reports.",
)
async def report_freet(
    freet_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReportActionResponse:
    freet = await freet_service.view_freet(db, freet_id, user)
    report, removed = await report_service.add_report(db, freet, user)
    return ReportActionResponse(
        message="Your report was added successfully.",
        report=report_service.to_response(report),
        removed=removed,
    )
