"""
Fritter Backend: Reply Route Handlers
======================================

Routes:
    GET    /api/replies/{id}           one reply
    PATCH  /api/replies/{id}           edit (body with content) or delete (without)
    DELETE /api/replies/{id}           delete
    GET    /api/replies/{id}/replies   direct replies, deleted ones blanked
    POST   /api/replies/{id}/replies   reply to the reply
    GET    /api/replies/{id}/likes     likes
    POST   /api/replies/{id}/likes     like
    DELETE /api/replies/{id}/likes     unlike
    GET    /api/replies/{id}/reports   reports
    POST   /api/replies/{id}/reports   report; removes the reply at the threshold

All routes require a signed-in user. Deleted replies answer 404.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.auth import require_user
from fritter.database import get_db_session
from fritter.models.user import User
from fritter.schemas.common import ErrorResponse, MessageResponse
from fritter.schemas.like import (
    LikeActionResponse,
    LikeListResponse,
    ReportActionResponse,
    ReportListResponse,
)
from fritter.schemas.reply import (
    ReplyActionResponse,
    ReplyCreate,
    ReplyListResponse,
    ReplyResponse,
    ReplyUpdate,
)
from fritter.services.like_service import like_service
from fritter.services.reply_service import reply_service
from fritter.services.report_service import report_service

router = APIRouter(prefix="/api/replies", tags=["Replies"])

_FORBIDDEN = {403: {"description": "Not signed in or not the author", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Reply not found", "model": ErrorResponse}}
_CONTENT = {
    400: {"description": "Empty content", "model": ErrorResponse},
    413: {"description": "Content too long", "model": ErrorResponse},
}


@router.get(
    "/{reply_id}",
    response_model=ReplyResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Get a single reply",
)
async def get_reply(
    reply_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReplyResponse:
    reply = await reply_service.get_reply(db, reply_id)
    return reply_service.to_response(reply, user.id)


@router.patch(
    "/{reply_id}",
    response_model=ReplyActionResponse | MessageResponse,
    responses={**_CONTENT, **_FORBIDDEN, **_NOT_FOUND},
    summary="Edit or delete a reply",
    description="With `content` the reply is edited; without it the reply is deleted.",
)
async def update_reply(
    reply_id: str,
    body: Optional[ReplyUpdate] = None,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReplyActionResponse | MessageResponse:
    content = body.content if body else None
    if not content:
        await reply_service.delete_reply(db, reply_id, user)
        return MessageResponse(message="Your reply was deleted successfully.")

    reply = await reply_service.update_reply(db, reply_id, user, content)
    return ReplyActionResponse(
        message="Your reply was updated successfully.",
        reply=reply_service.to_response(reply, user.id),
    )


@router.delete(
    "/{reply_id}",
    response_model=MessageResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Delete a reply",
)
async def delete_reply(
    reply_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await reply_service.delete_reply(db, reply_id, user)
    return MessageResponse(message="Your reply was deleted successfully.")


# ── Nested replies ────────────────────────────────────────────────────────

@router.get(
    "/{reply_id}/replies",
    response_model=ReplyListResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="List the replies to a reply",
)
async def get_reply_replies(
    reply_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReplyListResponse:
    parent = await reply_service.get_reply(db, reply_id)
    replies = await reply_service.replies_to_reply(db, parent)
    return ReplyListResponse(
        message=f"Reply {parent.id} has {len(replies)} replies.",
        replies=[reply_service.to_response(r, user.id) for r in replies],
    )


@router.post(
    "/{reply_id}/replies",
    response_model=ReplyActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_CONTENT, **_FORBIDDEN, **_NOT_FOUND},
    summary="Reply to a reply",
)
async def reply_to_reply(
    reply_id: str,
    body: ReplyCreate,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReplyActionResponse:
    parent = await reply_service.get_reply(db, reply_id)
    reply = await reply_service.reply_to_reply(db, parent, user, body.content, body.anonymous)
    return ReplyActionResponse(
        message="Your reply was created successfully.",
        reply=reply_service.to_response(reply, user.id),
    )


# ── Likes ─────────────────────────────────────────────────────────────────

@router.get(
    "/{reply_id}/likes",
    response_model=LikeListResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="List the likes on a reply",
)
async def get_reply_likes(
    reply_id: str,
    _: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> LikeListResponse:
    reply = await reply_service.get_reply(db, reply_id)
    likes = await like_service.list_likes(db, reply)
    return LikeListResponse(
        message=f"Reply {reply.id} has {len(likes)} likes.",
        likes=[like_service.to_response(like) for like in likes],
    )


@router.post(
    "/{reply_id}/likes",
    response_model=LikeActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_FORBIDDEN,
        **_NOT_FOUND,
        409: {"description": "Already liked", "model": ErrorResponse},
    },
    summary="Like a reply",
)
async def like_reply(
    reply_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> LikeActionResponse:
    reply = await reply_service.get_reply(db, reply_id)
    like = await like_service.add_like(db, reply, user)
    return LikeActionResponse(
        message="Your like was added successfully.",
        like=like_service.to_response(like),
    )


@router.delete(
    "/{reply_id}/likes",
    response_model=MessageResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Unlike a reply",
)
async def unlike_reply(
    reply_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    reply = await reply_service.get_reply(db, reply_id)
    await like_service.remove_like(db, reply, user)
    return MessageResponse(message="Your like was deleted successfully.")


# ── Reports ───────────────────────────────────────────────────────────────

@router.get(
    "/{reply_id}/reports",
    response_model=ReportListResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="List the reports on a reply",
)
async def get_reply_reports(
    reply_id: str,
    _: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReportListResponse:
    reply = await reply_service.get_reply(db, reply_id)
    reports = await report_service.list_reports(db, reply)
    return ReportListResponse(
        message=f"Reply {reply.id} has {len(reports)} reports.",
        reports=[report_service.to_response(r) for r in reports],
    )


@router.post(
    "/{reply_id}/reports",
    response_model=ReportActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_FORBIDDEN,
        **_NOT_FOUND,
        409: {"description": "Already reported", "model": ErrorResponse},
    },
    summary="Report a reply",
    description="The reply is removed once it collects REPLY_REPORT_THRESHOLD reports.",
)
async def report_reply(
    reply_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReportActionResponse:
    reply = await reply_service.get_reply(db, reply_id)
    report, removed = await report_service.add_report(db, reply, user)
    return ReportActionResponse(
        message="Your report was added successfully.",
        report=report_service.to_response(report),
        removed=removed,
    )
