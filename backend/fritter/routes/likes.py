"""
Fritter Backend: Legacy Like Route Handlers
============================================

Freet likes addressed by query string or request body instead of the path,
kept for the older front-end scripts:

    GET    /api/likes?freetId=<id>     like count of a freet
    POST   /api/likes  {"freetId": ..} like a freet
    DELETE /api/likes  {"freetId": ..} unlike a freet

New clients use /api/freets/{id}/likes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.auth import require_user
from fritter.database import get_db_session
from fritter.exceptions import ValidationError
from fritter.models.freet import Freet
from fritter.models.user import User
from fritter.schemas.common import ErrorResponse, MessageResponse
from fritter.schemas.like import LikeActionResponse, LikeCountResponse, LikeTarget
from fritter.services.freet_service import freet_service
from fritter.services.like_service import like_service

router = APIRouter(prefix="/api/likes", tags=["Likes"])

_ERRORS = {
    400: {"description": "Missing freet id", "model": ErrorResponse},
    403: {"description": "Not signed in", "model": ErrorResponse},
    404: {"description": "Freet or like not found", "model": ErrorResponse},
}


async def _resolve_freet(db: AsyncSession, freet_id: Optional[str], viewer: User) -> Freet:
    if not freet_id or not freet_id.strip():
        raise ValidationError(message="Provided freet ID must be nonempty.", field="freetId")
    return await freet_service.view_freet(db, freet_id, viewer)


@router.get(
    "",
    response_model=LikeCountResponse,
    responses=_ERRORS,
    summary="Count the likes on a freet",
)
async def count_likes(
    freet_id: Optional[str] = Query(default=None, alias="freetId"),
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> LikeCountResponse:
    freet = await _resolve_freet(db, freet_id, user)
    count = await like_service.count_likes(db, freet)
    return LikeCountResponse(message=f"Freet {freet.id} has {count} likes.", like_count=count)


@router.post(
    "",
    response_model=LikeActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERRORS, 409: {"description": "Already liked", "model": ErrorResponse}},
    summary="Like a freet",
)
async def add_like(
    body: LikeTarget,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> LikeActionResponse:
    freet = await _resolve_freet(db, body.freet_id, user)
    like = await like_service.add_like(db, freet, user)
    return LikeActionResponse(
        message="Your like was added successfully.",
        like=like_service.to_response(like),
    )


@router.delete(
    "",
    response_model=MessageResponse,
    responses=_ERRORS,
    summary="Unlike a freet",
)
async def remove_like(
    body: LikeTarget,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    freet = await _resolve_freet(db, body.freet_id, user)
    await like_service.remove_like(db, freet, user)
    return MessageResponse(message="Your like was deleted successfully.")
