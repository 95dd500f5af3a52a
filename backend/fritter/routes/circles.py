"""
Fritter Backend: Circle Route Handlers
=======================================

Routes:
    GET    /api/circles              circles you created
    POST   /api/circles              create {name, members}
    PATCH  /api/circles/{id}         rename and/or replace members
    DELETE /api/circles/{id}         delete (freets posted to it become private)
    GET    /api/circles/{id}/freets  freets posted to the circle
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.auth import require_user
from fritter.database import get_db_session
from fritter.models.user import User
from fritter.schemas.circle import (
    CircleActionResponse,
    CircleCreate,
    CircleListResponse,
    CircleUpdate,
)
from fritter.schemas.common import ErrorResponse, MessageResponse
from fritter.schemas.freet import FreetListResponse
from fritter.services.circle_service import circle_service
from fritter.services.freet_service import freet_service

router = APIRouter(prefix="/api/circles", tags=["Circles"])

_FORBIDDEN = {403: {"description": "Not signed in or not the creator", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Circle or member not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=CircleListResponse,
    responses=_FORBIDDEN,
    summary="List your circles",
)
async def list_circles(
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> CircleListResponse:
    circles = await circle_service.list_circles(db, user)
    return CircleListResponse(
        message=f"You have {len(circles)} circles.",
        circles=[circle_service.to_response(c) for c in circles],
    )


@router.post(
    "",
    response_model=CircleActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Empty circle name", "model": ErrorResponse},
        **_FORBIDDEN,
        **_NOT_FOUND,
        409: {"description": "Circle name already used", "model": ErrorResponse},
    },
    summary="Create a circle",
)
async def create_circle(
    body: CircleCreate,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> CircleActionResponse:
    circle = await circle_service.create_circle(db, user, body.name, body.members)
    return CircleActionResponse(
        message="Your circle was created successfully.",
        circle=circle_service.to_response(circle),
    )


@router.patch(
    "/{circle_id}",
    response_model=CircleActionResponse,
    responses={
        400: {"description": "Empty circle name", "model": ErrorResponse},
        **_FORBIDDEN,
        **_NOT_FOUND,
        409: {"description": "Circle name already used", "model": ErrorResponse},
    },
    summary="Modify a circle",
)
async def update_circle(
    circle_id: str,
    body: CircleUpdate,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> CircleActionResponse:
    circle = await circle_service.update_circle(
        db, circle_id, user, name=body.name, members=body.members
    )
    return CircleActionResponse(
        message="Your circle was updated successfully.",
        circle=circle_service.to_response(circle),
    )


@router.delete(
    "/{circle_id}",
    response_model=MessageResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Delete a circle",
)
async def delete_circle(
    circle_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await circle_service.delete_circle(db, circle_id, user)
    return MessageResponse(message="Your circle was deleted successfully.")


@router.get(
    "/{circle_id}/freets",
    response_model=FreetListResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="List the freets posted to a circle",
)
async def get_circle_freets(
    circle_id: str,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> FreetListResponse:
    freets = await circle_service.circle_freets(db, circle_id, user)
    return FreetListResponse(
        message=f"Found {len(freets)} freets in this circle.",
        freets=[freet_service.to_response(f, user.id) for f in freets],
    )
