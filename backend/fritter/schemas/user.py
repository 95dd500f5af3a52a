"""
Fritter Backend: User and Follow Schemas
=========================================

Request bodies accept raw strings; format rules (alphanumeric usernames,
no whitespace in passwords) are business rules checked by the user service
so that failures map to 400 rather than FastAPI's 422.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    """Body of POST /api/users and POST /api/users/session."""
    username: str = Field(description="Alphanumeric username")
    password: str = Field(description="Password without whitespace")


class UserUpdate(BaseModel):
    """Body of PUT /api/users. Omitted fields are left unchanged."""
    username: Optional[str] = Field(default=None, description="New username")
    password: Optional[str] = Field(default=None, description="New password")


class UserResponse(BaseModel):
    id: uuid.UUID
    username: str
    date_joined: datetime

    model_config = {"from_attributes": True}


class UserActionResponse(BaseModel):
    message: str
    user: UserResponse


class SessionResponse(BaseModel):
    """GET /api/users/session; `user` is null when nobody is signed in."""
    message: str
    user: Optional[UserResponse] = None


class FollowResponse(BaseModel):
    id: uuid.UUID
    follower: str = Field(description="Username of the follower")
    followee: str = Field(description="Username of the followed user")
    date_created: datetime


class FollowActionResponse(BaseModel):
    message: str
    follow: FollowResponse


class FollowersResponse(BaseModel):
    message: str
    followers: List[FollowResponse]


class FollowingResponse(BaseModel):
    message: str
    following: List[FollowResponse]
