"""
Fritter Backend: Circle Schemas
================================

`members` may be sent as a JSON list of usernames or as one
comma-separated string (the format HTML forms produce).
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def _split_members(value):
    if isinstance(value, str):
        return [name.strip() for name in value.split(",") if name.strip()]
    return value


class CircleCreate(BaseModel):
    name: str = Field(description="Circle name, unique among your circles")
    members: List[str] = Field(default_factory=list, description="Member usernames")

    @field_validator("members", mode="before")
    @classmethod
    def split_members(cls, v):
        return _split_members(v)


class CircleUpdate(BaseModel):
    name: Optional[str] = None
    members: Optional[List[str]] = Field(
        default=None, description="Replaces the full member list when given"
    )

    @field_validator("members", mode="before")
    @classmethod
    def split_members(cls, v):
        return _split_members(v)


class CircleResponse(BaseModel):
    id: uuid.UUID
    name: str
    creator: str
    members: List[str]
    deletable: bool


class CircleActionResponse(BaseModel):
    message: str
    circle: CircleResponse


class CircleListResponse(BaseModel):
    message: str
    circles: List[CircleResponse]
