"""
Fritter Backend: Like and Report Schemas
=========================================
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


class LikeTarget(BaseModel):
    """Body of POST/DELETE /api/likes, addressing a freet by id."""
    freet_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("freet_id", "freetId"),
    )


class LikeResponse(BaseModel):
    id: uuid.UUID
    liker: str = Field(description="Username of the user who liked the item")
    freet_id: Optional[uuid.UUID] = None
    reply_id: Optional[uuid.UUID] = None


class LikeActionResponse(BaseModel):
    message: str
    like: LikeResponse


class LikeListResponse(BaseModel):
    message: str
    likes: List[LikeResponse]


class LikeCountResponse(BaseModel):
    message: str
    like_count: int


class ReportResponse(BaseModel):
    id: uuid.UUID
    reporter: str = Field(description="Username of the reporting user")
    freet_id: Optional[uuid.UUID] = None
    reply_id: Optional[uuid.UUID] = None
    date_created: datetime


class ReportActionResponse(BaseModel):
    message: str
    report: ReportResponse
    removed: bool = Field(
        default=False,
        description="True when this report pushed the item over the report threshold",
    )


class ReportListResponse(BaseModel):
    message: str
    reports: List[ReportResponse]
