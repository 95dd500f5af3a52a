"""
Fritter Backend: Reply Schemas
===============================
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ReplyCreate(BaseModel):
    """Body of POST /api/freets/{id}/replies and POST /api/replies/{id}/replies."""
    content: str = Field(description="Reply text, 1 to 140 characters")
    anonymous: bool = Field(default=False)


class ReplyUpdate(BaseModel):
    """Body of PATCH /api/replies/{id}. Without content the reply is deleted."""
    content: Optional[str] = None


class ReplyResponse(BaseModel):
    """
    A reply as returned in threads.

    Deleted replies stay in listings so their children keep a parent;
    their content is returned empty and `deleted` is true.
    """
    id: uuid.UUID
    author: Optional[str] = Field(description="Author username; null when anonymous")
    content: str
    date_created: datetime
    date_modified: datetime
    anonymous: bool
    deleted: bool
    parent_freet_id: Optional[uuid.UUID] = None
    parent_reply_id: Optional[uuid.UUID] = None


class ReplyActionResponse(BaseModel):
    message: str
    reply: ReplyResponse


class ReplyListResponse(BaseModel):
    message: str
    replies: List[ReplyResponse]
