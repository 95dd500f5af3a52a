"""
Fritter Backend: Freet Schemas
===============================

What:  Request and response models for /api/freets.

Anonymity:
    `author` is null for anonymous freets unless the viewer wrote them.
    The response builder in the freet service applies this rule.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


class FreetCreate(BaseModel):
    """Body of POST /api/freets."""
    content: str = Field(description="Freet text, 1 to 140 characters")
    anonymous: bool = Field(default=False, description="Hide the author from other users")
    private: bool = Field(default=False, description="Only the author may view the freet")
    circle_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("circle_id", "circleId"),
        description="Post to one of your circles; only its members may view the freet",
    )


class FreetUpdate(BaseModel):
    """Body of PATCH /api/freets/{id}. Without content the freet is deleted."""
    content: Optional[str] = Field(default=None, description="New freet text")


class FreetResponse(BaseModel):
    id: uuid.UUID
    author: Optional[str] = Field(description="Author username; null when anonymous")
    content: str
    date_created: datetime
    date_modified: datetime
    anonymous: bool
    private: bool
    circle_id: Optional[uuid.UUID] = None


class FreetActionResponse(BaseModel):
    message: str
    freet: FreetResponse


class FreetListResponse(BaseModel):
    message: str
    freets: List[FreetResponse]
