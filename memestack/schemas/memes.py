"""Pydantic schemas for meme resources."""
from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field

from .common import ApiModel, UserSummary


class MemeStats(ApiModel):
    likes_count: int = Field(default=0, validation_alias=AliasChoices("likesCount", "likes"))
    views: int = 0
    shares: int = 0
    downloads: int = 0
    comments_count: int = 0


class Meme(ApiModel):
    """Leaf resource referenced by folders and collaborations."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str = ""
    description: str = ""
    image_url: str | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    stats: MemeStats = Field(default_factory=MemeStats)
    creator: UserSummary | None = Field(default=None, validation_alias=AliasChoices("creator", "owner"))
    is_liked: bool = False
    is_public: bool = True
    created_at: datetime | None = None


class LikeState(ApiModel):
    """Result of a like toggle."""

    is_liked: bool
    likes_count: int = 0


__all__ = ["LikeState", "Meme", "MemeStats"]
