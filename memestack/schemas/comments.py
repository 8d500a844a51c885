"""Pydantic schemas for meme comments."""
from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field

from .common import ApiModel, UserSummary


class CommentStats(ApiModel):
    likes_count: int = 0
    replies_count: int = 0


class Comment(ApiModel):
    """A comment; top-level entries carry their first replies inline."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    content: str
    meme: str | None = None
    author: UserSummary | None = None
    parent_comment: str | None = None
    stats: CommentStats = Field(default_factory=CommentStats)
    replies: list["Comment"] = Field(default_factory=list)
    has_more_replies: bool = False
    total_replies: int = 0
    is_liked: bool = False
    created_at: datetime | None = None


Comment.model_rebuild()


__all__ = ["Comment", "CommentStats"]
