"""Pydantic schemas for community groups."""
from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field

from .common import ApiModel, UserSummary


class GroupStats(ApiModel):
    member_count: int = 1
    post_count: int = 0
    challenge_count: int = 0
    weekly_active_members: int = 0


class Group(ApiModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    slug: str
    description: str = ""
    category: str = "general"
    privacy: str = "public"
    creator: UserSummary | None = None
    stats: GroupStats = Field(default_factory=GroupStats)
    is_member: bool = False
    created_at: datetime | None = None


__all__ = ["Group", "GroupStats"]
