"""Pydantic schemas for collaborations and their invites."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, Field

from .common import ApiModel, UserSummary


class CollaborationStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    REVIEWING = "reviewing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Collaborator(ApiModel):
    user: UserSummary
    role: str = "contributor"
    joined_at: datetime | None = None


class PendingInvite(ApiModel):
    user: UserSummary
    invited_by: UserSummary | None = None
    role: str = "contributor"
    message: str | None = None
    invited_at: datetime | None = None


class CollaborationSettings(ApiModel):
    is_public: bool = True
    allow_forks: bool = True
    require_approval: bool = False
    max_collaborators: int = 10


class CollaborationStats(ApiModel):
    total_contributors: int = 1
    total_versions: int = 0
    total_forks: int = 0
    total_views: int = 0


class Collaboration(ApiModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str
    description: str = ""
    type: str = "collaboration"
    status: CollaborationStatus = CollaborationStatus.DRAFT
    owner: UserSummary | None = None
    collaborators: list[Collaborator] = Field(default_factory=list)
    pending_invites: list[PendingInvite] = Field(default_factory=list)
    settings: CollaborationSettings = Field(default_factory=CollaborationSettings)
    stats: CollaborationStats = Field(default_factory=CollaborationStats)
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "Collaboration",
    "CollaborationSettings",
    "CollaborationStats",
    "CollaborationStatus",
    "Collaborator",
    "PendingInvite",
]
