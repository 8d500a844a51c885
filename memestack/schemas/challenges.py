"""Pydantic schemas for challenges and contests."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from .common import ApiModel, UserSummary


class ChallengeStats(ApiModel):
    participant_count: int = 0
    total_submissions: int = 0
    total_votes: int = 0
    views: int = 0


class Challenge(ApiModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str
    description: str = ""
    category: str = "freestyle"
    type: str = "challenge"
    status: str = "draft"
    rules: list[str] = Field(default_factory=list)
    start_date: datetime | None = None
    end_date: datetime | None = None
    max_participants: int = 100
    creator: UserSummary | None = None
    stats: ChallengeStats = Field(default_factory=ChallengeStats)
    is_active: bool = False
    days_remaining: int = 0
    created_at: datetime | None = None

    @field_validator("rules", mode="before")
    @classmethod
    def _rules_list(cls, value: Any) -> Any:
        return [] if value is None else value


__all__ = ["Challenge", "ChallengeStats"]
