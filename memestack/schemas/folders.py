"""Pydantic schemas for meme folders."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from ..constants import DEFAULT_FOLDER_COLOR
from .common import ApiModel
from .memes import Meme


class Folder(ApiModel):
    """A user's folder; owns a mutable membership set of meme ids."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    description: str = ""
    color: str = DEFAULT_FOLDER_COLOR
    icon: str = "folder"
    is_private: bool = True
    memes: list[Meme] = Field(default_factory=list)
    meme_count: int = 0
    share_url: str | None = None
    created_at: datetime | None = None

    @field_validator("memes", mode="before")
    @classmethod
    def _coerce_meme_refs(cls, value: Any) -> Any:
        # GET /folders returns bare ids, GET /folders/:id populated memes.
        if isinstance(value, list):
            return [{"_id": item} if isinstance(item, str) else item for item in value]
        return value

    @property
    def meme_ids(self) -> list[str]:
        return [meme.id for meme in self.memes]


class BulkAddResult(ApiModel):
    added_count: int = 0
    total_in_folder: int = 0


class ShareLink(ApiModel):
    share_url: str
    share_token: str | None = None


__all__ = ["BulkAddResult", "Folder", "ShareLink"]
