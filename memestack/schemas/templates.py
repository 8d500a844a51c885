"""Pydantic schemas for meme templates."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field, model_validator

from .common import ApiModel, UserSummary


class TextAreaPosition(ApiModel):
    x: float = 50
    y: float = 50


class TextArea(ApiModel):
    """Editable caption slot on a template image."""

    id: str
    default_text: str = ""
    position: TextAreaPosition = Field(default_factory=TextAreaPosition)
    style: dict[str, Any] = Field(default_factory=dict)


class TemplateStats(ApiModel):
    usage_count: int = 0
    download_count: int = 0
    favorites: int = 0
    rating: float = 0.0
    rating_count: int = 0


_TOP_LEVEL_COUNTERS = {"downloadCount": "downloadCount", "usageCount": "usageCount", "favoriteCount": "favorites"}


class Template(ApiModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    category: str = "popular"
    description: str = ""
    image_url: str | None = None
    text_areas: list[TextArea] = Field(default_factory=list)
    stats: TemplateStats = Field(default_factory=TemplateStats)
    creator: UserSummary | None = None
    is_public: bool = False
    is_favorited: bool = False
    created_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _lift_counters(cls, data: Any) -> Any:
        # The server keeps the live download, usage and favorite counters beside ``stats``.
        if not isinstance(data, dict) or not any(key in data for key in _TOP_LEVEL_COUNTERS):
            return data
        stats = data.get("stats")
        merged = dict(stats) if isinstance(stats, dict) else {}
        for source, target in _TOP_LEVEL_COUNTERS.items():
            if source in data:
                merged[target] = data[source]
        return {**data, "stats": merged}


def default_text_areas() -> list[TextArea]:
    """Top/bottom caption layout used when a template is uploaded without one."""

    style = {
        "fontSize": 36,
        "fontFamily": "Impact",
        "color": "#FFFFFF",
        "stroke": "#000000",
        "strokeWidth": 2,
        "textAlign": "center",
    }
    return [
        TextArea(id="text1", default_text="Top Text", position=TextAreaPosition(x=50, y=20), style=dict(style)),
        TextArea(id="text2", default_text="Bottom Text", position=TextAreaPosition(x=50, y=80), style=dict(style)),
    ]


__all__ = ["Template", "TemplateStats", "TextArea", "TextAreaPosition", "default_text_areas"]
