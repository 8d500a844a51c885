"""Project-wide constant values mirrored from the MemeStack API."""
from __future__ import annotations

from typing import Final

TEMPLATE_CATEGORIES: Final[tuple[str, ...]] = (
    "reaction",
    "mocking",
    "success",
    "fail",
    "advice",
    "rage",
    "philosoraptor",
    "first_world_problems",
    "conspiracy",
    "confession",
    "socially_awkward",
    "good_guy",
    "scumbag",
    "popular",
    "classic",
)

# Challenges accept every template category plus "freestyle".
CHALLENGE_CATEGORIES: Final[tuple[str, ...]] = TEMPLATE_CATEGORIES + ("freestyle",)
CHALLENGE_TYPES: Final[tuple[str, ...]] = ("contest", "challenge", "collaboration")
CHALLENGE_STATUSES: Final[tuple[str, ...]] = ("draft", "active", "voting", "completed", "cancelled")

MEME_CATEGORIES: Final[tuple[str, ...]] = (
    "funny",
    "reaction",
    "gaming",
    "sports",
    "political",
    "wholesome",
    "dark",
    "trending",
    "custom",
)

GROUP_CATEGORIES: Final[tuple[str, ...]] = (
    "general",
    "gaming",
    "sports",
    "politics",
    "entertainment",
    "technology",
    "science",
    "art",
    "music",
    "education",
    "business",
    "lifestyle",
    "food",
    "travel",
    "fashion",
    "dank",
    "wholesome",
    "dark_humor",
    "nsfw",
    "regional",
)
GROUP_PRIVACY: Final[tuple[str, ...]] = ("public", "private", "invite_only")

COLLABORATION_TYPES: Final[tuple[str, ...]] = ("remix", "collaboration", "template_creation", "challenge_response")
# Only these types can be created directly; challenge responses come from challenge submissions.
CREATABLE_COLLABORATION_TYPES: Final[tuple[str, ...]] = ("remix", "collaboration", "template_creation")

FOLDER_ICONS: Final[tuple[str, ...]] = (
    "folder",
    "star",
    "heart",
    "bookmark",
    "tag",
    "image",
    "trending_up",
    "favorite",
    "public",
    "work",
    "school",
    "home",
    "sports",
    "music",
)
DEFAULT_FOLDER_COLOR = "#6366f1"

REPORT_REASONS: Final[tuple[str, ...]] = ("spam", "harassment", "inappropriate", "hate_speech", "other")

ALLOWED_IMAGE_TYPES: Final[frozenset[str]] = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)

TEMPLATE_TABS: Final[tuple[str, ...]] = ("all", "favorites", "mine")

# Enumerated sort options accepted by each list endpoint.
TEMPLATE_SORTS: Final[tuple[str, ...]] = ("createdAt", "usageCount", "downloadCount", "name")
MEME_SORTS: Final[tuple[str, ...]] = ("createdAt", "stats.likesCount", "stats.views")
FOLDER_SORTS: Final[tuple[str, ...]] = ("createdAt", "name", "updatedAt")
CHALLENGE_SORTS: Final[tuple[str, ...]] = ("recent", "popular", "ending_soon", "featured")
COLLABORATION_SORTS: Final[tuple[str, ...]] = ("recent", "popular", "active")
GROUP_SORTS: Final[tuple[str, ...]] = ("popular", "newest", "active", "featured")
COMMENT_SORTS: Final[tuple[str, ...]] = ("createdAt", "stats.likesCount")

COMMENT_MAX_LENGTH = 500
CHALLENGE_RULE_MAX_LENGTH = 200

__all__ = [
    "ALLOWED_IMAGE_TYPES",
    "CHALLENGE_CATEGORIES",
    "CHALLENGE_RULE_MAX_LENGTH",
    "CHALLENGE_SORTS",
    "CHALLENGE_STATUSES",
    "CHALLENGE_TYPES",
    "COLLABORATION_SORTS",
    "COLLABORATION_TYPES",
    "COMMENT_MAX_LENGTH",
    "COMMENT_SORTS",
    "CREATABLE_COLLABORATION_TYPES",
    "DEFAULT_FOLDER_COLOR",
    "FOLDER_ICONS",
    "FOLDER_SORTS",
    "GROUP_CATEGORIES",
    "GROUP_PRIVACY",
    "GROUP_SORTS",
    "MEME_CATEGORIES",
    "MEME_SORTS",
    "REPORT_REASONS",
    "TEMPLATE_CATEGORIES",
    "TEMPLATE_SORTS",
    "TEMPLATE_TABS",
]
