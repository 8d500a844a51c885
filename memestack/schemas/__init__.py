"""Convenience exports for schema layer."""
from .auth import AuthResponse, LoginRequest, RegisterRequest
from .challenges import Challenge, ChallengeStats
from .collaborations import (
    Collaboration,
    CollaborationSettings,
    CollaborationStats,
    CollaborationStatus,
    Collaborator,
    PendingInvite,
)
from .comments import Comment, CommentStats
from .common import ApiModel, Page, Pagination, UserSummary, parse_model, parse_page, unwrap
from .folders import BulkAddResult, Folder, ShareLink
from .groups import Group, GroupStats
from .memes import LikeState, Meme, MemeStats
from .templates import Template, TemplateStats, TextArea, TextAreaPosition, default_text_areas

__all__ = [
    "ApiModel",
    "AuthResponse",
    "BulkAddResult",
    "Challenge",
    "ChallengeStats",
    "Collaboration",
    "CollaborationSettings",
    "CollaborationStats",
    "CollaborationStatus",
    "Collaborator",
    "Comment",
    "CommentStats",
    "Folder",
    "Group",
    "GroupStats",
    "LikeState",
    "LoginRequest",
    "Meme",
    "MemeStats",
    "Page",
    "Pagination",
    "PendingInvite",
    "RegisterRequest",
    "ShareLink",
    "Template",
    "TemplateStats",
    "TextArea",
    "TextAreaPosition",
    "UserSummary",
    "default_text_areas",
    "parse_model",
    "parse_page",
    "unwrap",
]
