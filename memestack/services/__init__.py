"""Resource services: one module per REST noun."""
from . import (
    auth_service,
    challenge_service,
    collaboration_service,
    comment_service,
    folder_service,
    group_service,
    meme_service,
    template_service,
)

__all__ = [
    "auth_service",
    "challenge_service",
    "collaboration_service",
    "comment_service",
    "folder_service",
    "group_service",
    "meme_service",
    "template_service",
]
