"""Page view models: controllers plus the action handlers bound to them."""
from .base import Confirm, View
from .challenges import ChallengesView
from .collaborations import CollaborationsView
from .comments import CommentThreadView
from .folders import FolderDetailView, FoldersView
from .groups import GroupsView
from .memes import MemesView
from .templates import TemplatesView

__all__ = [
    "ChallengesView",
    "CollaborationsView",
    "CommentThreadView",
    "Confirm",
    "FolderDetailView",
    "FoldersView",
    "GroupsView",
    "MemesView",
    "TemplatesView",
    "View",
]
