"""Reusable state controllers bound by the views."""
from .forms import FormSubmission
from .mutations import MutationResult, apply_after_success, without
from .paginated import PaginatedResourceController, Query
from .workflow import TRANSITIONS, can_transition, is_terminal, require_transition

__all__ = [
    "FormSubmission",
    "MutationResult",
    "PaginatedResourceController",
    "Query",
    "TRANSITIONS",
    "apply_after_success",
    "can_transition",
    "is_terminal",
    "require_transition",
    "without",
]
